"""
Plotting functions for array factor and phased array fields.
"""
import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, Union, List, Tuple

from .field import Field, RELATIVE_GAIN
from .utilities import find_nearest


def plot_field_cut(
    field: Field,
    phi: Union[float, List[float]] = 0.0,
    channel: str = RELATIVE_GAIN,
    normalize: bool = True,
    floor_db: float = -60.0,
    ax: Optional[plt.Axes] = None,
    fig_size: Tuple[float, float] = (10, 6),
    title: Optional[str] = None
) -> plt.Figure:
    """
    Plot the magnitude of a field channel against theta for one or more phi cuts.

    Args:
        field: Field to plot
        phi: Phi angle(s) in degrees; the nearest sampled phi is used
        channel: Channel to plot
        normalize: If True, normalize the magnitude to the channel peak (0 dB)
        floor_db: Lower limit of the y axis in dB
        ax: Optional matplotlib axes to plot on
        fig_size: Figure size as (width, height) in inches
        title: Optional title for the plot

    Returns:
        matplotlib.Figure: The created figure object
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=fig_size)
    else:
        fig = ax.figure

    gain_db = field.get_gain_db(channel).values
    if normalize:
        gain_db = gain_db - np.max(gain_db)

    theta_angles = field.theta_angles
    phi_angles = field.phi_angles
    sampled_phi = np.unique(phi_angles)

    for phi_value in np.atleast_1d(phi):
        nearest_phi, _ = find_nearest(sampled_phi, phi_value)
        mask = phi_angles == nearest_phi
        order = np.argsort(theta_angles[mask])
        ax.plot(theta_angles[mask][order], gain_db[mask][order],
                label=f"φ = {nearest_phi:.1f}°")

    ax.set_xlabel('Theta (degrees)')
    ax.set_ylabel('Normalized Magnitude (dB)' if normalize else 'Magnitude (dB)')
    ax.set_ylim(bottom=floor_db)
    ax.grid(True)
    ax.legend()

    if title is None:
        title = f"{channel} at {field.frequency/1e9:.3f} GHz"
    ax.set_title(title)

    return fig


def plot_field_2d(
    field: Field,
    channel: str = RELATIVE_GAIN,
    normalize: bool = True,
    floor_db: float = -40.0,
    ax: Optional[plt.Axes] = None,
    fig_size: Tuple[float, float] = (10, 6),
    title: Optional[str] = None
) -> plt.Figure:
    """
    Plot the magnitude of a field sampled on a regular theta/phi grid as a map.

    Args:
        field: Field to plot; its directions must form a regular grid
        channel: Channel to plot
        normalize: If True, normalize the magnitude to the channel peak (0 dB)
        floor_db: Lower limit of the color scale in dB
        ax: Optional matplotlib axes to plot on
        fig_size: Figure size as (width, height) in inches
        title: Optional title for the plot

    Returns:
        matplotlib.Figure: The created figure object
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=fig_size)
    else:
        fig = ax.figure

    grid = field.to_grid(channel)
    magnitude_db = 20 * np.log10(np.maximum(np.abs(grid.values), 1e-15))
    if normalize:
        magnitude_db = magnitude_db - np.max(magnitude_db)

    mesh = ax.pcolormesh(grid.phi.values, grid.theta.values, magnitude_db,
                         shading='auto', vmin=floor_db, vmax=np.max(magnitude_db))
    fig.colorbar(mesh, ax=ax, label='Normalized Magnitude (dB)' if normalize else 'Magnitude (dB)')

    ax.set_xlabel('Phi (degrees)')
    ax.set_ylabel('Theta (degrees)')

    if title is None:
        title = f"{channel} at {field.frequency/1e9:.3f} GHz"
    ax.set_title(title)

    return fig
