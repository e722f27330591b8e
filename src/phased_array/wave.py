"""
Plane wave and steering vector math.

These are pure functions with no state, safe to call from any thread.
"""
import numpy as np

from .directions import Direction


def wave_vector(wavelength: float, direction: Direction) -> np.ndarray:
    """
    Calculate the wave vector of a plane wave travelling along a direction.

    k = (2*pi/lambda) * (sin(theta)cos(phi), sin(theta)sin(phi), cos(theta))

    Args:
        wavelength: Wavelength in the same length unit as element positions.
            Must be positive; not validated here.
        direction: Propagation direction

    Returns:
        np.ndarray: Wave vector of shape (3,)
    """
    return direction.unit_vector() * (2 * np.pi / wavelength)


def steering_phasor(k: np.ndarray, position: np.ndarray) -> complex:
    """
    Calculate the steering phasor exp(-j k.r) for one element position.

    Args:
        k: Wave vector of shape (3,)
        position: Element position of shape (3,)

    Returns:
        complex: Unit magnitude phase factor
    """
    return complex(np.exp(-1j * np.dot(k, position)))


def steering_phasors(k: np.ndarray, positions: np.ndarray) -> np.ndarray:
    """
    Vectorized steering phasors for many element positions.

    Args:
        k: Wave vector of shape (3,)
        positions: Element positions of shape (N, 3)

    Returns:
        np.ndarray: Complex phasors of shape (N,)
    """
    return np.exp(-1j * (np.asarray(positions) @ k))
