"""
Observation directions in IEEE spherical coordinates.

A direction is a (theta, phi) pair stored in radians, with theta measured
from the +z axis in [0, pi] and phi measured from the +x axis in [-pi, pi].
"""
import math
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

# Configure logging
logger = logging.getLogger(__name__)

# Slack allowed on theta bounds for values produced by degree conversion
_ANGLE_TOLERANCE = 1e-12


def _wrap_phi(phi: float) -> float:
    """Wrap an azimuth angle into [-pi, pi]."""
    if -math.pi <= phi <= math.pi:
        return phi
    wrapped = math.fmod(phi + math.pi, 2 * math.pi)
    if wrapped < 0:
        wrapped += 2 * math.pi
    return wrapped - math.pi


@dataclass(frozen=True)
class Direction:
    """
    Immutable observation or pointing direction.

    Attributes:
        theta: Polar angle in radians, [0, pi]
        phi: Azimuth angle in radians, [-pi, pi]
    """
    theta: float
    phi: float

    def __post_init__(self):
        theta = float(self.theta)
        phi = float(self.phi)

        if not (math.isfinite(theta) and math.isfinite(phi)):
            raise ValueError(f"Direction angles must be finite, got theta={theta}, phi={phi}")
        if theta < -_ANGLE_TOLERANCE or theta > math.pi + _ANGLE_TOLERANCE:
            raise ValueError(f"theta must be within [0, pi] radians, got {theta}")

        object.__setattr__(self, 'theta', min(max(theta, 0.0), math.pi))
        object.__setattr__(self, 'phi', _wrap_phi(phi))

    @classmethod
    def from_radians(cls, theta: float, phi: float) -> 'Direction':
        """Create a direction from angles in radians."""
        return cls(theta, phi)

    @classmethod
    def from_degrees(cls, theta: float, phi: float) -> 'Direction':
        """Create a direction from angles in degrees."""
        return cls(math.radians(theta), math.radians(phi))

    @property
    def theta_deg(self) -> float:
        """Polar angle in degrees."""
        return math.degrees(self.theta)

    @property
    def phi_deg(self) -> float:
        """Azimuth angle in degrees."""
        return math.degrees(self.phi)

    def unit_vector(self) -> np.ndarray:
        """Cartesian unit vector pointing along this direction."""
        sin_theta = math.sin(self.theta)
        return np.array([
            sin_theta * math.cos(self.phi),
            sin_theta * math.sin(self.phi),
            math.cos(self.theta),
        ])


def directions_from_degrees(angles: Iterable[Tuple[float, float]]) -> List[Direction]:
    """
    Build a list of directions from (theta, phi) pairs in degrees.

    Args:
        angles: Iterable of (theta_deg, phi_deg) pairs

    Returns:
        List of Direction objects in input order
    """
    return [Direction.from_degrees(theta, phi) for theta, phi in angles]


def equally_spaced_sphere(step_deg: float) -> List[Direction]:
    """
    Sample the full sphere on a regular theta/phi grid.

    Theta runs from 0 to 180 degrees (outer loop) and phi from -180 to 180
    degrees (inner loop), both inclusive, at the given step.

    Args:
        step_deg: Angular step in degrees

    Returns:
        List of Direction objects, theta-major order

    Raises:
        ValueError: If step_deg is not positive
    """
    if not step_deg > 0:
        raise ValueError(f"step_deg must be positive, got {step_deg}")

    n_theta = int(math.floor(180.0 / step_deg + 1e-9)) + 1
    n_phi = int(math.floor(360.0 / step_deg + 1e-9)) + 1

    directions = [
        Direction.from_degrees(i * step_deg, -180.0 + j * step_deg)
        for i in range(n_theta)
        for j in range(n_phi)
    ]
    logger.debug(f"Generated {len(directions)} directions at {step_deg} deg spacing")
    return directions


def directions_to_arrays(directions: Sequence[Direction]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a sequence of directions into theta and phi arrays in radians.

    Args:
        directions: Sequence of Direction objects

    Returns:
        Tuple of (theta, phi) float arrays with one entry per direction
    """
    theta = np.fromiter((d.theta for d in directions), dtype=float, count=len(directions))
    phi = np.fromiter((d.phi for d in directions), dtype=float, count=len(directions))
    return theta, phi
