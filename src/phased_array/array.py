"""
Antenna array geometry and element excitation.

An AntennaArray is an immutable, ordered collection of elements that share
one design frequency. Arrays are built either as a regular lattice with
per-axis spacing given in wavelengths, or from an explicit list of points.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .exceptions import InvalidGeometryError
from .utilities import frequency_to_wavelength
from .weighting import WeightingStrategy, UniformWeighting

# Configure logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Element:
    """
    A single weighted antenna element.

    Attributes:
        position: Read-only position vector of shape (3,)
        frequency: Design frequency in Hz
        weight: Complex excitation weight
    """
    position: np.ndarray
    frequency: float
    weight: complex


def _validate_design_frequency(design_frequency: float) -> float:
    design_frequency = float(design_frequency)
    if not np.isfinite(design_frequency) or design_frequency <= 0:
        raise InvalidGeometryError(f"Design frequency must be positive and finite, got {design_frequency}")
    return design_frequency


def _validate_positions(points) -> np.ndarray:
    positions = np.array(points, dtype=float)
    if positions.size == 0:
        raise InvalidGeometryError("An antenna array needs at least one element")
    if positions.ndim == 1 and positions.size == 3:
        positions = positions.reshape(1, 3)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise InvalidGeometryError(f"Element positions must have shape (N, 3), got {positions.shape}")
    if not np.all(np.isfinite(positions)):
        raise InvalidGeometryError("Element positions must be finite")
    return positions


class AntennaArray:
    """
    Immutable collection of antenna elements.

    Elements keep the order they were supplied in. The array factor does not
    depend on that order, but keeping it stable makes results reproducible.

    Attributes:
        design_frequency (float): Frequency in Hz shared by all elements
        positions (np.ndarray): Read-only element positions, shape (N, 3)
        weights (np.ndarray): Read-only complex element weights, shape (N,)
    """

    def __init__(self, positions: np.ndarray, weights: np.ndarray, design_frequency: float):
        """
        Args:
            positions: Element positions, shape (N, 3)
            weights: Complex element weights, shape (N,)
            design_frequency: Design frequency in Hz

        Raises:
            InvalidGeometryError: If the positions, weights or frequency are invalid
        """
        positions = _validate_positions(positions)
        weights = np.array(weights, dtype=complex).reshape(-1)
        if weights.shape[0] != positions.shape[0]:
            raise InvalidGeometryError(
                f"Got {weights.shape[0]} weights for {positions.shape[0]} element positions")

        positions.setflags(write=False)
        weights.setflags(write=False)

        self._design_frequency = _validate_design_frequency(design_frequency)
        self._positions = positions
        self._weights = weights
        self._elements = tuple(
            Element(position=positions[i], frequency=self._design_frequency, weight=complex(weights[i]))
            for i in range(positions.shape[0])
        )

    @property
    def design_frequency(self) -> float:
        return self._design_frequency

    @property
    def design_wavelength(self) -> float:
        return frequency_to_wavelength(self._design_frequency)

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def elements(self) -> Tuple[Element, ...]:
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> Element:
        return self._elements[index]

    def __repr__(self) -> str:
        return f"AntennaArray(elements={len(self)}, design_frequency={self._design_frequency})"


@dataclass
class ArrayBuilder:
    """
    Accumulates element locations and produces an AntennaArray.

    Example:
        ```python
        array = (ArrayBuilder()
                 .set_design_frequency(28e9)
                 .set_weighting(ConjugateWeighting.from_frequency(28e9, Direction.from_degrees(90, 0)))
                 .add_position([0, 0, 0])
                 .add_position([0, 0.005, 0])
                 .build())
        ```
    """
    design_frequency: Optional[float] = None
    weighting: Optional[WeightingStrategy] = None
    points: List[Tuple[float, float, float]] = field(default_factory=list)

    def add_position(self, position: Sequence[float]) -> 'ArrayBuilder':
        """Append one element location."""
        if len(position) != 3:
            raise InvalidGeometryError(f"Element position must have three coordinates, got {len(position)}")
        self.points.append(tuple(float(c) for c in position))
        return self

    def add_positions(self, positions: Iterable[Sequence[float]]) -> 'ArrayBuilder':
        """Append several element locations in order."""
        for position in positions:
            self.add_position(position)
        return self

    def set_design_frequency(self, design_frequency: float) -> 'ArrayBuilder':
        self.design_frequency = design_frequency
        return self

    def set_weighting(self, weighting: WeightingStrategy) -> 'ArrayBuilder':
        self.weighting = weighting
        return self

    def build(self) -> AntennaArray:
        """
        Create the array from the accumulated locations.

        Raises:
            InvalidGeometryError: If no design frequency or no locations were given
        """
        if self.design_frequency is None:
            raise InvalidGeometryError("A design frequency must be set before building the array")
        return build_from_points(self.points, self.design_frequency, self.weighting)


def build_from_points(points: Iterable[Sequence[float]],
                      design_frequency: float,
                      weighting: Optional[WeightingStrategy] = None) -> AntennaArray:
    """
    Build an array with one element per supplied point.

    Args:
        points: Element positions, shape (N, 3), in input order
        design_frequency: Design frequency in Hz shared by all elements
        weighting: Strategy used to compute each element weight
            (default: uniform unit weights)

    Returns:
        AntennaArray with elements in the order of ``points``

    Raises:
        InvalidGeometryError: If the points are empty, malformed or not finite
    """
    positions = _validate_positions(list(points))
    design_frequency = _validate_design_frequency(design_frequency)
    if weighting is None:
        weighting = UniformWeighting()

    array = AntennaArray(positions, weighting.weights(positions), design_frequency)
    logger.info(f"Built antenna array with {len(array)} elements at {design_frequency/1e9:.3f} GHz")
    return array


def build_lattice(count_x: int, count_y: int, count_z: int,
                  spacing_x: float, spacing_y: float, spacing_z: float,
                  design_frequency: float,
                  weighting: Optional[WeightingStrategy] = None) -> AntennaArray:
    """
    Build a regular 1D/2D/3D lattice array.

    The element at lattice index (i, j, k) sits at (i*dx, j*dy, k*dz), where
    each physical spacing is the given spacing in wavelengths times
    c / design_frequency. Elements are stored x-major, then y, then z.

    Args:
        count_x, count_y, count_z: Number of elements along each axis (>= 1)
        spacing_x, spacing_y, spacing_z: Element spacing along each axis in wavelengths
        design_frequency: Design frequency in Hz
        weighting: Strategy used to compute each element weight
            (default: uniform unit weights)

    Returns:
        AntennaArray with count_x * count_y * count_z elements

    Raises:
        InvalidGeometryError: If a count is < 1 or the design frequency is invalid
    """
    counts = {'x': count_x, 'y': count_y, 'z': count_z}
    for axis, count in counts.items():
        if isinstance(count, bool) or int(count) != count or count < 1:
            raise InvalidGeometryError(f"Array size in {axis} dimension must be >= 1, got {count}")

    design_frequency = _validate_design_frequency(design_frequency)
    wavelength = frequency_to_wavelength(design_frequency)
    dx = spacing_x * wavelength
    dy = spacing_y * wavelength
    dz = spacing_z * wavelength

    positions = [
        (i * dx, j * dy, k * dz)
        for i in range(int(count_x))
        for j in range(int(count_y))
        for k in range(int(count_z))
    ]
    logger.debug(f"Lattice {count_x}x{count_y}x{count_z} with spacing "
                 f"({dx:.4g}, {dy:.4g}, {dz:.4g}) m")
    return build_from_points(positions, design_frequency, weighting)


def build_equally_spaced(count_x: int, count_y: int, count_z: int,
                         spacing: float,
                         design_frequency: float,
                         weighting: Optional[WeightingStrategy] = None) -> AntennaArray:
    """Build a lattice with the same spacing (in wavelengths) along every axis."""
    return build_lattice(count_x, count_y, count_z, spacing, spacing, spacing,
                         design_frequency, weighting)


def build_planar(count_y: int, count_z: int,
                 spacing_y: float, spacing_z: float,
                 design_frequency: float,
                 weighting: Optional[WeightingStrategy] = None) -> AntennaArray:
    """Build a 2D lattice in the y-z plane (one element along x, zero x spacing)."""
    return build_lattice(1, count_y, count_z, 0.0, spacing_y, spacing_z,
                         design_frequency, weighting)
