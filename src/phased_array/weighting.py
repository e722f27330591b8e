"""
Element weighting strategies.

A weighting strategy maps an element position to a complex excitation
weight. Strategies are immutable once constructed and may be queried
concurrently.
"""
import logging
from abc import ABC, abstractmethod
from typing import Sequence, Tuple, Union

import numpy as np
from scipy.signal import windows

from .directions import Direction
from .utilities import frequency_to_wavelength
from .wave import wave_vector, steering_phasor, steering_phasors

# Configure logging
logger = logging.getLogger(__name__)

WindowSpec = Union[str, Tuple]


class WeightingStrategy(ABC):
    """Capability to compute a complex weight for an element position."""

    @abstractmethod
    def weight(self, position: np.ndarray) -> complex:
        """
        Compute the complex weight for one element.

        Args:
            position: Element position of shape (3,)

        Returns:
            complex: Excitation weight
        """

    def weights(self, positions: np.ndarray) -> np.ndarray:
        """Compute weights for an (N, 3) array of positions."""
        positions = np.asarray(positions, dtype=float)
        return np.array([self.weight(p) for p in positions], dtype=complex)


class UniformWeighting(WeightingStrategy):
    """Equal, in-phase excitation of every element."""

    def __init__(self, amplitude: complex = 1.0):
        self._amplitude = complex(amplitude)

    @property
    def amplitude(self) -> complex:
        return self._amplitude

    def weight(self, position: np.ndarray) -> complex:
        return self._amplitude

    def weights(self, positions: np.ndarray) -> np.ndarray:
        return np.full(len(positions), self._amplitude, dtype=complex)

    def __repr__(self) -> str:
        return f"UniformWeighting(amplitude={self._amplitude})"


class ConjugateWeighting(WeightingStrategy):
    """
    Phase-conjugate beam steering.

    The weight of an element at r is the complex conjugate of its steering
    phasor toward the pointing direction, so all element contributions add
    in phase along that direction:

        w(r) = conj(exp(-j k_p . r)),  k_p = wave_vector(lambda, pointing)
    """

    def __init__(self, wavelength: float, pointing_direction: Direction):
        """
        Args:
            wavelength: Wavelength used to compute the steering phase, in the
                same length unit as element positions
            pointing_direction: Direction the main beam is steered toward

        Raises:
            ValueError: If wavelength is not positive and finite
        """
        wavelength = float(wavelength)
        if not np.isfinite(wavelength) or wavelength <= 0:
            raise ValueError(f"Wavelength must be positive and finite, got {wavelength}")

        self._wavelength = wavelength
        self._pointing_direction = pointing_direction
        self._k = wave_vector(wavelength, pointing_direction)
        self._k.setflags(write=False)

    @classmethod
    def from_wavelength(cls, wavelength: float, pointing_direction: Direction) -> 'ConjugateWeighting':
        """Create a conjugate weighting for a wavelength."""
        return cls(wavelength, pointing_direction)

    @classmethod
    def from_frequency(cls, frequency: float, pointing_direction: Direction) -> 'ConjugateWeighting':
        """Create a conjugate weighting for a frequency, using lambda = c / frequency."""
        return cls(frequency_to_wavelength(frequency), pointing_direction)

    @property
    def wavelength(self) -> float:
        return self._wavelength

    @property
    def pointing_direction(self) -> Direction:
        return self._pointing_direction

    def weight(self, position: np.ndarray) -> complex:
        return steering_phasor(self._k, np.asarray(position, dtype=float)).conjugate()

    def weights(self, positions: np.ndarray) -> np.ndarray:
        return np.conj(steering_phasors(self._k, np.asarray(positions, dtype=float)))

    def __repr__(self) -> str:
        return (f"ConjugateWeighting(wavelength={self._wavelength}, "
                f"pointing_direction={self._pointing_direction})")


def _taper_window(window: WindowSpec, count: int) -> np.ndarray:
    """Symmetric amplitude window of the given length, peak normalized to 1."""
    if count == 1:
        return np.ones(1)
    taper = windows.get_window(window, count, fftbins=False)
    return taper / np.max(np.abs(taper))


class TaperedWeighting(WeightingStrategy):
    """
    Separable amplitude taper applied on top of another strategy.

    The lattice index of an element is recovered from its position and the
    physical element spacing, and the inner strategy's weight is scaled by
    the product of the per-axis window values at that index. Typical
    windows are 'hamming', 'hann', ('chebwin', 30) or ('taylor', 4, 30).
    """

    def __init__(self,
                 inner: WeightingStrategy,
                 counts: Sequence[int],
                 spacings: Sequence[float],
                 window: WindowSpec = 'hamming'):
        """
        Args:
            inner: Strategy providing the phase (and base amplitude) of each element
            counts: Lattice size (count_x, count_y, count_z)
            spacings: Physical element spacing (dx, dy, dz)
            window: Window specification accepted by scipy.signal.windows.get_window

        Raises:
            ValueError: If counts or spacings are not three values, or a count is < 1
        """
        if len(counts) != 3 or len(spacings) != 3:
            raise ValueError("counts and spacings must each have three values (x, y, z)")
        if any(int(n) < 1 for n in counts):
            raise ValueError(f"Taper counts must all be >= 1, got {tuple(counts)}")

        self._inner = inner
        self._counts = tuple(int(n) for n in counts)
        self._spacings = tuple(float(d) for d in spacings)
        self._window = window
        self._tapers = tuple(_taper_window(window, n) for n in self._counts)
        logger.debug(f"Created {window} taper for lattice {self._counts}")

    @classmethod
    def for_lattice(cls,
                    inner: WeightingStrategy,
                    counts: Sequence[int],
                    spacings_wavelengths: Sequence[float],
                    design_frequency: float,
                    window: WindowSpec = 'hamming') -> 'TaperedWeighting':
        """Create a taper for a lattice whose spacing is given in wavelengths."""
        wavelength = frequency_to_wavelength(design_frequency)
        return cls(inner, counts, [s * wavelength for s in spacings_wavelengths], window)

    @property
    def inner(self) -> WeightingStrategy:
        return self._inner

    def amplitude(self, position: np.ndarray) -> float:
        """
        Taper amplitude at an element position.

        Raises:
            ValueError: If the position does not fall inside the tapered lattice
        """
        position = np.asarray(position, dtype=float)
        amplitude = 1.0
        for axis, (count, spacing, taper) in enumerate(zip(self._counts, self._spacings, self._tapers)):
            if count == 1 or spacing == 0:
                index = 0
            else:
                index = int(round(position[axis] / spacing))
            if not 0 <= index < count:
                raise ValueError(f"Position {position.tolist()} lies outside the tapered lattice "
                                 f"on axis {'xyz'[axis]} (index {index}, size {count})")
            amplitude *= taper[index]
        return float(amplitude)

    def weight(self, position: np.ndarray) -> complex:
        return self.amplitude(position) * self._inner.weight(position)

    def __repr__(self) -> str:
        return f"TaperedWeighting(inner={self._inner!r}, counts={self._counts}, window={self._window!r})"
