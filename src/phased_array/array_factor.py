"""
Array factor calculation.

For every observation direction the array factor is the coherent sum of
each element's weight times its steering phasor:

    AF(d) = sum_n w_n * exp(-j k(d) . r_n)

Directions are independent, so each one is a unit of work submitted to a
bounded thread pool. All directions must finish before a result is
returned; the first failure aborts the whole calculation.
"""
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait, FIRST_EXCEPTION
from typing import List, Optional, Sequence

import numpy as np

from .array import AntennaArray
from .config import CalculationConfig, get_default_config
from .directions import Direction
from .exceptions import CalculationError
from .field import Field, FieldType, RELATIVE_GAIN
from .utilities import frequency_to_wavelength
from .wave import wave_vector, steering_phasors

# Configure logging
logger = logging.getLogger(__name__)


def _array_factor_at(wavelength: float, positions: np.ndarray, weights: np.ndarray,
                     direction: Direction) -> complex:
    """Sum the weighted steering phasors of all elements for one direction."""
    k = wave_vector(wavelength, direction)
    return complex(np.sum(weights * steering_phasors(k, positions)))


class ArrayFactorEngine:
    """
    Computes array factor fields using a bounded pool of worker threads.

    The engine captures its configuration when it is created. Changing the
    process-wide default afterwards does not affect it.

    Example:
        ```python
        engine = ArrayFactorEngine(CalculationConfig(num_threads=4))
        field = engine.compute(28e9, array, equally_spaced_sphere(1))
        ```
    """

    def __init__(self, config: Optional[CalculationConfig] = None):
        """
        Args:
            config: Calculation settings. If None, the current process-wide
                default is used.
        """
        self._config = config if config is not None else get_default_config()

    @property
    def config(self) -> CalculationConfig:
        return self._config

    def compute(self,
                frequency: float,
                array: AntennaArray,
                directions: Sequence[Direction],
                executor: Optional[Executor] = None) -> Field:
        """
        Compute the array factor of an array over a list of directions.

        Args:
            frequency: Frequency in Hz at which the array factor is evaluated
            array: Antenna array to evaluate
            directions: Observation directions; output samples follow this order
            executor: Optional executor to run the per-direction work on. The
                caller keeps ownership and it is not shut down. If None, a
                thread pool with ``config.num_threads`` workers is created for
                this call and shut down before returning.

        Returns:
            Field: Far field with one ``relative_gain`` channel

        Raises:
            ValueError: If the frequency is not positive
            CalculationError: If any direction could not be computed or the work
                could not be scheduled. When several directions fail, the error
                reported is the first failed direction in input order, which is
                not necessarily the first one to fail in time.
        """
        wavelength = frequency_to_wavelength(frequency)
        directions = list(directions)

        if executor is None:
            logger.debug(f"Creating thread pool with {self._config.num_threads} workers")
            with ThreadPoolExecutor(max_workers=self._config.num_threads,
                                    thread_name_prefix='array-factor') as pool:
                samples = self._run(pool, wavelength, array, directions)
        else:
            logger.debug("Using caller-supplied executor")
            samples = self._run(executor, wavelength, array, directions)

        logger.info(f"Array factor computed for {len(directions)} directions, "
                    f"{len(array)} elements at {frequency/1e9:.3f} GHz")

        return Field(
            directions=directions,
            channels={RELATIVE_GAIN: samples},
            frequency=frequency,
            field_type=FieldType.FARFIELD,
            metadata={'source': 'array_factor', 'num_elements': len(array)}
        )

    def _run(self, executor: Executor, wavelength: float, array: AntennaArray,
             directions: List[Direction]) -> np.ndarray:
        positions = array.positions
        weights = array.weights

        futures: List[Future] = []
        try:
            for direction in directions:
                futures.append(
                    executor.submit(_array_factor_at, wavelength, positions, weights, direction))
        except RuntimeError as e:
            for future in futures:
                future.cancel()
            raise CalculationError("Could not schedule array factor calculation") from e

        done, not_done = wait(futures, return_when=FIRST_EXCEPTION)

        for future in futures:
            if future in done and future.exception() is not None:
                for pending in not_done:
                    pending.cancel()
                error = future.exception()
                logger.error("Array factor calculation failed", exc_info=error)
                raise CalculationError(
                    "Encountered unexpected exception while calculating array factor") from error

        samples = np.empty(len(directions), dtype=np.complex128)
        for i, future in enumerate(futures):
            samples[i] = future.result()
        return samples


def compute_array_factor(frequency: float,
                         array: AntennaArray,
                         directions: Sequence[Direction],
                         executor: Optional[Executor] = None,
                         config: Optional[CalculationConfig] = None) -> Field:
    """
    Compute the array factor of an array over a list of directions.

    Convenience wrapper around ArrayFactorEngine.compute.

    Args:
        frequency: Frequency in Hz
        array: Antenna array to evaluate
        directions: Observation directions
        executor: Optional caller-owned executor
        config: Optional calculation settings (default: process-wide default)

    Returns:
        Field: Far field with one ``relative_gain`` channel
    """
    return ArrayFactorEngine(config).compute(frequency, array, directions, executor)
