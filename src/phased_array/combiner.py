"""
Combine an array factor with an embedded element field.

The realized pattern of a phased array is the embedded element field
multiplied, direction by direction, by the array factor.
"""
import logging
from concurrent.futures import Executor
from typing import Optional, Sequence

from .array import AntennaArray
from .array_factor import ArrayFactorEngine
from .config import CalculationConfig
from .directions import Direction
from .exceptions import FieldMismatchError
from .field import Field

# Configure logging
logger = logging.getLogger(__name__)


def combine_fields(embedded_field: Field, array_factor: Field, truncate: bool = False) -> Field:
    """
    Create a phased array field from an embedded element field and an array factor.

    Each output sample is embedded[i] * array_factor[i]. Channels with the
    same name are multiplied pairwise; a single array factor channel scales
    every channel of the embedded field. The result uses the array factor's
    frequency and field type.

    Args:
        embedded_field: Average embedded element field
        array_factor: Array factor field over the same directions
        truncate: If True, fields of different lengths are combined up to the
            shorter length (with a warning) instead of raising

    Returns:
        Field: Realized phased array field

    Raises:
        FieldMismatchError: If the fields do not sample the same directions in
            the same order, or have no channels that can be paired
    """
    if len(embedded_field) != len(array_factor) and not truncate:
        raise FieldMismatchError(
            f"Embedded field has {len(embedded_field)} directions but array factor "
            f"has {len(array_factor)}")

    combined = array_factor.multiply(embedded_field, truncate=truncate)
    result = Field(
        directions=combined.directions,
        channels={name: combined.channel(name) for name in combined.channel_names},
        frequency=array_factor.frequency,
        field_type=array_factor.field_type,
        metadata={
            'source': 'phased_array',
            'embedded_field_metadata': embedded_field.metadata,
            'array_factor_metadata': array_factor.metadata,
        }
    )
    logger.info(f"Combined embedded field with array factor over {len(result)} directions")
    return result


def compute_phased_array(embedded_field: Field,
                         frequency: float,
                         array: AntennaArray,
                         directions: Sequence[Direction],
                         executor: Optional[Executor] = None,
                         config: Optional[CalculationConfig] = None) -> Field:
    """
    Compute the array factor and combine it with an embedded element field.

    Args:
        embedded_field: Average embedded element field sampled at ``directions``
        frequency: Frequency in Hz
        array: Antenna array to evaluate
        directions: Observation directions
        executor: Optional caller-owned executor for the array factor
        config: Optional calculation settings

    Returns:
        Field: Realized phased array field

    Raises:
        FieldMismatchError: If the embedded field does not sample ``directions``
        CalculationError: If the array factor could not be computed
    """
    directions = list(directions)
    if len(embedded_field) != len(directions) or embedded_field.directions != tuple(directions):
        raise FieldMismatchError("Embedded field must sample the requested directions in the same order")

    array_factor = ArrayFactorEngine(config).compute(frequency, array, directions, executor)
    return combine_fields(embedded_field, array_factor)
