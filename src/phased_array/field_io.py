"""
File input/output functions for fields.
"""

import logging
import numpy as np
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .directions import Direction
from .field import Field, FieldType

# Configure logging
logger = logging.getLogger(__name__)

FORMAT_VERSION = '1.0'


def save_field_npz(field: Field, file_path: Union[str, Path], metadata: Optional[Dict[str, Any]] = None) -> None:
    """
    Save a field to NPZ format for efficient loading.

    Args:
        field: Field object to save
        file_path: Path to save the file to
        metadata: Optional metadata to include

    Raises:
        OSError: If file cannot be written
    """
    file_path = Path(file_path)

    # Ensure .npz extension
    if file_path.suffix.lower() != '.npz':
        file_path = file_path.with_suffix('.npz')

    meta_dict = {
        'version': FORMAT_VERSION,
        'format': 'PhasedArray Field NPZ',
        'frequency': field.frequency,
        'field_type': field.field_type.value,
        'channels': field.channel_names,
        'field_metadata': field.metadata,
    }
    if metadata:
        meta_dict.update(metadata)

    theta = np.array([d.theta for d in field.directions], dtype=float)
    phi = np.array([d.phi for d in field.directions], dtype=float)

    save_dict = {
        'theta': theta,
        'phi': phi,
        'metadata': json.dumps(meta_dict, default=str),
    }
    for i, name in enumerate(field.channel_names):
        save_dict[f'channel_{i}'] = field.channel(name)

    np.savez_compressed(file_path, **save_dict)
    logger.info(f"Field saved to {file_path}")


def load_field_npz(file_path: Union[str, Path]) -> Field:
    """
    Load a field from NPZ format.

    Args:
        file_path: Path to the NPZ file

    Returns:
        Field: The loaded field

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If file format is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Field file not found: {file_path}")

    with np.load(file_path, allow_pickle=False) as data:
        try:
            theta = data['theta']
            phi = data['phi']
            metadata = json.loads(str(data['metadata']))
            channel_names = metadata.pop('channels')
            channels = {name: data[f'channel_{i}'] for i, name in enumerate(channel_names)}
        except KeyError as e:
            raise ValueError(f"Invalid field file {file_path}: missing {e}") from e

    frequency = metadata.pop('frequency')
    field_type = metadata.pop('field_type', FieldType.FARFIELD.value)
    field_metadata = metadata.pop('field_metadata', {})
    metadata.pop('version', None)
    metadata.pop('format', None)
    field_metadata.update(metadata)

    directions = [Direction(t, p) for t, p in zip(theta, phi)]
    field = Field(directions, channels, frequency, FieldType(field_type), field_metadata)
    logger.info(f"Field loaded from {file_path}")
    return field


def save_field_json(field: Field, file_path: Union[str, Path]) -> None:
    """
    Save a field to a JSON file.

    Angles are written in radians and complex samples as [real, imag] pairs:

        {"frequency": 28e9, "field_type": "farfield",
         "directions": [[theta, phi], ...],
         "channels": {"relative_gain": [[re, im], ...]}}

    Args:
        field: Field object to save
        file_path: Path to save the file to
    """
    file_path = Path(file_path)

    content = {
        'version': FORMAT_VERSION,
        'frequency': field.frequency,
        'field_type': field.field_type.value,
        'directions': [[d.theta, d.phi] for d in field.directions],
        'channels': {
            name: np.column_stack((field.channel(name).real, field.channel(name).imag)).tolist()
            for name in field.channel_names
        },
        'metadata': field.metadata,
    }

    with open(file_path, 'w') as f:
        json.dump(content, f, default=str)
    logger.info(f"Field saved to {file_path}")


def load_field_json(file_path: Union[str, Path]) -> Field:
    """
    Load a field from a JSON file written by save_field_json.

    Args:
        file_path: Path to the JSON file

    Returns:
        Field: The loaded field

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If file format is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Field file not found: {file_path}")

    with open(file_path, 'r') as f:
        content = json.load(f)

    try:
        directions = [Direction(theta, phi) for theta, phi in content['directions']]
        channels = {}
        for name, pairs in content['channels'].items():
            pairs = np.asarray(pairs, dtype=float).reshape(-1, 2)
            channels[name] = pairs[:, 0] + 1j * pairs[:, 1]
        frequency = content['frequency']
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid field file {file_path}: {e}") from e

    field = Field(
        directions=directions,
        channels=channels,
        frequency=frequency,
        field_type=FieldType(content.get('field_type', FieldType.FARFIELD.value)),
        metadata=content.get('metadata')
    )
    logger.info(f"Field loaded from {file_path}")
    return field
