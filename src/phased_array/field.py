"""
Container for complex field samples over a list of directions.
"""
import copy
import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import xarray as xr

from .directions import Direction, directions_to_arrays
from .exceptions import FieldMismatchError

# Configure logging
logger = logging.getLogger(__name__)

# Channel names
RELATIVE_GAIN = 'relative_gain'
E_THETA = 'e_theta'
E_PHI = 'e_phi'


class FieldType(str, Enum):
    """Region a field was computed for."""
    FARFIELD = 'farfield'
    NEARFIELD = 'nearfield'


class Field:
    """
    Complex field samples over an ordered list of directions.

    A field holds one or more named channels of complex samples, each
    aligned index-for-index with its directions. Fields are immutable;
    operations return new fields, and the ``data`` and ``metadata``
    properties hand out copies.
    """

    def __init__(self,
                 directions: Sequence[Direction],
                 channels: Mapping[str, Any],
                 frequency: float,
                 field_type: FieldType = FieldType.FARFIELD,
                 metadata: Optional[Dict[str, Any]] = None):
        """
        Args:
            directions: Ordered directions the samples belong to
            channels: Mapping of channel name to complex samples, one per direction
            frequency: Frequency in Hz
            field_type: Region the field describes
            metadata: Optional metadata dictionary

        Raises:
            ValueError: If no channels are given or a channel has the wrong length
        """
        directions = tuple(directions)
        if not channels:
            raise ValueError("A field needs at least one channel")

        samples: Dict[str, np.ndarray] = {}
        for name, values in channels.items():
            values = np.array(values, dtype=np.complex128).reshape(-1)
            if values.shape[0] != len(directions):
                raise ValueError(f"Channel '{name}' has {values.shape[0]} samples "
                                 f"for {len(directions)} directions")
            values.setflags(write=False)
            samples[str(name)] = values

        self._directions = directions
        self._frequency = float(frequency)
        self._field_type = FieldType(field_type)
        self._metadata = copy.deepcopy(dict(metadata)) if metadata is not None else {}

        theta, phi = directions_to_arrays(directions)
        self._theta_deg = np.degrees(theta)
        self._phi_deg = np.degrees(phi)
        self._theta_deg.setflags(write=False)
        self._phi_deg.setflags(write=False)
        self._data = xr.Dataset(
            data_vars={name: ('direction', values) for name, values in samples.items()},
            coords={
                'theta': ('direction', self._theta_deg),
                'phi': ('direction', self._phi_deg),
            },
            attrs={
                'frequency': self._frequency,
                'field_type': self._field_type.value,
            }
        )
        self._channels = samples

    @property
    def data(self) -> xr.Dataset:
        """
        Get the samples as an xarray Dataset.

        The Dataset has dimension ``direction``, one data variable per channel,
        and ``theta``/``phi`` coordinates in degrees. A deep copy is returned,
        so changes to it do not affect the field.
        """
        return self._data.copy(deep=True)

    @property
    def metadata(self) -> Dict[str, Any]:
        """Get a copy of the free-form metadata."""
        return copy.deepcopy(self._metadata)

    @property
    def directions(self) -> Tuple[Direction, ...]:
        return self._directions

    @property
    def frequency(self) -> float:
        """Get frequency in Hz."""
        return self._frequency

    @property
    def field_type(self) -> FieldType:
        return self._field_type

    @property
    def channel_names(self) -> List[str]:
        return list(self._channels)

    @property
    def theta_angles(self) -> np.ndarray:
        """Get theta angle of each sample in degrees."""
        return self._theta_deg

    @property
    def phi_angles(self) -> np.ndarray:
        """Get phi angle of each sample in degrees."""
        return self._phi_deg

    def __len__(self) -> int:
        return len(self._directions)

    def __repr__(self) -> str:
        return (f"Field(directions={len(self)}, channels={self.channel_names}, "
                f"frequency={self._frequency}, field_type={self._field_type.value})")

    def channel(self, name: str = RELATIVE_GAIN) -> np.ndarray:
        """
        Get the samples of one channel.

        Args:
            name: Channel name

        Returns:
            np.ndarray: Read-only complex samples, one per direction

        Raises:
            KeyError: If the channel does not exist
        """
        if name not in self._channels:
            raise KeyError(f"Channel {name} not found in field. "
                           f"Available channels: {self.channel_names}")
        return self._channels[name]

    def copy(self) -> 'Field':
        """Create a copy of the field."""
        return Field(
            directions=self._directions,
            channels={name: values.copy() for name, values in self._channels.items()},
            frequency=self._frequency,
            field_type=self._field_type,
            metadata=self._metadata
        )

    def multiply(self, other: 'Field', truncate: bool = False) -> 'Field':
        """
        Pointwise complex multiplication with another field.

        Channels present in both fields are multiplied pairwise. When no
        channel names match and one field has a single channel, that channel
        multiplies every channel of the other field. The result carries this
        field's frequency and field type.

        Args:
            other: Field to multiply with
            truncate: If True, fields of different lengths are multiplied up to
                the shorter length instead of raising

        Returns:
            Field: New field with the products

        Raises:
            FieldMismatchError: If the direction lists differ or no channels can be paired
        """
        n = len(self)
        if len(other) != n:
            if not truncate:
                raise FieldMismatchError(
                    f"Cannot multiply fields with {len(self)} and {len(other)} directions")
            n = min(len(self), len(other))
            logger.warning(f"Multiplying fields of {len(self)} and {len(other)} directions; "
                           f"truncating to {n}")

        directions = self._directions[:n]
        if other.directions[:n] != directions:
            raise FieldMismatchError("Fields must sample identical directions in the same order")

        common = [name for name in self.channel_names if name in other.channel_names]
        if common:
            products = {name: self.channel(name)[:n] * other.channel(name)[:n] for name in common}
        elif len(self.channel_names) == 1:
            scale = self.channel(self.channel_names[0])[:n]
            products = {name: scale * other.channel(name)[:n] for name in other.channel_names}
        elif len(other.channel_names) == 1:
            scale = other.channel(other.channel_names[0])[:n]
            products = {name: self.channel(name)[:n] * scale for name in self.channel_names}
        else:
            raise FieldMismatchError(f"No channels to pair between {self.channel_names} "
                                     f"and {other.channel_names}")

        return Field(
            directions=directions,
            channels=products,
            frequency=self._frequency,
            field_type=self._field_type,
            metadata={'source': 'field_product'}
        )

    def get_gain_db(self, name: str = RELATIVE_GAIN) -> xr.DataArray:
        """
        Get the magnitude of a channel in dB (20*log10|E|).

        Args:
            name: Channel name

        Returns:
            xarray.DataArray: Magnitude in dB along the ``direction`` dimension
        """
        self.channel(name)
        return 20 * np.log10(np.maximum(np.abs(self._data[name]), 1e-15))

    def get_phase(self, name: str = RELATIVE_GAIN) -> xr.DataArray:
        """
        Get the phase of a channel in degrees.

        Args:
            name: Channel name

        Returns:
            xarray.DataArray: Phase in degrees along the ``direction`` dimension
        """
        values = self.channel(name)
        return xr.DataArray(np.degrees(np.angle(values)), coords=self._data[name].coords,
                            dims=('direction',))

    def peak_direction(self, name: str = RELATIVE_GAIN) -> Direction:
        """Direction of the largest magnitude sample in a channel (first one on ties)."""
        values = self.channel(name)
        if values.size == 0:
            raise ValueError("Field has no samples")
        return self._directions[int(np.argmax(np.abs(values)))]

    def to_grid(self, name: str = RELATIVE_GAIN) -> xr.DataArray:
        """
        Reshape a channel sampled on a regular theta/phi grid into 2D.

        Args:
            name: Channel name

        Returns:
            xarray.DataArray: Complex samples with dimensions (theta, phi) in degrees

        Raises:
            ValueError: If the directions do not form a complete theta/phi grid
        """
        values = self.channel(name)
        theta = np.unique(self.theta_angles)
        phi = np.unique(self.phi_angles)
        if theta.size * phi.size != values.size:
            raise ValueError(f"Field directions do not form a regular grid "
                             f"({theta.size} theta x {phi.size} phi != {values.size} samples)")

        grid = np.full((theta.size, phi.size), np.nan + 0j, dtype=np.complex128)
        theta_idx = np.searchsorted(theta, self.theta_angles)
        phi_idx = np.searchsorted(phi, self.phi_angles)
        grid[theta_idx, phi_idx] = values
        if np.isnan(grid.real).any():
            raise ValueError("Field directions do not form a regular grid (duplicate samples)")

        return xr.DataArray(grid, coords={'theta': theta, 'phi': phi}, dims=('theta', 'phi'),
                            name=name, attrs={'frequency': self._frequency})
