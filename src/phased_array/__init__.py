"""
PhasedArray package - Array factor calculation for phased antenna arrays.

This package builds antenna array geometries, computes beam-steering
weights, evaluates the far-field array factor in parallel over many
observation directions, and combines it with an embedded element field
to obtain the realized phased array pattern.
"""

__version__ = '0.1.0'

# Import key classes and functions to make them available at the package level
from .directions import (
    Direction,
    directions_from_degrees,
    equally_spaced_sphere,
    directions_to_arrays
)
from .wave import (
    wave_vector,
    steering_phasor,
    steering_phasors
)
from .weighting import (
    WeightingStrategy,
    UniformWeighting,
    ConjugateWeighting,
    TaperedWeighting
)
from .array import (
    Element,
    AntennaArray,
    ArrayBuilder,
    build_lattice,
    build_equally_spaced,
    build_planar,
    build_from_points
)
from .config import (
    CalculationConfig,
    get_default_config,
    set_default_config,
    reset_default_config
)
from .field import (
    Field,
    FieldType,
    RELATIVE_GAIN,
    E_THETA,
    E_PHI
)
from .array_factor import (
    ArrayFactorEngine,
    compute_array_factor
)
from .combiner import (
    combine_fields,
    compute_phased_array
)
from .field_io import (
    save_field_npz,
    load_field_npz,
    save_field_json,
    load_field_json
)
from .exceptions import (
    PhasedArrayError,
    InvalidGeometryError,
    CalculationError,
    FieldMismatchError
)
from .utilities import (
    lightspeed,
    frequency_to_wavelength,
    find_nearest
)
from .plotting import (
    plot_field_cut,
    plot_field_2d
)

# Define what gets imported with "from phased_array import *"
__all__ = [
    'Direction',
    'directions_from_degrees',
    'equally_spaced_sphere',
    'directions_to_arrays',
    'wave_vector',
    'steering_phasor',
    'steering_phasors',
    'WeightingStrategy',
    'UniformWeighting',
    'ConjugateWeighting',
    'TaperedWeighting',
    'Element',
    'AntennaArray',
    'ArrayBuilder',
    'build_lattice',
    'build_equally_spaced',
    'build_planar',
    'build_from_points',
    'CalculationConfig',
    'get_default_config',
    'set_default_config',
    'reset_default_config',
    'Field',
    'FieldType',
    'RELATIVE_GAIN',
    'E_THETA',
    'E_PHI',
    'ArrayFactorEngine',
    'compute_array_factor',
    'combine_fields',
    'compute_phased_array',
    'save_field_npz',
    'load_field_npz',
    'save_field_json',
    'load_field_json',
    'PhasedArrayError',
    'InvalidGeometryError',
    'CalculationError',
    'FieldMismatchError',
    'lightspeed',
    'frequency_to_wavelength',
    'find_nearest',
    'plot_field_cut',
    'plot_field_2d'
]
