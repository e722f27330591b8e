"""
Common utility functions and constants for phased array calculations.
"""
import numpy as np
from typing import Tuple, Union, List

# Physical constants
lightspeed = 299792458  # Speed of light in vacuum (m/s)

# Type aliases
NumericArray = Union[np.ndarray, List[float], List[int], Tuple[float, ...], Tuple[int, ...]]


def find_nearest(array: NumericArray, value: float) -> Tuple[Union[float, np.ndarray], Union[int, np.ndarray]]:
    """
    Find the value in an array that is closest to a specified value and its index.
    
    Args:
        array: Array-like collection of numeric values
        value: Target value to find the nearest element to
    
    Returns:
        Tuple containing (nearest_value, index_of_nearest_value)
        
    Raises:
        ValueError: If input array is empty
    """
    array = np.asarray(array)
    
    if array.size == 0:
        raise ValueError("Input array is empty")
    
    idx = np.abs(array - value).argmin()
    return array[idx], idx


def frequency_to_wavelength(frequency: float) -> float:
    """
    Convert a frequency to its free-space wavelength.
    
    Args:
        frequency: Frequency in Hz
    
    Returns:
        Wavelength in meters
        
    Raises:
        ValueError: If frequency is zero, negative or not finite
    """
    frequency = float(frequency)
    if not np.isfinite(frequency) or frequency <= 0:
        raise ValueError(f"Frequency must be positive and finite, got {frequency}")
    
    return lightspeed / frequency

