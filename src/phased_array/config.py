"""
Calculation configuration for array factor computations.

The process-wide default is only read when an ArrayFactorEngine is
created; changing it afterwards does not affect existing engines.
"""
import os
import logging
from dataclasses import dataclass, field

# Configure logging
logger = logging.getLogger(__name__)


def available_threads() -> int:
    """Number of threads the host can run in parallel."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class CalculationConfig:
    """
    Settings for array factor calculations.

    Attributes:
        num_threads: Worker threads used when the caller does not supply
            its own executor (default: host parallelism)
    """
    num_threads: int = field(default_factory=available_threads)

    def __post_init__(self):
        if isinstance(self.num_threads, bool) or int(self.num_threads) != self.num_threads:
            raise ValueError(f"num_threads must be an integer, got {self.num_threads!r}")
        if self.num_threads < 1:
            raise ValueError(f"num_threads must be >= 1, got {self.num_threads}")
        object.__setattr__(self, 'num_threads', int(self.num_threads))


_default_config = CalculationConfig()


def get_default_config() -> CalculationConfig:
    """Get the process-wide default configuration."""
    return _default_config


def set_default_config(config: CalculationConfig) -> None:
    """
    Replace the process-wide default configuration.

    Args:
        config: Configuration used by engines created from now on
    """
    global _default_config
    if not isinstance(config, CalculationConfig):
        raise TypeError(f"Expected CalculationConfig, got {type(config).__name__}")
    _default_config = config
    logger.debug(f"Default calculation config set to {config}")


def reset_default_config() -> None:
    """Restore the default configuration derived from host parallelism."""
    set_default_config(CalculationConfig())
