# fieldtrace/utils/config.py
"""
Global package configuration.

Provides centralized settings for data types, progress reporting and
diagnostic verbosity across all modules.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any
import warnings

import numpy as np


_VALID_DTYPES = ("float32", "float64")
_VALID_PROGRESS_STYLES = ("auto", "tqdm", "simple", "none")


@dataclass
class PackageConfig:
    """
    Global configuration for the fieldtrace package.

    Controls the floating point type used for points and traced curves,
    how batch operations report progress, and whether degraded traces
    are reported as warnings.
    """
    # Data type settings
    dtype: str = "float64"              # 'float32' | 'float64'

    # Progress and monitoring
    show_progress: bool = True          # Report progress of batch traces
    progress_style: str = "auto"        # 'auto' | 'tqdm' | 'simple' | 'none'
    verbose: bool = False               # Warn when a trace is truncated

    def __post_init__(self):
        self._validate_config()

    def _validate_config(self):
        """Validate configuration settings."""
        if self.dtype not in _VALID_DTYPES:
            raise ValueError(f"dtype must be 'float32' or 'float64', got '{self.dtype}'")

        if self.progress_style not in _VALID_PROGRESS_STYLES:
            raise ValueError(
                f"progress_style must be one of {_VALID_PROGRESS_STYLES}, got '{self.progress_style}'"
            )

    # ---------- Utility methods ----------

    @property
    def np_dtype(self) -> np.dtype:
        return np.dtype(self.dtype)

    def effective_progress_style(self) -> str:
        """Progress style after applying ``show_progress``."""
        if not self.show_progress:
            return "none"
        return self.progress_style

    def as_dict(self) -> Dict[str, Any]:
        return {
            "dtype": self.dtype,
            "show_progress": self.show_progress,
            "progress_style": self.progress_style,
            "verbose": self.verbose,
        }


# Global configuration instance
_global_config = PackageConfig()


def get_config() -> PackageConfig:
    """Get global package configuration."""
    return _global_config


def configure(**kwargs) -> None:
    """
    Configure package settings.

    Parameters
    ----------
    **kwargs : dict
        Configuration parameters to update
    """
    for key, value in kwargs.items():
        if hasattr(_global_config, key):
            setattr(_global_config, key, value)
        else:
            warnings.warn(f"Unknown configuration parameter: {key}")

    # Re-validate
    _global_config._validate_config()


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _global_config
    _global_config = PackageConfig()
