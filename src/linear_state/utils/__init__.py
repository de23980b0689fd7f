"""Utility modules for linear_state.

Provides logging configuration.
"""

from linear_state.utils.logging import AlignedFormatter, setup_logging

__all__ = ["setup_logging", "AlignedFormatter"]
