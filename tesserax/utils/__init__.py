"""
Utility helpers shared across tesserax.

The puzzle loader lives in ``tesserax.utils.loader`` and is imported from there directly.
"""

from tesserax.utils.logging_config import setup_logging
from tesserax.utils.util import coloring_str, states_equal

__all__ = [
    "coloring_str",
    "setup_logging",
    "states_equal",
]
