"""
Move scheduling: edge-triggered input decoding and the FIFO animation sequencer.
"""

from tesserax.scheduler.intent import IntentDecoder, KeyBindings
from tesserax.scheduler.sequencer import MoveScheduler, build_gyro_sequence

__all__ = [
    "IntentDecoder",
    "KeyBindings",
    "MoveScheduler",
    "build_gyro_sequence",
]
