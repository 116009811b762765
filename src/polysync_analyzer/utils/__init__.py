"""Utilities subpackage for reading MIDI files into syncopation grids."""

from .midi_processor import MIDIProcessor
from .beat_grid import BarGrid

__all__ = [
    "MIDIProcessor",
    "BarGrid",
]
