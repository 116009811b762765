"""
Polyphonic Syncopation Analyzer for quantized drum rhythms.

Scores how syncopated a polyphonic rhythm is with the metrical-salience model
of Witek et al. (2014):
1. Grid Builder - note events to one instrument token per grid slot
2. Syncopation Scorer - circular nearest-previous-onset comparison of
   metrical weights plus directional instrument bonuses

The scalar index can be used on its own or, in batches, as an attribute
signal for latent-space regularization.
"""

from .config import AnalyzerConfig, MidiGridConfig, SyncopationConfig
from .exceptions import GridConfigurationError, PolysyncError, UnknownInstrumentError
from .grid_builder import NoteEvent, RhythmGridBuilder
from .pipeline import AnalysisResult, MidiAnalysisResult, SyncopationAnalyzer, rhythm_sequence, syncopation_index
from .syncopation import SlotContribution, SyncopationScorer, polyphonic_syncopation
from .tables import DEFAULT_INSTRUMENT_MAP, DEFAULT_INTERACTIONS, WEIGHTS_16, WEIGHTS_32

__version__ = "0.1.0"
__author__ = "Rhythm Analysis Team"

__all__ = [
    "AnalyzerConfig",
    "MidiGridConfig",
    "SyncopationConfig",
    "PolysyncError",
    "GridConfigurationError",
    "UnknownInstrumentError",
    "NoteEvent",
    "RhythmGridBuilder",
    "SyncopationScorer",
    "SlotContribution",
    "polyphonic_syncopation",
    "SyncopationAnalyzer",
    "AnalysisResult",
    "MidiAnalysisResult",
    "rhythm_sequence",
    "syncopation_index",
    "DEFAULT_INSTRUMENT_MAP",
    "DEFAULT_INTERACTIONS",
    "WEIGHTS_16",
    "WEIGHTS_32",
]
