"""
Configuration module for the polyphonic syncopation analyzer.

Provides dataclass configurations for the scorer and the MIDI grid extraction
with defaults taken from the Witek et al. (2014) tables.
"""

import json
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple, Union

from .exceptions import GridConfigurationError
from .tables import (
    DEFAULT_INSTRUMENT_MAP,
    DEFAULT_INTERACTIONS,
    WEIGHTS_16,
    InteractionKey,
    parse_interaction_table,
)


@dataclass
class SyncopationConfig:
    """Configuration for grid building and syncopation scoring."""

    weights: Tuple[int, ...] = WEIGHTS_16
    """Metrical weight per grid step. Its length defines the grid length."""

    instrument_map: Mapping[int, str] = field(default_factory=lambda: DEFAULT_INSTRUMENT_MAP)
    """Pitch to instrument label lookup."""

    interactions: Mapping[Union[str, InteractionKey], int] = field(default_factory=lambda: DEFAULT_INTERACTIONS)
    """Directional (previous, current) token pair to bonus lookup. Composite
    "PREV_CURR" string keys are accepted and converted to pairs."""

    grid_length: Optional[int] = None
    """Explicit grid length. None = len(weights). Must match len(weights) when set."""

    verbose: bool = False
    """Whether to log per-slot contributions at DEBUG level."""

    def __post_init__(self):
        self.interactions = parse_interaction_table(self.interactions)

    @property
    def resolved_grid_length(self) -> int:
        return len(self.weights) if self.grid_length is None else self.grid_length

    def validate(self) -> None:
        """Raise GridConfigurationError if grid length and weights disagree."""
        if self.grid_length is not None and self.grid_length != len(self.weights):
            raise GridConfigurationError(
                f"grid length {self.grid_length} does not match "
                f"{len(self.weights)} metrical weights"
            )


@dataclass
class MidiGridConfig:
    """Configuration for quantizing MIDI files into note event windows."""

    bars_per_grid: int = 1
    """Number of bars covered by one grid window (2 for the 32-step table)."""

    include_non_drums: bool = False
    """Whether to include notes from non-drum instruments."""

    min_notes_required: int = 1
    """Windows with fewer notes are skipped."""

    ignore_unmapped_pitches: bool = True
    """Drop notes whose pitch is not in the instrument map (cymbals, toms, ...)
    instead of failing the window."""


@dataclass
class AnalyzerConfig:
    """Master configuration for the analyzer pipeline."""

    syncopation: SyncopationConfig = field(default_factory=SyncopationConfig)
    """Scoring tables."""

    midi_grid: MidiGridConfig = field(default_factory=MidiGridConfig)
    """MIDI window extraction."""

    verbose: bool = False
    """Enable verbose logging and diagnostics."""

    @classmethod
    def from_json(cls, path: str) -> "AnalyzerConfig":
        """
        Build a configuration from a JSON table file.

        Recognized keys (all optional): "weights" (list of ints),
        "instrument_map" (pitch -> label, pitch keys as strings),
        "interactions" ("PREV_CURR" -> bonus), "grid_length" and
        "bars_per_grid".

        Args:
            path: Path to a JSON file.

        Returns:
            AnalyzerConfig with the file's tables applied over the defaults.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        sync = SyncopationConfig()
        if "weights" in data:
            sync.weights = tuple(int(w) for w in data["weights"])
        if "instrument_map" in data:
            sync.instrument_map = {int(p): str(label) for p, label in data["instrument_map"].items()}
        if "interactions" in data:
            sync.interactions = parse_interaction_table(data["interactions"])
        if data.get("grid_length") is not None:
            sync.grid_length = int(data["grid_length"])
        sync.validate()

        grid = MidiGridConfig()
        if "bars_per_grid" in data:
            grid.bars_per_grid = int(data["bars_per_grid"])

        return cls(syncopation=sync, midi_grid=grid)

    def __repr__(self) -> str:
        """Pretty-print configuration."""
        lines = [
            "AnalyzerConfig(",
            f"  syncopation={self.syncopation},",
            f"  midi_grid={self.midi_grid},",
            f"  verbose={self.verbose}",
            ")",
        ]
        return "\n".join(lines)
