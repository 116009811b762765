"""
Rhythm grid construction from quantized note events.

Converts (pitch, quantized step) events into a symbolic rhythm: one token per
grid slot, holding the sorted, hyphen-joined instrument labels of every onset
in that slot, e.g. ["BD-HH", "", "HH", "", "HH-SD", ...].
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping

from .exceptions import GridConfigurationError
from .tables import TOKEN_SEPARATOR, lookup_instrument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoteEvent:
    """A single onset on the quantized grid."""
    pitch: int
    quantized_start_step: int


class RhythmGridBuilder:
    """Build pitch grids and rhythm token sequences from note events."""

    @staticmethod
    def build_grid(events: Iterable[NoteEvent], grid_length: int) -> List[List[int]]:
        """
        Place event pitches into grid slots by quantized start step.

        Events whose step falls outside [0, grid_length) are skipped with a
        warning; they never abort the build.

        Args:
            events: Note events in any order.
            grid_length: Number of slots (>= 0).

        Returns:
            List of grid_length pitch lists, in event order within a slot.
        """
        if grid_length < 0:
            raise GridConfigurationError(f"grid length must be >= 0, got {grid_length}")

        grid: List[List[int]] = [[] for _ in range(grid_length)]
        for event in events:
            step = event.quantized_start_step
            if 0 <= step < grid_length:
                grid[step].append(event.pitch)
            else:
                logger.warning(
                    "Bad quantized step %d for grid length %d - ignoring pitch %d",
                    step, grid_length, event.pitch,
                )
        return grid

    @staticmethod
    def grid_to_rhythm(grid: List[List[int]], instrument_map: Mapping[int, str]) -> List[str]:
        """
        Map each slot's pitches to instrument labels and join them.

        Labels are sorted so the token does not depend on event order
        ([42, 35] -> "BD-HH"). Repeated labels are kept ([35, 36] -> "BD-BD").

        Args:
            grid: Output of build_grid().
            instrument_map: Pitch to instrument label lookup.

        Returns:
            One token per slot; "" for slots without onsets.

        Raises:
            UnknownInstrumentError: If a pitch is missing from the map.
        """
        rhythm: List[str] = []
        for pitches in grid:
            if not pitches:
                rhythm.append("")
                continue
            labels = sorted(lookup_instrument(p, instrument_map) for p in pitches)
            rhythm.append(TOKEN_SEPARATOR.join(labels))
        return rhythm

    @classmethod
    def build(
        cls,
        events: Iterable[NoteEvent],
        grid_length: int,
        instrument_map: Mapping[int, str],
    ) -> List[str]:
        """Build the rhythm token sequence for a list of note events."""
        grid = cls.build_grid(events, grid_length)
        return cls.grid_to_rhythm(grid, instrument_map)
