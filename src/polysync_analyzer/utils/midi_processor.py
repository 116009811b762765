"""
MIDI processing utilities for syncopation analysis.
Handles drum onset extraction, tempo/meter metadata, and quantization of
onsets into grid windows of NoteEvents.
"""

from typing import List, Tuple
import numpy as np
import pretty_midi

from ..grid_builder import NoteEvent
from .beat_grid import BarGrid


class MIDIProcessor:
    """Extract MIDI onsets and quantize them to the syncopation grid."""

    @staticmethod
    def extract_onsets(
        pm: pretty_midi.PrettyMIDI,
        include_non_drums: bool = False
    ) -> List[Tuple[float, int]]:
        """
        Extract note onsets with their pitches.

        Args:
            pm: PrettyMIDI object.
            include_non_drums: If False, only drum tracks are read.

        Returns:
            List of (start_time, pitch) tuples, sorted by start time then pitch.
        """
        onsets = []

        for instr in pm.instruments:
            if not include_non_drums and not instr.is_drum:
                continue
            for note in instr.notes:
                onsets.append((float(note.start), int(note.pitch)))

        onsets.sort()
        return onsets

    @staticmethod
    def get_tempo_map(pm: pretty_midi.PrettyMIDI) -> List[Tuple[float, float]]:
        """
        Get tempo change map from MIDI.

        Returns:
            List of (time_seconds, bpm) tuples sorted by time.
        """
        times, bpms = pm.get_tempo_changes()

        if len(times) == 0:
            # Default to 120 BPM if no explicit tempo
            return [(0.0, 120.0)]

        return list(zip(times, bpms))

    @staticmethod
    def get_time_signature_map(pm: pretty_midi.PrettyMIDI) -> List[Tuple[float, int, int]]:
        """
        Get time signature change map from MIDI.

        Returns:
            List of (time_seconds, numerator, denominator) tuples sorted by time.
        """
        ts_list = []

        if pm.time_signature_changes:
            for ts in pm.time_signature_changes:
                ts_list.append((ts.time, ts.numerator, ts.denominator))
        else:
            # Default to 4/4 if no explicit time signature
            ts_list = [(0.0, 4, 4)]

        return ts_list

    @staticmethod
    def quantize_windows(
        pm: pretty_midi.PrettyMIDI,
        grid_length: int,
        bars_per_grid: int = 1,
        include_non_drums: bool = False
    ) -> List[List[NoteEvent]]:
        """
        Split a MIDI file into grid windows and quantize onsets to steps.

        Each window spans `bars_per_grid` bars of the downbeat grid and is
        divided into `grid_length` equal steps. Onsets are rounded to the
        nearest step; an onset that rounds onto the next bar line is moved to
        step 0 of the next window. Only in the last window can a step reach
        `grid_length`, which the grid builder then skips. Onsets before the
        first downbeat (pickup) fall into the first window with a negative
        step.

        Args:
            pm: PrettyMIDI object.
            grid_length: Steps per window.
            bars_per_grid: Bars per window.
            include_non_drums: If False, only drum tracks are read.

        Returns:
            One list of NoteEvents per window, in time order.
        """
        bounds = BarGrid.window_boundaries(pm, bars_per_grid)
        if len(bounds) < 2 or grid_length <= 0:
            return []

        starts = bounds[:-1]
        step_durations = np.diff(bounds) / grid_length
        windows: List[List[NoteEvent]] = [[] for _ in range(len(starts))]

        for onset, pitch in MIDIProcessor.extract_onsets(pm, include_non_drums):
            w = int(np.searchsorted(starts, onset, side='right')) - 1
            w = max(w, 0)
            step = int(np.round((onset - starts[w]) / step_durations[w]))
            if step >= grid_length and w + 1 < len(starts):
                w += 1
                step = int(np.round((onset - starts[w]) / step_durations[w]))
            windows[w].append(NoteEvent(pitch=pitch, quantized_start_step=step))

        return windows
