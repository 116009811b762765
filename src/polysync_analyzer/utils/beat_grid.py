"""
Bar grid generation utilities.
Provides bar and grid-window boundaries from MIDI tempo/meter metadata.
"""

import numpy as np
import pretty_midi


class BarGrid:
    """Generate bar and window boundary timestamps using PrettyMIDI helpers."""

    @staticmethod
    def generate_bar_boundaries(
        pm: pretty_midi.PrettyMIDI,
        start_time: float = 0.0
    ) -> np.ndarray:
        """
        Generate bar (measure) boundaries from tempo and time signature.

        Args:
            pm: PrettyMIDI object.
            start_time: Start time in seconds (default 0.0).

        Returns:
            Array of bar boundary (downbeat) times in seconds.
        """
        end_time = pm.get_end_time()
        if end_time <= start_time:
            return np.array([], dtype=float)

        downbeats = pm.get_downbeats(start_time=start_time)
        return np.array(downbeats, dtype=float)

    @staticmethod
    def window_boundaries(
        pm: pretty_midi.PrettyMIDI,
        bars_per_grid: int = 1
    ) -> np.ndarray:
        """
        Boundaries of consecutive windows of `bars_per_grid` bars.

        The final window is closed by extrapolating the last bar length, so
        every window spans whole bars even when the file ends mid-bar.

        Returns:
            Array of N + 1 boundary times for N windows (empty if no bars).
        """
        if bars_per_grid < 1:
            raise ValueError(f"bars_per_grid must be >= 1, got {bars_per_grid}")

        downbeats = BarGrid.generate_bar_boundaries(pm)
        if downbeats.size == 0:
            return np.array([], dtype=float)

        bar_duration = BarGrid._last_bar_duration(pm, downbeats)
        starts = downbeats[::bars_per_grid]
        last_end = starts[-1] + bars_per_grid * bar_duration
        return np.append(starts, last_end)

    @staticmethod
    def _last_bar_duration(pm: pretty_midi.PrettyMIDI, downbeats: np.ndarray) -> float:
        """Length of the final bar; derived from tempo and meter for one-bar files."""
        if downbeats.size >= 2:
            return float(downbeats[-1] - downbeats[-2])

        from .midi_processor import MIDIProcessor

        bpm = MIDIProcessor.get_tempo_map(pm)[-1][1]
        _, num, den = MIDIProcessor.get_time_signature_map(pm)[-1]
        # One quarter note lasts 60 / bpm seconds
        return (60.0 / bpm) * num * (4.0 / den)
