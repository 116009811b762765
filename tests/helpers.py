from typing import Dict, Iterable, List

import pretty_midi

from polysync_analyzer import NoteEvent

BD, SD, HH = 36, 38, 42


def make_events(hits: Dict[int, Iterable[int]]) -> List[NoteEvent]:
    """{step: [pitch, ...]} -> NoteEvents."""
    return [
        NoteEvent(pitch=p, quantized_start_step=step)
        for step, pitches in hits.items()
        for p in pitches
    ]


def make_drum_midi(hits, tempo: float = 120.0, duration: float = 0.05) -> pretty_midi.PrettyMIDI:
    """PrettyMIDI with one drum track; hits are (start_sec, pitch) pairs."""
    pm = pretty_midi.PrettyMIDI(initial_tempo=tempo)
    drums = pretty_midi.Instrument(program=0, is_drum=True, name="Drums")
    for start, pitch in hits:
        drums.notes.append(pretty_midi.Note(velocity=100, pitch=pitch, start=start, end=start + duration))
    pm.instruments.append(drums)
    return pm
