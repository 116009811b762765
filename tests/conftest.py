import pretty_midi
import pytest

from tests.helpers import BD, HH, SD, make_drum_midi


@pytest.fixture
def backbeat_midi() -> pretty_midi.PrettyMIDI:
    # 120 BPM: one 4/4 bar = 2.0 s, one 16th = 0.125 s
    hits = [(0.0, BD), (1.0, SD)]
    hits += [(i * 0.25, HH) for i in range(8)]
    return make_drum_midi(hits)
