import pytest

from polysync_analyzer.config import SyncopationConfig
from polysync_analyzer.exceptions import GridConfigurationError
from polysync_analyzer.syncopation import (
    SyncopationScorer,
    find_previous_onset,
    polyphonic_syncopation,
    syncopation_contributions,
)
from polysync_analyzer.tables import DEFAULT_INTERACTIONS, WEIGHTS_16, WEIGHTS_32


def _rhythm(hits, length=16):
    rhythm = [""] * length
    for step, token in hits.items():
        rhythm[step] = token
    return rhythm


def test_empty_rhythm_scores_zero():
    assert polyphonic_syncopation([""] * 16, WEIGHTS_16, DEFAULT_INTERACTIONS) == 0
    assert polyphonic_syncopation([], [], DEFAULT_INTERACTIONS) == 0


@pytest.mark.parametrize("step", [0, 3, 8, 15])
def test_single_onset_matches_itself(step):
    rhythm = _rhythm({step: "BD-HH"})
    assert find_previous_onset(rhythm, step) == step
    assert polyphonic_syncopation(rhythm, WEIGHTS_16, DEFAULT_INTERACTIONS) == 0


def test_previous_onset_search_wraps():
    rhythm = _rhythm({2: "BD", 12: "SD"})
    assert find_previous_onset(rhythm, 12) == 2
    assert find_previous_onset(rhythm, 2) == 12


def test_bass_then_snare():
    rhythm = _rhythm({0: "BD", 8: "SD"})
    contributions = syncopation_contributions(rhythm, WEIGHTS_16, DEFAULT_INTERACTIONS)

    # Step 8 (-1) follows the downbeat (0): not syncopated
    assert all(c.index != 8 for c in contributions)
    # The downbeat wraps back to the snare on the weaker step 8
    assert [(c.index, c.previous_index, c.delta, c.bonus) for c in contributions] == [(0, 8, 1, 0)]
    assert polyphonic_syncopation(rhythm, WEIGHTS_16, DEFAULT_INTERACTIONS) == 1


def test_sign_convention_is_current_minus_previous():
    rhythm = _rhythm({0: "HH", 2: "BD", 4: "HH", 8: "HH", 12: "HH"})
    contributions = {c.index: c for c in syncopation_contributions(rhythm, WEIGHTS_16, DEFAULT_INTERACTIONS)}

    # Bass drum on step 2 (-3) after hi-hat on step 0 (0): delta -3
    assert 2 not in contributions
    assert 12 not in contributions
    assert contributions[0].delta == 2
    assert contributions[4].delta == 1
    assert contributions[4].bonus == 5
    assert contributions[8].delta == 1
    assert polyphonic_syncopation(rhythm, WEIGHTS_16, DEFAULT_INTERACTIONS) == 2 + 6 + 1


def test_interaction_bonus_is_directional():
    weights = (-1, 0)
    assert polyphonic_syncopation(["BD", "HH"], weights, DEFAULT_INTERACTIONS) == 1 + 5
    assert polyphonic_syncopation(["HH", "BD"], weights, DEFAULT_INTERACTIONS) == 1

    symmetric = dict(DEFAULT_INTERACTIONS)
    symmetric[("HH", "BD")] = 5
    assert polyphonic_syncopation(["HH", "BD"], weights, symmetric) == 1 + 5


def test_combined_token_bonus():
    # Bass drum on a weak 16th followed by snare + hi-hat on the next beat
    rhythm = _rhythm({3: "BD", 4: "HH-SD"})
    contributions = syncopation_contributions(rhythm, WEIGHTS_16, DEFAULT_INTERACTIONS)
    by_index = {c.index: c for c in contributions}
    assert by_index[4].delta == 2
    assert by_index[4].bonus == 2
    assert by_index[4].contribution == 4


def test_negative_bonus_from_custom_table():
    table = {("BD", "HH"): -3}
    assert polyphonic_syncopation(["BD", "HH"], (-1, 0), table) == -2


def test_length_mismatch_raises():
    with pytest.raises(GridConfigurationError):
        polyphonic_syncopation([""] * 16, WEIGHTS_32, DEFAULT_INTERACTIONS)

    scorer = SyncopationScorer(SyncopationConfig(weights=WEIGHTS_16))
    with pytest.raises(GridConfigurationError):
        scorer.score([""] * 32)


def test_scorer_diagnostics():
    scorer = SyncopationScorer()
    rhythm = _rhythm({0: "HH", 2: "BD", 4: "HH", 8: "HH", 12: "HH"})
    score, diagnostics = scorer.score_with_diagnostics(rhythm)

    assert score == 9
    assert diagnostics['grid_length'] == 16
    assert diagnostics['onsets'] == 5
    assert diagnostics['syncopated_onsets'] == 3
    assert diagnostics['delta_total'] == 4
    assert diagnostics['bonus_total'] == 5
    assert scorer.score(rhythm) == score


def test_scorer_rejects_inconsistent_config():
    scorer = SyncopationScorer(SyncopationConfig(weights=WEIGHTS_16, grid_length=32))
    with pytest.raises(GridConfigurationError):
        scorer.score([""] * 16)


def test_verbose_scorer_logs_contributions(caplog):
    scorer = SyncopationScorer(SyncopationConfig(verbose=True))
    with caplog.at_level("DEBUG", logger="polysync_analyzer.syncopation"):
        scorer.score(_rhythm({3: "BD", 4: "HH-SD"}))
    assert any("slot 4" in r.getMessage() for r in caplog.records)
