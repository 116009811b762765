import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from polysync_analyzer import SyncopationAnalyzer  # noqa: E402
from polysync_analyzer.plotting import create_syncopation_figure  # noqa: E402
from tests.helpers import BD, HH, make_events  # noqa: E402


def test_create_figure():
    import matplotlib.pyplot as plt

    result = SyncopationAnalyzer().analyze_events(make_events({0: [HH], 2: [BD], 4: [HH], 8: [HH], 12: [HH]}))
    fig = create_syncopation_figure(result, title="Test")
    assert len(fig.axes) == 2
    contribution_heights = [p.get_height() for p in fig.axes[1].patches]
    assert contribution_heights[4] == 6.0
    assert sum(contribution_heights) == result.score
    plt.close(fig)


def test_empty_rhythm_warns():
    import matplotlib.pyplot as plt

    result = SyncopationAnalyzer().analyze_events([])
    with pytest.warns(UserWarning, match="no onsets"):
        fig = create_syncopation_figure(result)
    plt.close(fig)
