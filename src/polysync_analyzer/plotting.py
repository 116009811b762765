"""
Rhythm grid plotting for syncopation analysis.

Draws the metrical weight profile of a grid together with the onsets of a
rhythm and the score contributed at each syncopated slot.
"""

import warnings
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pipeline import AnalysisResult


ONSET_COLOR = '#45B7D1'
SYNCOPATION_COLOR = '#E056FD'
WEIGHT_COLOR = '#95A5A6'


def create_syncopation_figure(
    result: "AnalysisResult",
    title: str = "Syncopation Analysis"
):
    """
    Create a figure of metrical weights, onsets and slot contributions.

    The figure is returned without being shown, so it can be saved to file
    or embedded elsewhere.

    Args:
        result: AnalysisResult from SyncopationAnalyzer.analyze_events().
        title: Title for the plot.

    Returns:
        matplotlib.figure.Figure: The created figure object.
    """
    import matplotlib.pyplot as plt

    grid_length = len(result.rhythm)
    steps = list(range(grid_length))
    weights = list(result.weights)

    contributions = [0.0] * grid_length
    for c in result.diagnostics.get('contributions', []):
        contributions[c.index] = float(c.contribution)

    if not any(result.rhythm):
        warnings.warn(
            "Rhythm has no onsets. Plotting metrical weights only.",
            UserWarning
        )

    fig, (ax_w, ax_c) = plt.subplots(2, 1, figsize=(12, 6), sharex=True)

    ax_w.bar(steps, weights, color=WEIGHT_COLOR, alpha=0.8)
    ax_w.set_ylabel('Metrical weight')
    for i, token in enumerate(result.rhythm):
        if token:
            ax_w.annotate(
                token, (i, 0), xytext=(0, 6), textcoords='offset points',
                ha='center', fontsize=7, rotation=90, color=ONSET_COLOR
            )

    ax_c.bar(steps, contributions, color=SYNCOPATION_COLOR, alpha=0.8)
    ax_c.set_ylabel('Syncopation')
    ax_c.set_xlabel('Grid step')
    ax_c.set_xticks(steps)

    ax_w.set_title(f"{title} (score {result.score})", fontsize=14)
    ax_w.grid(True, linestyle='--', alpha=0.7)
    ax_c.grid(True, linestyle='--', alpha=0.7)

    return fig


def plot_syncopation(
    result: "AnalysisResult",
    title: str = "Syncopation Analysis"
) -> None:
    """
    Create and display the syncopation figure with plt.show().

    Use create_syncopation_figure() to get the figure without displaying it.
    """
    import matplotlib.pyplot as plt
    create_syncopation_figure(result, title)
    plt.show()
