"""
Polyphonic syncopation scorer.

Implements the syncopation index of Witek et al. (2014) for polyphonic drum
rhythms, building on the Longuet-Higgins & Lee (1984) metrical model.

Theory:
  - Every onset is compared with the nearest preceding onset, searching
    backwards and wrapping around the end of the grid (the rhythm loops).
  - If the preceding onset sits on a weaker position than the current one
    (weights[i] - weights[prev] > 0), the pair is a syncopation worth that
    difference.
  - A directional instrument bonus is added for perceptually strong pairs,
    e.g. a bass drum followed by a snare + hi-hat.

Result: non-negative total under the default tables; 0 for empty rhythms and
for rhythms with a single onset (the onset matches itself).
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .config import SyncopationConfig
from .exceptions import GridConfigurationError
from .tables import InteractionKey, parse_interaction_table

logger = logging.getLogger(__name__)

# Sum of table values; int for integer tables.
Score = Union[int, float]


@dataclass(frozen=True)
class SlotContribution:
    """Score contribution of one syncopated onset."""
    index: int
    previous_index: int
    previous_token: str
    token: str
    delta: Score
    bonus: Score

    @property
    def contribution(self) -> Score:
        return self.delta + self.bonus


def find_previous_onset(rhythm: Sequence[str], index: int) -> int:
    """
    Index of the nearest non-empty slot before `index`, wrapping circularly.

    Returns `index` itself when it is the only onset in the rhythm.
    """
    n = len(rhythm)
    prev = index
    while True:
        prev = (prev - 1) % n
        if rhythm[prev] != "":
            return prev


def _check_lengths(rhythm: Sequence[str], weights: Sequence[int]) -> None:
    if len(rhythm) != len(weights):
        raise GridConfigurationError(
            f"rhythm has {len(rhythm)} slots but {len(weights)} metrical weights were given"
        )


def syncopation_contributions(
    rhythm: Sequence[str],
    weights: Sequence[int],
    interactions: Mapping[InteractionKey, int],
) -> List[SlotContribution]:
    """
    List every syncopated onset with its delta and instrument bonus.

    Args:
        rhythm: Token per grid slot ("" = no onset).
        weights: Metrical weight per grid slot.
        interactions: (previous token, current token) -> bonus.

    Returns:
        Contributions in grid order; onsets with delta <= 0 are omitted.
    """
    _check_lengths(rhythm, weights)

    contributions: List[SlotContribution] = []
    for i, token in enumerate(rhythm):
        if token == "":
            continue
        prev = find_previous_onset(rhythm, i)
        delta = weights[i] - weights[prev]
        if delta > 0:
            bonus = interactions.get((rhythm[prev], token), 0)
            contributions.append(SlotContribution(
                index=i,
                previous_index=prev,
                previous_token=rhythm[prev],
                token=token,
                delta=delta,
                bonus=bonus,
            ))
    return contributions


def polyphonic_syncopation(
    rhythm: Sequence[str],
    weights: Sequence[int],
    interactions: Mapping[Union[str, InteractionKey], int],
) -> Score:
    """Total syncopation of a rhythm token sequence."""
    table = parse_interaction_table(interactions)
    return sum(c.contribution for c in syncopation_contributions(rhythm, weights, table))


class SyncopationScorer:
    """Score rhythm token sequences against configured weight tables."""

    def __init__(self, config: Optional[SyncopationConfig] = None):
        """
        Initialize scorer with configuration.

        Args:
            config: SyncopationConfig holding the weight and interaction tables.
        """
        self.config = config or SyncopationConfig()

    def score(self, rhythm: Sequence[str]) -> Score:
        """
        Compute the syncopation index of a rhythm.

        Args:
            rhythm: Token per grid slot, as produced by RhythmGridBuilder.

        Returns:
            Syncopation index (sum of delta + bonus over syncopated onsets).
        """
        total, _ = self.score_with_diagnostics(rhythm)
        return total

    def score_with_diagnostics(self, rhythm: Sequence[str]) -> Tuple[Score, dict]:
        """
        Score a rhythm and report how the total was reached.

        Returns:
            Tuple of (score, diagnostics_dict).

        Diagnostics include:
            - grid_length: Number of slots
            - onsets: Number of non-empty slots
            - syncopated_onsets: Number of slots that contributed
            - contributions: List of SlotContribution records
            - delta_total: Sum of metrical deltas
            - bonus_total: Sum of instrument bonuses
        """
        self.config.validate()
        contributions = syncopation_contributions(
            rhythm, self.config.weights, self.config.interactions
        )
        total = sum(c.contribution for c in contributions)

        diagnostics = {
            'grid_length': len(rhythm),
            'onsets': sum(1 for token in rhythm if token != ""),
            'syncopated_onsets': len(contributions),
            'contributions': contributions,
            'delta_total': sum(c.delta for c in contributions),
            'bonus_total': sum(c.bonus for c in contributions),
        }

        if self.config.verbose:
            for c in contributions:
                logger.debug(
                    "slot %d %r after slot %d %r: delta=%s bonus=%s",
                    c.index, c.token, c.previous_index, c.previous_token, c.delta, c.bonus,
                )
            logger.debug("syncopation total=%s over %d onsets", total, diagnostics['onsets'])

        return total, diagnostics
