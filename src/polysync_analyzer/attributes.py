"""
Attribute targets derived from batches of syncopation scores.

A latent-space regularizer compares the ordering of a batch of scores with the
ordering of one latent dimension. These helpers build the score side of that
comparison: the pairwise difference matrix and its sign.
"""

from typing import Sequence

import numpy as np


def attribute_distance_matrix(scores: Sequence[float]) -> np.ndarray:
    """
    Pairwise signed differences of a batch of scores.

    Args:
        scores: One score per sequence in the batch.

    Returns:
        Array D of shape (n, n) with D[i, j] = scores[i] - scores[j].

    Example:
        >>> attribute_distance_matrix([0, 2])
        array([[ 0., -2.],
               [ 2.,  0.]])
    """
    x = np.asarray(scores, dtype=float).reshape(-1)
    return x[:, None] - x[None, :]


def signed_attribute_targets(scores: Sequence[float]) -> np.ndarray:
    """Flattened sign of the distance matrix, values in {-1, 0, 1}."""
    return np.sign(attribute_distance_matrix(scores)).reshape(-1)
