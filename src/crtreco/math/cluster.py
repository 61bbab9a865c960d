"""Numba JIT compiled implementation of clustering routines."""

import numba as nb
import numpy as np

__all__ = ["anchor_window_cluster"]


@nb.njit(cache=True)
def anchor_window_cluster(times: nb.int64[:], window: nb.int64) -> nb.int64[:]:
    """Greedily groups time-ordered values into coincidence clusters.

    The first value which does not yet belong to a cluster (the anchor)
    opens a new cluster. Every later unassigned value which falls strictly
    within `window` of the anchor joins it. Membership is always tested
    against the anchor, never against the latest member, so that clusters
    span at most `window` and are not chained transitively.

    Parameters
    ----------
    times : np.ndarray
        (N) Times, sorted in ascending order
    window : int
        Coincidence window, in the same units as `times`

    Returns
    -------
    np.ndarray
        (N) Cluster label of each value, numbered in order of discovery
    """
    num_values = len(times)
    labels = np.full(num_values, -1, dtype=np.int64)
    label = 0
    for i in range(num_values):
        if labels[i] > -1:
            continue

        labels[i] = label
        for j in range(i + 1, num_values):
            if labels[j] < 0 and times[j] - times[i] < window:
                labels[j] = label

        label += 1

    return labels
