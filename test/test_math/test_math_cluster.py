"""Tests for the crtreco.math.cluster module."""

import numpy as np

from crtreco.math.cluster import anchor_window_cluster


class TestAnchorWindowCluster:
    """Anchor-based coincidence clustering."""

    def test_empty(self):
        """Test that an empty input produces no labels."""
        labels = anchor_window_cluster(np.empty(0, dtype=np.int64), 5)
        assert len(labels) == 0

    def test_single_cluster(self):
        """Test that values within the window form a single cluster."""
        times = np.array([0, 1, 2, 3], dtype=np.int64)
        labels = anchor_window_cluster(times, 10)
        np.testing.assert_array_equal(labels, [0, 0, 0, 0])

    def test_anchor_window(self):
        """Test that membership is tested against the anchor only."""
        times = np.array([0, 5, 9], dtype=np.int64)
        labels = anchor_window_cluster(times, 6)
        np.testing.assert_array_equal(labels, [0, 0, 1])

    def test_strict_window(self):
        """Test that a value exactly one window away opens a new cluster."""
        times = np.array([10, 15], dtype=np.int64)
        labels = anchor_window_cluster(times, 5)
        np.testing.assert_array_equal(labels, [0, 1])

    def test_zero_window(self):
        """Test that a zero window isolates every value."""
        times = np.array([3, 3, 4], dtype=np.int64)
        labels = anchor_window_cluster(times, 0)
        np.testing.assert_array_equal(labels, [0, 1, 2])

    def test_discovery_order(self):
        """Test that labels are numbered in order of discovery."""
        times = np.array([0, 2, 20, 21, 50], dtype=np.int64)
        labels = anchor_window_cluster(times, 5)
        np.testing.assert_array_equal(labels, [0, 0, 1, 1, 2])
