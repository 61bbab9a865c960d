"""Tests for the post-processor manager and the CRT post-processors."""

import pytest

from crtreco.data import Association, CRTTruthMatch
from crtreco.errors import AssociationError
from crtreco.post import PostManager
from crtreco.utils.enums import CRTTagger
from crtreco.utils.globals import INVALID_TRACK_ID


@pytest.fixture(name="post_cfg")
def fixture_post_cfg(geo_cfg, geo_file):
    """Configuration of the CRT post-processing chain."""
    return {
        "crt_truth_match": {"geometry_file": geo_file},
        "crt_cluster": {"coincidence_window": 50, "geometry": geo_cfg, "priority": 1},
    }


class TestPostManager:
    """Loading and execution of a post-processing chain."""

    def test_priority(self, post_cfg):
        """Test that the post-processors are run in decreasing priority."""
        manager = PostManager(post_cfg)

        assert list(manager.modules) == ["crt_cluster", "crt_truth_match"]
        assert set(manager.times) == {"crt_cluster", "crt_truth_match"}

    def test_missing_upstream(self, geo_cfg):
        """Test that a post-processor cannot run without its upstream."""
        cfg = {"crt_truth_match": {"geometry": geo_cfg}}
        with pytest.raises(AssertionError):
            PostManager(cfg)

        # Fine if the upstream post-processor was run elsewhere
        manager = PostManager(cfg, post_list=["crt_cluster"])
        assert list(manager.modules) == ["crt_truth_match"]

    def test_missing_key(self, geo_cfg):
        """Test that a missing essential data product is reported."""
        manager = PostManager(
            {"crt_cluster": {"coincidence_window": 50, "geometry": geo_cfg}}
        )
        with pytest.raises(AssertionError):
            manager({"index": 0})

    def test_single_entry(self, post_cfg, truth_event):
        """Test the full clustering and truth matching chain on one entry."""
        manager = PostManager(post_cfg)
        data = dict(truth_event, index=0)
        manager(data)

        # One cluster in the bottom tagger, one in the low top tagger
        clusters = data["crt_clusters"]
        assert [c.tagger for c in clusters] == [CRTTagger.BOTTOM, CRTTagger.TOP_LOW]
        assert [list(c.hit_ids) for c in clusters] == [[2], [0, 1]]

        hit_matches = data["crt_strip_hit_matches"]
        assert len(hit_matches) == 3
        assert all(isinstance(m, CRTTruthMatch) for m in hit_matches)
        assert hit_matches[0].track_id == 1
        assert hit_matches[0].purity == pytest.approx(0.75)
        assert hit_matches[0].completeness == pytest.approx(0.375)
        assert hit_matches[2].track_id == INVALID_TRACK_ID

        cluster_matches = data["crt_cluster_matches"]
        assert cluster_matches[0].track_id == INVALID_TRACK_ID
        assert cluster_matches[1].track_id == 1
        assert cluster_matches[1].purity == pytest.approx(0.8)
        assert cluster_matches[1].completeness == pytest.approx(0.5)

        # Truth information is not carried over to the next entry
        backtracker = manager.modules["crt_truth_match"].backtracker
        assert backtracker.context is None

    def test_batch(self, post_cfg, truth_event):
        """Test the chain on a batch of entries."""
        manager = PostManager(post_cfg)
        data = {k: [v, v] for k, v in truth_event.items()}
        data["index"] = [0, 1]
        manager(data)

        assert len(data["crt_clusters"]) == 2
        assert len(data["crt_cluster_matches"]) == 2
        for matches in data["crt_strip_hit_matches"]:
            assert [m.track_id for m in matches] == [1, 1, INVALID_TRACK_ID]

    def test_failed_matching(self, post_cfg, truth_event):
        """Test that a matching error does not leave the truth loaded."""
        manager = PostManager(post_cfg)

        # Strip hit 0 is no longer read out by any FEB
        data = dict(truth_event, index=0)
        data["crt_strip_hit_feb_assn"] = Association.from_pairs([(1, 0), (2, 2)])
        with pytest.raises(AssociationError):
            manager(data)

        backtracker = manager.modules["crt_truth_match"].backtracker
        assert backtracker.context is None
