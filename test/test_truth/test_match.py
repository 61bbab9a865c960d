"""Tests for the truth matching of CRT strip hits and clusters."""

import logging

import pytest

from crtreco.data import Association, CRTCluster, CRTDeposit, CRTStripHit
from crtreco.errors import AssociationError
from crtreco.truth import build_truth_context
from crtreco.utils.enums import CRTTagger
from crtreco.utils.globals import INVALID_TRACK_ID


def context_from_event(geo, event):
    """Builds the truth context of an event dictionary."""
    return build_truth_context(
        geo,
        event["crt_deposits"],
        event["crt_strip_hits"],
        event["crt_strip_hit_feb_assn"],
        event["crt_feb_deposit_assn"],
        event["dropped_track_maps"],
    )


class TestStripHitMatching:
    """Truth matching of individual strip hits."""

    def test_match(self, geo, truth_event):
        """Test the matching of a strip hit with two contributing tracks."""
        context = context_from_event(geo, truth_event)
        match = context.match(truth_event["crt_strip_hits"][0])

        # Track 5 is rolled up into track 1: 3 GeV out of 4 GeV
        assert match.track_id == 1
        assert match.is_matched
        assert match.purity == pytest.approx(0.75)
        assert match.completeness == pytest.approx(3.0 / 8.0)

    def test_channel_mask(self, geo, truth_event):
        """Test that only the depositions on the hit channel are used."""
        context = context_from_event(geo, truth_event)
        match = context.match(truth_event["crt_strip_hits"][1])

        assert match.track_id == 1
        assert match.purity == pytest.approx(1.0)
        assert match.completeness == pytest.approx(1.0 / 8.0)

    def test_sentinel(self, geo, truth_event):
        """Test that a hit without depositions on its channel is unmatched."""
        context = context_from_event(geo, truth_event)
        match = context.match(truth_event["crt_strip_hits"][2])

        assert match.track_id == INVALID_TRACK_ID
        assert not match.is_matched
        assert match.purity == 0.0
        assert match.completeness == 0.0

    def test_read_only(self, geo, truth_event):
        """Test that queries do not modify the truth context."""
        context = context_from_event(geo, truth_event)
        categories = context.deposit_index.categories
        for hit in truth_event["crt_strip_hits"]:
            context.match(hit)

        assert context.deposit_index.categories == categories
        assert len(context.ancestry) == 1

    def test_tie_break(self, geo):
        """Test that the lowest track ID wins a purity tie."""
        pos = [0.0, 302.0, 0.0]
        deposits = [
            CRTDeposit(id=0, track_id=7, energy=1.0, entry=pos, exit=pos),
            CRTDeposit(id=1, track_id=4, energy=1.0, entry=pos, exit=pos),
        ]
        hit = CRTStripHit(id=0, channel=0)
        context = build_truth_context(
            geo,
            deposits,
            [hit],
            Association.from_pairs([(0, 0)]),
            Association.from_pairs([(0, 0), (0, 1)], data=[0, 0]),
        )
        match = context.match(hit)

        assert match.track_id == 4
        assert match.purity == pytest.approx(0.5)
        assert match.completeness == pytest.approx(1.0)

    def test_zero_tagger_energy(self, geo):
        """Test that a match without energy in the hit tagger is unmatched."""
        dep = CRTDeposit(id=0, track_id=1, energy=1.0, entry=[0, 0, 0], exit=[0, 0, 0])
        hit = CRTStripHit(id=0, channel=0)
        context = build_truth_context(
            geo,
            [dep],
            [hit],
            Association.from_pairs([(0, 0)]),
            Association.from_pairs([(0, 0)], data=[0]),
        )
        match = context.match(hit)

        assert match.track_id == INVALID_TRACK_ID
        assert match.completeness == 0.0

    def test_inconsistent_completeness(self, geo, caplog):
        """Test that a completeness above 1 is reported, not clamped."""
        pos = [0.0, 302.0, 0.0]
        dep = CRTDeposit(id=0, track_id=1, energy=1.0, entry=pos, exit=pos)
        hit = CRTStripHit(id=0, channel=0)
        context = build_truth_context(
            geo,
            [dep],
            [hit],
            Association.from_pairs([(0, 0)]),
            Association.from_pairs([(0, 0), (0, 0)], data=[0, 0]),
        )
        with caplog.at_level(logging.WARNING, logger="crtreco"):
            match = context.match(hit)

        assert match.completeness == pytest.approx(2.0)
        assert match.purity == pytest.approx(1.0)
        assert "inconsistent" in caplog.text

    @pytest.mark.parametrize("feb_pairs", [[], [(0, 0), (0, 1)]])
    def test_feb_association(self, geo, feb_pairs):
        """Test that a hit must be tied to exactly one FEB record."""
        hit = CRTStripHit(id=0, channel=0)
        context = build_truth_context(
            geo, [], [hit], Association.from_pairs(feb_pairs), Association()
        )
        with pytest.raises(AssociationError):
            context.match(hit)


class TestClusterMatching:
    """Truth matching of clusters."""

    def test_match(self, geo, truth_event):
        """Test that a cluster pools the depositions of its strip hits."""
        context = context_from_event(geo, truth_event)
        cluster = CRTCluster(id=0, n_hits=2, tagger=CRTTagger.TOP_LOW, hit_ids=[0, 1])
        match = context.match(cluster)

        assert match.track_id == 1
        assert match.purity == pytest.approx(0.8)
        assert match.completeness == pytest.approx(0.5)

    def test_unknown_hit(self, geo, truth_event):
        """Test that a cluster must refer to strip hits of the event."""
        context = context_from_event(geo, truth_event)
        cluster = CRTCluster(id=0, n_hits=1, tagger=CRTTagger.TOP_LOW, hit_ids=[9])
        with pytest.raises(AssociationError):
            context.match(cluster)

    def test_unsupported_object(self, geo, truth_event):
        """Test that only strip hits and clusters can be matched."""
        context = context_from_event(geo, truth_event)
        with pytest.raises(TypeError):
            context.match(truth_event["crt_deposits"][0])
