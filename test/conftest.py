"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import pytest
import yaml

from crtreco.data import Association, CRTDeposit, CRTStripHit, FEBData
from crtreco.geo import geo_factory

# Small CRT geometry with two crossed modules in the low top tagger and one
# module in each of the bottom and north taggers
GEOMETRY = {
    "name": "test_crt",
    "tag": "unit",
    "version": 1,
    "taggers": [
        {"tagger": "top_low", "lower": [-100, 300, -100], "upper": [100, 310, 100]},
        {"tagger": "bottom", "lower": [-100, -310, -100], "upper": [100, -300, 100]},
        {"tagger": "north", "lower": [-100, -300, 200], "upper": [100, 300, 210]},
    ],
    "modules": [
        {
            "name": "top_x",
            "tagger": "top_low",
            "orientation": 0,
            "first_channel": 0,
            "num_strips": 16,
            "width_axis": 2,
            "lower": [-100, 300, -100],
            "upper": [100, 305, 100],
        },
        {
            "name": "top_z",
            "tagger": "top_low",
            "orientation": 1,
            "first_channel": 32,
            "num_strips": 16,
            "width_axis": 0,
            "lower": [-100, 305, -100],
            "upper": [100, 310, 100],
        },
        {
            "name": "bottom_x",
            "tagger": "bottom",
            "orientation": 0,
            "first_channel": 64,
            "num_strips": 16,
            "width_axis": 2,
            "lower": [-100, -310, -100],
            "upper": [100, -305, 100],
        },
        {
            "name": "north_y",
            "tagger": "north",
            "orientation": 0,
            "first_channel": 96,
            "num_strips": 16,
            "width_axis": 1,
            "lower": [-100, -300, 200],
            "upper": [100, 300, 205],
        },
    ],
}


@pytest.fixture(name="geo_cfg")
def fixture_geo_cfg():
    """Configuration dictionary of the test CRT geometry."""
    return yaml.safe_load(yaml.safe_dump(GEOMETRY))


@pytest.fixture(name="geo")
def fixture_geo(geo_cfg):
    """Test CRT geometry object."""
    return geo_factory(geometry=geo_cfg)


@pytest.fixture(name="geo_file")
def fixture_geo_file(tmp_path, geo_cfg):
    """Test CRT geometry stored as a YAML file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    """
    path = tmp_path / "crt_geometry.yaml"
    path.write_text(yaml.safe_dump(geo_cfg))

    return str(path)


@pytest.fixture(name="make_hit")
def fixture_make_hit():
    """Factory of strip hits with sequential IDs."""
    counter = {"id": 0}

    def make_hit(channel, ts1, ts0=None, unix_s=1700000000):
        hit = CRTStripHit(
            id=counter["id"],
            channel=channel,
            ts0=ts1 if ts0 is None else ts0,
            ts1=ts1,
            unix_s=unix_s,
        )
        counter["id"] += 1
        return hit

    return make_hit


@pytest.fixture(name="truth_event")
def fixture_truth_event():
    """Data products of a simulated event with truth information.

    - Strip hits 0 and 1 are read out by FEB 0 (channels 0 and 2, low top
      tagger), strip hit 2 by FEB 2 (channel 64, bottom tagger)
    - Track 5 was dropped in favor of track 1
    - Track 1 deposits 8 GeV in the low top tagger, 4 GeV of which on a
      module without any strip hit
    - No deposition is read out on the channel of strip hit 2
    """
    top = [[0.0, 301.0, 0.0], [0.0, 303.0, 0.0]]
    bottom = [[0.0, -309.0, 0.0], [0.0, -307.0, 0.0]]
    deposits = [
        CRTDeposit(id=0, track_id=1, energy=2.0, entry=top[0], exit=top[1]),
        CRTDeposit(id=1, track_id=5, energy=1.0, entry=top[0], exit=top[1]),
        CRTDeposit(id=2, track_id=2, energy=1.0, entry=top[0], exit=top[1]),
        CRTDeposit(id=3, track_id=1, energy=1.0, entry=top[0], exit=top[1]),
        CRTDeposit(id=4, track_id=1, energy=4.0, entry=top[0], exit=top[1]),
        CRTDeposit(id=5, track_id=3, energy=0.5, entry=bottom[0], exit=bottom[1]),
    ]
    strip_hits = [
        CRTStripHit(id=0, channel=0, ts0=100, ts1=10, unix_s=1700000000),
        CRTStripHit(id=1, channel=2, ts0=102, ts1=12, unix_s=1700000000),
        CRTStripHit(id=2, channel=64, ts0=100, ts1=10, unix_s=1700000000),
    ]
    febs = [FEBData(id=0, mac5=0), FEBData(id=1, mac5=1), FEBData(id=2, mac5=2)]
    hit_feb_assn = Association.from_pairs([(0, 0), (1, 0), (2, 2)])
    feb_deposit_assn = Association.from_pairs(
        [(0, 0), (0, 1), (0, 2), (0, 3), (1, 4), (2, 5)], data=[0, 0, 0, 2, 0, 5]
    )

    return {
        "crt_deposits": deposits,
        "crt_strip_hits": strip_hits,
        "crt_feb_data": febs,
        "crt_strip_hit_feb_assn": hit_feb_assn,
        "crt_feb_deposit_assn": feb_deposit_assn,
        "dropped_track_maps": [{1: {5}}],
    }
