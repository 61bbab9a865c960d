"""Module with data class objects which represent CRT reconstruction
products.

This copies the internal structure of the `sbnd::crt` strip hit, cluster and
front-end board (FEB) data products.
"""

from dataclasses import dataclass

import numpy as np

from crtreco.utils.enums import CRTTagger
from crtreco.utils.globals import FEB_NUM_CHANNELS

from .base import DataBase

__all__ = ["CRTStripHit", "CRTCluster", "FEBData"]


@dataclass(eq=False)
class CRTStripHit(DataBase):
    """CRT strip hit information.

    A strip hit is formed from the two SiPM readings at either end of a
    single scintillator strip.

    Attributes
    ----------
    id : int
        Index of the strip hit in the list
    channel : int
        Readout channel of the strip (first of its two SiPM channels)
    ts0 : int
        Time relative to the detector clock (ns)
    ts1 : int
        Time relative to the trigger (ns)
    unix_s : int
        Unix timestamp of the hit (seconds component)
    pos : float
        Position of the hit across the width of the strip (cm)
    error : float
        Uncertainty on the position across the width of the strip (cm)
    adc1 : int
        ADC value measured by the first SiPM
    adc2 : int
        ADC value measured by the second SiPM
    """

    id: int = -1
    channel: int = -1
    ts0: int = 0
    ts1: int = 0
    unix_s: int = 0
    pos: float = -1.0
    error: float = -1.0
    adc1: int = 0
    adc2: int = 0


@dataclass(eq=False)
class CRTCluster(DataBase):
    """CRT cluster information.

    A cluster groups the strip hits of one tagger which are coincident in
    time, i.e. the strips crossed by a single particle.

    Attributes
    ----------
    id : int
        Index of the cluster in the list
    ts0 : int
        Average time of the strip hits relative to the detector clock (ns)
    ts1 : int
        Average time of the strip hits relative to the trigger (ns)
    unix_s : int
        Average unix timestamp of the strip hits (seconds component)
    n_hits : int
        Number of strip hits in the cluster
    tagger : CRTTagger
        CRT tagger which registered the strip hits
    three_d : bool
        Whether the strip hits span two different strip orientations, i.e.
        whether a 3D position can be reconstructed from the cluster
    hit_ids : np.ndarray
        (N) Indexes of the strip hits which make up the cluster
    """

    id: int = -1
    ts0: int = 0
    ts1: int = 0
    unix_s: int = 0
    n_hits: int = 0
    tagger: CRTTagger = CRTTagger.UNDEFINED
    three_d: bool = False
    hit_ids: np.ndarray = None

    # Variable-length attributes
    _var_length_attrs = (("hit_ids", np.int64),)

    def __post_init__(self):
        """Casts the tagger to its enumerated type."""
        super().__post_init__()
        self.tagger = CRTTagger(self.tagger)


@dataclass(eq=False)
class FEBData(DataBase):
    """Front-end board readout information.

    Attributes
    ----------
    id : int
        Index of the FEB record in the list
    mac5 : int
        Address of the front-end board
    ts0 : int
        Time relative to the detector clock (ns)
    ts1 : int
        Time relative to the trigger (ns)
    adc : np.ndarray
        (32) ADC value of each of the channels of the board
    """

    id: int = -1
    mac5: int = -1
    ts0: int = 0
    ts1: int = 0
    adc: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("adc", (FEB_NUM_CHANNELS, np.int32)),)

    def __post_init__(self):
        """Gives an empty ADC readout to boards created without one."""
        if self.adc is None:
            self.adc = np.zeros(FEB_NUM_CHANNELS, dtype=np.int32)
        super().__post_init__()
