"""Data structures used to represent CRT reconstruction inputs/outputs.

- :class:`CRTStripHit`, :class:`CRTCluster`, :class:`FEBData`: detector
  readout and reconstructed objects
- :class:`CRTDeposit`, :class:`CRTTruthMatch`: simulated energy depositions
  and truth matching results
- :class:`Association`: one-to-many relation between lists of records
"""

from .assn import Association
from .crt import CRTCluster, CRTStripHit, FEBData
from .truth import CRTDeposit, CRTTruthMatch
