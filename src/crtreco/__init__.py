"""Top-level module of the CRT reconstruction source code."""

from .version import __version__

# Import commonly used data structures
from .data import CRTCluster, CRTDeposit, CRTStripHit, CRTTruthMatch
