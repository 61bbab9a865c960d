"""Truth accounting of the energy deposited in the CRT and truth matching
of reconstructed CRT objects.
"""

from .ancestry import AncestorMap
from .backtrack import CRTBackTracker
from .deposit import DepositIndex
from .match import TruthContext, build_truth_context
