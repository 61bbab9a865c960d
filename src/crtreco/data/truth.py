"""Module with data class objects which represent simulated CRT energy
depositions and the outcome of truth matching reconstructed CRT objects.
"""

from dataclasses import dataclass

import numpy as np

from crtreco.utils.globals import INVALID_TRACK_ID

from .base import DataBase

__all__ = ["CRTDeposit", "CRTTruthMatch"]


@dataclass(eq=False)
class CRTDeposit(DataBase):
    """Energy deposition of a simulated particle in a CRT strip.

    This copies the internal structure of :class:`sim::AuxDetIDE`.

    Attributes
    ----------
    id : int
        Index of the deposition in the list
    track_id : int
        Geant4 track ID of the particle which deposited the energy
    energy : float
        Deposited energy (GeV)
    entry : np.ndarray
        (3) Position where the particle entered the strip (cm)
    exit : np.ndarray
        (3) Position where the particle exited the strip (cm)
    """

    id: int = -1
    track_id: int = INVALID_TRACK_ID
    energy: float = 0.0
    entry: np.ndarray = None
    exit: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("entry", (3, np.float64)), ("exit", (3, np.float64)))

    @property
    def midpoint(self):
        """Position halfway between the entry and exit points.

        Returns
        -------
        np.ndarray
            (3) Midpoint of the deposition (cm)
        """
        return (self.entry + self.exit) / 2.0


@dataclass(eq=False)
class CRTTruthMatch(DataBase):
    """Outcome of the truth matching of a CRT strip hit or cluster.

    Attributes
    ----------
    track_id : int
        Track ID of the best-matched (rolled-up) particle, -99999 if the
        object could not be matched
    completeness : float
        Fraction of the energy deposited by the matched particle in the
        tagger which is captured by the object
    purity : float
        Fraction of the energy associated with the object which was
        deposited by the matched particle
    """

    track_id: int = INVALID_TRACK_ID
    completeness: float = 0.0
    purity: float = 0.0

    @property
    def is_matched(self):
        """Whether the object was matched to a particle.

        Returns
        -------
        bool
            `True` if a particle was matched
        """
        return self.track_id != INVALID_TRACK_ID
