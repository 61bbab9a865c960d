"""Module which matches reconstructed CRT objects to simulated particles.

The matching walks the chain of associations from a strip hit to the
energy depositions which produced it:

    strip hit -> FEB data record -> energy depositions (+ FEB channel)

and scores each contributing (rolled-up) particle by the energy it
deposited in the object.
"""

from collections import defaultdict

from crtreco.data import CRTCluster, CRTStripHit, CRTTruthMatch
from crtreco.errors import AssociationError
from crtreco.utils.globals import FEB_NUM_CHANNELS
from crtreco.utils.logger import logger

from .ancestry import AncestorMap
from .deposit import DepositIndex

__all__ = ["TruthContext", "build_truth_context"]


class TruthContext:
    """Truth information of one event, used to match CRT objects.

    The context is immutable once built: matching queries can be issued in
    any order and do not modify it.

    Attributes
    ----------
    geo : CRTGeometry
        Geometry service
    ancestry : AncestorMap
        Ancestor mapping of the event
    deposit_index : DepositIndex
        Energy deposited per (ancestor, tagger) pair in the event
    deposits : Dict[int, CRTDeposit]
        Energy depositions of the event, indexed by ID
    strip_hits : Dict[int, CRTStripHit]
        Strip hits of the event, indexed by ID
    hit_feb_assn : Association
        Association between strip hits and FEB data records
    feb_deposit_assn : Association
        Association between FEB data records and energy depositions, each
        link carrying the FEB channel which read out the deposition
    """

    def __init__(
        self,
        geo,
        ancestry,
        deposit_index,
        deposits,
        strip_hits,
        hit_feb_assn,
        feb_deposit_assn,
    ):
        """Initialize the truth context.

        Parameters
        ----------
        geo : CRTGeometry
            Geometry service
        ancestry : AncestorMap
            Ancestor mapping of the event
        deposit_index : DepositIndex
            Energy deposited per (ancestor, tagger) pair in the event
        deposits : List[CRTDeposit]
            Energy depositions of the event
        strip_hits : List[CRTStripHit]
            Strip hits of the event
        hit_feb_assn : Association
            Association between strip hits and FEB data records
        feb_deposit_assn : Association
            Association between FEB data records and energy depositions
        """
        self.geo = geo
        self.ancestry = ancestry
        self.deposit_index = deposit_index
        self.deposits = {dep.id: dep for dep in deposits}
        self.strip_hits = {hit.id: hit for hit in strip_hits}
        self.hit_feb_assn = hit_feb_assn
        self.feb_deposit_assn = feb_deposit_assn

    def match(self, obj):
        """Finds the particle which best matches a strip hit or a cluster.

        Parameters
        ----------
        obj : Union[CRTStripHit, CRTCluster]
            Reconstructed CRT object

        Returns
        -------
        CRTTruthMatch
            Matched track ID, completeness and purity. If no energy
            deposition contributes to the object, the track ID is -99999
            and the metrics are 0.
        """
        tagger, strip_hits = self.get_members(obj)

        # Accumulate the energy contributed by each ancestor
        energies = defaultdict(float)
        total_energy = 0.0
        for hit in strip_hits:
            for dep in self.get_deposits(hit):
                energies[self.ancestry.roll_up(dep.track_id)] += dep.energy
                total_energy += dep.energy

        if total_energy <= 0.0:
            return CRTTruthMatch()

        # Pick the purest ancestor, the lowest ID wins ties
        track_id, best_energy, best_purity = None, 0.0, 0.0
        for ancestor in sorted(energies):
            purity = energies[ancestor] / total_energy
            if purity > best_purity:
                track_id, best_energy, best_purity = ancestor, energies[ancestor], purity

        if track_id is None:
            return CRTTruthMatch()

        tagger_energy = self.deposit_index.energy(track_id, tagger)
        if tagger_energy <= 0.0:
            return CRTTruthMatch()

        completeness = best_energy / tagger_energy
        if completeness > 1.0:
            logger.warning(
                f"Completeness of {completeness:.3f} for track {track_id} in "
                f"tagger {tagger.name}: the deposition index and the "
                "associations of the event are inconsistent."
            )

        return CRTTruthMatch(
            track_id=track_id, completeness=completeness, purity=best_purity
        )

    def get_members(self, obj):
        """Returns the tagger and the strip hits which make up an object.

        Parameters
        ----------
        obj : Union[CRTStripHit, CRTCluster]
            Reconstructed CRT object

        Returns
        -------
        CRTTagger
            Tagger of the object
        List[CRTStripHit]
            Strip hits which make up the object
        """
        if isinstance(obj, CRTStripHit):
            return self.geo.channel_to_tagger(obj.channel), [obj]

        if isinstance(obj, CRTCluster):
            strip_hits = []
            for hit_id in obj.hit_ids:
                if hit_id not in self.strip_hits:
                    raise AssociationError("cluster -> strip hit", obj.id, 0)
                strip_hits.append(self.strip_hits[hit_id])

            return obj.tagger, strip_hits

        raise TypeError(
            f"Cannot truth match an object of type {type(obj).__name__}. "
            "Must be one of `CRTStripHit` or `CRTCluster`."
        )

    def get_deposits(self, strip_hit):
        """Returns the energy depositions read out by the channel of a strip hit.

        Parameters
        ----------
        strip_hit : CRTStripHit
            Strip hit

        Returns
        -------
        List[CRTDeposit]
            Energy depositions attributed to the strip hit channel
        """
        # A strip hit must be formed from exactly one FEB readout
        feb_ids = self.hit_feb_assn.at(strip_hit.id)
        if len(feb_ids) != 1:
            raise AssociationError("strip hit -> FEB data", strip_hit.id, len(feb_ids))

        # The board reads out many strips, only keep those of this one
        feb_id = feb_ids[0]
        channel = strip_hit.channel % FEB_NUM_CHANNELS
        deposits = []
        for dep_id, feb_channel in zip(
            self.feb_deposit_assn.at(feb_id), self.feb_deposit_assn.data(feb_id)
        ):
            if feb_channel == channel:
                deposits.append(self.deposits[dep_id])

        return deposits


def build_truth_context(
    geo, deposits, strip_hits, hit_feb_assn, feb_deposit_assn, dropped_track_maps=()
):
    """Builds the truth context of one event.

    Parameters
    ----------
    geo : CRTGeometry
        Geometry service
    deposits : List[CRTDeposit]
        Energy depositions of the event
    strip_hits : List[CRTStripHit]
        Strip hits of the event
    hit_feb_assn : Association
        Association between strip hits and FEB data records
    feb_deposit_assn : Association
        Association between FEB data records and energy depositions, each
        link carrying the FEB channel which read out the deposition
    dropped_track_maps : Iterable[Dict[int, Iterable[int]]], optional
        List of (ancestor ID -> dropped track IDs) mappings

    Returns
    -------
    TruthContext
        Truth context of the event
    """
    ancestry = AncestorMap.from_dropped_maps(dropped_track_maps)
    deposit_index = DepositIndex.build(deposits, geo, ancestry)

    return TruthContext(
        geo,
        ancestry,
        deposit_index,
        deposits,
        strip_hits,
        hit_feb_assn,
        feb_deposit_assn,
    )
