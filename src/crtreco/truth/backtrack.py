"""Module which sets up the truth information of each event and answers
truth matching queries about its CRT objects.
"""

from crtreco.errors import StaleContextError
from crtreco.utils.logger import logger

from .match import build_truth_context

__all__ = ["CRTBackTracker"]


class CRTBackTracker:
    """Truth matching utility for CRT strip hits and clusters.

    The truth information must be set up with :meth:`setup` at the start of
    every event, before any object of that event is matched.

    Attributes
    ----------
    geo : CRTGeometry
        Geometry service
    context : TruthContext
        Truth context of the current event (`None` before the first setup)
    """

    def __init__(
        self,
        geo,
        deposit_key="crt_deposits",
        strip_hit_key="crt_strip_hits",
        hit_feb_key="crt_strip_hit_feb_assn",
        feb_deposit_key="crt_feb_deposit_assn",
        dropped_track_key="dropped_track_maps",
    ):
        """Initialize the back tracker.

        Parameters
        ----------
        geo : CRTGeometry
            Geometry service
        deposit_key : str, default 'crt_deposits'
            Data product key which provides the energy depositions
        strip_hit_key : str, default 'crt_strip_hits'
            Data product key which provides the strip hits
        hit_feb_key : str, default 'crt_strip_hit_feb_assn'
            Data product key which provides the strip hit to FEB data
            association
        feb_deposit_key : str, default 'crt_feb_deposit_assn'
            Data product key which provides the FEB data to energy deposition
            association
        dropped_track_key : str, default 'dropped_track_maps'
            Data product key which provides the dropped track maps
        """
        self.geo = geo
        self.deposit_key = deposit_key
        self.strip_hit_key = strip_hit_key
        self.hit_feb_key = hit_feb_key
        self.feb_deposit_key = feb_deposit_key
        self.dropped_track_key = dropped_track_key
        self.context = None

    @property
    def required_keys(self):
        """Data product keys which must be provided to :meth:`setup`.

        Returns
        -------
        Tuple[str]
            Required data product keys
        """
        return (
            self.deposit_key,
            self.strip_hit_key,
            self.hit_feb_key,
            self.feb_deposit_key,
        )

    def setup(self, data):
        """Rebuilds the truth information from the data products of one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products. The dropped track maps are optional.

        Returns
        -------
        TruthContext
            Truth context of the event
        """
        # Never leave the previous event loaded if this one cannot be built
        self.reset()
        self.context = build_truth_context(
            self.geo,
            data[self.deposit_key],
            data[self.strip_hit_key],
            data[self.hit_feb_key],
            data[self.feb_deposit_key],
            data.get(self.dropped_track_key, ()),
        )

        logger.debug(
            f"Set up CRT truth information: {len(self.context.deposits)} "
            f"depositions from {len(self.context.deposit_index.ancestor_ids)} "
            f"ancestors, {len(self.context.ancestry)} dropped tracks."
        )

        return self.context

    def reset(self):
        """Forgets the truth information of the current event."""
        self.context = None

    def roll_up(self, track_id):
        """Returns the ancestor of a track in the current event.

        Parameters
        ----------
        track_id : int
            Track ID

        Returns
        -------
        int
            Ancestor track ID
        """
        return self._get_context().ancestry.roll_up(track_id)

    def truth_matching(self, obj):
        """Matches a strip hit or a cluster of the current event.

        Parameters
        ----------
        obj : Union[CRTStripHit, CRTCluster]
            Reconstructed CRT object

        Returns
        -------
        CRTTruthMatch
            Matched track ID, completeness and purity
        """
        return self._get_context().match(obj)

    def _get_context(self):
        """Returns the truth context of the current event.

        Returns
        -------
        TruthContext
            Truth context of the current event
        """
        if self.context is None:
            raise StaleContextError(
                "The CRT truth information has not been set up for this event. "
                "Call `setup` before issuing truth matching queries."
            )

        return self.context
