"""Post-processor in charge of matching CRT objects to true particles."""

from crtreco.geo import geo_factory
from crtreco.post.base import PostBase
from crtreco.truth import CRTBackTracker

__all__ = ["CRTTruthMatchProcessor"]


class CRTTruthMatchProcessor(PostBase):
    """Matches CRT strip hits and clusters to the true particles which
    deposited energy in them.
    """

    # Name of the post-processor (as specified in the configuration)
    name = "crt_truth_match"

    # Alternative allowed names of the post-processor
    aliases = ("crt_backtracker",)

    # Set of post-processors which must be run before this one is
    _upstream = ("crt_cluster",)

    def __init__(
        self,
        geometry_file=None,
        geometry=None,
        cluster_key="crt_clusters",
        match_hits=True,
        match_clusters=True,
        **kwargs,
    ):
        """Initialize the CRT truth matching post-processor.

        Parameters
        ----------
        geometry_file : str, optional
            Path to a `.yaml` geometry file to load the geometry from
        geometry : dict, optional
            Geometry configuration dictionary
        cluster_key : str, default 'crt_clusters'
            Data product key which provides the CRT clusters
        match_hits : bool, default True
            Whether to truth match the strip hits
        match_clusters : bool, default True
            Whether to truth match the clusters
        **kwargs : dict
            Data product keys to pass to the :class:`CRTBackTracker`
        """
        assert match_hits or match_clusters, "Must match at least one object type."

        # Initialize the back tracker
        geo = geo_factory(geometry_file, geometry)
        self.backtracker = CRTBackTracker(geo, **kwargs)

        # Make sure the truth information is available, store
        self.cluster_key = cluster_key
        self.match_hits = match_hits
        self.match_clusters = match_clusters
        self.update_keys({k: True for k in self.backtracker.required_keys})
        self.update_keys({self.backtracker.dropped_track_key: False})
        if match_clusters:
            self.update_keys({cluster_key: True})

    def process(self, data):
        """Truth match the CRT objects of one entry.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Dictionary with the lists of :class:`CRTTruthMatch` objects,
            aligned with the strip hit and cluster lists
        """
        # Rebuild the truth information of this entry
        self.backtracker.setup(data)

        result = {}
        try:
            if self.match_hits:
                hits = data[self.backtracker.strip_hit_key]
                result["crt_strip_hit_matches"] = [
                    self.backtracker.truth_matching(hit) for hit in hits
                ]

            if self.match_clusters:
                clusters = data[self.cluster_key]
                result["crt_cluster_matches"] = [
                    self.backtracker.truth_matching(cluster) for cluster in clusters
                ]

        finally:
            # Never carry the truth information over to the next entry
            self.backtracker.reset()

        return result
