"""Post-processor in charge of grouping CRT strip hits into clusters."""

from crtreco.geo import geo_factory
from crtreco.post.base import PostBase
from crtreco.reco import CRTClusterer

__all__ = ["CRTClusterProcessor"]


class CRTClusterProcessor(PostBase):
    """Groups the CRT strip hits of each tagger into time clusters."""

    # Name of the post-processor (as specified in the configuration)
    name = "crt_cluster"

    # Alternative allowed names of the post-processor
    aliases = ("crt_clustering",)

    def __init__(
        self,
        coincidence_window,
        geometry_file=None,
        geometry=None,
        strip_hit_key="crt_strip_hits",
        cluster_key="crt_clusters",
    ):
        """Initialize the CRT clustering post-processor.

        Parameters
        ----------
        coincidence_window : int
            Maximum `ts1` difference between the first strip hit of a cluster
            and any other of its strip hits, in ns
        geometry_file : str, optional
            Path to a `.yaml` geometry file to load the geometry from
        geometry : dict, optional
            Geometry configuration dictionary
        strip_hit_key : str, default 'crt_strip_hits'
            Data product key which provides the CRT strip hits
        cluster_key : str, default 'crt_clusters'
            Data product key under which to store the CRT clusters
        """
        # Make sure the strip hit data product is available, store
        self.strip_hit_key = strip_hit_key
        self.cluster_key = cluster_key
        self.update_keys({strip_hit_key: True})

        # Initialize the clusterer
        geo = geo_factory(geometry_file, geometry)
        self.clusterer = CRTClusterer(geo, coincidence_window)

    def process(self, data):
        """Build the CRT clusters of one entry.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Dictionary with the list of :class:`CRTCluster` objects
        """
        clusters = self.clusterer.get_clusters(data[self.strip_hit_key])

        return {self.cluster_key: clusters}
