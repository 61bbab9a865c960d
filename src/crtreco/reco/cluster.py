"""Module that groups CRT strip hits into clusters.

A cluster is a set of strip hits, in a single tagger, which are coincident
in time. It corresponds to the set of strips crossed by a single particle.
"""

import numpy as np

from crtreco.data import CRTCluster
from crtreco.math.cluster import anchor_window_cluster
from crtreco.utils.logger import logger

__all__ = ["CRTClusterer", "group_and_cluster"]


class CRTClusterer:
    """Groups strip hits per tagger and clusters them in time.

    Attributes
    ----------
    geo : CRTGeometry
        Geometry service, must provide `channel_to_tagger`, `get_strip` and
        `different_orientations`
    coincidence_window : int
        Maximum difference in `ts1` between the first hit of a cluster and
        any other of its hits, in ns (strict)
    """

    def __init__(self, geo, coincidence_window):
        """Initialize the clusterer.

        Parameters
        ----------
        geo : CRTGeometry
            Geometry service
        coincidence_window : int
            Coincidence window, in ns
        """
        if coincidence_window < 0:
            raise ValueError(
                f"The coincidence window must not be negative, got {coincidence_window}."
            )

        self.geo = geo
        self.coincidence_window = int(coincidence_window)

    def get_clusters(self, strip_hits):
        """Builds all the clusters of one event.

        The taggers are processed in ascending order of their enumerated
        value. Within a tagger, the clusters are listed in order of
        discovery.

        Parameters
        ----------
        strip_hits : List[CRTStripHit]
            List of strip hits in the event

        Returns
        -------
        List[CRTCluster]
            List of clusters, each of which refers to its strip hits
            through its `hit_ids` attribute
        """
        clusters = []
        groups = self.group_strip_hits(strip_hits)
        for tagger in sorted(groups):
            hits = sorted(groups[tagger], key=lambda h: h.ts1)
            for members in self.create_clusters(hits):
                cluster = self.characterise_cluster(members)
                cluster.id = len(clusters)
                clusters.append(cluster)

        logger.debug(
            f"Grouped {len(strip_hits)} CRT strip hits into {len(clusters)} clusters."
        )

        return clusters

    def group_strip_hits(self, strip_hits):
        """Partitions the strip hits by the tagger they belong to.

        Parameters
        ----------
        strip_hits : List[CRTStripHit]
            List of strip hits

        Returns
        -------
        Dict[CRTTagger, List[CRTStripHit]]
            Strip hits of each tagger, in input order
        """
        groups = {}
        for hit in strip_hits:
            tagger = self.geo.channel_to_tagger(hit.channel)
            groups.setdefault(tagger, []).append(hit)

        return groups

    def create_clusters(self, strip_hits):
        """Partitions the strip hits of one tagger into time clusters.

        Each unused hit, taken in order, opens a new cluster which every
        subsequent unused hit joins if its `ts1` is within the coincidence
        window of the opening hit.

        Parameters
        ----------
        strip_hits : List[CRTStripHit]
            List of strip hits of a single tagger, sorted by `ts1`

        Returns
        -------
        List[List[CRTStripHit]]
            List of clusters, given as lists of strip hits
        """
        if not len(strip_hits):
            return []

        times = np.array([hit.ts1 for hit in strip_hits], dtype=np.int64)
        assert np.all(np.diff(times) >= 0), "Strip hits must be sorted by `ts1`."

        labels = anchor_window_cluster(times, self.coincidence_window)
        clusters = [[] for _ in range(labels.max() + 1)]
        for hit, label in zip(strip_hits, labels):
            clusters[label].append(hit)

        return clusters

    def characterise_cluster(self, strip_hits):
        """Reduces a set of strip hits into a single cluster object.

        The times of the cluster are the averages of those of its hits,
        truncated to an integer. The cluster is 3D if any of its strips
        crosses the strip of its first hit.

        Parameters
        ----------
        strip_hits : List[CRTStripHit]
            List of strip hits which make up the cluster

        Returns
        -------
        CRTCluster
            Cluster object
        """
        if not len(strip_hits):
            raise ValueError("Cannot characterise a cluster without strip hits.")

        num_hits = len(strip_hits)
        strip0 = self.geo.get_strip(strip_hits[0].channel)
        tagger = self.geo.channel_to_tagger(strip_hits[0].channel)

        ts0, ts1, unix_s, three_d = 0, 0, 0, False
        for hit in strip_hits:
            ts0 += int(hit.ts0)
            ts1 += int(hit.ts1)
            unix_s += int(hit.unix_s)

            strip = self.geo.get_strip(hit.channel)
            three_d |= self.geo.different_orientations(strip0, strip)

        return CRTCluster(
            ts0=ts0 // num_hits,
            ts1=ts1 // num_hits,
            unix_s=unix_s // num_hits,
            n_hits=num_hits,
            tagger=tagger,
            three_d=three_d,
            hit_ids=[hit.id for hit in strip_hits],
        )


def group_and_cluster(strip_hits, geo, coincidence_window):
    """Builds the clusters of one event.

    Parameters
    ----------
    strip_hits : List[CRTStripHit]
        List of strip hits in the event
    geo : CRTGeometry
        Geometry service
    coincidence_window : int
        Coincidence window, in ns

    Returns
    -------
    List[Tuple[CRTCluster, List[int]]]
        List of (cluster, strip hit IDs) pairs
    """
    clusterer = CRTClusterer(geo, coincidence_window)
    clusters = clusterer.get_clusters(strip_hits)

    return [(cluster, cluster.hit_ids.tolist()) for cluster in clusters]
