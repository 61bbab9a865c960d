"""Module which accounts for the energy deposited by each particle in each
CRT tagger.

This is the truth reference against which the completeness of a
reconstructed CRT object is computed.
"""

__all__ = ["DepositIndex"]


class DepositIndex:
    """Number of depositions and deposited energy per (ancestor, tagger) pair.

    Attributes
    ----------
    ancestor_ids : Set[int]
        Set of ancestor track IDs which deposited energy in the CRT
    """

    def __init__(self):
        """Initialize an empty index."""
        self._counts = {}
        self._energies = {}
        self.ancestor_ids = set()

    @classmethod
    def build(cls, deposits, geo, ancestry):
        """Builds the index from all the energy depositions of one event.

        Each deposition is attributed to the tagger which contains the
        midpoint of its entry and exit points, and to the ancestor of the
        track which produced it.

        Parameters
        ----------
        deposits : List[CRTDeposit]
            List of energy depositions in the event
        geo : CRTGeometry
            Geometry service, must provide `position_to_tagger`
        ancestry : AncestorMap
            Ancestor mapping of the event

        Returns
        -------
        DepositIndex
            Deposition index
        """
        index = cls()

        # Categorize each deposition
        categories = []
        for dep in deposits:
            tagger = geo.position_to_tagger(*dep.midpoint)
            ancestor = ancestry.roll_up(dep.track_id)
            categories.append((ancestor, tagger))

        # Register every category first, so that all of them can be queried
        for key in categories:
            index._counts[key] = 0
            index._energies[key] = 0.0
            index.ancestor_ids.add(key[0])

        # Accumulate
        for key, dep in zip(categories, deposits):
            index._counts[key] += 1
            index._energies[key] += dep.energy

        return index

    @property
    def categories(self):
        """List of (ancestor, tagger) pairs which appear in the index.

        Returns
        -------
        List[Tuple[int, CRTTagger]]
            List of (ancestor, tagger) pairs
        """
        return list(self._counts)

    def count(self, ancestor, tagger):
        """Number of depositions of an ancestor in a tagger.

        Parameters
        ----------
        ancestor : int
            Ancestor track ID
        tagger : CRTTagger
            CRT tagger

        Returns
        -------
        int
            Number of depositions (0 if the pair was never observed)
        """
        return self._counts.get((ancestor, tagger), 0)

    def energy(self, ancestor, tagger):
        """Total energy deposited by an ancestor in a tagger.

        Parameters
        ----------
        ancestor : int
            Ancestor track ID
        tagger : CRTTagger
            CRT tagger

        Returns
        -------
        float
            Deposited energy (0 if the pair was never observed)
        """
        return self._energies.get((ancestor, tagger), 0.0)

    def __contains__(self, key):
        return key in self._counts

    def __len__(self):
        return len(self._counts)
