"""Module with a one-to-many association between two lists of records."""

from collections import defaultdict

__all__ = ["Association"]


class Association:
    """One-to-many relation between the IDs of two lists of records.

    Each link can carry a piece of extra information (e.g. the FEB channel
    on which an energy deposition was read out).

    Attributes
    ----------
    links : Dict[int, List[int]]
        Mapping from a source record ID onto its associated record IDs
    link_data : Dict[int, List[object]]
        Mapping from a source record ID onto its per-link information
    """

    def __init__(self):
        """Initialize an empty association."""
        self.links = defaultdict(list)
        self.link_data = defaultdict(list)

    @classmethod
    def from_pairs(cls, pairs, data=None):
        """Builds an association from a list of (source, target) ID pairs.

        Parameters
        ----------
        pairs : Iterable[Tuple[int, int]]
            List of (source ID, target ID) pairs, in link order
        data : Iterable[object], optional
            Information attached to each link, in the same order as `pairs`

        Returns
        -------
        Association
            Association object
        """
        pairs = list(pairs)
        data = [None] * len(pairs) if data is None else list(data)
        assert len(data) == len(pairs), (
            "Must provide one piece of link information per pair. "
            f"Got {len(data)}, but expected {len(pairs)}."
        )

        assn = cls()
        for (src, dst), info in zip(pairs, data):
            assn.add(src, dst, info)

        return assn

    def add(self, src, dst, info=None):
        """Adds a single link to the association.

        Parameters
        ----------
        src : int
            ID of the source record
        dst : int
            ID of the target record
        info : object, optional
            Information attached to the link
        """
        self.links[int(src)].append(int(dst))
        self.link_data[int(src)].append(info)

    def at(self, key):
        """Returns the IDs of the records associated with a source record.

        Parameters
        ----------
        key : int
            ID of the source record

        Returns
        -------
        List[int]
            IDs of the associated records (empty if there are none)
        """
        return list(self.links.get(key, []))

    def data(self, key):
        """Returns the information attached to the links of a source record.

        Parameters
        ----------
        key : int
            ID of the source record

        Returns
        -------
        List[object]
            Link information, aligned with :meth:`at`
        """
        return list(self.link_data.get(key, []))

    def __len__(self):
        """Returns the total number of links in the association.

        Returns
        -------
        int
            Number of links
        """
        return sum(len(v) for v in self.links.values())
