"""Module which attributes simulated tracks to their recorded ancestor."""

__all__ = ["AncestorMap"]


class AncestorMap:
    """Mapping from the ID of a track dropped (or merged) by the simulation
    onto the ID of the ancestor its energy was attributed to.

    Tracks which do not appear in the mapping are their own ancestor. The
    lookup is a single level: if the ancestor itself appears in the mapping,
    it is not resolved further.

    Attributes
    ----------
    mothers : Dict[int, int]
        Mapping from a dropped track ID onto its ancestor track ID
    """

    def __init__(self, mothers=None):
        """Initialize the mapping.

        Parameters
        ----------
        mothers : Dict[int, int], optional
            Mapping from a dropped track ID onto its ancestor track ID
        """
        self.mothers = dict(mothers) if mothers is not None else {}

    @classmethod
    def from_dropped_maps(cls, dropped_maps):
        """Builds the mapping from the dropped track maps of one event.

        Each map lists, for an ancestor track ID, the set of track IDs which
        were dropped in its favor. When a track ID appears in more than one
        map, the last one wins.

        Parameters
        ----------
        dropped_maps : Iterable[Dict[int, Iterable[int]]]
            List of (ancestor ID -> dropped track IDs) mappings

        Returns
        -------
        AncestorMap
            Ancestor mapping
        """
        mothers = {}
        for dropped_map in dropped_maps:
            for mother, track_ids in dropped_map.items():
                for track_id in track_ids:
                    mothers[int(track_id)] = int(mother)

        return cls(mothers)

    def roll_up(self, track_id):
        """Returns the ancestor of a track.

        Parameters
        ----------
        track_id : int
            Track ID

        Returns
        -------
        int
            Ancestor track ID (the track ID itself if it was not dropped)
        """
        return self.mothers.get(track_id, track_id)

    def __contains__(self, track_id):
        """Checks whether a track was dropped in favor of an ancestor.

        Parameters
        ----------
        track_id : int
            Track ID

        Returns
        -------
        bool
            `True` if the track has a recorded ancestor
        """
        return track_id in self.mothers

    def __len__(self):
        """Returns the number of dropped tracks.

        Returns
        -------
        int
            Number of dropped tracks
        """
        return len(self.mothers)
