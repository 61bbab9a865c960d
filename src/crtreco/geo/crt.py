"""CRT detector geometry classes.

The cosmic-ray taggers are organised in three levels:
- Taggers, i.e. the walls of scintillator surrounding the detector
- Modules, i.e. sets of parallel strips read out by one front-end board
- Strips, i.e. single scintillator bars read out by two SiPM channels
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

import numpy as np

from crtreco.errors import GeometryError
from crtreco.utils.enums import CRTTagger, enum_factory
from crtreco.utils.globals import STRIP_NUM_CHANNELS

from .base import Box

__all__ = ["CRTGeometry"]


@dataclass
class CRTStrip(Box):
    """Class which holds all properties of an individual CRT strip.

    Attributes
    ----------
    name : str
        Name of the strip
    channel0 : int
        Readout channel of the SiPM at the first end of the strip
    channel1 : int
        Readout channel of the SiPM at the second end of the strip
    module : str
        Name of the module the strip belongs to
    """

    name: str
    channel0: int
    channel1: int
    module: str

    def __init__(
        self,
        name: str,
        channel0: int,
        module: str,
        lower: np.ndarray,
        upper: np.ndarray,
    ):
        """Initialize the CRT strip object.

        Parameters
        ----------
        name : str
            Name of the strip
        channel0 : int
            Readout channel of the first SiPM, the second SiPM is read out
            by the next channel
        module : str
            Name of the module the strip belongs to
        lower : np.ndarray
            (3,) Lower bounds of the strip
        upper : np.ndarray
            (3,) Upper bounds of the strip
        """
        super().__init__(lower, upper)
        self.name = name
        self.channel0 = channel0
        self.channel1 = channel0 + 1
        self.module = module


@dataclass
class CRTModule(Box):
    """Class which holds all properties of a CRT module.

    Attributes
    ----------
    name : str
        Name of the module
    tagger : str
        Name of the tagger the module belongs to
    orientation : int
        Orientation of the strips in the module. Strips of two modules with
        a different orientation cross each other.
    first_channel : int
        First readout channel of the module
    width_axis : int
        Axis along which the strips of the module are stacked
    strips : List[CRTStrip]
        List of strips in the module, in channel order
    """

    name: str
    tagger: str
    orientation: int
    first_channel: int
    width_axis: int
    strips: List[CRTStrip]

    def __init__(
        self,
        name: str,
        tagger: str,
        orientation: int,
        first_channel: int,
        num_strips: int,
        width_axis: int,
        lower: List[float],
        upper: List[float],
    ):
        """Initialize the CRT module and its strips.

        The strips are obtained by slicing the module in `num_strips`
        identical bars along its `width_axis`.

        Parameters
        ----------
        name : str
            Name of the module
        tagger : str
            Name of the tagger the module belongs to
        orientation : int
            Orientation of the strips in the module
        first_channel : int
            First readout channel of the module
        num_strips : int
            Number of strips in the module
        width_axis : int
            Axis along which the strips of the module are stacked
        lower : List[float]
            (3,) Lower bounds of the module
        upper : List[float]
            (3,) Upper bounds of the module
        """
        assert num_strips > 0, "A CRT module must contain at least one strip."
        assert width_axis in (0, 1, 2), "The width axis must be one of 0, 1 or 2."

        super().__init__(lower, upper)
        self.name = name
        self.tagger = tagger
        self.orientation = orientation
        self.first_channel = first_channel
        self.width_axis = width_axis

        width = self.dimensions[width_axis] / num_strips
        self.strips = []
        for i in range(num_strips):
            strip_lower, strip_upper = self.lower.copy(), self.upper.copy()
            strip_lower[width_axis] = self.lower[width_axis] + i * width
            strip_upper[width_axis] = self.lower[width_axis] + (i + 1) * width
            channel0 = first_channel + STRIP_NUM_CHANNELS * i
            self.strips.append(
                CRTStrip(f"{name}_strip_{i}", channel0, name, strip_lower, strip_upper)
            )

    @property
    def num_channels(self) -> int:
        """Number of readout channels in the module.

        Returns
        -------
        int
            Number of channels
        """
        return STRIP_NUM_CHANNELS * len(self.strips)


@dataclass
class CRTTaggerVolume(Box):
    """Class which holds all properties of a CRT tagger.

    Attributes
    ----------
    name : str
        Name of the tagger
    tagger : CRTTagger
        Enumerated tagger type
    """

    name: str
    tagger: CRTTagger

    def __init__(
        self,
        tagger: Union[str, int],
        lower: List[float],
        upper: List[float],
        name: Optional[str] = None,
    ):
        """Initialize the CRT tagger.

        Parameters
        ----------
        tagger : Union[str, int]
            Enumerated tagger type (name or value)
        lower : List[float]
            (3,) Lower bounds of the tagger
        upper : List[float]
            (3,) Upper bounds of the tagger
        name : str, optional
            Name of the tagger, defaults to the lower-case tagger type
        """
        super().__init__(lower, upper)
        self.tagger = enum_factory("tagger", tagger)
        self.name = name if name is not None else self.tagger.name.lower()


@dataclass
class CRTGeometry:
    """Handles all geometry queries for a set of cosmic-ray taggers.

    Attributes
    ----------
    name : str
        Name of the detector
    tag : str
        Tag or label for the geometry instance
    version : str
        Version of the geometry
    taggers : Dict[str, CRTTaggerVolume]
        Taggers, indexed by name
    modules : Dict[str, CRTModule]
        Modules, indexed by name
    """

    name: str
    tag: str
    version: str
    taggers: Dict[str, CRTTaggerVolume]
    modules: Dict[str, CRTModule]

    def __init__(
        self,
        taggers: List[dict],
        modules: List[dict],
        name: str = "crt",
        tag: Optional[str] = None,
        version: Union[str, int, float] = "1.0",
    ):
        """Parse the CRT geometry configuration.

        Parameters
        ----------
        taggers : List[dict]
            List of tagger configurations (`tagger`, `lower`, `upper` and
            optionally `name`)
        modules : List[dict]
            List of module configurations (`name`, `tagger`, `orientation`,
            `first_channel`, `num_strips`, `width_axis`, `lower`, `upper`)
        name : str, default 'crt'
            Name of the detector
        tag : str, optional
            Tag or label for the geometry instance
        version : Union[str, int, float], default '1.0'
            Version of the geometry
        """
        self.name = name
        self.tag = tag
        self.version = str(version)

        # Build the taggers
        self.taggers = {}
        for cfg in taggers:
            tagger = CRTTaggerVolume(**cfg)
            assert tagger.name not in self.taggers, f"Duplicate tagger: {tagger.name}."
            self.taggers[tagger.name] = tagger

        # Build the modules, register the channels of each of their strips
        self.modules = {}
        self._channel_map = {}
        self._strip_map = {}
        for cfg in modules:
            module = CRTModule(**cfg)
            assert module.name not in self.modules, f"Duplicate module: {module.name}."
            if module.tagger not in self.taggers:
                raise GeometryError(
                    f"Module `{module.name}` refers to an unknown tagger: "
                    f"`{module.tagger}`. Known taggers: {list(self.taggers)}."
                )

            self.modules[module.name] = module
            for strip in module.strips:
                self._strip_map[strip.name] = strip
                for channel in (strip.channel0, strip.channel1):
                    if channel in self._channel_map:
                        raise GeometryError(
                            f"Channel {channel} is read out by both "
                            f"`{self._channel_map[channel].name}` and "
                            f"`{strip.name}`."
                        )
                    self._channel_map[channel] = strip

    @property
    def num_channels(self) -> int:
        """Total number of readout channels.

        Returns
        -------
        int
            Number of channels
        """
        return len(self._channel_map)

    def get_strip(self, key: Union[int, str]) -> CRTStrip:
        """Returns the strip read out by a channel, or with a given name.

        Parameters
        ----------
        key : Union[int, str]
            Readout channel or name of the strip

        Returns
        -------
        CRTStrip
            Strip object
        """
        if isinstance(key, str):
            if key not in self._strip_map:
                raise GeometryError(f"Unknown CRT strip: `{key}`.")
            return self._strip_map[key]

        if key not in self._channel_map:
            raise GeometryError(f"Channel {key} is not mapped to any CRT strip.")

        return self._channel_map[key]

    def get_module(self, key: Union[int, str]) -> CRTModule:
        """Returns the module which contains a channel or a strip.

        Parameters
        ----------
        key : Union[int, str]
            Readout channel or name of the strip

        Returns
        -------
        CRTModule
            Module object
        """
        return self.modules[self.get_strip(key).module]

    def get_tagger(self, name: str) -> CRTTaggerVolume:
        """Returns a tagger from its name.

        Parameters
        ----------
        name : str
            Name of the tagger

        Returns
        -------
        CRTTaggerVolume
            Tagger object
        """
        if name not in self.taggers:
            raise GeometryError(f"Unknown CRT tagger: `{name}`.")

        return self.taggers[name]

    def channel_to_tagger(self, channel: int) -> CRTTagger:
        """Returns the tagger which a readout channel belongs to.

        Parameters
        ----------
        channel : int
            Readout channel

        Returns
        -------
        CRTTagger
            Enumerated tagger type
        """
        return self.get_tagger(self.get_module(channel).tagger).tagger

    def position_to_tagger(self, x: float, y: float, z: float) -> CRTTagger:
        """Returns the tagger which contains a point.

        Taggers are checked in the order in which they were declared, the
        first one to contain the point is returned.

        Parameters
        ----------
        x : float
            Position along the x axis
        y : float
            Position along the y axis
        z : float
            Position along the z axis

        Returns
        -------
        CRTTagger
            Enumerated tagger type, `UNDEFINED` if no tagger contains the point
        """
        point = np.array([x, y, z])
        for tagger in self.taggers.values():
            if tagger.contains(point):
                return tagger.tagger

        return CRTTagger.UNDEFINED

    def different_orientations(
        self, strip_a: Union[CRTStrip, int, str], strip_b: Union[CRTStrip, int, str]
    ) -> bool:
        """Checks whether two strips belong to modules of different orientations.

        Parameters
        ----------
        strip_a : Union[CRTStrip, int, str]
            First strip (or one of its channels, or its name)
        strip_b : Union[CRTStrip, int, str]
            Second strip (or one of its channels, or its name)

        Returns
        -------
        bool
            `True` if the strips are not parallel
        """
        modules = []
        for strip in (strip_a, strip_b):
            if not isinstance(strip, CRTStrip):
                strip = self.get_strip(strip)
            modules.append(self.modules[strip.module])

        return modules[0].orientation != modules[1].orientation
