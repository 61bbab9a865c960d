"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum

__all__ = ["CRTTagger", "enum_factory"]


class CRTTagger(IntEnum):
    """Enumerates all the CRT taggers surrounding the detector."""

    BOTTOM = 0
    SOUTH = 1
    NORTH = 2
    WEST = 3
    EAST = 4
    TOP_LOW = 5
    TOP_HIGH = 6
    UNDEFINED = 7


def enum_factory(enum, value):
    """Parses an enumerated object from string name(s) to value(s).

    Parameters
    ----------
    enum : str
        Name of the enumerated type
    value : Union[str, int, List[Union[str, int]]]
        Name or names of the enumerated objects (from config)

    Returns
    -------
    Union[IntEnum, List[IntEnum]]
        Value or values of the enumerated objects
    """
    # Get the enumerated type
    ENUM_DICT = {"tagger": CRTTagger}
    assert enum in ENUM_DICT, (
        f"Enumerated type not recognized: {enum}. Must be one of "
        f"{list(ENUM_DICT.keys())}."
    )
    enum = ENUM_DICT[enum]

    # Translate enumerated strings into values
    if isinstance(value, (str, int)):
        return _parse_enum(enum, value)

    return [_parse_enum(enum, v) for v in value]


def _parse_enum(enum, value):
    """Parses a single enumerated value from its name or its integer value.

    Parameters
    ----------
    enum : IntEnum
        Enumerated type
    value : Union[str, int]
        Name or value of the enumerated object

    Returns
    -------
    IntEnum
        Enumerated object
    """
    if isinstance(value, str):
        if not hasattr(enum, value.upper()):
            raise ValueError(
                f"Enumerated object not recognized: {value}. Must be one "
                f"of {[e.name for e in enum]}."
            )

        return getattr(enum, value.upper())

    return enum(value)
