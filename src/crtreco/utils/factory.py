"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a YAML block into an instatiated class
with all the appropriate checks that the class exists and is provided
with appropriate arguments.
"""

from copy import deepcopy
from warnings import warn

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module):
    """Converts module into a dictionary which maps class names onto classes.

    A class can be fetched by its class name, by its `name` attribute or by
    any of its `aliases` (deprecated names).

    Parameters
    ----------
    module : module
        Module from which to fetch the classes

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    options = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name[0] == "_":
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not isinstance(cls, type) or module.__name__ not in cls.__module__:
            continue

        options[cls_name] = cls
        if getattr(cls, "name", None):
            options[cls.name] = cls
        for alias in getattr(cls, "aliases", ()):
            options[alias] = cls

    return options


def instantiate(module_dict, cfg, **kwargs):
    """Instantiates a class based on a configuration dictionary and a list of
    possible classes to chose from.

    This function supports two YAML configuration structures
    (parsed as a dictionary):

    .. code-block:: yaml

        processor:
          name: processor_name
          kwarg_1: value_1
          kwarg_2: value_2

    or

    .. code-block:: yaml

        processor:
          name: processor_name
          kwargs:
            kwarg_1: value_1
            kwarg_2: value_2

    Parameters
    ----------
    module_dict : dict
        Dictionary which maps a class name onto an object class.
    cfg : Union[str, dict]
        Configuration dictionary (or name of the class, if it takes no
        parameters)
    **kwargs : dict, optional
        Additional parameters to pass to the class

    Returns
    -------
    object
        Instantiated object
    """
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    assert "name" in config, "Could not find the name of the class under `name`"
    class_name = config.pop("name")
    if class_name not in module_dict:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary "
            f"which maps names to classes. Available names: "
            f"{list(module_dict.keys())}"
        )

    cls = module_dict[class_name]
    if class_name in getattr(cls, "aliases", ()):
        warn(
            f"This name ({class_name}) is deprecated. Use {cls.name} instead.",
            DeprecationWarning,
        )

    # Gather the keyword arguments, they can be nested under `kwargs` or
    # provided at the top level, but not both
    kwargs = dict(config.pop("kwargs", {}), **kwargs)
    for key in config.keys():
        assert key not in kwargs, (
            f"The keyword argument {key} is provided "
            "at the top level and under `kwargs`. Ambiguous."
        )
    kwargs.update(config)

    try:
        return cls(**kwargs)

    except Exception as err:
        logger.error(
            f"Failed to instantiate {cls.__name__} with these arguments:\n"
            f"  - kwargs: {kwargs}"
        )

        raise err
