"""Construct a post-processor module class from its name."""

from crtreco.utils.factory import instantiate, module_dict

from . import crt

__all__ = ["post_processor_factory"]

# Build a dictionary of available post-processors
POST_DICT = {}
for module in [crt]:
    POST_DICT.update(**module_dict(module))


def post_processor_factory(name, cfg):
    """Instantiates a post-processor module from a configuration dictionary.

    Parameters
    ----------
    name : str
        Name of the post-processor module
    cfg : dict
        Post-processor module configuration

    Returns
    -------
    object
         Initialized post-processor object
    """
    cfg = dict(cfg)
    cfg["name"] = name

    return instantiate(POST_DICT, cfg)
