"""Construct a CRT geometry object from a configuration."""

from typing import Optional

import yaml

from .crt import CRTGeometry

__all__ = ["geo_factory"]


def geo_factory(
    geometry_file: Optional[str] = None, geometry: Optional[dict] = None
) -> CRTGeometry:
    """Instantiates a CRT geometry from a YAML file or a dictionary.

    Parameters
    ----------
    geometry_file : str, optional
        Path to a `.yaml` geometry file to load the geometry from
    geometry : dict, optional
        Geometry configuration dictionary

    Returns
    -------
    CRTGeometry
         Initialized geometry object
    """
    if (geometry_file is None) == (geometry is None):
        raise ValueError("Must provide exactly one of `geometry_file` or `geometry`.")

    if geometry_file is not None:
        with open(geometry_file, "r", encoding="utf-8") as f:
            geometry = yaml.safe_load(f)

    return CRTGeometry(**geometry)
