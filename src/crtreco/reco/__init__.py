"""Reconstruction of CRT objects from the detector readout."""

from .cluster import CRTClusterer, group_and_cluster
