"""CRT geometry: taggers, modules and strips, and the queries relating
readout channels and positions to them.
"""

from .crt import CRTGeometry, CRTModule, CRTStrip, CRTTaggerVolume
from .factories import geo_factory
