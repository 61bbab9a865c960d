"""CRT reconstruction and truth matching post-processors."""

from .cluster import *
from .truth import *
