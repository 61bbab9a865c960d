"""Defines constants used throughout the package."""

# Track ID assigned to objects which could not be matched to a particle
INVALID_TRACK_ID = -99999

# Number of readout channels on a single front-end board (FEB)
FEB_NUM_CHANNELS = 32

# Number of readout channels per CRT strip (one SiPM at each end)
STRIP_NUM_CHANNELS = 2
