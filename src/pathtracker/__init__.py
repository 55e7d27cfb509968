"""Dead-reckoning walking path estimation from accelerometer and heading samples."""

__version__ = "0.1.0"
