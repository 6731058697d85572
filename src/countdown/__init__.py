"""countdown: an hours/minutes/seconds countdown timer."""

__version__ = "0.1.0"
