"""Study schedule service - a fixed six-week reading and exam grid for one candidate."""

__version__ = "0.1.0"
