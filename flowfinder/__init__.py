"""flowfinder - congestion-aware route planning over a venue map."""

__version__ = "0.1.0"
