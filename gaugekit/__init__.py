"""Instrument gauges, meters and progress bars rendered to Pillow images."""

__version__ = "0.1.0"