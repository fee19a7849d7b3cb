"""Orchestrates DISM + SFC repair runs and reports what was found."""

__version__ = "0.1.0"
