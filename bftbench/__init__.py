"""Workload generation, in-flight tracking and run statistics for a BFT benchmark client."""

__version__ = "0.1.0"