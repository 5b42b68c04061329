"""Hotspot Engine.

Configuration, pipelines, reports and console entry-points for the TopHub
trends and football hotspot workflows.
"""

__version__ = "0.1.0"
