"""Hotspot Generation Engine.

Model-backed generation sites (trend insight, football analysis, image
prompts, social notes), each paired with a deterministic rule-based fallback.
"""

__version__ = "0.1.0"
