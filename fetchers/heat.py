"""Heat value normalization for TopHub hot-list entries."""
from __future__ import annotations

import re

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")

# Magnitude markers, checked largest first
HEAT_MULTIPLIERS = (
    ("亿", 100_000_000),
    ("万", 10_000),
)


def parse_heat(heat: str) -> float:
    """Convert a heat string (e.g. '5356万', '1.2亿', '98765') to a number.

    Only the leading number of the digits-and-dots remainder counts, so
    '1.2.3万' reads as 1.2万. The result is only meant for relative ordering.
    Strings without a number give ``0.0``.
    """
    if not heat:
        return 0.0

    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", heat))
    if match is None:
        return 0.0
    base = float(match.group())

    for marker, multiplier in HEAT_MULTIPLIERS:
        if marker in heat:
            return base * multiplier
    return base
