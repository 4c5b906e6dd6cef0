"""
synergy.py - Synergy bonus between paired companies

One pure function: calculate_synergy(tier, other_tier) -> bonus.
"""

from __future__ import annotations
from typing import Optional

from .core import (
    TIERS, TIER_RED, TIER_ORANGE, TIER_YELLOW, TIER_GREEN, TIER_BLUE,
)


def calculate_synergy(tier: str, other_tier: Optional[str]) -> int:
    """
    Income bonus a company of tier earns from a partner of other_tier.

    Args:
        tier: Tier of the company collecting the bonus
        other_tier: Tier of its synergy partner, or None if the partner is not owned

    Returns:
        0 without a partner, otherwise the tier table value:
            red     1
            orange  1 with red, else 2
            yellow  2 with orange, else 4
            green   4
            blue    4 with green or yellow, else 8
            purple  8 with blue, else 16

    Raises:
        ValueError: If tier is not one of TIERS
    """
    if tier not in TIERS:
        raise ValueError(f"Unknown tier {tier!r}")
    if other_tier is None:
        return 0

    if tier == TIER_RED:
        return 1
    if tier == TIER_ORANGE:
        return 1 if other_tier == TIER_RED else 2
    if tier == TIER_YELLOW:
        return 2 if other_tier == TIER_ORANGE else 4
    if tier == TIER_GREEN:
        return 4
    if tier == TIER_BLUE:
        return 4 if other_tier in (TIER_GREEN, TIER_YELLOW) else 8
    # purple
    return 8 if other_tier == TIER_BLUE else 16
