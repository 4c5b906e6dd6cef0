"""
ladder.py - The share price ladder

Provides the discretized price track corporations move along:
- PriceCell: one price on the track, occupied by at most one corporation
- SharePriceLadder: the ordered track with vacant-cell scans in both directions
- build_ladder(): factory from an ascending list of prices

The ladder never moves a corporation itself. Corporation.swap_share_price()
is the only place occupancy changes.
"""

from __future__ import annotations
import math
from typing import Any, Iterator, List, Optional, Sequence

from .core import CompanyLike


# Default price track, from the worthless bottom cell to the top.
DEFAULT_PRICES = (
    0, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 18, 20, 22, 24, 26, 28,
    31, 34, 37, 41, 45, 50, 55, 60, 67, 74, 82, 91, 100, 110, 120, 131,
    143, 156, 170, 185, 201, 218, 236, 255, 275, 296, 318, 341, 365, 390,
    416, 443, 471, 500,
)


class PriceCell:
    """
    One price on the ladder.

    Attributes:
        price: Share price at this cell
        index: Position in the ladder (0-based)
        corporation: The occupying corporation, or None when vacant
    """

    __slots__ = ('price', 'index', 'corporation')

    def __init__(self, price: int, index: int, corporation: Any = None):
        self.price = price
        self.index = index
        self.corporation = corporation

    @property
    def unowned(self) -> bool:
        return self.corporation is None

    def valid_range(self, company: CompanyLike) -> bool:
        """
        Check whether a corporation may be founded at this price with company.

        A founding price lies between half the company's face value (rounded up)
        and the face value itself, so the founder receives one or two shares.
        The $0 cell is never a founding price.
        """
        return 0 < self.price and math.ceil(company.value / 2) <= self.price <= company.value

    def __repr__(self) -> str:
        occupant = getattr(self.corporation, 'name', None)
        return f"PriceCell(${self.price} @{self.index}, {occupant or 'vacant'})"


class SharePriceLadder:
    """
    Ordered sequence of PriceCells shared by every corporation in a game.

    Invariant: ladder[i].index == i, prices strictly ascending.
    """

    def __init__(self, cells: Sequence[PriceCell]):
        if not cells:
            raise ValueError("Ladder must have at least one cell")
        for position, cell in enumerate(cells):
            if cell.index != position:
                raise ValueError(f"Cell ${cell.price} has index {cell.index}, expected {position}")
            if position and cell.price <= cells[position - 1].price:
                raise ValueError(f"Prices must be strictly ascending, got ${cell.price} after ${cells[position - 1].price}")
        self._cells: List[PriceCell] = list(cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> PriceCell:
        return self._cells[index]

    def __iter__(self) -> Iterator[PriceCell]:
        return iter(self._cells)

    def prev_vacant(self, index: int) -> Optional[PriceCell]:
        """First vacant cell strictly below index, or None at the bottom."""
        for cell in reversed(self._cells[:index]):
            if cell.unowned:
                return cell
        return None

    def next_vacant(self, index: int) -> Optional[PriceCell]:
        """First vacant cell strictly above index, or None at the top."""
        for cell in self._cells[index + 1:]:
            if cell.unowned:
                return cell
        return None

    def cell_for_price(self, price: int) -> PriceCell:
        """Return the cell with exactly this price."""
        for cell in self._cells:
            if cell.price == price:
                return cell
        raise ValueError(f"No cell priced ${price} on the ladder")

    def founding_cells(self, company: CompanyLike) -> List[PriceCell]:
        """Vacant cells a corporation could be founded on with company."""
        return [c for c in self._cells if c.unowned and c.valid_range(company)]

    def occupied(self) -> List[PriceCell]:
        return [c for c in self._cells if not c.unowned]

    def __repr__(self) -> str:
        return f"SharePriceLadder({len(self._cells)} cells, {len(self.occupied())} occupied)"


def build_ladder(prices: Sequence[int] = DEFAULT_PRICES) -> SharePriceLadder:
    """
    Build a ladder of vacant cells from an ascending list of prices.

    Args:
        prices: Strictly ascending, non-negative integer prices

    Raises:
        ValueError: If prices is empty, not ascending, or contains a negative price
    """
    if any(p < 0 for p in prices):
        raise ValueError("Share prices cannot be negative")
    return SharePriceLadder([PriceCell(price, i) for i, price in enumerate(prices)])
