"""
Core types for the share market subsystem.

This module provides the foundational pieces the corporation state machine is built on:
1. Constants: corporation names, company tiers, share count
2. Protocols: the collaborator interfaces consumed from the game engine
3. Exceptions: StockMarketError and one error type per failed precondition
4. Share tokens: Share and ShareKind
5. GameLog: the default append-only event sink

Nothing here moves a price or a share. All mutation lives in corporation.py.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any, Callable, Iterator, List, Optional, Protocol, Sequence, runtime_checkable
)


# ============================================================================
# CONSTANTS
# ============================================================================

# The fixed set of corporations that can be formed during a game.
CORPORATIONS = (
    "Android", "Bear", "Eagle", "Horse", "Jupiter",
    "Orion", "Saturn", "Ship", "Star", "Wheel",
)

# Company tiers, cheapest first. Synergy bonuses grow along this order.
TIER_RED = "red"
TIER_ORANGE = "orange"
TIER_YELLOW = "yellow"
TIER_GREEN = "green"
TIER_BLUE = "blue"
TIER_PURPLE = "purple"

TIERS = (TIER_RED, TIER_ORANGE, TIER_YELLOW, TIER_GREEN, TIER_BLUE, TIER_PURPLE)

# Every corporation has exactly this many share tokens: 1 president + 9 normal.
TOTAL_SHARES = 10


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LogSink(Protocol):
    """
    Append-only sink for human-readable game events.

    pop() exists only so a superseded price move can be retracted when the
    price adjustment takes a second step. A plain list satisfies this protocol.
    """

    def append(self, entry: str) -> None:
        ...

    def pop(self) -> str:
        ...


class ShareHolder(Protocol):
    """Anything that can hold shares and cash: a player or a corporation."""
    name: str
    cash: int
    shares: List['Share']
    companies: List['CompanyLike']


class CompanyLike(Protocol):
    """
    A company card as consumed by the share market.

    Attributes:
        name: Unique company name, used to resolve synergy partners
        value: Face value, used for founding and book value
        tier: One of TIERS
        synergies: Names of companies this one earns a synergy bonus with
        owner: Current owner (player or corporation); reassigned on formation
        income: Base income contributed to its owner
    """
    name: str
    value: int
    tier: str
    synergies: Sequence[str]
    owner: Any
    income: int


class Ownable(Protocol):
    """Entities that have an owner and a stable identifier."""

    @property
    def owner(self) -> Any:
        ...

    @property
    def id(self) -> str:
        ...


class Passer(Protocol):
    """Entities that can pass during a round and be reset for the next one."""

    @property
    def passed(self) -> bool:
        ...

    def pass_turn(self) -> None:
        ...

    def unpass(self) -> None:
        ...


# Base income supplied by the game engine: (companies, tier) -> income.
BaseIncome = Callable[[Sequence[CompanyLike], str], int]


# ============================================================================
# EXCEPTIONS
# ============================================================================

class StockMarketError(Exception):
    """Base exception for all share market errors."""
    pass


class PriceTaken(StockMarketError):
    """Raised when forming a corporation on a price cell another corporation occupies."""
    pass


class InvalidFoundingPrice(StockMarketError):
    """Raised when the founding price is outside the seed company's valid range."""
    pass


class NoShareAvailable(StockMarketError):
    """Raised when buying from an empty bank pool."""
    pass


class InsufficientFunds(StockMarketError):
    """Raised when a player cannot pay the post-move price of a share."""
    pass


class CannotSell(StockMarketError):
    """Raised when a player has no sellable share of the corporation on top of their stack."""
    pass


class CannotIssue(StockMarketError):
    """Raised when the corporation has no unissued shares left."""
    pass


class NegativeDividend(StockMarketError):
    """Raised when a dividend per share below zero is requested."""
    pass


class UnaffordableDividend(StockMarketError):
    """Raised when the treasury cannot cover the dividend on every issued share."""
    pass


# ============================================================================
# SHARES
# ============================================================================

class ShareKind(Enum):
    """
    Kind of share token.

    PRESIDENT: The control share. One per corporation, never sold to the bank.
    NORMAL: An ordinary ownership unit.
    """
    PRESIDENT = "president"
    NORMAL = "normal"


@dataclass(frozen=True, slots=True, eq=False)
class Share:
    """
    One ownership unit of a corporation.

    Shares are immutable. Ownership changes only by moving the token between
    collections (unissued pool, bank pool, a holder's stack). Equality is
    identity so that two normal shares of the same corporation stay distinct.
    """
    corporation: Any
    kind: ShareKind

    @classmethod
    def president(cls, corporation: Any) -> 'Share':
        return cls(corporation, ShareKind.PRESIDENT)

    @classmethod
    def normal(cls, corporation: Any) -> 'Share':
        return cls(corporation, ShareKind.NORMAL)

    @property
    def is_president(self) -> bool:
        return self.kind is ShareKind.PRESIDENT

    def __repr__(self) -> str:
        name = getattr(self.corporation, 'name', self.corporation)
        return f"Share({name}, {self.kind.value})"


# ============================================================================
# GAME LOG
# ============================================================================

class GameLog:
    """
    Default LogSink: an ordered, append-only list of event lines.

    Owned by the game session and shared by every corporation in it.

    Example:
        log = GameLog(verbose=True)
        corp = Corporation("Bear", company, ladder.cell_for_price(10), ladder, log)
        log[-1]   # 'alice forms corporation Bear with BME at $10 - 1 shares issued.'
    """

    def __init__(self, entries: Optional[Sequence[str]] = None, verbose: bool = False):
        """
        Create a log.

        Args:
            entries: Lines to start with (default: none)
            verbose: Echo every appended line to stdout (default: False)
        """
        self._entries: List[str] = list(entries or [])
        self.verbose = verbose

    def append(self, entry: str) -> None:
        self._entries.append(entry)
        if self.verbose:
            print(f"📝 {entry}")

    def pop(self) -> str:
        """Retract and return the most recent line."""
        entry = self._entries.pop()
        if self.verbose:
            print(f"↩️  retracted: {entry}")
        return entry

    @property
    def entries(self) -> List[str]:
        """Copy of all lines, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __getitem__(self, index):
        return self._entries[index]

    def __repr__(self) -> str:
        return f"GameLog({len(self._entries)} entries)"
