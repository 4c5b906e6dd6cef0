"""
sharemarket - Corporation share market for an economic board game

Corporations are formed from a seed company, trade shares with players along a
shared price ladder, pay dividends, and earn synergy income from the companies
they own.

Usage:
    from sharemarket import Corporation, GameLog, build_ladder

    ladder = build_ladder()
    log = GameLog()

    # alice owns a company worth 100 and founds Bear at $67
    bear = Corporation("Bear", company, ladder.cell_for_price(67), ladder, log)

    bear.buy_share(bob)          # price steps up, bob pays the new price
    bear.pay_dividend(5, [alice, bob])
    bear.income("orange")
"""

# Core types
from .core import (
    CORPORATIONS,
    TIERS,
    TIER_RED, TIER_ORANGE, TIER_YELLOW, TIER_GREEN, TIER_BLUE, TIER_PURPLE,
    TOTAL_SHARES,
    LogSink,
    ShareHolder,
    CompanyLike,
    Ownable,
    Passer,
    BaseIncome,
    Share,
    ShareKind,
    GameLog,
    StockMarketError,
    PriceTaken,
    InvalidFoundingPrice,
    NoShareAvailable,
    InsufficientFunds,
    CannotSell,
    CannotIssue,
    NegativeDividend,
    UnaffordableDividend,
)

# Price ladder
from .ladder import (
    DEFAULT_PRICES,
    PriceCell,
    SharePriceLadder,
    build_ladder,
)

# Synergy
from .synergy import calculate_synergy

# Corporation
from .corporation import (
    Corporation,
    PurchaserState,
    default_base_income,
)

__all__ = [
    # Core
    'CORPORATIONS', 'TIERS',
    'TIER_RED', 'TIER_ORANGE', 'TIER_YELLOW', 'TIER_GREEN', 'TIER_BLUE', 'TIER_PURPLE',
    'TOTAL_SHARES',
    'LogSink', 'ShareHolder', 'CompanyLike', 'Ownable', 'Passer', 'BaseIncome',
    'Share', 'ShareKind', 'GameLog',
    'StockMarketError', 'PriceTaken', 'InvalidFoundingPrice', 'NoShareAvailable',
    'InsufficientFunds', 'CannotSell', 'CannotIssue', 'NegativeDividend',
    'UnaffordableDividend',
    # Ladder
    'DEFAULT_PRICES', 'PriceCell', 'SharePriceLadder', 'build_ladder',
    # Synergy
    'calculate_synergy',
    # Corporation
    'Corporation', 'PurchaserState', 'default_base_income',
]

__version__ = '1.0.0'
