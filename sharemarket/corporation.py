"""
corporation.py - Corporation state machine

The Corporation is the only object in the package that mutates game state.
It owns its share tokens, its treasury and its position on the share price
ladder, and coordinates every share movement with the matching price move.

=== SHARE POOLS ===

Every corporation has exactly TOTAL_SHARES tokens, always in one of:
    shares        - unissued pool. Issuance takes from the FRONT.
    bank_shares   - issued, held by the bank. Returns go to the BACK,
                    purchases take from the BACK.
    holder stacks - player.shares. Buys push on top, sells pop the top,
                    and only when it is a normal share of this corporation.

=== PRICE MOVES ===

Buying moves the price up one vacant cell, selling and issuing move it down
one vacant cell. Cells occupied by other corporations are skipped. Money
always changes hands at the price AFTER the move.

After a dividend the price adjusts toward book value, taking a second step
when the first one moved exactly one cell and the valuation gap persists.

=== PRECONDITIONS ===

Every operation checks all of its preconditions before the first mutation,
so a raised StockMarketError leaves the corporation, the ladder and the
players untouched.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .core import (
    CORPORATIONS, TOTAL_SHARES,
    BaseIncome, CompanyLike, LogSink, ShareHolder,
    GameLog, Share,
    PriceTaken, InvalidFoundingPrice, NoShareAvailable, InsufficientFunds,
    CannotSell, CannotIssue, NegativeDividend, UnaffordableDividend,
)
from .ladder import PriceCell, SharePriceLadder
from .synergy import calculate_synergy


def default_base_income(companies: Sequence[CompanyLike], tier: str) -> int:
    """Sum of the owned companies' printed income. The tier is not used."""
    return sum(company.income for company in companies)


@dataclass
class PurchaserState:
    """
    Cash and companies of anything that can buy companies.

    Attributes:
        cash: Treasury
        companies: Owned companies, in acquisition order
        base_income: Income rule supplied by the game engine
    """
    cash: int = 0
    companies: List[CompanyLike] = field(default_factory=list)
    base_income: BaseIncome = default_base_income

    def income(self, tier: str) -> int:
        return self.base_income(self.companies, tier)

    @property
    def company_value(self) -> int:
        return sum(company.value for company in self.companies)


class Corporation:
    """
    A player-formed corporation whose shares trade on the price ladder.

    Implements the Ownable and Passer protocols and composes a PurchaserState
    for its cash and companies.

    Example:
        ladder = build_ladder()
        log = GameLog()
        corp = Corporation("Bear", company, ladder.cell_for_price(67), ladder, log)
        corp.buy_share(bob)
        corp.pay_dividend(5, [alice, bob])
    """

    calculate_synergy = staticmethod(calculate_synergy)

    def __init__(
        self,
        name: str,
        company: CompanyLike,
        share_price: PriceCell,
        share_prices: SharePriceLadder,
        log: Optional[LogSink] = None,
        base_income: Optional[BaseIncome] = None,
    ):
        """
        Form a corporation from a seed company.

        Args:
            name: One of CORPORATIONS
            company: Seed company. Its owner becomes president and pays the seed.
            share_price: Requested founding cell; must be vacant and in the company's range
            share_prices: The game's shared ladder
            log: Shared event sink (default: a new GameLog)
            base_income: Engine-supplied income rule (default: sum of company income)

        Raises:
            ValueError: If name is not one of CORPORATIONS
            PriceTaken: If share_price is already occupied
            InvalidFoundingPrice: If share_price is outside the company's founding range
        """
        if name not in CORPORATIONS:
            raise ValueError(f"Unknown corporation {name!r}")
        if not share_price.unowned:
            raise PriceTaken(
                f"Share price {share_price.price} taken by {share_price.corporation.name}"
            )
        if not share_price.valid_range(company):
            raise InvalidFoundingPrice(f"Share price {share_price.price} not valid")

        self.name = name
        self.president: ShareHolder = company.owner
        self._purchaser = PurchaserState(
            companies=[company],
            base_income=base_income or default_base_income,
        )
        self._passed = False
        self.share_prices = share_prices
        self.shares: List[Share] = [Share.president(self)] + [
            Share.normal(self) for _ in range(TOTAL_SHARES - 1)
        ]
        self.bank_shares: List[Share] = []
        self.log: LogSink = log if log is not None else GameLog()

        self.president.companies.remove(company)
        company.owner = self
        self.share_price = share_price
        self.share_price.corporation = self

        self._issue_initial_shares()

    # ========================================================================
    # OWNABLE / PASSER / PURCHASER
    # ========================================================================

    @property
    def id(self) -> str:
        return self.name

    @property
    def owner(self) -> ShareHolder:
        return self.president

    @property
    def passed(self) -> bool:
        return self._passed

    def pass_turn(self) -> None:
        self._passed = True

    def unpass(self) -> None:
        self._passed = False

    @property
    def cash(self) -> int:
        return self._purchaser.cash

    @cash.setter
    def cash(self, value: int) -> None:
        self._purchaser.cash = value

    @property
    def companies(self) -> List[CompanyLike]:
        return self._purchaser.companies

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def price(self) -> int:
        return self.share_price.price

    @property
    def index(self) -> int:
        return self.share_price.index

    @property
    def book_value(self) -> int:
        """Treasury plus the face value of every owned company."""
        return self.cash + self._purchaser.company_value

    @property
    def market_cap(self) -> int:
        return self.shares_issued * self.price

    @property
    def shares_issued(self) -> int:
        """Shares outside the unissued pool, including those held by the bank."""
        return TOTAL_SHARES - len(self.shares)

    def is_bankrupt(self) -> bool:
        return self.price == 0 or not self.companies

    def shares_held_by(self, holder: ShareHolder) -> int:
        return sum(1 for share in holder.shares if share.corporation is self)

    @property
    def prev_share_price(self) -> Optional[PriceCell]:
        return self.share_prices.prev_vacant(self.index)

    @property
    def next_share_price(self) -> Optional[PriceCell]:
        return self.share_prices.next_vacant(self.index)

    # ========================================================================
    # TRADING
    # ========================================================================

    def can_buy_share(self) -> bool:
        return bool(self.bank_shares)

    def buy_share(self, player: ShareHolder) -> None:
        """
        Buy one share from the bank.

        The price moves up first, then the player pays the new price.

        Raises:
            NoShareAvailable: If the bank holds no shares
            InsufficientFunds: If the player cannot pay the price after the move
        """
        if not self.can_buy_share():
            raise NoShareAvailable('Cannot buy share. None available')
        target = self.next_share_price
        cost = target.price if target else self.price
        if player.cash < cost:
            raise InsufficientFunds('Player does not have enough money to buy a share.')

        self.swap_share_price(target)
        player.cash -= self.price
        player.shares.append(self.bank_shares.pop())
        self.log.append(f"{player.name} buys share of {self.name} for ${self.price}")

    def can_sell_share(self, player: ShareHolder) -> bool:
        """The top of the player's stack is a normal share of this corporation."""
        if not player.shares:
            return False
        top = player.shares[-1]
        return top.corporation is self and not top.is_president

    def sell_share(self, player: ShareHolder) -> None:
        """
        Sell the top share of the player's stack back to the bank.

        The price moves down first, then the player receives the new price.

        Raises:
            CannotSell: If the player's stack is empty, or its top share is a
                        president share or belongs to another corporation
        """
        if not self.can_sell_share(player):
            raise CannotSell('Cannot sell share')

        self.swap_share_price(self.prev_share_price)
        player.cash += self.price
        self.bank_shares.append(player.shares.pop())
        self.log.append(f"{player.name} sells share of {self.name} for ${self.price}")

    def can_issue_share(self) -> bool:
        return bool(self.shares)

    def issue_share(self) -> None:
        """
        Issue one share from the unissued pool to the bank.

        The price moves down first and the treasury receives the new price.

        Raises:
            CannotIssue: If every share has already been issued
        """
        if not self.can_issue_share():
            raise CannotIssue('Cannot issue share')
        target = self.prev_share_price
        proceeds = target.price if target else self.price

        self.log.append(f"{self.name} issues a share and receives ${proceeds}")
        self.swap_share_price(target)
        self.cash += self.price
        self.bank_shares.append(self.shares.pop(0))

    # ========================================================================
    # INCOME AND DIVIDENDS
    # ========================================================================

    def income(self, tier: str) -> int:
        """
        Base income plus synergy bonuses between owned companies.

        Companies are visited in acquisition order. Once a company's own
        partners are counted it is removed from the lookup, so each owned
        pair pays out once.
        """
        total = self._purchaser.income(tier)
        remaining = {company.name: company.tier for company in self.companies}

        for company in self.companies:
            for partner in company.synergies:
                total += calculate_synergy(company.tier, remaining.get(partner))
            remaining.pop(company.name, None)

        return total

    def pay_dividend(self, amount: int, players: Sequence[ShareHolder]) -> None:
        """
        Pay amount per share to every holder, then adjust the share price.

        Dividends on bank shares leave the treasury and go to no one.

        Raises:
            NegativeDividend: If amount < 0
            UnaffordableDividend: If amount on every issued share exceeds the treasury
        """
        if amount < 0:
            raise NegativeDividend('Dividend must be positive')
        if self.shares_issued * amount > self.cash:
            raise UnaffordableDividend('Total dividends must be payable with corporation cash')

        self.cash -= amount * len(self.bank_shares)

        dividend_log = f"{self.name} pays ${amount} dividends - "
        for player in players:
            total = amount * self.shares_held_by(player)
            self.cash -= total
            player.cash += total
            if total == 0:
                continue
            dividend_log += f" {player.name} receives {total}"
        self.log.append(dividend_log)

        self.adjust_share_price()

    # ========================================================================
    # PRICE MOVES
    # ========================================================================

    def _issue_initial_shares(self) -> None:
        """
        Fund the treasury and hand out the founding shares.

        The founder tops up the company's value to a whole number of shares
        (the seed), then receives that many shares, and the bank receives the
        same number again.
        """
        company = self.companies[0]
        value = company.value
        num_shares = math.ceil(value / self.price)
        seed = num_shares * self.price - value

        self.cash = seed
        self.president.cash -= seed
        self.cash += num_shares * self.price

        self.president.shares.extend(self.shares[:num_shares])
        del self.shares[:num_shares]
        self.bank_shares.extend(self.shares[:num_shares])
        del self.shares[:num_shares]
        self.log.append(
            f"{self.owner.name} forms corporation {self.name} with {company.name} "
            f"at ${self.price} - {num_shares} shares issued."
        )

    def swap_share_price(self, new_price: Optional[PriceCell]) -> None:
        """
        Move this corporation to new_price, transferring occupancy.

        A None target means there is no vacant cell in that direction; the
        corporation stays put and nothing is logged.
        """
        if new_price is None:
            return
        self.log.append(f"{self.name} changes share price ${self.price} to ${new_price.price}")
        new_price.corporation = self
        self.share_price.corporation = None
        self.share_price = new_price

    def above_valuation(self) -> bool:
        return self.book_value - self.market_cap >= 0

    def adjust_share_price(self) -> None:
        """
        Move toward book value: up when at or above it, down otherwise.

        A one-cell first step is replaced by a second step in the same
        direction while the valuation gap persists. The first step's log line
        is retracted only when that second step actually happens.
        """
        old_index = self.index

        if self.above_valuation():
            self.swap_share_price(self.next_share_price)
            if self.index - old_index == 1 and self.above_valuation():
                self._step_again(self.next_share_price)
        else:
            self.swap_share_price(self.prev_share_price)
            if old_index - self.index == 1 and not self.above_valuation():
                self._step_again(self.prev_share_price)

    def _step_again(self, target: Optional[PriceCell]) -> None:
        if target is None:
            return
        self.log.pop()
        self.swap_share_price(target)

    def __repr__(self) -> str:
        return f"Corporation({self.name}, ${self.price}, cash={self.cash})"
