"""
test_formation.py - Unit tests for forming a corporation

Tests:
- Share distribution and treasury funding
- Company ownership transfer
- Precondition failures leave everything untouched
- Ownable / Passer capabilities and basic queries
"""

import pytest

from sharemarket import (
    Corporation, GameLog, ShareKind, build_ladder,
    PriceTaken, InvalidFoundingPrice, StockMarketError,
)

from tests.fakes import FakeCompany, FakePlayer, form, verify_share_conservation


class TestSeedFunding:
    """Value 100 at $67: ceil(100/67) = 2 shares, seed 2*67 - 100 = 34."""

    def test_founder_pays_seed(self, bear, alice):
        assert alice.cash == 500 - 34

    def test_treasury(self, bear):
        assert bear.cash == 34 + 2 * 67

    def test_share_distribution(self, bear, alice):
        assert len(alice.shares) == 2
        assert len(bear.bank_shares) == 2
        assert len(bear.shares) == 6
        assert bear.shares_issued == 4

    def test_president_share_goes_to_founder_first(self, bear, alice):
        assert alice.shares[0].kind is ShareKind.PRESIDENT
        assert alice.shares[1].kind is ShareKind.NORMAL
        assert all(not s.is_president for s in bear.bank_shares)
        assert all(not s.is_president for s in bear.shares)

    def test_exactly_one_president_share(self, bear, alice):
        every_share = alice.shares + bear.bank_shares + bear.shares
        assert sum(s.is_president for s in every_share) == 1
        assert all(s.corporation is bear for s in every_share)

    def test_conservation(self, bear, alice):
        assert verify_share_conservation(bear, [alice])

    def test_exact_multiple_has_no_seed(self, ladder, log):
        dave = FakePlayer("dave", cash=100)
        corp = form("Eagle", dave, 100, 100, ladder, log)
        assert dave.cash == 100
        assert corp.cash == 100
        assert len(dave.shares) == 1
        assert len(corp.bank_shares) == 1
        assert corp.shares_issued == 2

    def test_seed_is_not_checked_against_founder_cash(self, ladder, log):
        """A founder short of the seed still forms and goes into debt."""
        dave = FakePlayer("dave", cash=10)
        corp = form("Bear", dave, 100, 67, ladder, log)
        assert dave.cash == 10 - 34
        assert corp.cash == 168
        assert len(dave.shares) == 2
        assert verify_share_conservation(corp, [dave])

    def test_formation_log_line(self, bear, log):
        assert log[-1] == "alice forms corporation Bear with BME at $67 - 2 shares issued."
        assert len(log) == 1


class TestOwnership:

    def test_president_is_founder(self, bear, alice):
        assert bear.president is alice
        assert bear.owner is alice

    def test_company_moves_to_corporation(self, bear, alice):
        company = bear.companies[0]
        assert company.owner is bear
        assert company not in alice.companies

    def test_other_companies_stay_with_founder(self, ladder, log, alice):
        keep = FakeCompany.owned_by(alice, "KME", 40)
        form("Bear", alice, 100, 67, ladder, log)
        assert alice.companies == [keep]

    def test_occupies_cell(self, bear, ladder):
        cell = ladder.cell_for_price(67)
        assert cell.corporation is bear
        assert bear.share_price is cell
        assert bear.price == 67
        assert bear.index == cell.index

    def test_id_is_name(self, bear):
        assert bear.id == "Bear"


class TestPreconditions:

    def test_price_taken(self, bear, ladder, log, bob):
        company = FakeCompany.owned_by(bob, "KME", 100)
        with pytest.raises(PriceTaken, match="67 taken by Bear"):
            Corporation("Eagle", company, ladder.cell_for_price(67), ladder, log)
        assert company.owner is bob
        assert company in bob.companies
        assert bob.cash == 200
        assert ladder.cell_for_price(67).corporation is bear
        assert len(log) == 1

    @pytest.mark.parametrize("price", [45, 110])
    def test_invalid_founding_price(self, ladder, log, alice, price):
        company = FakeCompany.owned_by(alice, "BME", 100)
        with pytest.raises(InvalidFoundingPrice, match=f"{price} not valid"):
            Corporation("Bear", company, ladder.cell_for_price(price), ladder, log)
        assert ladder.occupied() == []
        assert company.owner is alice
        assert alice.cash == 500
        assert alice.shares == []
        assert len(log) == 0

    def test_worthless_company_cannot_found_on_zero_cell(self, alice, log):
        ladder = build_ladder([0, 5, 10])
        company = FakeCompany.owned_by(alice, "BME", 0)
        assert not ladder[0].valid_range(company)
        with pytest.raises(InvalidFoundingPrice, match="0 not valid"):
            Corporation("Bear", company, ladder[0], ladder, log)
        assert ladder.occupied() == []
        assert company.owner is alice
        assert company in alice.companies
        assert alice.cash == 500
        assert alice.shares == []
        assert len(log) == 0

    def test_errors_share_a_base(self):
        assert issubclass(PriceTaken, StockMarketError)
        assert issubclass(InvalidFoundingPrice, StockMarketError)

    def test_unknown_name(self, ladder, log, alice):
        company = FakeCompany.owned_by(alice, "BME", 100)
        with pytest.raises(ValueError, match="Unknown corporation"):
            Corporation("Walrus", company, ladder.cell_for_price(67), ladder, log)
        assert ladder.occupied() == []


class TestCapabilities:

    def test_pass_and_unpass(self, bear):
        assert not bear.passed
        bear.pass_turn()
        assert bear.passed
        bear.unpass()
        assert not bear.passed

    def test_default_log(self, alice):
        ladder = build_ladder()
        company = FakeCompany.owned_by(alice, "BME", 100)
        corp = Corporation("Bear", company, ladder.cell_for_price(67), ladder)
        assert isinstance(corp.log, GameLog)
        assert len(corp.log) == 1

    def test_plain_list_log(self, alice):
        ladder = build_ladder()
        lines = []
        company = FakeCompany.owned_by(alice, "BME", 100)
        Corporation("Bear", company, ladder.cell_for_price(67), ladder, lines)
        assert lines == ["alice forms corporation Bear with BME at $67 - 2 shares issued."]


class TestValuationQueries:

    def test_book_value(self, bear):
        assert bear.book_value == 168 + 100

    def test_market_cap(self, bear):
        assert bear.market_cap == 4 * 67

    def test_not_bankrupt(self, bear):
        assert not bear.is_bankrupt()

    def test_bankrupt_without_companies(self, bear):
        bear.companies.clear()
        assert bear.is_bankrupt()

    def test_bankrupt_at_zero_price(self, alice, log):
        ladder = build_ladder([0, 5, 10])
        corp = form("Bear", alice, 10, 5, ladder, log)
        corp.swap_share_price(ladder[0])
        assert corp.price == 0
        assert corp.is_bankrupt()
