"""
Unit tests for applying settlements to tallies.
"""
import pytest
from decimal import Decimal
from ledger_service.utils.aggregator import Tally, aggregate_group_expenses
from ledger_service.utils.reconciler import (
    reconcile_counterpart_settlements,
    reconcile_group_settlements,
    reconcile_pair_settlements,
)
from ledger_service.tests.factories import assert_zero_sum, equal_expense, settlement


@pytest.mark.unit
class TestPairSettlements:

    def test_counterpart_pays_subject(self):
        tally = Tally(Decimal("500"), Decimal("0"))
        result = reconcile_pair_settlements(tally, [settlement("B", "A", 500)], "A", "B")
        assert result == Tally(Decimal("0"), Decimal("0"))

    def test_subject_pays_counterpart(self):
        tally = Tally(Decimal("0"), Decimal("500"))
        result = reconcile_pair_settlements(tally, [settlement("B", "A", 200)], "B", "A")
        assert result.owing == Decimal("300")

    def test_overpayment_stays_signed(self):
        tally = Tally(Decimal("100"), Decimal("0"))
        result = reconcile_pair_settlements(tally, [settlement("B", "A", 150)], "A", "B")
        assert result.owed == Decimal("-50")

    def test_settlements_with_third_parties_are_ignored(self):
        tally = Tally(Decimal("100"), Decimal("40"))
        settlements = [settlement("A", "C", 40), settlement("C", "A", 100)]
        assert reconcile_pair_settlements(tally, settlements, "A", "B") == tally

    def test_input_is_not_mutated(self):
        tally = Tally(Decimal("100"), Decimal("0"))
        reconcile_pair_settlements(tally, [settlement("B", "A", 100)], "A", "B")
        assert tally.owed == Decimal("100")


@pytest.mark.unit
class TestGroupSettlements:

    def test_settlement_erases_debt(self):
        tally = aggregate_group_expenses([equal_expense("A", 200, ["A", "B"])], ["A", "B"])
        result = reconcile_group_settlements(tally, [settlement("B", "A", 100)])

        assert result.ledger["B"]["A"] == Decimal("0")
        assert result.totals == {"A": Decimal("0"), "B": Decimal("0")}

    def test_reverse_payment_goes_negative_before_netting(self):
        tally = aggregate_group_expenses([equal_expense("A", 200, ["A", "B"])], ["A", "B"])
        result = reconcile_group_settlements(tally, [settlement("A", "B", 30)])

        assert result.ledger["A"]["B"] == Decimal("-30")
        assert result.totals == {"A": Decimal("130"), "B": Decimal("-130")}
        assert_zero_sum(result.totals)

    def test_input_is_not_mutated(self):
        tally = aggregate_group_expenses([equal_expense("A", 200, ["A", "B"])], ["A", "B"])
        reconcile_group_settlements(tally, [settlement("B", "A", 100)])
        assert tally.ledger["B"]["A"] == Decimal("100")


@pytest.mark.unit
class TestCounterpartSettlements:

    def test_settlements_in_both_directions(self):
        tallies = {"B": Tally(Decimal("100"), Decimal("0")), "C": Tally(Decimal("0"), Decimal("80"))}
        settlements = [
            settlement("B", "A", 60),
            settlement("A", "C", 80),
            settlement("B", "C", 999),
        ]
        result = reconcile_counterpart_settlements(tallies, settlements, "A")
        assert result["B"] == Tally(Decimal("40"), Decimal("0"))
        assert result["C"] == Tally(Decimal("0"), Decimal("0"))

    def test_settlement_with_new_counterpart(self):
        result = reconcile_counterpart_settlements({}, [settlement("A", "D", 25)], "A")
        assert result["D"] == Tally(Decimal("0"), Decimal("-25"))
