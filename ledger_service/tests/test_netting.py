"""
Unit tests for pairwise netting.

Covers 2-, 3- and n-member groups, cyclic debts, idempotence, antisymmetry
and the magnitude of each netted pair.
"""
import random
import pytest
from decimal import Decimal
from itertools import combinations
from ledger_service.utils.aggregator import aggregate_group_expenses
from ledger_service.utils.netting import net_group_tally, net_pairwise_ledger
from ledger_service.utils.reconciler import reconcile_group_settlements
from ledger_service.tests.factories import equal_expense, settlement

D = Decimal


def build_ledger(ids, cells):
    ledger = {a: {b: D("0") for b in ids if b != a} for a in ids}
    for (debtor, creditor), amount in cells.items():
        ledger[debtor][creditor] = D(str(amount))
    return ledger


def random_ledger(ids, rng):
    ledger = {a: {} for a in ids}
    for a in ids:
        for b in ids:
            if a != b:
                ledger[a][b] = D(rng.randint(-5000, 5000)) / 100
    return ledger


def assert_netted(raw, netted, ids):
    for a, b in combinations(ids, 2):
        forward, backward = netted[a][b], netted[b][a]
        assert forward >= 0 and backward >= 0
        assert forward == 0 or backward == 0
        assert forward + backward == abs(raw[a][b] - raw[b][a])


@pytest.mark.unit
class TestTwoMembers:

    def test_one_direction(self):
        raw = build_ledger(["A", "B"], {("B", "A"): 100})
        netted = net_pairwise_ledger(raw)
        assert netted["B"]["A"] == D("100")
        assert netted["A"]["B"] == D("0")

    def test_opposite_debts_cancel(self):
        raw = build_ledger(["A", "B"], {("B", "A"): 100, ("A", "B"): 100})
        netted = net_pairwise_ledger(raw)
        assert netted["A"]["B"] == D("0")
        assert netted["B"]["A"] == D("0")

    def test_larger_side_wins(self):
        raw = build_ledger(["A", "B"], {("B", "A"): 30, ("A", "B"): 100})
        netted = net_pairwise_ledger(raw)
        assert netted["A"]["B"] == D("70")
        assert netted["B"]["A"] == D("0")

    def test_sub_cent_difference_nets_to_zero(self):
        raw = build_ledger(["A", "B"], {("B", "A"): "33.334", ("A", "B"): "33.33"})
        netted = net_pairwise_ledger(raw)
        assert netted["A"]["B"] == D("0")
        assert netted["B"]["A"] == D("0")

    def test_one_cent_difference_is_kept(self):
        raw = build_ledger(["A", "B"], {("B", "A"): "33.34", ("A", "B"): "33.33"})
        netted = net_pairwise_ledger(raw)
        assert netted["B"]["A"] == D("0.01")
        assert netted["A"]["B"] == D("0")

    def test_negative_cell_flips_direction(self):
        raw = build_ledger(["A", "B"], {("A", "B"): -30, ("B", "A"): 100})
        netted = net_pairwise_ledger(raw)
        assert netted["B"]["A"] == D("130")
        assert netted["A"]["B"] == D("0")

    def test_input_is_not_mutated(self):
        raw = build_ledger(["A", "B"], {("B", "A"): 30, ("A", "B"): 100})
        net_pairwise_ledger(raw)
        assert raw["B"]["A"] == D("30")
        assert raw["A"]["B"] == D("100")


@pytest.mark.unit
class TestThreeMembers:

    def test_two_payers_scenario(self):
        """A and B each pay 300 split equally with C; A's and B's debts cancel."""
        ids = ["A", "B", "C"]
        tally = aggregate_group_expenses([
            equal_expense("A", 300, ids),
            equal_expense("B", 300, ids),
        ], ids)
        netted = net_group_tally(tally)

        assert netted.ledger["A"]["B"] == D("0")
        assert netted.ledger["B"]["A"] == D("0")
        assert netted.ledger["C"]["A"] == D("100")
        assert netted.ledger["A"]["C"] == D("0")
        assert netted.ledger["C"]["B"] == D("100")
        assert netted.ledger["B"]["C"] == D("0")

    def test_cycle_is_not_cancelled(self):
        """A owes B, B owes C, C owes A: all three debts remain."""
        ids = ["A", "B", "C"]
        raw = build_ledger(ids, {("A", "B"): 50, ("B", "C"): 50, ("C", "A"): 50})
        netted = net_pairwise_ledger(raw)

        assert netted["A"]["B"] == D("50")
        assert netted["B"]["C"] == D("50")
        assert netted["C"]["A"] == D("50")
        assert_netted(raw, netted, ids)

    def test_uneven_cycle(self):
        ids = ["A", "B", "C"]
        raw = build_ledger(ids, {("A", "B"): 50, ("B", "C"): 20, ("C", "A"): 70, ("B", "A"): 10})
        netted = net_pairwise_ledger(raw)
        assert netted["A"]["B"] == D("40")
        assert netted["B"]["C"] == D("20")
        assert netted["C"]["A"] == D("70")
        assert_netted(raw, netted, ids)

    def test_member_order_does_not_matter(self):
        raw = build_ledger(["C", "A", "B"], {("A", "B"): 50, ("B", "A"): 20, ("C", "B"): 5})
        assert net_pairwise_ledger(raw, ["C", "A", "B"]) == net_pairwise_ledger(raw, ["A", "B", "C"])


@pytest.mark.unit
class TestManyMembers:

    @pytest.mark.parametrize("size", [2, 3, 5, 8])
    def test_random_ledgers_are_netted(self, size):
        rng = random.Random(size)
        ids = [f"user-{i:02d}" for i in range(size)]
        for _ in range(20):
            raw = random_ledger(ids, rng)
            netted = net_pairwise_ledger(raw, ids)
            assert_netted(raw, netted, ids)

    @pytest.mark.parametrize("size", [2, 3, 6])
    def test_netting_is_idempotent(self, size):
        rng = random.Random(100 + size)
        ids = [f"user-{i:02d}" for i in range(size)]
        for _ in range(10):
            once = net_pairwise_ledger(random_ledger(ids, rng), ids)
            assert net_pairwise_ledger(once, ids) == once

    def test_long_cycle_survives(self):
        ids = [f"m{i}" for i in range(6)]
        cells = {(ids[i], ids[(i + 1) % len(ids)]): 25 for i in range(len(ids))}
        netted = net_pairwise_ledger(build_ledger(ids, cells), ids)
        for (debtor, creditor) in cells:
            assert netted[debtor][creditor] == D("25")

    def test_netted_rows_match_totals(self):
        """Each member's net position in the ledger equals their signed total."""
        ids = ["A", "B", "C", "D"]
        tally = aggregate_group_expenses([
            equal_expense("A", 120, ["A", "B", "C"]),
            equal_expense("B", 60, ["B", "C"]),
            equal_expense("C", 45, ["A", "C", "D"]),
        ], ids)
        tally = reconcile_group_settlements(tally, [settlement("C", "A", 25), settlement("D", "B", 5)])
        netted = net_group_tally(tally)

        for member in ids:
            owed_to = sum(netted.ledger[other][member] for other in ids if other != member)
            owes = sum(netted.ledger[member][other] for other in ids if other != member)
            assert owed_to - owes == netted.totals[member]
