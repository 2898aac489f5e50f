from __future__ import annotations

import math

from orcamento.models.general import GeneralInfo
from orcamento.models.service import BudgetItem, Service
from orcamento.services.ledger import BudgetLedger, compute_totals, line_subtotal


class TestComputeTotals:
    def test_discount_larger_than_total_clamps_to_zero(self, budget_items, general):
        totals = compute_totals(budget_items, general)
        assert totals.itens == 250
        assert totals.deslocamento == 10
        assert totals.taxas == 5
        assert totals.desconto == 1000
        assert totals.final == 0

    def test_final_sum(self, budget_items):
        general = GeneralInfo(deslocamento=30, taxas=20, desconto=50)
        assert compute_totals(budget_items, general).final == 250

    def test_empty_budget(self):
        totals = compute_totals([], GeneralInfo(deslocamento=15))
        assert totals.itens == 0
        assert totals.final == 15

    def test_non_finite_value_counts_as_zero(self):
        item = BudgetItem(id="1", item="A", unidade="m", valor=math.inf, qtde=3)
        assert line_subtotal(item) == 0

    def test_zero_quantity_counts_as_one(self):
        item = BudgetItem(id="1", item="A", unidade="m", valor=40, qtde=0)
        assert line_subtotal(item) == 40


class TestBudgetLedger:
    def test_add_from_catalog_row_prepends(self, budget_items):
        ledger = BudgetLedger(budget_items)
        item = ledger.add_from_catalog_row(Service(id="s", item="Pintura", unidade="metro", valor=35.5))
        assert ledger.items[0] == item
        assert item.qtde == 1
        assert item.id != "s"
        assert len(ledger.items) == 3

    def test_same_service_twice_gives_two_lines(self):
        ledger = BudgetLedger()
        s = Service(id="s", item="Pintura", unidade="metro", valor=35.5)
        ledger.add_from_catalog_row(s)
        ledger.add_from_catalog_row(s)
        assert len(ledger.items) == 2

    def test_update_merges_fields(self, budget_items):
        ledger = BudgetLedger(budget_items)
        updated = ledger.update("b-1", qtde=3, valor="12.5", item="Varal")
        assert updated.qtde == 3
        assert updated.valor == 12.5
        assert updated.item == "Varal"
        assert ledger.get("b-1") == updated
        assert [i.id for i in ledger.items] == ["b-1", "b-2"]

    def test_update_fractional_quantity_is_floored(self, budget_items):
        ledger = BudgetLedger(budget_items)
        assert ledger.update("b-1", qtde=2.7).qtde == 2
        assert ledger.update("b-1", qtde=0.5).qtde == 1

    def test_update_zero_quantity_removes(self, budget_items):
        ledger = BudgetLedger(budget_items)
        assert ledger.update("b-1", qtde=0) is None
        assert ledger.get("b-1") is None

    def test_update_negative_or_non_finite_quantity_removes(self, budget_items):
        ledger = BudgetLedger(budget_items)
        assert ledger.update("b-1", qtde=-1) is None
        assert ledger.update("b-2", qtde=float("nan")) is None
        assert ledger.items == ()

    def test_update_unknown_id(self, budget_items):
        ledger = BudgetLedger(budget_items)
        assert ledger.update("nope", qtde=2) is None
        assert len(ledger.items) == 2

    def test_remove(self, budget_items):
        ledger = BudgetLedger(budget_items)
        ledger.remove("b-2")
        assert [i.id for i in ledger.items] == ["b-1"]

    def test_clear_requires_confirmation(self, budget_items):
        ledger = BudgetLedger(budget_items)
        assert ledger.clear(False) is False
        assert len(ledger.items) == 2
        assert ledger.clear(True) is True
        assert ledger.items == ()

    def test_on_change_called_with_new_items(self, budget_items):
        seen = []
        ledger = BudgetLedger(budget_items, on_change=seen.append)
        ledger.update("b-1", qtde=5)
        ledger.remove("b-2")
        assert len(seen) == 2
        assert seen[-1] == ledger.items

    def test_compute_totals_uses_items(self, budget_items, general):
        ledger = BudgetLedger(budget_items)
        assert ledger.compute_totals(general).itens == 250
