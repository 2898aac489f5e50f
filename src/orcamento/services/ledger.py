from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from orcamento.models.general import GeneralInfo
from orcamento.models.service import BudgetItem, Service
from orcamento.utils.numbers import to_finite


@dataclass(frozen=True)
class Totals:
    itens: float
    deslocamento: float
    taxas: float
    desconto: float
    final: float


def line_subtotal(item: BudgetItem) -> float:
    """valor × qtde, with non-finite values as 0 and a missing quantity as 1."""
    return to_finite(item.valor) * (to_finite(item.qtde) or 1)


def compute_totals(items: Iterable[BudgetItem], general: GeneralInfo) -> Totals:
    itens = sum((line_subtotal(i) for i in items), 0.0)
    deslocamento = to_finite(general.deslocamento)
    taxas = to_finite(general.taxas)
    desconto = to_finite(general.desconto)
    final = max(0.0, itens + deslocamento + taxas - desconto)
    return Totals(itens=itens, deslocamento=deslocamento, taxas=taxas, desconto=desconto, final=final)


class BudgetLedger:
    """The lines of the quote being assembled."""

    def __init__(
        self,
        items: Iterable[BudgetItem] = (),
        *,
        on_change: Callable[[tuple[BudgetItem, ...]], None] | None = None,
    ) -> None:
        self._items: tuple[BudgetItem, ...] = tuple(items)
        self._on_change = on_change

    @property
    def items(self) -> tuple[BudgetItem, ...]:
        return self._items

    def get(self, item_id: str) -> BudgetItem | None:
        return next((i for i in self._items if i.id == item_id), None)

    def _replace(self, items: Iterable[BudgetItem]) -> None:
        self._items = tuple(items)
        if self._on_change is not None:
            self._on_change(self._items)

    def add_from_catalog_row(self, service: Service) -> BudgetItem:
        """Snapshot ``service`` into a new line with quantity 1, at the front."""
        item = BudgetItem.from_service(service)
        self._replace((item, *self._items))
        return item

    def update(self, item_id: str, **patch) -> BudgetItem | None:
        """Merge ``patch`` into a line.

        A quantity that is not a finite number > 0 removes the line instead.
        Returns the updated line, or None if it was removed or not found.
        """
        current = self.get(item_id)
        if current is None:
            return None

        changes: dict = {}
        if "qtde" in patch:
            n = to_finite(patch["qtde"], default=math.nan)
            if math.isnan(n) or n <= 0:
                self.remove(item_id)
                return None
            changes["qtde"] = max(1, math.floor(n))
        if "valor" in patch:
            changes["valor"] = to_finite(patch["valor"])
        for key in ("item", "unidade"):
            if key in patch:
                changes[key] = str(patch[key])

        updated = replace(current, **changes)
        self._replace(updated if i.id == item_id else i for i in self._items)
        return updated

    def remove(self, item_id: str) -> None:
        self._replace(i for i in self._items if i.id != item_id)

    def clear(self, confirmed: bool) -> bool:
        """Empty the budget. Declining leaves it untouched."""
        if not confirmed:
            return False
        self._replace(())
        return True

    def compute_totals(self, general: GeneralInfo) -> Totals:
        return compute_totals(self._items, general)
