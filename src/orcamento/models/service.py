from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass

from orcamento.utils.numbers import non_negative, to_finite

DEFAULT_UNIDADE = "unitário"


def new_id() -> str:
    """Opaque unique identifier for catalog and budget rows."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Service:
    """Catalog entry: a service that can be quoted."""

    id: str
    item: str
    unidade: str = DEFAULT_UNIDADE
    valor: float = 0.0

    @classmethod
    def from_dict(cls, d: dict) -> Service:
        """Create a Service from a stored dict, applying defaults for missing fields."""
        return cls(
            id=str(d.get("id") or new_id()),
            item=str(d.get("item", "")),
            unidade=str(d.get("unidade", DEFAULT_UNIDADE)),
            valor=non_negative(d.get("valor", 0)),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BudgetItem:
    """Budget line: a snapshot of a Service with a quantity.

    There is no link back to the catalog: editing the Service later does not
    change lines already in the budget.
    """

    id: str
    item: str
    unidade: str
    valor: float
    qtde: int = 1

    @classmethod
    def from_service(cls, service: Service) -> BudgetItem:
        return cls(
            id=new_id(),
            item=service.item,
            unidade=service.unidade,
            valor=to_finite(service.valor),
            qtde=1,
        )

    @classmethod
    def from_dict(cls, d: dict) -> BudgetItem:
        qtde = int(to_finite(d.get("qtde", 1), default=1))
        return cls(
            id=str(d.get("id") or new_id()),
            item=str(d.get("item", "")),
            unidade=str(d.get("unidade", DEFAULT_UNIDADE)),
            valor=to_finite(d.get("valor", 0)),
            qtde=qtde if qtde >= 1 else 1,
        )

    def to_dict(self) -> dict:
        return asdict(self)
