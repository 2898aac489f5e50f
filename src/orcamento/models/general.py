from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from datetime import date

from orcamento.utils.numbers import non_negative

_NUMERIC_FIELDS = frozenset({"validade_dias", "deslocamento", "taxas", "desconto"})


def _today() -> str:
    return date.today().isoformat()


@dataclass(frozen=True)
class GeneralInfo:
    """Quote header: client data plus the fees applied on top of the items."""

    cliente: str = ""
    contato: str = ""
    endereco: str = ""
    cidade_uf: str = ""
    data: str = field(default_factory=_today)  # YYYY-MM-DD
    validade_dias: int = 15
    deslocamento: float = 0.0
    taxas: float = 0.0
    desconto: float = 0.0
    observacoes: str = ""

    @classmethod
    def from_dict(cls, d: dict, *, validade_dias: int = 15) -> GeneralInfo:
        """Create GeneralInfo from a stored dict; unknown keys are ignored."""
        base = cls(validade_dias=validade_dias)
        known = {f.name for f in fields(cls)}
        return base.with_changes(**{k: v for k, v in d.items() if k in known})

    def with_changes(self, **changes) -> GeneralInfo:
        """Return a copy with ``changes`` applied; numeric fields are coerced to >= 0."""
        coerced = {}
        for key, value in changes.items():
            if key in _NUMERIC_FIELDS:
                n = non_negative(value)
                coerced[key] = int(n) if key == "validade_dias" else n
            else:
                coerced[key] = "" if value is None else str(value)
        return replace(self, **coerced)

    def to_dict(self) -> dict:
        return asdict(self)
