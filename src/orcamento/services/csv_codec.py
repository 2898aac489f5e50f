"""CSV import/export for the service catalog.

The import side is deliberately forgiving: the delimiter is sniffed (";" or
","), the header row is optional, and rows without a name are skipped
instead of failing the whole file. An empty result means "nothing usable".
"""

from __future__ import annotations

from pathlib import Path

from orcamento.models.service import DEFAULT_UNIDADE, Service, new_id
from orcamento.services.exceptions import CatalogImportError
from orcamento.utils.numbers import normalize_number

ITEM_ALIASES = ("item", "servi", "nome")
UNIDADE_ALIASES = ("unidade", "und", "uni")
VALOR_ALIASES = ("valor", "valor unit", "pre")

CSV_MODEL_LINES = (
    "item;unidade;valor",
    "Instalar Varal de Teto;unitário;100",
    "Pintura de Parede;metro;35,50",
)


def sniff_delimiter(text: str) -> str:
    """Majority vote between ";" and ","; ties go to ";"."""
    return ";" if text.count(";") >= text.count(",") else ","


def _find_column(header: list[str], aliases: tuple[str, ...]) -> int:
    for idx, cell in enumerate(header):
        if any(cell.startswith(alias) for alias in aliases):
            return idx
    return -1


def _cell(cols: list[str], idx: int) -> str:
    return cols[idx] if 0 <= idx < len(cols) else ""


def parse_csv_text(text: str) -> list[Service]:
    """Decode catalog rows from CSV text. Never raises on malformed content."""
    lines = [line for line in text.replace("\r", "").split("\n") if line.strip()]
    if not lines:
        return []

    sep = sniff_delimiter(text)
    header = [h.strip().lower() for h in lines[0].split(sep)]
    col_item = _find_column(header, ITEM_ALIASES)
    col_unid = _find_column(header, UNIDADE_ALIASES)
    col_valor = _find_column(header, VALOR_ALIASES)
    start = 1 if col_item >= 0 and col_unid >= 0 and col_valor >= 0 else 0

    rows: list[Service] = []
    for line in lines[start:]:
        cols = [c.strip() for c in line.split(sep)]
        item = _cell(cols, col_item if col_item >= 0 else 0)
        if not item:
            continue
        rows.append(
            Service(
                id=new_id(),
                item=item,
                unidade=_cell(cols, col_unid if col_unid >= 0 else 1) or DEFAULT_UNIDADE,
                valor=normalize_number(_cell(cols, col_valor if col_valor >= 0 else 2)),
            )
        )
    return rows


def parse_csv_file(path: str | Path) -> list[Service]:
    """Read a CSV file and decode it.

    Raises CatalogImportError if the file cannot be read.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise CatalogImportError(f"Não foi possível ler '{p}': {e.strerror or e}", str(p)) from e
    return parse_csv_text(text)


def build_csv_model() -> str:
    """The downloadable template: header plus one dot-decimal and one comma-decimal row."""
    return "\n".join(CSV_MODEL_LINES)
