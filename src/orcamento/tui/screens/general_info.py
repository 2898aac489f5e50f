from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static, TextArea

from orcamento.models.general import GeneralInfo
from orcamento.utils.numbers import normalize_number

# Mapping of (widget_id, GeneralInfo field, label, placeholder) for Input fields.
# Used by compose, _fill_form and _read_form to avoid repeating the same field list.
_TEXT_FIELDS: tuple[tuple[str, str, str, str], ...] = (
    ("geral-cliente", "cliente", "Cliente", "Maria Souza"),
    ("geral-contato", "contato", "Contato", "(11) 99999-0000"),
    ("geral-data", "data", "Data (AAAA-MM-DD)", "2025-01-31"),
    ("geral-endereco", "endereco", "Endereço", "Rua das Flores, 100"),
    ("geral-cidade-uf", "cidade_uf", "Cidade/UF", "São Paulo/SP"),
)

_NUMERIC_FIELDS: tuple[tuple[str, str, str, str], ...] = (
    ("geral-validade", "validade_dias", "Validade (dias)", "15"),
    ("geral-deslocamento", "deslocamento", "Deslocamento (R$)", "0,00"),
    ("geral-taxas", "taxas", "Taxas gerais (R$)", "0,00"),
    ("geral-desconto", "desconto", "Desconto (R$)", "0,00"),
)


def _number_text(value: float) -> str:
    n = float(value)
    if n.is_integer():
        return str(int(n))
    return f"{n:.2f}".replace(".", ",")


class GeneralInfoScreen(ModalScreen[dict | None]):
    """Form for the quote header. Dismisses with the changed fields, or None."""

    BINDINGS = [
        Binding("escape", "go_back", "Voltar"),
    ]

    def __init__(self, general: GeneralInfo) -> None:
        super().__init__()
        self._general = general

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Informações gerais", id="header-bar")
                yield Button("\u2715", id="btn-modal-close")
            with VerticalScroll(id="general-form"):
                for widget_id, _, label, placeholder in _TEXT_FIELDS + _NUMERIC_FIELDS:
                    yield Label(label, classes="form-label")
                    yield Input(placeholder=placeholder, id=widget_id)
                yield Label("Observações", classes="form-label")
                yield TextArea(id="geral-observacoes")
            with Horizontal(classes="button-bar"):
                yield Button("\u2190 Voltar", id="btn-geral-voltar", variant="error")
                yield Button("\u25b6 Salvar", id="btn-geral-salvar", variant="success")

    def on_mount(self) -> None:
        self._fill_form()
        self.query_one("#geral-cliente", Input).focus()

    def _fill_form(self) -> None:
        for widget_id, key, _, _ in _TEXT_FIELDS:
            self.query_one(f"#{widget_id}", Input).value = str(getattr(self._general, key))
        for widget_id, key, _, _ in _NUMERIC_FIELDS:
            self.query_one(f"#{widget_id}", Input).value = _number_text(getattr(self._general, key))
        self.query_one("#geral-observacoes", TextArea).text = self._general.observacoes

    def _read_form(self) -> dict:
        values: dict = {}
        for widget_id, key, _, _ in _TEXT_FIELDS:
            values[key] = self.query_one(f"#{widget_id}", Input).value.strip()
        for widget_id, key, _, _ in _NUMERIC_FIELDS:
            values[key] = normalize_number(self.query_one(f"#{widget_id}", Input).value)
        values["observacoes"] = self.query_one("#geral-observacoes", TextArea).text
        return values

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-geral-salvar":
                self.dismiss(self._read_form())
            case "btn-geral-voltar" | "btn-modal-close":
                self.dismiss(None)

    def action_go_back(self) -> None:
        self.dismiss(None)
