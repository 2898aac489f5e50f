from __future__ import annotations

import math

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from orcamento.models.service import BudgetItem
from orcamento.utils.formatters import format_brl
from orcamento.utils.numbers import non_negative, normalize_number


class BudgetItemScreen(ModalScreen[dict | None]):
    """Edit one budget line. Dismisses with a patch for BudgetLedger.update, or None."""

    BINDINGS = [
        Binding("escape", "go_back", "Voltar"),
    ]

    def __init__(self, item: BudgetItem) -> None:
        super().__init__()
        self._item = item

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Item do orçamento", id="header-bar")
                yield Button("\u2715", id="btn-modal-close")
            yield Label("Item", classes="form-label")
            yield Input(value=self._item.item, id="linha-item")
            yield Label("Unidade", classes="form-label")
            yield Input(value=self._item.unidade, id="linha-unidade")
            yield Label("Quantidade (0 remove o item)", classes="form-label")
            yield Input(value=str(self._item.qtde), id="linha-qtde")
            yield Label("Valor unitário (R$)", classes="form-label")
            yield Input(value=f"{self._item.valor:.2f}".replace(".", ","), id="linha-valor")
            yield Label("", id="linha-subtotal")
            with Horizontal(classes="button-bar"):
                yield Button("\u2190 Voltar", id="btn-linha-voltar", variant="error")
                yield Button("\u25b6 Salvar", id="btn-linha-salvar", variant="success")

    def on_mount(self) -> None:
        self._update_subtotal()
        self.query_one("#linha-qtde", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id in ("linha-qtde", "linha-valor"):
            self._update_subtotal()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(self._read_patch())

    def _update_subtotal(self) -> None:
        patch = self._read_patch()
        qtde = patch["qtde"]
        # Same rule as BudgetLedger.update: 0 removes, fractions round down to at least 1
        subtotal = patch["valor"] * max(1, math.floor(qtde)) if qtde > 0 else 0.0
        self.query_one("#linha-subtotal", Label).update(f"Subtotal: {format_brl(subtotal)}")

    def _read_patch(self) -> dict:
        return {
            "item": self.query_one("#linha-item", Input).value.strip(),
            "unidade": self.query_one("#linha-unidade", Input).value.strip(),
            "qtde": normalize_number(self.query_one("#linha-qtde", Input).value),
            "valor": non_negative(normalize_number(self.query_one("#linha-valor", Input).value)),
        }

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-linha-salvar":
                self.dismiss(self._read_patch())
            case "btn-linha-voltar" | "btn-modal-close":
                self.dismiss(None)

    def action_go_back(self) -> None:
        self.dismiss(None)
