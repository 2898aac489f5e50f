from __future__ import annotations

from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static


class ImportCsvScreen(ModalScreen[str | None]):
    """Ask for the CSV file to import. Dismisses with the path, or None."""

    BINDINGS = [
        Binding("escape", "go_back", "Voltar"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Importar CSV", id="header-bar")
                yield Button("\u2715", id="btn-modal-close")
            yield Static(
                "Colunas aceitas: item (ou serviço/nome), unidade e valor.\n"
                "Separador ; ou , e valores como 35,50 ou 1.234,56.",
                id="import-hint",
            )
            yield Label("Arquivo CSV", classes="form-label")
            yield Input(placeholder="~/Downloads/servicos.csv", id="csv-path")
            yield Label("", id="error-label")
            with Horizontal(classes="button-bar"):
                yield Button("\u2715 Fechar", id="btn-voltar", variant="error")
                yield Button("\u21d1 Importar", id="btn-importar", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#csv-path", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._do_import()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-importar":
                self._do_import()
            case "btn-voltar" | "btn-modal-close":
                self.dismiss(None)

    def _do_import(self) -> None:
        raw = self.query_one("#csv-path", Input).value.strip()
        if not raw:
            self.query_one("#error-label", Label).update("Informe o caminho do arquivo CSV")
            return
        path = Path(raw).expanduser()
        if not path.is_file():
            self.query_one("#error-label", Label).update(f"Arquivo não encontrado: {raw}")
            return
        self.dismiss(str(path))

    def action_go_back(self) -> None:
        self.dismiss(None)
