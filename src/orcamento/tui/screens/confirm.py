from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from orcamento.utils.formatters import format_brl


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no dialog guarding the quote's destructive actions.

    Use :meth:`restore_catalog` and :meth:`clear_budget` so the dialog spells
    out what is about to be lost. Dismisses with ``True`` only on confirmation.
    """

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
        background: $surface 80%;
    }
    #confirm-dialog {
        width: 60;
        height: auto;
        max-height: 18;
        background: $surface;
        border: thick $warning;
        padding: 1 2;
    }
    #confirm-dialog.danger {
        border: thick $error;
    }
    #confirm-title {
        text-style: bold;
        margin-bottom: 1;
    }
    #confirm-detail {
        color: $text-muted;
        margin-top: 1;
    }
    #confirm-dialog .button-bar {
        height: 3;
        margin-top: 1;
        align-horizontal: right;
    }
    #confirm-dialog .button-bar Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancelar"),
        Binding("n", "cancel", show=False),
        Binding("s", "confirm", show=False),
    ]

    def __init__(
        self,
        message: str,
        confirm_label: str = "Confirmar",
        *,
        title: str = "Confirmar",
        detail: str = "",
        danger: bool = False,
    ) -> None:
        super().__init__()
        self._message = message
        self._confirm_label = confirm_label
        self._title = title
        self._detail = detail
        self._danger = danger

    @classmethod
    def restore_catalog(cls, current_count: int) -> ConfirmScreen:
        detail = (
            f"{current_count} serviço(s) do catálogo atual serão descartados."
            if current_count
            else "O catálogo atual está vazio."
        )
        return cls(
            "Restaurar o catálogo padrão de exemplos?",
            "Restaurar",
            title="Restaurar catálogo",
            detail=detail,
        )

    @classmethod
    def clear_budget(cls, line_count: int, total: float) -> ConfirmScreen:
        return cls(
            "Limpar todo o orçamento?",
            "Limpar",
            title="Limpar orçamento",
            detail=f"{line_count} linha(s) somando {format_brl(total)} serão removidas.",
            danger=True,
        )

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog", classes="danger" if self._danger else ""):
            yield Label(self._title, id="confirm-title")
            yield Static(self._message, id="confirm-message")
            if self._detail:
                yield Static(self._detail, id="confirm-detail", markup=False)
            with Horizontal(classes="button-bar"):
                yield Button("\u2715 Cancelar", id="btn-cancel")
                yield Button(
                    f"\u25b6 {self._confirm_label}",
                    id="btn-confirm",
                    variant="error" if self._danger else "warning",
                )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-confirm")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
