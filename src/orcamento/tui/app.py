from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from orcamento.services.notices import Notice
from orcamento.services.session import QuoteSession


class OrcamentoApp(App):
    """Orçamentos de Manutenção TUI application."""

    CSS_PATH = "app.tcss"
    TITLE = "Orçamentos de Manutenção"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "quit", "Sair", priority=True),
    ]

    def __init__(self, session: QuoteSession | None = None):
        super().__init__()
        self.session = session or QuoteSession.from_config()
        self.session.catalog.notify = self.show_notice
        self.notice_timeout = self.session.settings.notificacao_segundos

    def on_mount(self) -> None:
        from orcamento.tui.screens.dashboard import DashboardScreen

        self.session.save_all()
        self.push_screen(DashboardScreen())

    def show_notice(self, notice: Notice) -> None:
        """Show a notice, replacing whichever one is still on screen."""
        self.clear_notifications()
        self.notify(notice.text, severity=notice.severity, timeout=self.notice_timeout)
