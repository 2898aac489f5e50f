from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, RichLog, Static


class HelpScreen(ModalScreen):
    """Keyboard shortcuts and CSV format."""

    BINDINGS = [
        Binding("escape", "go_back", "Voltar"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Ajuda", id="header-bar")
                yield Button("\u2715", id="btn-modal-close")
            yield RichLog(id="help-content", wrap=True, markup=True)
            with Horizontal(classes="button-bar"):
                yield Button("\u2715 Fechar", id="btn-voltar")

    def on_mount(self) -> None:
        log = self.query_one("#help-content", RichLog)

        log.write("[bold]Orçamentos de Manutenção[/bold]")
        log.write("")
        log.write(
            "Monte orçamentos a partir de um catálogo de serviços. "
            "Tudo fica salvo localmente, no diretório de dados do usuário."
        )
        log.write("")

        log.write("[bold]Catálogo[/bold]")
        log.write("")
        log.write("  [bold cyan]n[/bold cyan]  Novo serviço        Adiciona um serviço ao catálogo")
        log.write("  [bold cyan]b[/bold cyan]  Adicionar           Coloca o serviço selecionado no orçamento")
        log.write("  [bold cyan]i[/bold cyan]  Importar CSV        Importa serviços de um arquivo CSV")
        log.write("  [bold cyan]m[/bold cyan]  Modelo CSV          Salva o modelo CSV na pasta Downloads")
        log.write("  [bold cyan]y[/bold cyan]  Copiar CSV          Copia o modelo CSV")
        log.write("  [bold cyan]f[/bold cyan]  Filtrar             Foca no filtro do catálogo")
        log.write("")
        log.write("  Excluir pede confirmação: pressione o botão uma segunda vez.")
        log.write("")
        log.write("[bold]Orçamento[/bold]")
        log.write("")
        log.write("  [bold cyan]+ / -[/bold cyan]   Aumentar / diminuir quantidade (0 remove)")
        log.write("  [bold cyan]enter[/bold cyan]   Editar item selecionado")
        log.write("  [bold cyan]del[/bold cyan]     Remover item selecionado")
        log.write("  [bold cyan]g[/bold cyan]       Informações gerais (cliente, taxas, desconto)")
        log.write("  [bold cyan]h[/bold cyan]       Ajuda")
        log.write("  [bold cyan]q[/bold cyan]       Sair")
        log.write("")

        log.write("[bold]Formato do CSV[/bold]")
        log.write("")
        log.write("  item;unidade;valor")
        log.write("  Instalar Varal de Teto;unitário;100")
        log.write("  Pintura de Parede;metro;35,50")
        log.write("")
        log.write(
            "O separador pode ser ; ou , e o cabeçalho é opcional. "
            "Linhas sem nome de serviço são ignoradas."
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id in ("btn-voltar", "btn-modal-close"):
            self.app.pop_screen()

    def action_go_back(self) -> None:
        self.app.pop_screen()
