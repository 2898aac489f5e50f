from __future__ import annotations

import subprocess

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Input, Label, Select, Static

from orcamento.models.service import Service
from orcamento.services.catalog import DeleteStatus
from orcamento.services.csv_codec import build_csv_model
from orcamento.services.ledger import line_subtotal
from orcamento.services.notices import Notice
from orcamento.utils.formatters import format_brl
from orcamento.utils.numbers import non_negative, normalize_number


class DashboardScreen(Screen):
    """Main screen: service catalog on the left, budget and totals on the right."""

    BINDINGS = [
        # Catalog actions: hidden from footer (have buttons)
        Binding("m", "export_model", "Modelo CSV", show=False),
        Binding("y", "copy_model", "Copiar CSV", show=False),
        # Budget row actions
        Binding("plus", "increment", "Qtd. +", show=False),
        Binding("minus", "decrement", "Qtd. -", show=False),
        Binding("delete", "remove_line", "Remover", show=False),
        # Generic actions: shown in footer
        Binding("n", "add_service", "Novo serviço"),
        Binding("b", "add_to_budget", "Adicionar"),
        Binding("i", "import_csv", "Importar"),
        Binding("g", "general", "Informações gerais"),
        Binding("f", "focus_filter", "Filtrar"),
        Binding("h", "help", "Ajuda"),
        Binding("q", "quit", "Sair"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._form_id: str | None = None

    @property
    def session(self):
        return self.app.session  # type: ignore[attr-defined]

    def compose(self) -> ComposeResult:
        with Horizontal(id="top-bar"):
            yield Static("Orçamentos de Manutenção", id="app-title")
            yield Static("", id="general-summary", markup=False)
            yield Button(
                "\u270e Informações gerais",
                id="btn-general",
                tooltip="Cliente, endereço, deslocamento, taxas e desconto (g)",
            )

        with Horizontal(id="main-panes"):
            # Catalog pane
            with Vertical(id="catalog-pane", classes="pane"):
                yield Static("Catálogo de serviços", classes="section-title")
                with Horizontal(classes="action-bar"):
                    yield Button("+ Serviço", id="btn-add-service", variant="primary", tooltip="(n)")
                    yield Button("\u21d1 Importar CSV", id="btn-import", tooltip="(i)")
                    yield Button("\u21d3 Baixar modelo", id="btn-export-model", tooltip="(m)")
                    yield Button("\u2398 Copiar CSV", id="btn-copy-model", tooltip="(y)")
                with Horizontal(classes="action-bar"):
                    yield Button(
                        "\u2295 Anexar exemplos",
                        id="btn-attach",
                        tooltip="Anexa os exemplos que ainda não estão no catálogo",
                    )
                    yield Button(
                        "\u21bb Restaurar exemplos",
                        id="btn-restore",
                        variant="warning",
                        tooltip="Substitui o catálogo pela lista de exemplos",
                    )
                yield Label("Filtrar catálogo", classes="form-label")
                yield Input(placeholder="Buscar por nome, unidade ou valor", id="catalog-filter")
                yield Label("Selecionar serviço", classes="form-label")
                yield Select([], id="service-select", prompt="Nenhum serviço", allow_blank=True)
                with Vertical(id="service-form"):
                    yield Label("Item", classes="form-label")
                    yield Input(id="edit-item")
                    yield Label("Unidade", classes="form-label")
                    yield Input(id="edit-unidade")
                    yield Label("Valor unitário (R$)", classes="form-label")
                    yield Input(id="edit-valor")
                    with Horizontal(classes="button-bar"):
                        yield Button("\u25b6 Salvar no catálogo", id="btn-save-service", variant="success")
                        yield Button("+ Adicionar ao orçamento", id="btn-add-budget", tooltip="(b)")
                        yield Button("\u2716 Excluir do catálogo", id="btn-delete-service", variant="warning")
                        yield Button("\u2715 Cancelar", id="btn-cancel-delete")
                yield Static("", id="csv-link")

            # Budget pane
            with Vertical(id="budget-pane", classes="pane"):
                yield Static("Orçamento", classes="section-title")
                with Horizontal(classes="action-bar"):
                    yield Button("\u270e Editar item", id="btn-edit-line", tooltip="(enter)")
                    yield Button("\u2716 Remover", id="btn-remove-line", tooltip="(del)")
                    yield Button("\u2715 Limpar orçamento", id="btn-clear-budget", variant="error")
                yield DataTable(id="budget-table", cursor_type="row")
                yield Static("Nenhum item no orçamento.", id="budget-empty")
                yield Static("", id="totals")

        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#budget-table", DataTable)
        table.add_columns("Item", "Unidade", "Qtd.", "Valor unitário", "Subtotal")
        self._refresh_catalog(force_form=True)
        self._refresh_budget()
        self._refresh_general()
        self.query_one("#service-select", Select).focus()

    # --- Rendering ---

    def _refresh_catalog(self, *, force_form: bool = False) -> None:
        catalog = self.session.catalog
        select = self.query_one("#service-select", Select)
        options = [(f"{s.item} — {s.unidade} — {format_brl(s.valor)}", s.id) for s in catalog.visible()]
        with select.prevent(Select.Changed):
            select.set_options(options)
            if catalog.selected_id is not None:
                select.value = catalog.selected_id
        if force_form or catalog.selected_id != self._form_id:
            self._fill_service_form(catalog.selected)
        self._update_delete_buttons()

    def _fill_service_form(self, service: Service | None) -> None:
        self._form_id = service.id if service else None
        self.query_one("#edit-item", Input).value = service.item if service else ""
        self.query_one("#edit-unidade", Input).value = service.unidade if service else ""
        valor = f"{service.valor:.2f}".replace(".", ",") if service else ""
        self.query_one("#edit-valor", Input).value = valor
        self.query_one("#service-form").disabled = service is None

    def _update_delete_buttons(self) -> None:
        catalog = self.session.catalog
        selected_id = catalog.selected_id
        status = catalog.status(selected_id) if selected_id else DeleteStatus.IDLE
        delete_btn = self.query_one("#btn-delete-service", Button)
        cancel_btn = self.query_one("#btn-cancel-delete", Button)
        if status is DeleteStatus.DELETING:
            delete_btn.label = "Excluindo…"
            delete_btn.disabled = True
        elif status is DeleteStatus.ARMED:
            delete_btn.label = "\u2716 Confirmar exclusão"
            delete_btn.disabled = False
        else:
            delete_btn.label = "\u2716 Excluir do catálogo"
            delete_btn.disabled = selected_id is None
        cancel_btn.display = status is DeleteStatus.ARMED

        restore_btn = self.query_one("#btn-restore", Button)
        restore_btn.disabled = catalog.restoring
        restore_btn.label = "Restaurando…" if catalog.restoring else "\u21bb Restaurar exemplos"

    def _refresh_budget(self) -> None:
        table = self.query_one("#budget-table", DataTable)
        previous_row = table.cursor_row
        table.clear()
        for item in self.session.ledger.items:
            table.add_row(
                item.item,
                item.unidade,
                str(item.qtde),
                format_brl(item.valor),
                format_brl(line_subtotal(item)),
                key=item.id,
            )
        has_rows = table.row_count > 0
        table.display = has_rows
        self.query_one("#budget-empty", Static).display = not has_rows
        if has_rows:
            table.move_cursor(row=min(previous_row, table.row_count - 1))
        self._refresh_totals()

    def _refresh_totals(self) -> None:
        totals = self.session.totals()
        self.query_one("#totals", Static).update(
            f"Itens            {format_brl(totals.itens)}\n"
            f"Deslocamento     {format_brl(totals.deslocamento)}\n"
            f"Taxas gerais     {format_brl(totals.taxas)}\n"
            f"Desconto       − {format_brl(totals.desconto)}\n"
            f"[bold]Total geral      {format_brl(totals.final)}[/bold]"
        )

    def _refresh_general(self) -> None:
        general = self.session.general
        cliente = general.cliente or "Cliente não informado"
        self.query_one("#general-summary", Static).update(
            f"{cliente} · {general.data} · validade {general.validade_dias} dia(s)"
        )
        self._refresh_totals()

    def _notice(self, kind: str, text: str) -> None:
        self.app.show_notice(Notice(kind, text))  # type: ignore[attr-defined]

    # --- Event handlers ---

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "catalog-filter":
            self.session.catalog.set_filter(event.value)
            self._refresh_catalog()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "service-select" or not isinstance(event.value, str):
            return
        self.session.catalog.select(event.value)
        self._refresh_catalog()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-general":
                self.action_general()
            case "btn-add-service":
                self.action_add_service()
            case "btn-import":
                self.action_import_csv()
            case "btn-export-model":
                self.action_export_model()
            case "btn-copy-model":
                self.action_copy_model()
            case "btn-attach":
                self.session.catalog.attach_defaults()
                self._refresh_catalog()
            case "btn-restore":
                self._confirm_restore()
            case "btn-save-service":
                self._save_service()
            case "btn-add-budget":
                self.action_add_to_budget()
            case "btn-delete-service":
                self._request_delete()
            case "btn-cancel-delete":
                self.session.catalog.cancel_delete()
                self.app.clear_notifications()
                self._update_delete_buttons()
            case "btn-edit-line":
                self._edit_selected_line()
            case "btn-remove-line":
                self.action_remove_line()
            case "btn-clear-budget":
                self._confirm_clear()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self._open_line(str(event.row_key.value))

    # --- Catalog ---

    def _form_service(self) -> Service | None:
        """The selected service with the (possibly unsaved) values from the form."""
        if self._form_id is None:
            return None
        return Service(
            id=self._form_id,
            item=self.query_one("#edit-item", Input).value.strip(),
            unidade=self.query_one("#edit-unidade", Input).value.strip(),
            valor=non_negative(normalize_number(self.query_one("#edit-valor", Input).value)),
        )

    def _save_service(self) -> None:
        row = self._form_service()
        if row is None:
            return
        self.session.catalog.edit(row)
        self._refresh_catalog(force_form=True)

    def _request_delete(self) -> None:
        selected_id = self.session.catalog.selected_id
        if selected_id is None:
            return
        self._run_delete(selected_id)

    @work(group="catalog-delete")
    async def _run_delete(self, service_id: str) -> None:
        catalog = self.session.catalog
        if catalog.status(service_id) is DeleteStatus.ARMED:
            delete_btn = self.query_one("#btn-delete-service", Button)
            delete_btn.label = "Excluindo…"
            delete_btn.disabled = True
            self.query_one("#btn-cancel-delete", Button).disabled = True
        await catalog.delete(service_id)
        self.query_one("#btn-cancel-delete", Button).disabled = False
        self._refresh_catalog()

    def _confirm_restore(self) -> None:
        from orcamento.tui.screens.confirm import ConfirmScreen

        self.app.push_screen(
            ConfirmScreen.restore_catalog(len(self.session.catalog.services)),
            callback=self._on_restore_confirmed,
        )

    def _on_restore_confirmed(self, confirmed: bool | None) -> None:
        self._run_restore(bool(confirmed))

    @work(group="catalog-restore")
    async def _run_restore(self, confirmed: bool) -> None:
        catalog = self.session.catalog
        if confirmed:
            restore_btn = self.query_one("#btn-restore", Button)
            restore_btn.label = "Restaurando…"
            restore_btn.disabled = True
        await catalog.restore_defaults(confirmed)
        self._refresh_catalog(force_form=True)

    # --- CSV template ---

    def action_export_model(self) -> None:
        from orcamento.services.export import save_csv_model

        self._notice("info", "Gerando modelo CSV…")
        try:
            path = save_csv_model()
        except OSError:
            self._notice("error", "Falha ao baixar o modelo CSV")
            return
        self.query_one("#csv-link", Static).update(f"Modelo salvo em: {path}")
        self._notice("success", "Modelo CSV baixado")

    def action_copy_model(self) -> None:
        from orcamento.utils.clipboard import copy_text

        csv = build_csv_model()
        try:
            if not copy_text(csv):
                # No clipboard command: ask the terminal to copy (OSC 52).
                self.app.copy_to_clipboard(csv)
        except (OSError, subprocess.SubprocessError):
            self._notice("error", "Não foi possível copiar o CSV")
            return
        self._notice("success", "Modelo CSV copiado")

    # --- Budget ---

    def _selected_line_id(self) -> str | None:
        """Return the id of the budget row under the cursor, or None if empty."""
        table = self.query_one("#budget-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return str(row_key.value)

    def _edit_selected_line(self) -> None:
        line_id = self._selected_line_id()
        if line_id is None:
            self._notice("info", "Nenhum item selecionado")
            return
        self._open_line(line_id)

    def _open_line(self, line_id: str) -> None:
        item = self.session.ledger.get(line_id)
        if item is None:
            return
        from orcamento.tui.screens.budget_item import BudgetItemScreen

        self.app.push_screen(
            BudgetItemScreen(item),
            callback=lambda patch: self._on_line_edited(line_id, patch),
        )

    def _on_line_edited(self, line_id: str, patch: dict | None) -> None:
        if patch is None:
            return
        if self.session.ledger.update(line_id, **patch) is None:
            self._notice("info", "Item removido do orçamento")
        self._refresh_budget()

    def _change_quantity(self, delta: int) -> None:
        line_id = self._selected_line_id()
        if line_id is None:
            return
        item = self.session.ledger.get(line_id)
        if item is None:
            return
        self.session.ledger.update(line_id, qtde=item.qtde + delta)
        self._refresh_budget()

    def _confirm_clear(self) -> None:
        if not self.session.ledger.items:
            return
        from orcamento.tui.screens.confirm import ConfirmScreen

        ledger = self.session.ledger
        totals = ledger.compute_totals(self.session.general)
        self.app.push_screen(
            ConfirmScreen.clear_budget(len(ledger.items), totals.itens),
            callback=self._on_clear_confirmed,
        )

    def _on_clear_confirmed(self, confirmed: bool | None) -> None:
        if self.session.ledger.clear(bool(confirmed)):
            self._refresh_budget()

    # --- Actions ---

    def action_add_service(self) -> None:
        self.session.catalog.add()
        self._refresh_catalog(force_form=True)
        self.query_one("#edit-item", Input).focus()

    def action_add_to_budget(self) -> None:
        row = self._form_service()
        if row is None:
            self._notice("info", "Nenhum serviço selecionado")
            return
        self.session.ledger.add_from_catalog_row(row)
        self._refresh_budget()
        self._notice("success", f"'{row.item}' adicionado ao orçamento")

    def action_increment(self) -> None:
        self._change_quantity(1)

    def action_decrement(self) -> None:
        self._change_quantity(-1)

    def action_remove_line(self) -> None:
        line_id = self._selected_line_id()
        if line_id is None:
            return
        self.session.ledger.remove(line_id)
        self._refresh_budget()

    def action_import_csv(self) -> None:
        from orcamento.tui.screens.import_csv import ImportCsvScreen

        self.app.push_screen(ImportCsvScreen(), callback=self._on_import_path)

    def _on_import_path(self, path: str | None) -> None:
        if not path:
            return
        self.session.catalog.import_file(path)
        self._refresh_catalog()

    def action_general(self) -> None:
        from orcamento.tui.screens.general_info import GeneralInfoScreen

        self.app.push_screen(GeneralInfoScreen(self.session.general), callback=self._on_general_saved)

    def _on_general_saved(self, changes: dict | None) -> None:
        if changes is None:
            return
        self.session.update_general(**changes)
        self._refresh_general()
        self._notice("success", "Informações gerais atualizadas")

    def action_focus_filter(self) -> None:
        self.query_one("#catalog-filter", Input).focus()

    def action_help(self) -> None:
        from orcamento.tui.screens.help import HelpScreen

        self.app.push_screen(HelpScreen())

    def action_quit(self) -> None:
        self.app.exit()
