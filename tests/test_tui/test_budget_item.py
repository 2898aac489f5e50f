from __future__ import annotations

import pytest

from orcamento.models.service import Service
from orcamento.tui.app import OrcamentoApp
from orcamento.tui.screens.budget_item import BudgetItemScreen
from orcamento.tui.screens.dashboard import DashboardScreen


def _with_line(session):
    return session.ledger.add_from_catalog_row(
        Service(id="s-pintura", item="Pintura de Parede", unidade="metro", valor=35.5)
    )


@pytest.mark.asyncio
async def test_enter_on_row_opens_editor(tui_session):
    from textual.widgets import DataTable, Input

    _with_line(tui_session)
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        app.screen.query_one("#budget-table", DataTable).focus()
        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, BudgetItemScreen)
        assert app.screen.query_one("#linha-item", Input).value == "Pintura de Parede"
        assert app.screen.query_one("#linha-valor", Input).value == "35,50"


@pytest.mark.asyncio
async def test_save_applies_patch(tui_session):
    from textual.widgets import Button, Input

    line = _with_line(tui_session)
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        app.screen.query_one("#btn-edit-line", Button).press()
        await pilot.pause()
        screen = app.screen
        screen.query_one("#linha-qtde", Input).value = "3"
        screen.query_one("#linha-valor", Input).value = "40"
        screen.query_one("#btn-linha-salvar", Button).press()
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)
        updated = tui_session.ledger.get(line.id)
        assert updated.qtde == 3
        assert updated.valor == 40


@pytest.mark.asyncio
async def test_live_subtotal(tui_session):
    from textual.widgets import Button, Input, Label

    _with_line(tui_session)
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        app.screen.query_one("#btn-edit-line", Button).press()
        await pilot.pause()
        app.screen.query_one("#linha-qtde", Input).value = "4"
        await pilot.pause()
        assert "R$ 142,00" in app.screen.query_one("#linha-subtotal", Label).render().plain


@pytest.mark.asyncio
async def test_zero_quantity_removes_line(tui_session):
    from textual.widgets import Button, Input

    line = _with_line(tui_session)
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        app.screen.query_one("#btn-edit-line", Button).press()
        await pilot.pause()
        app.screen.query_one("#linha-qtde", Input).value = "0"
        app.screen.query_one("#btn-linha-salvar", Button).press()
        await pilot.pause()
        assert tui_session.ledger.get(line.id) is None


@pytest.mark.asyncio
async def test_escape_keeps_line(tui_session):
    from textual.widgets import Button, Input

    line = _with_line(tui_session)
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        app.screen.query_one("#btn-edit-line", Button).press()
        await pilot.pause()
        app.screen.query_one("#linha-qtde", Input).value = "9"
        await pilot.press("escape")
        await pilot.pause()
        assert tui_session.ledger.get(line.id) == line


@pytest.mark.asyncio
async def test_negative_price_is_saved_as_zero(tui_session):
    from textual.widgets import Button, Input, Label

    line = _with_line(tui_session)
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        app.screen.query_one("#btn-edit-line", Button).press()
        await pilot.pause()
        app.screen.query_one("#linha-valor", Input).value = "-50"
        await pilot.pause()
        assert "R$ 0,00" in app.screen.query_one("#linha-subtotal", Label).render().plain
        app.screen.query_one("#btn-linha-salvar", Button).press()
        await pilot.pause()
        assert tui_session.ledger.get(line.id).valor == 0
