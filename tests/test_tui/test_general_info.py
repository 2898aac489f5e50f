from __future__ import annotations

import pytest

from orcamento.tui.app import OrcamentoApp
from orcamento.tui.screens.dashboard import DashboardScreen
from orcamento.tui.screens.general_info import GeneralInfoScreen


@pytest.mark.asyncio
async def test_general_screen_opens_with_g(tui_session):
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        await pilot.press("g")
        assert isinstance(app.screen, GeneralInfoScreen)


@pytest.mark.asyncio
async def test_general_form_prefilled(tui_session):
    from textual.widgets import Input

    tui_session.update_general(cliente="Maria Souza", desconto=12.5, validade_dias=30)
    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        await pilot.press("g")
        await pilot.pause()
        assert app.screen.query_one("#geral-cliente", Input).value == "Maria Souza"
        assert app.screen.query_one("#geral-desconto", Input).value == "12,50"
        assert app.screen.query_one("#geral-validade", Input).value == "30"


@pytest.mark.asyncio
async def test_general_save_updates_session_and_totals(tui_session):
    from textual.widgets import Button, Input, Static

    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        await pilot.press("g")
        await pilot.pause()
        screen = app.screen
        screen.query_one("#geral-cliente", Input).value = "João"
        screen.query_one("#geral-deslocamento", Input).value = "1.234,50"
        screen.query_one("#geral-desconto", Input).value = "abc"
        screen.query_one("#btn-geral-salvar", Button).press()
        await pilot.pause()

        assert isinstance(app.screen, DashboardScreen)
        assert tui_session.general.cliente == "João"
        assert tui_session.general.deslocamento == 1234.5
        assert tui_session.general.desconto == 0
        totals = app.screen.query_one("#totals", Static).render().plain
        assert "R$ 1.234,50" in totals
        summary = app.screen.query_one("#general-summary", Static).render().plain
        assert "João" in summary


@pytest.mark.asyncio
async def test_general_escape_discards(tui_session):
    from textual.widgets import Input

    app = OrcamentoApp(session=tui_session)
    async with app.run_test() as pilot:
        await pilot.press("g")
        await pilot.pause()
        app.screen.query_one("#geral-cliente", Input).value = "Descartado"
        await pilot.press("escape")
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)
        assert tui_session.general.cliente == ""
