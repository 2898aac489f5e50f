from __future__ import annotations

from unittest.mock import patch

import pytest

from orcamento.config import Settings
from orcamento.models.service import Service
from orcamento.services.session import QuoteSession
from orcamento.utils.store import JsonStore


@pytest.fixture
def mock_config(tmp_path):
    """Point every directory lookup at tmp_path so the TUI never touches real files."""
    with (
        patch("orcamento.config.get_data_dir", return_value=tmp_path / "data"),
        patch("orcamento.config.get_config_dir", return_value=tmp_path / "config"),
        patch("orcamento.config.get_downloads_dir", return_value=tmp_path / "downloads"),
    ):
        yield tmp_path


@pytest.fixture
def tui_session(mock_config) -> QuoteSession:
    """Session with a small known catalog and no artificial delays."""
    store = JsonStore(mock_config / "data")
    store.save(
        "svc:list",
        [
            Service(id="s-varal", item="Instalar Varal de Teto", unidade="unitário", valor=100.0).to_dict(),
            Service(id="s-pintura", item="Pintura de Parede", unidade="metro", valor=35.5).to_dict(),
        ],
    )
    return QuoteSession(store, settings=Settings(atraso_exclusao=0, atraso_restauracao=0))
