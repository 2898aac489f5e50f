from __future__ import annotations

import pytest

from orcamento.config import Settings
from orcamento.models.general import GeneralInfo
from orcamento.models.service import BudgetItem, Service
from orcamento.services.catalog import CatalogManager
from orcamento.services.session import QuoteSession
from orcamento.utils.store import JsonStore

# --- Catalog fixtures ---


@pytest.fixture
def services() -> list[Service]:
    return [
        Service(id="s-varal", item="Instalar Varal de Teto", unidade="unitário", valor=100.0),
        Service(id="s-pintura", item="Pintura de Parede", unidade="metro", valor=35.5),
        Service(id="s-agua", item="Água: reparo de vazamento", unidade="unitário", valor=180.0),
    ]


@pytest.fixture
def example_services() -> list[Service]:
    """Small stand-in for the bundled example catalog, with fixed ids and prices."""
    return [
        Service(id="ex-1", item="Instalar Cortina", unidade="unitário", valor=120.0),
        Service(id="ex-2", item="Pintura de Parede", unidade="unitário", valor=200.0),
        Service(id="ex-3", item="Trocar Torneira", unidade="unitário", valor=90.0),
    ]


@pytest.fixture
def notices() -> list:
    return []


@pytest.fixture
def catalog(services, example_services, notices) -> CatalogManager:
    return CatalogManager(
        services,
        notify=notices.append,
        defaults_factory=lambda: list(example_services),
        delete_delay=0,
        restore_delay=0,
    )


# --- Budget fixtures ---


@pytest.fixture
def budget_items() -> list[BudgetItem]:
    return [
        BudgetItem(id="b-1", item="Instalar Varal de Teto", unidade="unitário", valor=100.0, qtde=2),
        BudgetItem(id="b-2", item="Trocar Torneira", unidade="unitário", valor=50.0, qtde=1),
    ]


@pytest.fixture
def general() -> GeneralInfo:
    return GeneralInfo(cliente="Maria Souza", data="2025-01-31", deslocamento=10, taxas=5, desconto=1000)


# --- Store / session fixtures ---


@pytest.fixture
def store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path)


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(atraso_exclusao=0, atraso_restauracao=0)


@pytest.fixture
def session(store, fast_settings) -> QuoteSession:
    return QuoteSession(store, settings=fast_settings)
