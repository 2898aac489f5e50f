"""Quote session: the three persisted collections wired to the local store."""

from __future__ import annotations

import logging
from collections.abc import Callable

from orcamento import config as _config
from orcamento.models.general import GeneralInfo
from orcamento.models.service import BudgetItem, Service
from orcamento.services.catalog import CatalogManager
from orcamento.services.defaults import generate_example_services
from orcamento.services.ledger import BudgetLedger, Totals
from orcamento.services.notices import Notifier
from orcamento.utils.store import JsonStore

logger = logging.getLogger(__name__)


def _rows(raw: object, factory: Callable[[dict], object]) -> list:
    """Decode a stored list of dicts, skipping entries that are not dicts."""
    if not isinstance(raw, list):
        return []
    return [factory(d) for d in raw if isinstance(d, dict)]


class QuoteSession:
    """Loads catalog, budget and general info, and saves each one on every change."""

    def __init__(
        self,
        store: JsonStore | None = None,
        *,
        settings: _config.Settings | None = None,
        notify: Notifier | None = None,
    ) -> None:
        self.store = store or JsonStore()
        self.settings = settings or _config.Settings()

        services = self._load_services()
        self.catalog = CatalogManager(
            services,
            on_change=self._save_services,
            notify=notify,
            delete_delay=self.settings.atraso_exclusao,
            restore_delay=self.settings.atraso_restauracao,
        )
        self.ledger = BudgetLedger(
            _rows(self.store.load(_config.BUDGET_KEY, []), BudgetItem.from_dict),
            on_change=self._save_budget,
        )
        self.general = self._load_general()

    @classmethod
    def from_config(cls, *, notify: Notifier | None = None) -> QuoteSession:
        """Session rooted at the configured data dir with settings.yaml applied."""
        return cls(JsonStore(), settings=_config.load_settings(), notify=notify)

    # --- Loading ---

    def _load_services(self) -> list[Service]:
        raw = self.store.load(_config.CATALOG_KEY, None)
        if raw is None:
            return generate_example_services()
        if not isinstance(raw, list):
            logger.warning("Stored catalog is not a list; using the example catalog")
            return generate_example_services()
        return _rows(raw, Service.from_dict)

    def _load_general(self) -> GeneralInfo:
        raw = self.store.load(_config.GENERAL_KEY, None)
        if not isinstance(raw, dict):
            return GeneralInfo(validade_dias=self.settings.validade_dias)
        return GeneralInfo.from_dict(raw, validade_dias=self.settings.validade_dias)

    # --- Saving (fire-and-forget) ---

    def _save_services(self, services: tuple[Service, ...]) -> None:
        self.store.save(_config.CATALOG_KEY, [s.to_dict() for s in services])

    def _save_budget(self, items: tuple[BudgetItem, ...]) -> None:
        self.store.save(_config.BUDGET_KEY, [i.to_dict() for i in items])

    def _save_general(self) -> None:
        self.store.save(_config.GENERAL_KEY, self.general.to_dict())

    def save_all(self) -> None:
        """Persist every collection, e.g. right after the first load."""
        self._save_services(self.catalog.services)
        self._save_budget(self.ledger.items)
        self._save_general()

    # --- General info / totals ---

    def update_general(self, **changes) -> GeneralInfo:
        self.general = self.general.with_changes(**changes)
        self._save_general()
        return self.general

    def totals(self) -> Totals:
        return self.ledger.compute_totals(self.general)
