"""Service catalog state: CRUD, CSV import, example data and selection."""

from __future__ import annotations

import asyncio
import enum
import unicodedata
from collections.abc import Callable, Iterable
from pathlib import Path

from orcamento.models.service import DEFAULT_UNIDADE, Service, new_id
from orcamento.services.csv_codec import parse_csv_file
from orcamento.services.defaults import generate_example_services
from orcamento.services.exceptions import CatalogImportError
from orcamento.services.notices import Notice, NoticeKind, Notifier
from orcamento.utils.numbers import non_negative

NEW_SERVICE_NAME = "Novo serviço"


class DeleteStatus(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    DELETING = "deleting"


def sort_key(text: str) -> str:
    """Accent- and case-insensitive key so "Água" sorts next to "agua"."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def _name_key(text: str) -> str:
    return text.strip().casefold()


def _price_text(valor: float) -> str:
    return str(int(valor)) if float(valor).is_integer() else repr(float(valor))


class CatalogManager:
    """Owns the list of services and the active selection.

    Every mutation replaces ``services`` with a new tuple and reports it
    through ``on_change``. The sorted/filtered view is recomputed on demand.
    """

    def __init__(
        self,
        services: Iterable[Service] = (),
        *,
        on_change: Callable[[tuple[Service, ...]], None] | None = None,
        notify: Notifier | None = None,
        defaults_factory: Callable[[], list[Service]] = generate_example_services,
        delete_delay: float = 0.03,
        restore_delay: float = 0.05,
    ) -> None:
        self._services: tuple[Service, ...] = tuple(services)
        self._filter = ""
        self._status: dict[str, DeleteStatus] = {}
        self._on_change = on_change
        self.notify = notify
        self._defaults_factory = defaults_factory
        self.delete_delay = delete_delay
        self.restore_delay = restore_delay
        self.restoring = False
        self.last_notice: Notice | None = None
        self.selected_id: str | None = self._services[0].id if self._services else None
        self._reconcile_selection()

    # --- Read side ---

    @property
    def services(self) -> tuple[Service, ...]:
        return self._services

    @property
    def filter_text(self) -> str:
        return self._filter

    @property
    def selected(self) -> Service | None:
        return self.get(self.selected_id) if self.selected_id else None

    def get(self, service_id: str) -> Service | None:
        return next((s for s in self._services if s.id == service_id), None)

    def visible(self) -> list[Service]:
        """Services sorted by name, restricted to those matching the filter."""
        ordered = sorted(self._services, key=lambda s: (sort_key(s.item), s.item))
        q = self._filter.strip().lower()
        if not q:
            return ordered
        return [
            s
            for s in ordered
            if any(q in field.lower() for field in (s.item, s.unidade, _price_text(s.valor)))
        ]

    def status(self, service_id: str) -> DeleteStatus:
        return self._status.get(service_id, DeleteStatus.IDLE)

    @property
    def pending_delete_id(self) -> str | None:
        return next((k for k, v in self._status.items() if v is DeleteStatus.ARMED), None)

    # --- Internals ---

    def _emit(self, kind: NoticeKind, text: str) -> Notice:
        notice = Notice(kind, text)
        self.last_notice = notice
        if self.notify is not None:
            self.notify(notice)
        return notice

    def _replace(self, services: Iterable[Service]) -> None:
        self._services = tuple(services)
        self._reconcile_selection()
        if self._on_change is not None:
            self._on_change(self._services)

    def _reconcile_selection(self) -> None:
        view = self.visible()
        if self.selected_id is None or all(s.id != self.selected_id for s in view):
            self.selected_id = view[0].id if view else None

    # --- Selection / filter ---

    def select(self, service_id: str) -> None:
        if self.get(service_id) is not None:
            self.selected_id = service_id
        self._reconcile_selection()

    def set_filter(self, text: str) -> None:
        self._filter = text
        self._reconcile_selection()

    # --- Mutations ---

    def add(self) -> Service:
        """Insert a placeholder service at the front and select it."""
        service = Service(id=new_id(), item=NEW_SERVICE_NAME, unidade=DEFAULT_UNIDADE, valor=0.0)
        self.selected_id = service.id
        self._replace((service, *self._services))
        self._emit("success", "Serviço adicionado ao catálogo")
        return service

    def edit(self, row: Service) -> Notice | None:
        """Commit edited fields for ``row.id``; invalid prices become 0."""
        if self.get(row.id) is None:
            return None
        updated = Service(id=row.id, item=row.item, unidade=row.unidade, valor=non_negative(row.valor))
        self._replace(updated if s.id == row.id else s for s in self._services)
        return self._emit("success", "Catálogo atualizado")

    async def delete(self, service_id: str | None = None) -> Notice | None:
        """Two-phase delete: the first call arms, a second call on the same id removes.

        Arming a different id disarms the previous one. Calls on an id that is
        already being deleted are ignored.
        """
        target = service_id or self.selected_id
        if target is None or self.get(target) is None:
            return None

        status = self.status(target)
        if status is DeleteStatus.DELETING:
            return None
        if status is not DeleteStatus.ARMED:
            self._status = {k: v for k, v in self._status.items() if v is DeleteStatus.DELETING}
            self._status[target] = DeleteStatus.ARMED
            return self._emit("info", "Confirme a exclusão deste serviço.")

        self._status[target] = DeleteStatus.DELETING
        self._emit("info", "Excluindo…")
        await asyncio.sleep(self.delete_delay)
        self._replace(s for s in self._services if s.id != target)
        self._status.pop(target, None)
        return self._emit("success", "Excluído com sucesso")

    def cancel_delete(self) -> None:
        """Disarm a pending delete confirmation."""
        self._status = {k: v for k, v in self._status.items() if v is not DeleteStatus.ARMED}

    def import_batch(self, rows: Iterable[Service]) -> bool:
        """Prepend decoded CSV rows. An empty batch is an error, not a no-op."""
        batch = tuple(rows)
        if not batch:
            self._emit("error", "CSV vazio ou inválido")
            return False
        self._replace((*batch, *self._services))
        self._emit("success", f"{len(batch)} serviço(s) importado(s)")
        return True

    def import_file(self, path: str | Path) -> bool:
        try:
            rows = parse_csv_file(path)
        except CatalogImportError as e:
            self._emit("error", f"Erro ao importar CSV: {e}")
            return False
        return self.import_batch(rows)

    async def restore_defaults(self, confirmed: bool) -> bool:
        """Replace the whole catalog with a fresh example set (after confirmation)."""
        if not confirmed:
            return False
        self.restoring = True
        try:
            await asyncio.sleep(self.restore_delay)
            fresh = self._defaults_factory()
            self._status = {}
            self.selected_id = fresh[0].id if fresh else None
            self._replace(fresh)
            self._emit("success", f"Catálogo de exemplo restaurado ({len(fresh)} itens)")
        finally:
            self.restoring = False
        return True

    def attach_defaults(self) -> int:
        """Add the example services whose names are not in the catalog yet."""
        existing = {_name_key(s.item) for s in self._services}
        to_add = [s for s in self._defaults_factory() if _name_key(s.item) not in existing]
        if not to_add:
            self._emit("info", "Nenhum exemplo novo para anexar")
            return 0
        self._replace((*to_add, *self._services))
        self._emit("success", f"{len(to_add)} serviço(s) de exemplo anexado(s)")
        return len(to_add)
