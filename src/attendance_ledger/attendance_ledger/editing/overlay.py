"""Edit buffers layered over the persisted grid.

Each table id is either in VIEW (no buffer) or in EDIT (one open buffer).
``start`` copies the displayed value of every editable cell into a fresh
buffer, ``mutate`` changes buffered cells only, ``save`` commits cell by
cell and always closes the buffer, ``cancel`` drops the buffer without
contacting the store. Distinct table ids are independent.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Generic, Hashable, Mapping, TypeVar

from ..core.enums import EditMode
from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger("attendance_ledger.editing")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class CommitError:
    """One failed item of a batch; reported, never raised."""

    key: Any
    kind: str
    message: str


@dataclass(frozen=True)
class SaveReport:
    table_id: str
    committed: tuple = ()
    errors: tuple[CommitError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


class EditOverlayManager(ABC, Generic[K, V]):
    """State machine of edit buffers, keyed by table id.

    Subclasses say which cells a table has (``editable_cells``), how a
    partial change is merged (``merge``), what makes a cell committable
    (``validate``) and how it reaches the store (``commit``).
    """

    def __init__(self, session):
        self._session = session
        self._buffers: dict[str, dict[K, V]] = {}

    # --- queries ---------------------------------------------------------

    def mode(self, table_id: str) -> EditMode:
        return EditMode.EDIT if table_id in self._buffers else EditMode.VIEW

    def is_editing(self, table_id: str) -> bool:
        return table_id in self._buffers

    def open_tables(self) -> list[str]:
        return list(self._buffers)

    def buffer(self, table_id: str) -> dict[K, V]:
        return dict(self._require_buffer(table_id))

    # --- transitions -----------------------------------------------------

    def start(self, table_id: str, *, horizon: date) -> dict[K, V]:
        if table_id in self._buffers:
            raise ValidationError(f"Table {table_id} is already being edited.")
        cells = dict(self.editable_cells(self._session.snapshot, table_id, horizon=horizon))
        self._buffers[table_id] = cells
        return dict(cells)

    def mutate(self, table_id: str, cell_key: K, partial: Mapping[str, Any]) -> V:
        buf = self._require_buffer(table_id)
        if cell_key not in buf:
            raise ValidationError(f"Cell {cell_key!r} is not editable in table {table_id}.")
        buf[cell_key] = self.merge(buf[cell_key], partial)
        return buf[cell_key]

    def save(self, table_id: str, *, horizon: date) -> SaveReport:
        buf = self._require_buffer(table_id)
        committed: list[K] = []
        errors: list[CommitError] = []

        try:
            for key, value in buf.items():
                if not self.should_commit(value):
                    continue
                try:
                    self.validate(self._session.snapshot, table_id, key, value, horizon=horizon)
                    self.commit(table_id, key, value)
                except DomainError as e:
                    logger.warning(
                        "cell not saved",
                        extra={"table_id": table_id, "cell": str(key), "error": str(e)},
                    )
                    errors.append(CommitError(key=key, kind=e.kind, message=str(e)))
                else:
                    committed.append(key)
        finally:
            self._buffers.pop(table_id, None)

        logger.info(
            "table saved",
            extra={"table_id": table_id, "committed": len(committed), "failed": len(errors)},
        )
        self._session.refresh()
        return SaveReport(table_id=table_id, committed=tuple(committed), errors=tuple(errors))

    def cancel(self, table_id: str) -> None:
        # Requests already sent cannot be retracted; only the local buffer goes.
        self._buffers.pop(table_id, None)

    # --- hooks -----------------------------------------------------------

    @abstractmethod
    def editable_cells(self, snapshot, table_id: str, *, horizon: date) -> Mapping[K, V]:
        raise NotImplementedError

    def merge(self, current: V, partial: Mapping[str, Any]) -> V:
        return replace(current, **dict(partial))

    def should_commit(self, value: V) -> bool:
        return True

    @abstractmethod
    def validate(self, snapshot, table_id: str, key: K, value: V, *, horizon: date) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self, table_id: str, key: K, value: V) -> None:
        raise NotImplementedError

    def _require_buffer(self, table_id: str) -> dict[K, V]:
        buf = self._buffers.get(table_id)
        if buf is None:
            raise ValidationError(f"Table {table_id} is not in edit mode.")
        return buf
