"""
Local (On-Device) State Storage

Everything the device keeps lives in one small JSON document:

    {
        "is_onboarded": false,
        "incomes": [...],           # local-only, never replicated
        "savings": [...],           # local ledger, read by reports
        "pending_savings": [...]    # not yet replicated, insertion order
    }

The document is rewritten atomically (temp file + rename) on every
change. With path=None the state is kept in memory only.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from src.models.income import Income, dump_incomes, parse_incomes
from src.models.saving import Saving
from src.services.storage.interface import (
    DuplicateError,
    IncomeStoreInterface,
    NotFoundError,
    PendingSavingsQueueInterface,
    SavingLedgerInterface,
    StorageError,
)


def _empty_state() -> dict:
    return {
        "is_onboarded": False,
        "incomes": [],
        "savings": [],
        "pending_savings": [],
    }


class LocalStateStore(
    IncomeStoreInterface,
    SavingLedgerInterface,
    PendingSavingsQueueInterface,
):
    """
    JSON-file implementation of all on-device storage capabilities.

    The same object is handed to the income flow (as an income store)
    and to the sync service (as ledger and queue), but each consumer
    only sees the interface it was typed against.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path is not None else None
        self._incomes: list = []
        self._savings: list[Saving] = []
        self._pending: list[Saving] = []
        self._is_onboarded = False
        self._load()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            return

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read local state {self._path}: {e}")

        state = {**_empty_state(), **raw}
        try:
            self._incomes = parse_incomes(state["incomes"])
            self._savings = [Saving.model_validate(s) for s in state["savings"]]
            self._pending = [Saving.model_validate(s) for s in state["pending_savings"]]
        except ValidationError as e:
            raise StorageError(f"Local state {self._path} is malformed: {e}")
        self._is_onboarded = bool(state["is_onboarded"])

    def _to_document(self) -> dict:
        return {
            "is_onboarded": self._is_onboarded,
            "incomes": dump_incomes(self._incomes),
            "savings": [s.model_dump(mode="json") for s in self._savings],
            "pending_savings": [s.model_dump(mode="json") for s in self._pending],
        }

    def _save(self) -> None:
        if self._path is None:
            return

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(self._to_document(), tmp, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write local state {self._path}: {e}")

    # -------------------------------------------------------------------------
    # Onboarding flag
    # -------------------------------------------------------------------------

    @property
    def is_onboarded(self) -> bool:
        return self._is_onboarded

    def set_onboarded(self, value: bool) -> None:
        self._is_onboarded = value
        self._save()

    def clear_all(self) -> None:
        """Forget everything stored on the device."""
        self._incomes = []
        self._savings = []
        self._pending = []
        self._is_onboarded = False
        self._save()

    # -------------------------------------------------------------------------
    # IncomeStoreInterface
    # -------------------------------------------------------------------------

    def list_incomes(self) -> list[Income]:
        return list(self._incomes)

    def add_income(self, income: Income) -> None:
        if any(existing.id == income.id for existing in self._incomes):
            raise DuplicateError(f"Income already exists: {income.id}")
        self._incomes.append(income)
        self._save()

    def update_income(self, income: Income) -> None:
        for idx, existing in enumerate(self._incomes):
            if existing.id == income.id:
                self._incomes[idx] = income
                self._save()
                return
        raise NotFoundError(f"Income not found: {income.id}")

    def remove_income(self, income_id: str) -> bool:
        remaining = [income for income in self._incomes if income.id != income_id]
        if len(remaining) == len(self._incomes):
            return False
        self._incomes = remaining
        self._save()
        return True

    def replace_incomes(self, incomes: list[Income]) -> None:
        self._incomes = list(incomes)
        self._save()

    # -------------------------------------------------------------------------
    # SavingLedgerInterface
    # -------------------------------------------------------------------------

    def append_saving(self, saving: Saving) -> None:
        self._savings.append(saving)
        self._save()

    def list_savings(self) -> list[Saving]:
        return list(self._savings)

    def replace_savings(self, savings: list[Saving]) -> None:
        self._savings = list(savings)
        self._save()

    # -------------------------------------------------------------------------
    # PendingSavingsQueueInterface
    # -------------------------------------------------------------------------

    def enqueue(self, saving: Saving) -> None:
        self._pending.append(saving)
        self._save()

    def peek_all(self) -> list[Saving]:
        return list(self._pending)

    def clear(self) -> None:
        self._pending = []
        self._save()
