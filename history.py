"""Historial acotado de evaluaciones (solo en memoria)."""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from config import HISTORY_CAPACITY


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"


class HistoryStore:
    """Entradas ordenadas de la más reciente a la más antigua."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("La capacidad debe ser positiva")
        self._capacity = capacity
        self._entries: List[HistoryEntry] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    @property
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[0] if self._entries else None

    def record(self, expression: str, result: str) -> HistoryEntry:
        """Antepone una entrada y descarta las más antiguas sobre la capacidad."""
        entry = HistoryEntry(expression, result)
        self._entries = [entry, *self._entries][: self._capacity]
        return entry

    def clear(self) -> None:
        self._entries = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]
