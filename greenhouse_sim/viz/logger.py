"""Day-stamped session log: what the player did, what the market did."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from typing import Optional, TextIO


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    os.makedirs(parent or ".", exist_ok=True)


@dataclass
class LogEntry:
    day: int
    category: str
    message: str
    entity_ids: list[str] = field(default_factory=list)
    data: dict = field(default_factory=dict)

    def format(self) -> str:
        return f"[Day {self.day:>4}] [{self.category:<8}] {self.message}"


class SimLogger:
    """Categorised session log.

    Entries are buffered until the engine closes a game day, then echoed
    to stdout and the log file if their category clears the verbosity
    threshold. Every entry is kept for narrative and JSON export whatever
    the verbosity.
    """

    TIME = "TIME"
    MARKET = "MARKET"
    ECONOMY = "ECONOMY"
    PLOT = "PLOT"
    QUEST = "QUEST"
    CATALOG = "CATALOG"

    # Minimum verbosity at which a category is echoed
    _VERBOSITY_MAP: dict[str, int] = {
        CATALOG: 0,
        QUEST: 0,
        PLOT: 0,
        ECONOMY: 1,
        TIME: 2,
        MARKET: 3,
    }

    def __init__(
        self,
        verbosity: int = 1,
        log_file: Optional[str] = None,
        stdout: bool = True,
    ) -> None:
        """
        verbosity levels:
            0 = only catalog, quest and plot unlock events
            1 = + purchases, sales, care actions and refusals
            2 = + day boundaries
            3 = everything (daily price moves)
        """
        self.verbosity = verbosity
        self._stdout = stdout
        self._pending: list[LogEntry] = []
        self._history: list[LogEntry] = []
        self._file: Optional[TextIO] = None
        if log_file:
            _ensure_parent(log_file)
            self._file = open(log_file, "w", encoding="utf-8")

    @classmethod
    def silent(cls) -> SimLogger:
        """A logger that records entries but never echoes them."""
        return cls(verbosity=-1, stdout=False)

    def log(
        self,
        category: str,
        message: str,
        entity_ids: Optional[list[str]] = None,
        day: int = 0,
        **data,
    ) -> None:
        self._pending.append(LogEntry(day, category, message, list(entity_ids or []), data))

    @property
    def entries(self) -> list[LogEntry]:
        """All entries, flushed and pending, in order."""
        return self._history + self._pending

    def entries_for(self, category: Optional[str] = None, entity_id: Optional[str] = None) -> list[LogEntry]:
        return [
            e for e in self.entries
            if (category is None or e.category == category)
            and (entity_id is None or entity_id in e.entity_ids)
        ]

    def echoes(self, entry: LogEntry) -> bool:
        return self._VERBOSITY_MAP.get(entry.category, 1) <= self.verbosity

    def flush_day(self, day: int) -> None:
        """Echo and archive everything logged up to the end of `day`."""
        for entry in self._pending:
            if not self.echoes(entry):
                continue
            line = entry.format()
            if self._stdout:
                print(line)
            if self._file:
                self._file.write(line + "\n")

        self._history.extend(self._pending)
        self._pending = []
        if self._file:
            self._file.flush()

    def get_narrative(self, day: int) -> str:
        day_entries = [e for e in self.entries if e.day == day]
        if not day_entries:
            return f"Day {day}: Nothing notable happened."
        body = [f"  [{e.category}] {e.message}" for e in day_entries]
        return "\n".join([f"=== Day {day} ==="] + body)

    def export_json(self, filepath: str) -> None:
        _ensure_parent(filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump([asdict(e) for e in self.entries], f, indent=2)

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None
