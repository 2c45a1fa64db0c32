import threading
from datetime import timedelta
from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class DiagnosticSink(Protocol):
    """Collector of per-call timing and trace records.

    The request builder never reads from a sink; it only appends to it.
    """

    def cat(self, name: str) -> None: ...

    def add_statement(
        self, category: str, duration: timedelta, records: Sequence[Any]
    ) -> None: ...

    def calculate_total_time(self) -> None: ...


class DebugCollector:
    """In-memory :class:`DiagnosticSink`.

    Statements are grouped by category in first-seen order. Each category keeps
    its accumulated duration; ``total_time`` is the sum over all categories as of
    the last ``calculate_total_time`` call.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._categories: List[str] = []
        self._statements: Dict[str, List[Any]] = {}
        self._durations: Dict[str, timedelta] = {}
        self.total_time = timedelta(0)

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    def cat(self, name: str) -> None:
        with self._lock:
            if name not in self._statements:
                self._categories.append(name)
                self._statements[name] = []
                self._durations[name] = timedelta(0)

    def add_statement(
        self, category: str, duration: timedelta, records: Sequence[Any]
    ) -> None:
        self.cat(category)
        with self._lock:
            self._statements[category].extend(records)
            self._durations[category] += duration

    def calculate_total_time(self) -> None:
        with self._lock:
            self.total_time = sum(self._durations.values(), timedelta(0))

    def statements(self, category: str) -> List[Any]:
        with self._lock:
            return list(self._statements.get(category, []))

    def duration(self, category: str) -> timedelta:
        with self._lock:
            return self._durations.get(category, timedelta(0))

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "total_time": self.total_time.total_seconds(),
                "categories": {
                    name: {
                        "duration": self._durations[name].total_seconds(),
                        "statements": [
                            record.to_dict() if hasattr(record, "to_dict") else record
                            for record in self._statements[name]
                        ],
                    }
                    for name in self._categories
                },
            }
