from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock


@dataclass
class RouteStats:
    requests: int = 0
    duration_ms: float = 0.0
    slowest_ms: float = 0.0
    by_status: dict[int, int] = field(default_factory=lambda: defaultdict(int))

    def as_dict(self) -> dict:
        errors = sum(count for code, count in self.by_status.items() if code >= 400)
        return {
            "total_requests": self.requests,
            "total_duration_ms": round(self.duration_ms, 2),
            "avg_duration_ms": round(self.duration_ms / self.requests, 2) if self.requests else 0.0,
            "max_duration_ms": round(self.slowest_ms, 2),
            "error_count": errors,
            "status_codes": {str(code): count for code, count in sorted(self.by_status.items())},
        }


class InMemoryRequestMetrics:
    """Contadores por rota, mantidos só em memória do processo."""

    def __init__(self) -> None:
        self._routes: dict[str, RouteStats] = {}
        self._lock = Lock()

    def observe(self, endpoint: str, method: str, status_code: int, duration_ms: float) -> None:
        route = f"{method} {endpoint}"
        with self._lock:
            stats = self._routes.get(route)
            if stats is None:
                stats = self._routes[route] = RouteStats()
            stats.requests += 1
            stats.duration_ms += duration_ms
            stats.slowest_ms = max(stats.slowest_ms, duration_ms)
            stats.by_status[status_code] += 1

    def snapshot(self) -> dict[str, dict]:
        with self._lock:
            return {route: stats.as_dict() for route, stats in self._routes.items()}

    def reset(self) -> None:
        with self._lock:
            self._routes.clear()


request_metrics = InMemoryRequestMetrics()
