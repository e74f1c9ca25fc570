import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

import requests

from dashboard.state import DashboardState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything one dashboard render needs, fetched for a single state."""

    state: DashboardState
    transactions: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    total_pages: int = 0
    statistics: dict[str, Any] = field(default_factory=dict)
    bar_chart: dict[str, int] = field(default_factory=dict)
    pie_chart: dict[str, int] = field(default_factory=dict)


class DashboardClient:
    """
    Loads dashboard data from the query service.

    Every load gets a sequence number; a load that finishes after a newer
    one was issued is dropped so an older response never overwrites a
    newer one. Failed loads keep the previous snapshot.
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        per_page: int | None = None,
    ):
        self.base_url = (base_url or os.getenv("DASHBOARD_API_URL", "http://localhost:5000")).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else float(os.getenv("DASHBOARD_TIMEOUT_SECONDS", "10"))
        self.per_page = per_page
        self.snapshot: DashboardSnapshot | None = None

        self._lock = threading.Lock()
        self._issued = 0

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get_json(self, path: str, params: dict) -> Any:
        resp = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _next_sequence(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def load(self, state: DashboardState) -> DashboardSnapshot | None:
        seq = self._next_sequence()

        with ThreadPoolExecutor(max_workers=2) as pool:
            transactions_future = pool.submit(
                self._get_json, "/api/transactions", state.transaction_params(self.per_page)
            )
            combined_future = pool.submit(
                self._get_json, "/api/combined-data", {"month": state.selected_month}
            )

            try:
                page = transactions_future.result()
                combined = combined_future.result()
            except (requests.RequestException, ValueError) as exc:
                logger.error("Error fetching data: %s", exc)
                return self.snapshot

        snapshot = DashboardSnapshot(
            state=state,
            transactions=list(page.get("data") or []),
            total=int(page.get("total") or 0),
            total_pages=int(page.get("totalPages") or 0),
            statistics=dict(combined.get("statistics") or {}),
            bar_chart=dict(combined.get("barChart") or {}),
            pie_chart=dict(combined.get("pieChart") or {}),
        )

        with self._lock:
            if seq != self._issued:
                logger.info("Discarding stale dashboard response seq=%s latest=%s", seq, self._issued)
                return self.snapshot
            self.snapshot = snapshot
        return snapshot
