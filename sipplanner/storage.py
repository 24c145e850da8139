"""SQLite-backed key/value store for saved scenarios, portfolios and the risk profile.

Values are stored as JSON under the same keys the browser client used in
localStorage, so an exported bundle can be imported on either side.

Every read-modify-write (append a scenario, upsert a portfolio, ...) runs in
a single ``BEGIN IMMEDIATE`` transaction, so concurrent requests queue on
SQLite's write lock instead of overwriting each other's lists.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

logger = logging.getLogger(__name__)

SIP_SCENARIOS = "sipScenarios"
PORTFOLIOS = "portfolios"
RISK_PROFILE = "riskProfile"
COMPARISON_SIPS = "comparisonSIPs"

IMPORTABLE_KEYS = (SIP_SCENARIOS, PORTFOLIOS, RISK_PROFILE, COMPARISON_SIPS)

# seconds a writer waits on the lock before sqlite3 gives up
LOCK_TIMEOUT = 30.0


def generate_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _read(conn: sqlite3.Connection, key: str) -> Any:
    row = conn.execute("select value from storage where key = ?", (key,)).fetchone()
    if row is None:
        return None
    try:
        return json.loads(row["value"])
    except json.JSONDecodeError:
        logger.error("Stored value for key %r is not valid JSON; treating it as missing", key)
        return None


def _write(conn: sqlite3.Connection, key: str, value: Any) -> None:
    conn.execute(
        """
        insert into storage (key, value, updated_at)
        values (?, ?, ?)
        on conflict(key) do update set value = excluded.value, updated_at = excluded.updated_at
        """,
        (key, json.dumps(value), _utcnow()),
    )


class Store:
    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=LOCK_TIMEOUT)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """One connection holding the write lock from first read to commit."""
        conn = self._connect()
        conn.isolation_level = None
        try:
            conn.execute("begin immediate")
            try:
                yield conn
            except BaseException:
                conn.execute("rollback")
                raise
            conn.execute("commit")
        finally:
            conn.close()

    def init_db(self) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                create table if not exists storage (
                    key text primary key,
                    value text not null,
                    updated_at text not null
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---------- raw key/value ----------

    def get(self, key: str) -> Any:
        conn = self._connect()
        try:
            return _read(conn, key)
        finally:
            conn.close()

    def set(self, key: str, value: Any) -> None:
        with self._transaction() as conn:
            _write(conn, key, value)

    def remove(self, key: str) -> None:
        with self._transaction() as conn:
            conn.execute("delete from storage where key = ?", (key,))

    def clear(self) -> None:
        with self._transaction() as conn:
            conn.execute("delete from storage")
        logger.info("Cleared all stored data in %s", self.db_path)

    def size(self) -> int:
        """Approximate stored size in characters (keys + JSON values)."""
        conn = self._connect()
        try:
            row = conn.execute(
                "select coalesce(sum(length(key) + length(value)), 0) as total from storage"
            ).fetchone()
        finally:
            conn.close()
        return int(row["total"])

    def size_kb(self) -> float:
        return round(self.size() / 1024, 2)

    # ---------- SIP scenarios ----------

    def sip_scenarios(self) -> List[Dict[str, Any]]:
        return self.get(SIP_SCENARIOS) or []

    def save_sip_scenario(self, scenario: Dict[str, Any]) -> List[Dict[str, Any]]:
        with self._transaction() as conn:
            scenarios = _read(conn, SIP_SCENARIOS) or []
            scenarios.append(scenario)
            _write(conn, SIP_SCENARIOS, scenarios)
        return scenarios

    def delete_sip_scenario(self, index: int) -> bool:
        with self._transaction() as conn:
            scenarios = _read(conn, SIP_SCENARIOS) or []
            if not 0 <= index < len(scenarios):
                return False
            del scenarios[index]
            _write(conn, SIP_SCENARIOS, scenarios)
        return True

    # ---------- portfolios ----------

    def portfolios(self) -> List[Dict[str, Any]]:
        return self.get(PORTFOLIOS) or []

    def save_portfolio(self, portfolio: Dict[str, Any]) -> Dict[str, Any]:
        """Insert, or replace the portfolio with the same id."""
        portfolio = dict(portfolio)
        if not portfolio.get("id"):
            portfolio["id"] = generate_id()

        with self._transaction() as conn:
            portfolios = _read(conn, PORTFOLIOS) or []
            for index, existing in enumerate(portfolios):
                if existing.get("id") == portfolio["id"]:
                    portfolios[index] = portfolio
                    break
            else:
                portfolios.append(portfolio)
            _write(conn, PORTFOLIOS, portfolios)
        return portfolio

    def portfolio(self, portfolio_id: str) -> Optional[Dict[str, Any]]:
        for portfolio in self.portfolios():
            if portfolio.get("id") == portfolio_id:
                return portfolio
        return None

    def delete_portfolio(self, portfolio_id: str) -> bool:
        with self._transaction() as conn:
            portfolios = _read(conn, PORTFOLIOS) or []
            remaining = [p for p in portfolios if p.get("id") != portfolio_id]
            if len(remaining) == len(portfolios):
                return False
            _write(conn, PORTFOLIOS, remaining)
        return True

    # ---------- risk profile ----------

    def risk_profile(self) -> Optional[Dict[str, Any]]:
        return self.get(RISK_PROFILE)

    def save_risk_profile(self, profile: Dict[str, Any]) -> None:
        self.set(RISK_PROFILE, profile)

    # ---------- bulk ----------

    def export_all(self) -> Dict[str, Any]:
        conn = self._connect()
        try:
            return {
                SIP_SCENARIOS: _read(conn, SIP_SCENARIOS) or [],
                PORTFOLIOS: _read(conn, PORTFOLIOS) or [],
                RISK_PROFILE: _read(conn, RISK_PROFILE),
                COMPARISON_SIPS: _read(conn, COMPARISON_SIPS) or [],
                "exportDate": _utcnow(),
            }
        finally:
            conn.close()

    def import_data(self, data: Dict[str, Any]) -> List[str]:
        """Overwrite every known key present (and truthy) in ``data``.

        Values are written as given; the API validates their shape first.
        """
        imported = []
        with self._transaction() as conn:
            for key in IMPORTABLE_KEYS:
                if data.get(key):
                    _write(conn, key, data[key])
                    imported.append(key)
        logger.info("Imported keys %s into %s", imported, self.db_path)
        return imported


__all__ = [
    "SIP_SCENARIOS",
    "PORTFOLIOS",
    "RISK_PROFILE",
    "COMPARISON_SIPS",
    "Store",
    "generate_id",
]
