"""Backend data store boundary.

The assistant only needs a handful of CRUD calls: a user's profile, the
organization's records per table, and inserting conversation logs.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from tmsai.service.errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_TABLES = {
    "profiles": "profiles",
    "vehicles": "vehicles",
    "drivers": "drivers",
    "inspections": "vehicle_inspections",
    "maintenance": "maintenance_schedule",
    "conversations": "ai_conversations",
}


class DataStore(ABC):
    """Opaque CRUD access by logical table name."""

    def __init__(self, tables: dict[str, str] | None = None) -> None:
        self.tables = {**DEFAULT_TABLES, **(tables or {})}

    def table(self, name: str) -> str:
        return self.tables.get(name, name)

    @abstractmethod
    def get_profile(self, user_id: str) -> dict[str, Any] | None:
        """Return the profile row for user_id, or None."""

    @abstractmethod
    def list_records(self, table: str, organization_id: str) -> list[dict[str, Any]]:
        """Return every row of table belonging to organization_id."""

    @abstractmethod
    def insert(self, table: str, row: dict[str, Any]) -> None:
        """Insert one row into table."""


class InMemoryStore(DataStore):
    """Dict-backed store for development and tests."""

    def __init__(self, records: dict[str, list[dict[str, Any]]] | None = None, tables: dict[str, str] | None = None) -> None:
        super().__init__(tables)
        self.records: dict[str, list[dict[str, Any]]] = {k: list(v) for k, v in (records or {}).items()}

    def get_profile(self, user_id: str) -> dict[str, Any] | None:
        for row in self.records.get(self.table("profiles"), []):
            if row.get("id") == user_id:
                return row
        return None

    def list_records(self, table: str, organization_id: str) -> list[dict[str, Any]]:
        return [r for r in self.records.get(self.table(table), []) if r.get("organization_id") == organization_id]

    def insert(self, table: str, row: dict[str, Any]) -> None:
        self.records.setdefault(self.table(table), []).append(dict(row))


class SupabaseStore(DataStore):
    """Store backed by a Supabase project's REST (PostgREST) endpoint."""

    def __init__(
        self,
        url: str,
        key: str,
        tables: dict[str, str] | None = None,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(tables)
        if not url or not key:
            raise ValueError("Supabase url and key are required")
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        })

    def _get(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        physical = self.table(table)
        try:
            resp = self.session.get(f"{self.base_url}/{physical}", params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise StoreError("select", physical, f"Data store select on '{physical}' failed: {e}") from e

    def get_profile(self, user_id: str) -> dict[str, Any] | None:
        rows = self._get("profiles", {"select": "*", "id": f"eq.{user_id}", "limit": "1"})
        return rows[0] if rows else None

    def list_records(self, table: str, organization_id: str) -> list[dict[str, Any]]:
        return self._get(table, {"select": "*", "organization_id": f"eq.{organization_id}"})

    def insert(self, table: str, row: dict[str, Any]) -> None:
        physical = self.table(table)
        try:
            resp = self.session.post(
                f"{self.base_url}/{physical}",
                json=row,
                headers={"Prefer": "return=minimal"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise StoreError("insert", physical, f"Data store insert on '{physical}' failed: {e}") from e


def create_store(config: dict[str, Any]) -> DataStore:
    """Supabase store when configured, otherwise an empty in-memory store."""
    section = config.get("store", {})
    tables = section.get("tables")
    if section.get("url") and section.get("key"):
        return SupabaseStore(section["url"], section["key"], tables=tables, timeout=section.get("timeout", 30))
    logger.warning("No data store configured; using an empty in-memory store")
    return InMemoryStore(tables=tables)
