"""Operational context handed to the model with every request."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from tmsai.service.errors import ContextError, StoreError
from tmsai.service.store import DataStore

logger = logging.getLogger(__name__)

INSPECTION_MAX_AGE = timedelta(days=30)


@dataclass
class UserInfo:
    id: str
    name: str = ""
    role: str = ""
    organization: str = ""


@dataclass
class FleetSummary:
    total_vehicles: int = 0
    active_vehicles: int = 0
    maintenance_due: int = 0


@dataclass
class VehicleSummary:
    id: str
    name: str | None = None
    status: str | None = None
    last_inspection: str | None = None


@dataclass
class DriverSummary:
    id: str
    name: str | None = None
    status: str | None = None
    license_expiry: str | None = None


@dataclass
class RouteSummary:
    id: str
    name: str | None = None
    status: str | None = None
    estimated_time: str | None = None


@dataclass
class InspectionSummary:
    id: str
    vehicle_id: str | None = None
    status: str | None = None
    date: str | None = None


@dataclass
class MaintenanceSummary:
    id: str
    vehicle_id: str | None = None
    type: str | None = None
    due_date: str | None = None


@dataclass
class ComplianceFlags:
    dvsa_compliant: bool = True
    licenses_valid: bool = True
    inspections_up_to_date: bool = True


@dataclass
class TMSContext:
    user: UserInfo
    fleet: FleetSummary = field(default_factory=FleetSummary)
    vehicles: list[VehicleSummary] = field(default_factory=list)
    drivers: list[DriverSummary] = field(default_factory=list)
    routes: list[RouteSummary] = field(default_factory=list)
    inspections: list[InspectionSummary] = field(default_factory=list)
    maintenance: list[MaintenanceSummary] = field(default_factory=list)
    compliance: ComplianceFlags = field(default_factory=ComplianceFlags)


def parse_timestamp(value: Any) -> datetime | None:
    """ISO date or datetime string to an aware datetime (UTC when unzoned)."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def licenses_valid(drivers: list[dict[str, Any]], now: datetime) -> bool:
    """Every driver holds a licence expiring after now. Unknown expiry counts as invalid."""
    for driver in drivers:
        expiry = parse_timestamp(driver.get("license_expiry_date"))
        if expiry is None or expiry <= now:
            return False
    return True


def inspections_up_to_date(inspections: list[dict[str, Any]], now: datetime) -> bool:
    """Every inspection on record happened within the last 30 days."""
    cutoff = now - INSPECTION_MAX_AGE
    for inspection in inspections:
        when = parse_timestamp(inspection.get("inspection_date"))
        if when is None or when <= cutoff:
            return False
    return True


def dvsa_compliant(vehicles: list[dict[str, Any]], inspections: list[dict[str, Any]]) -> bool:
    """Every vehicle has at least one inspection on record that did not fail."""
    passed = {
        i.get("vehicle_id")
        for i in inspections
        if str(i.get("status", "")).lower() not in ("failed", "fail")
    }
    return all(v.get("id") in passed for v in vehicles)


class ContextManager:
    """Build a user's operational context from the data store."""

    def __init__(self, store: DataStore, clock: Callable[[], datetime] = _utcnow) -> None:
        self.store = store
        self._clock = clock
        self._context: TMSContext | None = None

    def build_context(self, user_id: str) -> TMSContext:
        try:
            profile = self.store.get_profile(user_id) or {}
            org = profile.get("organization_id") or ""
            vehicles = self.store.list_records("vehicles", org)
            drivers = self.store.list_records("drivers", org)
            inspections = self.store.list_records("inspections", org)
            maintenance = self.store.list_records("maintenance", org)
        except StoreError as e:
            logger.error("Error building context for %s: %s", user_id, e)
            raise ContextError(user_id) from e

        now = self._clock()
        due = 0
        for m in maintenance:
            due_date = parse_timestamp(m.get("due_date"))
            if due_date is not None and due_date <= now:
                due += 1

        self._context = TMSContext(
            user=UserInfo(
                id=profile.get("id") or user_id,
                name=profile.get("full_name") or "",
                role=profile.get("role") or "",
                organization=org,
            ),
            fleet=FleetSummary(
                total_vehicles=len(vehicles),
                active_vehicles=sum(1 for v in vehicles if v.get("status") == "active"),
                maintenance_due=due,
            ),
            vehicles=[
                VehicleSummary(v.get("id"), v.get("vehicle_name"), v.get("status"), v.get("last_inspection_date"))
                for v in vehicles
            ],
            drivers=[
                DriverSummary(d.get("id"), d.get("full_name"), d.get("status"), d.get("license_expiry_date"))
                for d in drivers
            ],
            inspections=[
                InspectionSummary(i.get("id"), i.get("vehicle_id"), i.get("status"), i.get("inspection_date"))
                for i in inspections
            ],
            maintenance=[
                MaintenanceSummary(m.get("id"), m.get("vehicle_id"), m.get("maintenance_type"), m.get("due_date"))
                for m in maintenance
            ],
            compliance=ComplianceFlags(
                dvsa_compliant=dvsa_compliant(vehicles, inspections),
                licenses_valid=licenses_valid(drivers, now),
                inspections_up_to_date=inspections_up_to_date(inspections, now),
            ),
        )
        return self._context

    def get_context(self) -> TMSContext | None:
        return self._context
