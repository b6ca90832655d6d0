"""Compliance checks, incident analysis and DVSA assessments."""

from typing import Any

from tmsai.agents.base import BaseAgent, now_iso, range_bounds
from tmsai.llm.prompt_manager import bullet_lines, count_where, field, to_json
from tmsai.models.compliance import (
    ComplianceCheck,
    ComplianceCheckReport,
    DVSACompliance,
    IncidentAnalysis,
    RegulatoryUpdate,
    RegulatoryUpdateList,
    SafetyIncident,
)


class ComplianceSafetyAgent(BaseAgent):
    role = "Compliance & Safety AI Agent"

    def check_compliance(
        self,
        vehicles: list[dict[str, Any]],
        drivers: list[dict[str, Any]],
        inspections: list[dict[str, Any]],
    ) -> list[ComplianceCheck]:
        context = self._require_context()
        prompt = self._prompt(
            "compliance_check",
            total_vehicles=len(vehicles),
            total_drivers=len(drivers),
            total_inspections=len(inspections),
            fleet_status=to_json(context.fleet),
            vehicles=bullet_lines(vehicles, lambda v: (
                f"{v.get('vehicle_name')} ({v.get('id')}): {v.get('status')}, "
                f"Type: {field(v, 'vehicle_type')}, Last Inspection: {field(v, 'last_inspection_date')}"
            )),
            drivers=bullet_lines(drivers, lambda d: (
                f"{d.get('full_name')} ({d.get('id')}): {d.get('status')}, "
                f"License: {field(d, 'license_type')}, "
                f"Expiry: {field(d, 'license_expiry_date', 'license_expiry')}"
            )),
            inspections=bullet_lines(inspections, lambda i: (
                f"{i.get('vehicle_id')}: {field(i, 'inspection_type')}, "
                f"Date: {field(i, 'inspection_date')}, Status: {field(i, 'status')}"
            )),
        )
        report = self._ask(prompt, "check compliance", ComplianceCheckReport())
        return report.compliance_checks

    def analyze_safety_incident(
        self,
        incident: dict[str, Any],
        historical_incidents: list[dict[str, Any]],
    ) -> SafetyIncident:
        self._require_context()
        prompt = self._prompt(
            "compliance_safety_incident",
            incident_type=field(incident, "incident_type"),
            vehicle_id=field(incident, "vehicle_id"),
            driver_id=field(incident, "driver_id"),
            location=field(incident, "location"),
            timestamp=field(incident, "timestamp"),
            description=field(incident, "description"),
            severity=field(incident, "severity"),
            history_count=len(historical_incidents),
            history=bullet_lines(historical_incidents, lambda i: (
                f"{i.get('incident_type')}: {i.get('description')}, Date: {i.get('timestamp')}"
            )),
        )

        def fallback(raw: str) -> SafetyIncident:
            return SafetyIncident(
                incident_id="",
                vehicle_id="",
                driver_id="",
                incident_type="safety_violation",
                severity="minor",
                description="",
                location="",
                timestamp=now_iso(),
                ai_analysis=IncidentAnalysis(
                    root_cause=raw,
                    contributing_factors=[],
                    recommendations=[],
                    risk_level="low",
                    similar_incidents=0,
                ),
            )

        return self._ask(prompt, "analyze safety incident", fallback)

    def check_dvsa_compliance(
        self,
        operator: dict[str, Any],
        vehicles: list[dict[str, Any]],
        drivers: list[dict[str, Any]],
    ) -> DVSACompliance:
        self._require_context()
        prompt = self._prompt(
            "compliance_dvsa",
            operator_id=field(operator, "operator_id"),
            license_type=field(operator, "license_type"),
            authorized_vehicles=field(operator, "authorized_vehicles"),
            last_inspection=field(operator, "last_inspection_date"),
            total_vehicles=len(vehicles),
            active_vehicles=count_where(vehicles, "status", "active"),
            total_drivers=len(drivers),
            licensed_drivers=sum(1 for d in drivers if d.get("license_type")),
        )

        def fallback(raw: str) -> DVSACompliance:
            now = now_iso()
            return DVSACompliance(
                operator_id=str(operator.get("operator_id") or ""),
                compliance_status="at_risk",
                last_inspection=now,
                next_inspection=now,
                outstanding_issues=[],
                compliance_score=0,
                recommendations=[raw],
            )

        return self._ask(prompt, "check DVSA compliance", fallback)

    def get_regulatory_updates(
        self,
        current_regulations: list[dict[str, Any]],
        industry: str = "transport",
    ) -> list[RegulatoryUpdate]:
        self._require_context()
        prompt = self._prompt(
            "compliance_regulatory_updates",
            industry=industry,
            regulations=bullet_lines(current_regulations, lambda r: (
                f"{r.get('regulation_id')}: {r.get('title')}, Effective: {r.get('effective_date')}"
            )),
        )
        updates = self._ask(prompt, "get regulatory updates", RegulatoryUpdateList())
        return updates.regulatory_updates

    def generate_safety_report(
        self,
        time_range: Any,
        vehicles: list[dict[str, Any]],
        incidents: list[dict[str, Any]],
    ) -> dict[str, Any]:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "compliance_safety_report",
            start=start,
            end=end,
            total_vehicles=len(vehicles),
            active_vehicles=count_where(vehicles, "status", "active"),
            incident_count=len(incidents),
            incidents=bullet_lines(incidents, lambda i: (
                f"{i.get('incident_type')}: {i.get('description')}, "
                f"Date: {i.get('timestamp')}, Severity: {i.get('severity')}"
            )),
        )
        return self._ask(prompt, "generate safety report", lambda raw: {"report": raw})
