"""Compliance and safety reply shapes."""

from typing import Literal

from tmsai.models.base import Level, ReplyModel, Severity


class ComplianceIssue(ReplyModel):
    type: Literal["safety", "regulatory", "documentation", "maintenance"]
    severity: Severity
    description: str
    recommendation: str
    deadline: str | None = None


class ComplianceCheck(ReplyModel):
    vehicle_id: str
    driver_id: str
    check_type: Literal["daily", "weekly", "monthly", "annual"]
    status: Literal["compliant", "non-compliant", "warning"]
    issues: list[ComplianceIssue]
    next_check_date: str
    compliance_score: float


class ComplianceCheckReport(ReplyModel):
    compliance_checks: list[ComplianceCheck] = []


class IncidentAnalysis(ReplyModel):
    root_cause: str
    contributing_factors: list[str]
    recommendations: list[str]
    risk_level: Level
    similar_incidents: int


class SafetyIncident(ReplyModel):
    incident_id: str
    vehicle_id: str
    driver_id: str
    incident_type: Literal["collision", "breakdown", "traffic_violation", "safety_violation"]
    severity: Literal["minor", "moderate", "major", "critical"]
    description: str
    location: str
    timestamp: str
    ai_analysis: IncidentAnalysis


class OutstandingIssue(ReplyModel):
    category: str
    description: str
    deadline: str
    priority: Level


class DVSACompliance(ReplyModel):
    operator_id: str
    compliance_status: Literal["compliant", "at_risk", "non_compliant"]
    last_inspection: str
    next_inspection: str
    outstanding_issues: list[OutstandingIssue]
    compliance_score: float
    recommendations: list[str]


class RegulatoryUpdate(ReplyModel):
    regulation_id: str
    title: str
    description: str
    effective_date: str
    impact: Level
    affected_areas: list[str]
    required_actions: list[str]
    deadline: str
    status: Literal["pending", "in_progress", "completed"]


class RegulatoryUpdateList(ReplyModel):
    regulatory_updates: list[RegulatoryUpdate] = []
