"""Tests for the compliance and safety agent."""

import json

import pytest

from tmsai.agents import ComplianceSafetyAgent


@pytest.fixture
def agent(service, context):
    agent = ComplianceSafetyAgent(service)
    agent.set_context(context)
    return agent


def test_check_compliance_parsed(agent, provider):
    provider.reply = json.dumps({"complianceChecks": [{
        "vehicleId": "v1", "driverId": "d1", "checkType": "daily", "status": "non-compliant",
        "issues": [{"type": "documentation", "severity": "high", "description": "MOT missing",
                    "recommendation": "Upload MOT"}],
        "nextCheckDate": "2025-06-02", "complianceScore": 40,
    }]})
    checks = agent.check_compliance(
        [{"id": "v1", "vehicle_name": "Van 1", "status": "active"}],
        [{"id": "d1", "full_name": "Alex", "status": "active", "license_expiry_date": "2026-01-01"}],
        [],
    )
    assert checks[0].status == "non-compliant"
    assert checks[0].issues[0].deadline is None

    prompt = provider.calls[-1][0]
    assert prompt.startswith("As a Compliance & Safety AI Agent")
    assert "Expiry: 2026-01-01" in prompt


def test_check_compliance_fallback_empty(agent, provider):
    provider.reply = "Everything looks fine."
    assert agent.check_compliance([], [], []) == []


def test_safety_incident_fallback(agent, provider):
    provider.reply = "Driver fatigue is the likely cause."
    incident = agent.analyze_safety_incident({"incident_type": "collision"}, [])
    assert incident.incident_type == "safety_violation"
    assert incident.severity == "minor"
    assert incident.ai_analysis.root_cause == "Driver fatigue is the likely cause."
    assert incident.ai_analysis.risk_level == "low"
    assert incident.ai_analysis.similar_incidents == 0
    assert "- Type: collision" in provider.calls[-1][0]
    assert "- Location: N/A" in provider.calls[-1][0]


def test_dvsa_fallback(agent, provider):
    provider.reply = "Book inspections for all HGVs."
    result = agent.check_dvsa_compliance(
        {"operator_id": "OP1"}, [{"status": "active"}], [{"license_type": "C"}, {}],
    )
    assert result.operator_id == "OP1"
    assert result.compliance_status == "at_risk"
    assert result.compliance_score == 0
    assert result.recommendations == ["Book inspections for all HGVs."]
    assert "- Licensed Drivers: 1" in provider.calls[-1][0]


def test_regulatory_updates(agent, provider):
    provider.reply = json.dumps({"regulatoryUpdates": [{
        "regulationId": "R1", "title": "Tachograph", "description": "Smart tachographs",
        "effectiveDate": "2025-08-21", "impact": "high", "affectedAreas": ["drivers"],
        "requiredActions": ["Retrofit"], "deadline": "2025-08-21", "status": "pending",
    }]})
    updates = agent.get_regulatory_updates([], industry="haulage")
    assert updates[0].regulation_id == "R1"
    assert "for the haulage industry" in provider.calls[-1][0]


def test_safety_report_fallback(agent, provider):
    provider.reply = "No incidents this month."
    report = agent.generate_safety_report({"start": "a", "end": "b"}, [], [])
    assert report == {"report": "No incidents this month."}
