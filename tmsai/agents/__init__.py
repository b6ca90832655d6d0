"""Domain agents that turn operational records into typed model advice."""

from tmsai.agents.autonomous import AutonomousOperationsAgent
from tmsai.agents.compliance import ComplianceSafetyAgent
from tmsai.agents.financial import FinancialAgent
from tmsai.agents.fleet import FleetManagementAgent
from tmsai.agents.operations import OperationsAgent
from tmsai.agents.search import EnterpriseSearchAgent

__all__ = [
    "AutonomousOperationsAgent",
    "ComplianceSafetyAgent",
    "EnterpriseSearchAgent",
    "FinancialAgent",
    "FleetManagementAgent",
    "OperationsAgent",
]
