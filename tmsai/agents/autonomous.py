"""Autonomous decisions, predictive analytics and automated workflows."""

import logging
import uuid
from typing import Any, Callable

from tmsai.agents.base import BaseAgent, now_iso, range_bounds
from tmsai.agents.errors import WorkflowNotFoundError
from tmsai.llm.prompt_manager import json_or_none, to_json, truncate
from tmsai.models.autonomous import (
    Anomaly,
    AutomatedWorkflow,
    AutonomousDecision,
    DecisionImpact,
    FleetOptimization,
    LiveInsight,
    LivePerformance,
    OverallImpact,
    PredictiveAnalytics,
    RealTimeMonitoring,
    ValueRange,
    WorkflowAction,
    WorkflowSpec,
)
from tmsai.models.base import TimeRange

logger = logging.getLogger(__name__)

ActionHandler = Callable[[Any, Any], None]


def _log_action(action_type: str) -> ActionHandler:
    def handler(parameters: Any, data: Any) -> None:
        logger.info("Workflow action %s", action_type, extra={"parameters": parameters})
    return handler


DEFAULT_ACTIONS = ("send_notification", "update_database", "trigger_api_call")


class AutonomousOperationsAgent(BaseAgent):
    """
    Decisions and workflows for hands-off fleet operation.

    Workflows created here are kept in ``active_workflows`` and run by
    ``execute_workflow``. Each action type maps to a handler taking the
    action's parameters and the caller's data; the built-in types only log
    until a real handler is registered with ``register_action``.
    """

    role = "Autonomous Operations AI Agent"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.active_workflows: dict[str, AutomatedWorkflow] = {}
        self._successes: dict[str, int] = {}
        self.action_handlers: dict[str, ActionHandler] = {name: _log_action(name) for name in DEFAULT_ACTIONS}

    def register_action(self, action_type: str, handler: ActionHandler) -> None:
        self.action_handlers[action_type] = handler

    def _snippet(self, raw: str) -> str:
        return truncate(raw, self._limit("short", 100))

    def make_decision(self, scenario: Any, constraints: Any = None) -> AutonomousDecision:
        self._require_context()
        prompt = self._prompt(
            "autonomous_decision",
            scenario=to_json(scenario),
            constraints=json_or_none(constraints),
        )

        def fallback(raw: str) -> AutonomousDecision:
            return AutonomousDecision(
                id=str(uuid.uuid4()),
                type="route_change",
                priority="medium",
                confidence=0.7,
                reasoning=self._snippet(raw),
                action="No action required",
                impact=DecisionImpact(),
                automated=False,
                requires_approval=True,
                timestamp=now_iso(),
                status="pending",
            )

        return self._ask(prompt, "make autonomous decision", fallback)

    def generate_predictive_analytics(self, time_range: Any, metrics: list[str]) -> PredictiveAnalytics:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "autonomous_predictive_analytics",
            start=start,
            end=end,
            metrics=", ".join(metrics),
        )

        def fallback(raw: str) -> PredictiveAnalytics:
            return PredictiveAnalytics(
                time_horizon=TimeRange(start=start, end=end),
                predictions=[],
                trends=[],
                anomalies=[
                    Anomaly(
                        metric="general",
                        value=0,
                        expected_range=ValueRange(min=0, max=100),
                        severity="medium",
                        description=self._snippet(raw),
                        suggested_action="Review data",
                    )
                ],
            )

        return self._ask(prompt, "generate predictive analytics", fallback)

    def create_workflow(self, spec: WorkflowSpec | dict[str, Any]) -> AutomatedWorkflow:
        """Ask the model to flesh out a workflow and register it as active."""
        self._require_context()
        if not isinstance(spec, WorkflowSpec):
            spec = WorkflowSpec.model_validate(spec)
        prompt = self._prompt("autonomous_workflow", workflow=to_json(spec))

        def fallback(raw: str) -> AutomatedWorkflow:
            return AutomatedWorkflow(
                id=str(uuid.uuid4()),
                name=spec.name,
                description=self._snippet(raw),
                triggers=spec.triggers,
                actions=spec.actions,
                conditions=spec.conditions,
                status="active",
                last_executed=now_iso(),
                execution_count=0,
                success_rate=0,
            )

        workflow = self._ask(prompt, "create automated workflow", fallback)
        if not workflow.id:
            workflow.id = str(uuid.uuid4())
        self.active_workflows[workflow.id] = workflow
        self._successes[workflow.id] = 0
        return workflow

    def optimize_fleet(self, current_state: Any, objectives: list[str]) -> FleetOptimization:
        self._require_context()
        prompt = self._prompt(
            "autonomous_fleet_optimization",
            state=to_json(current_state),
            objectives=", ".join(objectives),
        )
        fallback = FleetOptimization(vehicles=[], drivers=[], routes=[], overall_impact=OverallImpact())
        return self._ask(prompt, "optimize fleet", fallback)

    def monitor_real_time(self, current_data: Any) -> RealTimeMonitoring:
        self._require_context()
        prompt = self._prompt("autonomous_monitoring", data=to_json(current_data))

        def fallback(raw: str) -> RealTimeMonitoring:
            return RealTimeMonitoring(
                timestamp=now_iso(),
                active_vehicles=0,
                active_drivers=0,
                active_routes=0,
                alerts=[],
                performance=LivePerformance(),
                ai_insights=[
                    LiveInsight(type="general", message=self._snippet(raw), confidence=0.5, action="Monitor")
                ],
            )

        return self._ask(prompt, "monitor real-time data", fallback)

    def execute_workflow(self, workflow_id: str, data: Any) -> bool:
        """Run a workflow's actions in order. Returns False if any action fails."""
        workflow = self.active_workflows.get(workflow_id)
        if workflow is None:
            raise WorkflowNotFoundError(workflow_id)

        succeeded = True
        try:
            for action in sorted(workflow.actions, key=lambda a: a.order):
                self._execute_action(action, data)
        except Exception:
            logger.exception("Workflow %s failed", workflow_id)
            succeeded = False

        workflow.last_executed = now_iso()
        workflow.execution_count += 1
        if succeeded:
            self._successes[workflow_id] = self._successes.get(workflow_id, 0) + 1
        workflow.success_rate = self._successes.get(workflow_id, 0) / workflow.execution_count
        return succeeded

    def _execute_action(self, action: WorkflowAction, data: Any) -> None:
        handler = self.action_handlers.get(action.type)
        if handler is None:
            raise ValueError(f"Unknown action type: {action.type}")
        handler(action.parameters, data)
