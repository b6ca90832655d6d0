"""Job scheduling, resource allocation and operational analytics."""

from typing import Any

from tmsai.agents.base import BaseAgent, range_bounds
from tmsai.llm.prompt_manager import bullet_lines, count_where, field, json_or_none, to_json
from tmsai.models.base import TimeRange
from tmsai.models.operations import (
    ActionRecommendation,
    DriverMetrics,
    FleetMetrics,
    JobSchedule,
    JobSchedulePlan,
    OperationalAnalytics,
    PerformanceInsights,
    PerformanceMetrics,
    ResourceAllocation,
    ResourceAllocationPlan,
    VehicleMetrics,
)


class OperationsAgent(BaseAgent):
    role = "Operations AI Agent"

    def optimize_job_schedule(
        self,
        jobs: list[dict[str, Any]],
        vehicles: list[dict[str, Any]],
        drivers: list[dict[str, Any]],
        constraints: dict[str, Any] | None = None,
    ) -> list[JobSchedule]:
        context = self._require_context()
        prompt = self._prompt(
            "ops_job_schedule",
            total_jobs=len(jobs),
            total_vehicles=len(vehicles),
            total_drivers=len(drivers),
            fleet_status=to_json(context.fleet),
            jobs=bullet_lines(jobs, lambda j: (
                f"{field(j, 'job_name', 'id')}: {j.get('pickup_location')} → {j.get('delivery_location')}, "
                f"Priority: {field(j, 'priority', default='medium')}, "
                f"Duration: {field(j, 'estimated_duration')}, Deadline: {field(j, 'deadline')}"
            )),
            vehicles=bullet_lines(vehicles, lambda v: (
                f"{v.get('vehicle_name')} ({v.get('id')}): {v.get('status')}, "
                f"Type: {field(v, 'vehicle_type')}, Capacity: {field(v, 'capacity')}"
            )),
            drivers=bullet_lines(drivers, lambda d: (
                f"{d.get('full_name')} ({d.get('id')}): {d.get('status')}, "
                f"Hours Available: {field(d, 'available_hours')}"
            )),
            constraints=json_or_none(constraints),
        )
        plan = self._ask(prompt, "optimize job schedule", JobSchedulePlan())
        return plan.job_schedules

    def allocate_resources(
        self,
        resources: list[dict[str, Any]],
        jobs: list[dict[str, Any]],
        time_range: Any,
    ) -> list[ResourceAllocation]:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "ops_resource_allocation",
            start=start,
            end=end,
            resources=bullet_lines(resources, lambda r: (
                f"{field(r, 'name', 'id')} ({r.get('type', 'resource')}): "
                f"Capacity: {field(r, 'capacity')}, Status: {field(r, 'status')}"
            )),
            jobs=bullet_lines(jobs, lambda j: (
                f"{field(j, 'job_name', 'id')}: Requirements: {field(j, 'requirements')}, "
                f"Duration: {field(j, 'estimated_duration')}"
            )),
        )
        plan = self._ask(prompt, "allocate resources", ResourceAllocationPlan())
        return plan.resource_allocations

    def analyze_performance(
        self,
        time_range: Any,
        jobs: list[dict[str, Any]],
        vehicles: list[dict[str, Any]],
        drivers: list[dict[str, Any]],
    ) -> PerformanceMetrics:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "ops_performance",
            start=start,
            end=end,
            total_jobs=len(jobs),
            completed_jobs=count_where(jobs, "status", "completed"),
            total_vehicles=len(vehicles),
            active_vehicles=count_where(vehicles, "status", "active"),
            total_drivers=len(drivers),
            active_drivers=count_where(drivers, "status", "active"),
        )

        def fallback(raw: str) -> PerformanceMetrics:
            return PerformanceMetrics(
                time_range=TimeRange(start=start, end=end),
                fleet_metrics=FleetMetrics(),
                driver_metrics=DriverMetrics(),
                vehicle_metrics=VehicleMetrics(),
                ai_insights=PerformanceInsights(trends=[raw]),
            )

        return self._ask(prompt, "analyze performance", fallback)

    def generate_operational_analytics(
        self,
        analysis_type: str,
        time_range: Any,
        data: list[Any],
    ) -> OperationalAnalytics:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "ops_analytics",
            analysis_type=analysis_type,
            start=start,
            end=end,
            data_points=len(data),
        )

        def fallback(raw: str) -> OperationalAnalytics:
            return OperationalAnalytics(
                analysis_type="efficiency",
                time_range=TimeRange(start=start, end=end),
                data_points=[],
                trends=[],
                predictions=[],
                recommendations=[
                    ActionRecommendation(
                        category="general",
                        priority="medium",
                        description=raw,
                        expected_impact="Unknown",
                        implementation=[],
                    )
                ],
            )

        return self._ask(prompt, "generate operational analytics", fallback)

    def predict_demand(
        self,
        historical_data: list[Any],
        time_horizon: Any,
        factors: list[str] | None = None,
    ) -> dict[str, Any]:
        self._require_context()
        start, end = range_bounds(time_horizon)
        prompt = self._prompt(
            "ops_demand_prediction",
            data_points=len(historical_data),
            start=start,
            end=end,
            factors=", ".join(factors) if factors else "Standard factors",
        )
        return self._ask(prompt, "predict demand", lambda raw: {"prediction": raw})
