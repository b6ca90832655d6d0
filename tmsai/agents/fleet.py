"""Route planning, driver assignment and vehicle maintenance advice."""

from datetime import datetime, timezone
from typing import Any

from tmsai.agents.base import BaseAgent, range_bounds
from tmsai.llm.prompt_manager import bullet_lines, count_where, field, json_or_none, to_json
from tmsai.models.fleet import (
    DriverAssignment,
    DriverAssignmentPlan,
    MaintenancePrediction,
    RouteOptimization,
    RouteSavings,
)


class FleetManagementAgent(BaseAgent):
    role = "Fleet Management AI Agent"

    def optimize_routes(
        self,
        vehicles: list[dict[str, Any]],
        jobs: list[dict[str, Any]],
        constraints: dict[str, Any] | None = None,
    ) -> RouteOptimization:
        context = self._require_context()
        prompt = self._prompt(
            "fleet_route_optimization",
            total_vehicles=len(vehicles),
            available_vehicles=count_where(vehicles, "status", "active"),
            total_jobs=len(jobs),
            fleet_status=to_json(context.fleet),
            vehicles=bullet_lines(vehicles, lambda v: (
                f"{v.get('vehicle_name')} ({v.get('id')}): {v.get('status')}, "
                f"Capacity: {field(v, 'capacity')}, Fuel: {field(v, 'fuel_level')}%"
            )),
            jobs=bullet_lines(jobs, _job_line),
            constraints=json_or_none(constraints),
        )

        def fallback(raw: str) -> RouteOptimization:
            return RouteOptimization(
                optimized_routes=[],
                total_savings=RouteSavings(distance=0, time="0h", fuel=0),
                recommendations=[raw],
            )

        return self._ask(prompt, "optimize routes", fallback)

    def assign_drivers(
        self,
        vehicles: list[dict[str, Any]],
        drivers: list[dict[str, Any]],
        jobs: list[dict[str, Any]],
    ) -> list[DriverAssignment]:
        self._require_context()
        prompt = self._prompt(
            "fleet_driver_assignment",
            drivers=bullet_lines(drivers, lambda d: (
                f"{d.get('full_name')} ({d.get('id')}): {d.get('status')}, "
                f"License: {field(d, 'license_type')}, Experience: {field(d, 'experience_years')} years"
            )),
            vehicles=bullet_lines(vehicles, lambda v: (
                f"{v.get('vehicle_name')} ({v.get('id')}): {field(v, 'vehicle_type')}, "
                f"Requires License: {field(v, 'required_license')}"
            )),
            jobs=bullet_lines(jobs, lambda j: (
                f"{field(j, 'job_name', 'id')}: {j.get('pickup_location')} → {j.get('delivery_location')}, "
                f"Duration: {field(j, 'estimated_duration')}"
            )),
        )
        plan = self._ask(prompt, "assign drivers", DriverAssignmentPlan())
        return plan.assignments

    def predict_maintenance(self, vehicle: dict[str, Any]) -> MaintenancePrediction:
        self._require_context()
        history = vehicle.get("maintenance_history")
        prompt = self._prompt(
            "fleet_maintenance_prediction",
            vehicle_name=field(vehicle, "vehicle_name"),
            vehicle_type=field(vehicle, "vehicle_type"),
            mileage=field(vehicle, "current_mileage"),
            last_service=field(vehicle, "last_service_date"),
            age=field(vehicle, "age"),
            usage_pattern=field(vehicle, "usage_pattern"),
            history=to_json(history) if history else "No history available",
        )

        def fallback(raw: str) -> MaintenancePrediction:
            return MaintenancePrediction(
                vehicle_id=str(vehicle.get("id") or ""),
                maintenance_type="General",
                predicted_date=datetime.now(timezone.utc).isoformat(),
                confidence=0.5,
                urgency="medium",
                estimated_cost=0,
                recommended_actions=[raw],
                parts_needed=[],
            )

        return self._ask(prompt, "predict maintenance", fallback)

    def analyze_fuel_efficiency(self, vehicles: list[dict[str, Any]], time_range: Any) -> dict[str, Any]:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "fleet_fuel_efficiency",
            start=start,
            end=end,
            vehicles=bullet_lines(vehicles, lambda v: (
                f"{v.get('vehicle_name')}: Current MPG: {field(v, 'fuel_efficiency')}, "
                f"Fuel Type: {field(v, 'fuel_type')}"
            )),
        )
        return self._ask(prompt, "analyze fuel efficiency", lambda raw: {"analysis": raw})


def _job_line(job: dict[str, Any]) -> str:
    return (
        f"{field(job, 'job_name', 'id')}: {job.get('pickup_location')} → {job.get('delivery_location')}, "
        f"Priority: {field(job, 'priority', default='normal')}, Deadline: {field(job, 'deadline')}"
    )
