"""Fleet management reply shapes."""

from typing import Literal

from tmsai.models.base import ReplyModel, Severity


class RouteStop(ReplyModel):
    location: str
    estimated_time: str
    type: Literal["pickup", "delivery", "fuel", "break"]


class OptimizedRoute(ReplyModel):
    route_id: str
    vehicle_id: str
    driver_id: str
    stops: list[RouteStop]
    total_distance: float
    estimated_duration: str
    fuel_cost: float


class RouteSavings(ReplyModel):
    distance: float
    time: str
    fuel: float


class RouteOptimization(ReplyModel):
    optimized_routes: list[OptimizedRoute]
    total_savings: RouteSavings
    recommendations: list[str]


class DriverBreak(ReplyModel):
    start_time: str
    end_time: str
    duration: float


class HoursCompliance(ReplyModel):
    driving_time: float
    rest_time: float
    is_compliant: bool


class DriverAssignment(ReplyModel):
    driver_id: str
    vehicle_id: str
    route_id: str
    start_time: str
    end_time: str
    breaks: list[DriverBreak]
    compliance: HoursCompliance


class DriverAssignmentPlan(ReplyModel):
    assignments: list[DriverAssignment] = []


class MaintenancePrediction(ReplyModel):
    vehicle_id: str
    maintenance_type: str
    predicted_date: str
    confidence: float
    urgency: Severity
    estimated_cost: float
    recommended_actions: list[str]
    parts_needed: list[str]
