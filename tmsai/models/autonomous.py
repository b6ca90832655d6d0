"""Autonomous operations reply shapes."""

from typing import Any, Literal

from tmsai.models.base import Direction, ReplyModel, Severity, TimeRange


class DecisionImpact(ReplyModel):
    cost: float = 0
    time: float = 0
    efficiency: float = 0
    risk: float = 0


class AutonomousDecision(ReplyModel):
    id: str
    type: Literal["route_change", "maintenance_alert", "driver_reassignment", "fuel_optimization", "compliance_action"]
    priority: Severity
    confidence: float
    reasoning: str
    action: str
    impact: DecisionImpact
    automated: bool
    requires_approval: bool
    timestamp: str
    status: Literal["pending", "approved", "rejected", "executed"]


class MetricForecast(ReplyModel):
    category: str
    metric: str
    current_value: float
    predicted_value: float
    confidence: float
    factors: list[str]
    recommendations: list[str]


class MetricTrend(ReplyModel):
    metric: str
    direction: Direction
    rate: float
    significance: float
    explanation: str


class ValueRange(ReplyModel):
    min: float
    max: float


class Anomaly(ReplyModel):
    metric: str
    value: float
    expected_range: ValueRange
    severity: Severity
    description: str
    suggested_action: str


class PredictiveAnalytics(ReplyModel):
    time_horizon: TimeRange
    predictions: list[MetricForecast]
    trends: list[MetricTrend]
    anomalies: list[Anomaly]


class WorkflowTrigger(ReplyModel):
    condition: str
    threshold: float
    operator: Literal["gt", "lt", "eq", "gte", "lte"]


class WorkflowAction(ReplyModel):
    type: str
    parameters: Any = None
    order: int


class WorkflowCondition(ReplyModel):
    type: Literal["approval_required", "notification_sent", "data_validation"]
    parameters: Any = None


class WorkflowSpec(ReplyModel):
    """What a caller supplies when asking for a new workflow."""

    name: str
    description: str = ""
    triggers: list[WorkflowTrigger] = []
    actions: list[WorkflowAction] = []
    conditions: list[WorkflowCondition] = []


class AutomatedWorkflow(WorkflowSpec):
    id: str = ""
    status: Literal["active", "inactive", "error"]
    last_executed: str
    execution_count: int
    success_rate: float


class ChangeImpact(ReplyModel):
    efficiency: float = 0
    cost: float = 0
    time: float = 0


class VehicleReassignment(ReplyModel):
    id: str
    current_assignment: str
    recommended_assignment: str
    reason: str
    impact: ChangeImpact


class DriverReassignment(ReplyModel):
    id: str
    current_route: str
    recommended_route: str
    reason: str
    impact: ChangeImpact


class RouteChange(ReplyModel):
    id: str
    current_optimization: float
    recommended_optimization: float
    changes: list[str]
    expected_improvement: float


class OverallImpact(ReplyModel):
    efficiency_gain: float = 0
    cost_reduction: float = 0
    time_savings: float = 0
    risk_reduction: float = 0


class FleetOptimization(ReplyModel):
    vehicles: list[VehicleReassignment]
    drivers: list[DriverReassignment]
    routes: list[RouteChange]
    overall_impact: OverallImpact


class MonitoringAlert(ReplyModel):
    id: str
    type: Literal["warning", "error", "info", "critical"]
    message: str
    vehicle_id: str | None = None
    driver_id: str | None = None
    route_id: str | None = None
    timestamp: str
    resolved: bool


class LivePerformance(ReplyModel):
    average_speed: float = 0
    fuel_efficiency: float = 0
    route_adherence: float = 0
    delivery_on_time: float = 0


class LiveInsight(ReplyModel):
    type: str
    message: str
    confidence: float
    action: str


class RealTimeMonitoring(ReplyModel):
    timestamp: str
    active_vehicles: int
    active_drivers: int
    active_routes: int
    alerts: list[MonitoringAlert]
    performance: LivePerformance
    ai_insights: list[LiveInsight]
