"""Operations reply shapes."""

from typing import Any, Literal

from tmsai.models.base import Direction, Level, ReplyModel, TimeRange

AnalysisType = Literal["efficiency", "cost", "safety", "compliance", "predictive"]


class JobDelay(ReplyModel):
    reason: str
    duration: float
    impact: Level


class JobOptimization(ReplyModel):
    efficiency: float
    recommendations: list[str]
    cost_savings: float


class JobSchedule(ReplyModel):
    job_id: str
    vehicle_id: str
    driver_id: str
    start_time: str
    end_time: str
    priority: Literal["low", "medium", "high", "urgent"]
    status: Literal["scheduled", "in_progress", "completed", "delayed"]
    estimated_duration: str
    actual_duration: str | None = None
    delays: list[JobDelay]
    optimization: JobOptimization


class JobSchedulePlan(ReplyModel):
    job_schedules: list[JobSchedule] = []


class ResourceSlot(ReplyModel):
    job_id: str
    start_time: str
    end_time: str
    utilization: float
    efficiency: float


class ResourceAvailability(ReplyModel):
    available: bool
    next_available: str
    conflicts: list[str]


class ResourceAllocation(ReplyModel):
    resource_id: str
    resource_type: Literal["vehicle", "driver", "equipment", "facility"]
    allocation: list[ResourceSlot]
    total_utilization: float
    availability: ResourceAvailability
    recommendations: list[str]


class ResourceAllocationPlan(ReplyModel):
    resource_allocations: list[ResourceAllocation] = []


class FleetMetrics(ReplyModel):
    total_jobs: int = 0
    completed_jobs: int = 0
    on_time_deliveries: int = 0
    average_job_duration: str = "0h"
    total_distance: float = 0
    fuel_consumption: float = 0
    cost_per_mile: float = 0


class DriverMetrics(ReplyModel):
    total_drivers: int = 0
    active_drivers: int = 0
    average_hours: float = 0
    compliance_rate: float = 0
    safety_score: float = 0


class VehicleMetrics(ReplyModel):
    total_vehicles: int = 0
    active_vehicles: int = 0
    average_utilization: float = 0
    maintenance_cost: float = 0
    reliability_score: float = 0


class PerformanceInsights(ReplyModel):
    trends: list[str] = []
    anomalies: list[str] = []
    recommendations: list[str] = []
    risk_factors: list[str] = []


class PerformanceMetrics(ReplyModel):
    time_range: TimeRange
    fleet_metrics: FleetMetrics
    driver_metrics: DriverMetrics
    vehicle_metrics: VehicleMetrics
    ai_insights: PerformanceInsights


class DataPoint(ReplyModel):
    timestamp: str
    value: float
    category: str
    metadata: Any = None


class TrendLine(ReplyModel):
    direction: Direction
    magnitude: float
    confidence: float
    description: str


class MetricPrediction(ReplyModel):
    metric: str
    predicted_value: float
    confidence: float
    timeframe: str
    factors: list[str]


class ActionRecommendation(ReplyModel):
    category: str
    priority: Level
    description: str
    expected_impact: str
    implementation: list[str]


class OperationalAnalytics(ReplyModel):
    analysis_type: AnalysisType
    time_range: TimeRange
    data_points: list[DataPoint]
    trends: list[TrendLine]
    predictions: list[MetricPrediction]
    recommendations: list[ActionRecommendation]
