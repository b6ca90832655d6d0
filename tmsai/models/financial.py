"""Financial reply shapes."""

from typing import Literal

from tmsai.models.base import Direction, Level, ReplyModel, TimeRange


class CostTotals(ReplyModel):
    fuel: float = 0
    maintenance: float = 0
    insurance: float = 0
    licensing: float = 0
    labor: float = 0
    overhead: float = 0
    total: float = 0


class CostLine(ReplyModel):
    category: str
    amount: float
    percentage: float
    trend: Direction
    forecast: float


class CostInsights(ReplyModel):
    cost_drivers: list[str] = []
    optimization_opportunities: list[str] = []
    risk_factors: list[str] = []
    recommendations: list[str] = []


class CostAnalysis(ReplyModel):
    period: TimeRange
    total_costs: CostTotals
    cost_breakdown: list[CostLine]
    cost_per_mile: float
    cost_per_vehicle: float
    cost_per_driver: float
    ai_insights: CostInsights


class SavingsLine(ReplyModel):
    category: str
    current: float
    optimized: float
    savings: float


class BudgetSavings(ReplyModel):
    amount: float = 0
    percentage: float = 0
    breakdown: list[SavingsLine] = []


class BudgetRecommendation(ReplyModel):
    category: str
    action: str
    expected_savings: float
    implementation: list[str]
    priority: Level


class BudgetOptimization(ReplyModel):
    current_budget: CostTotals
    optimized_budget: CostTotals
    savings: BudgetSavings
    recommendations: list[BudgetRecommendation]


class PeriodProjection(ReplyModel):
    period: str
    projected: float
    confidence: float
    factors: list[str]


class ProfitProjection(ReplyModel):
    period: str
    projected: float
    margin: float
    confidence: float


class CashFlowLine(ReplyModel):
    period: str
    inflow: float
    outflow: float
    net_flow: float
    balance: float


class RiskAssessment(ReplyModel):
    high_risk_factors: list[str] = []
    medium_risk_factors: list[str] = []
    low_risk_factors: list[str] = []
    mitigation_strategies: list[str] = []


class FinancialForecast(ReplyModel):
    time_horizon: TimeRange
    revenue_forecast: list[PeriodProjection]
    cost_forecast: list[PeriodProjection]
    profit_forecast: list[ProfitProjection]
    cash_flow_projection: list[CashFlowLine]
    risk_assessment: RiskAssessment


class ExpenseReview(ReplyModel):
    category: str
    reasonableness: Level
    anomalies: list[str]
    recommendations: list[str]


class ReviewedExpense(ReplyModel):
    id: str
    category: str
    amount: float
    date: str
    description: str
    vehicle_id: str | None = None
    driver_id: str | None = None
    status: Literal["pending", "approved", "rejected"]
    ai_analysis: ExpenseReview


class CategoryTotal(ReplyModel):
    category: str
    total: float
    count: int


class ExpenseSummary(ReplyModel):
    total_expenses: float = 0
    approved_expenses: float = 0
    pending_expenses: float = 0
    rejected_expenses: float = 0
    average_expense: float = 0
    top_categories: list[CategoryTotal] = []


class ExpenseInsights(ReplyModel):
    unusual_expenses: list[str] = []
    cost_trends: list[str] = []
    optimization_suggestions: list[str] = []
    compliance_issues: list[str] = []


class ExpenseManagement(ReplyModel):
    expenses: list[ReviewedExpense]
    expense_summary: ExpenseSummary
    ai_insights: ExpenseInsights


class RevenueSource(ReplyModel):
    source: str
    amount: float
    percentage: float


class CostShare(ReplyModel):
    category: str
    amount: float
    percentage: float


class RevenueSummary(ReplyModel):
    total: float = 0
    per_vehicle: float = 0
    per_driver: float = 0
    per_mile: float = 0
    breakdown: list[RevenueSource] = []


class CostSummary(ReplyModel):
    total: float = 0
    per_vehicle: float = 0
    per_driver: float = 0
    per_mile: float = 0
    breakdown: list[CostShare] = []


class ProfitFigures(ReplyModel):
    gross_profit: float = 0
    gross_margin: float = 0
    net_profit: float = 0
    net_margin: float = 0
    ebitda: float = 0
    ebitda_margin: float = 0


class ReturnMetrics(ReplyModel):
    return_on_assets: float = 0
    return_on_equity: float = 0
    asset_turnover: float = 0
    profit_margin: float = 0


class ProfitabilityInsights(ReplyModel):
    profitability_drivers: list[str] = []
    improvement_opportunities: list[str] = []
    competitive_analysis: list[str] = []
    strategic_recommendations: list[str] = []


class ProfitabilityAnalysis(ReplyModel):
    period: TimeRange
    revenue: RevenueSummary
    costs: CostSummary
    profitability: ProfitFigures
    performance_metrics: ReturnMetrics
    ai_insights: ProfitabilityInsights
