"""Cost, budget, forecast, expense and profitability analysis."""

from typing import Any

from tmsai.agents.base import BaseAgent, range_bounds
from tmsai.llm.prompt_manager import count_where, json_or_none, to_json, truncate
from tmsai.models.base import TimeRange
from tmsai.models.financial import (
    BudgetOptimization,
    BudgetRecommendation,
    BudgetSavings,
    CostAnalysis,
    CostInsights,
    CostSummary,
    CostTotals,
    ExpenseInsights,
    ExpenseManagement,
    ExpenseSummary,
    FinancialForecast,
    ProfitabilityAnalysis,
    ProfitabilityInsights,
    ProfitFigures,
    ReturnMetrics,
    RevenueSummary,
    RiskAssessment,
)


class FinancialAgent(BaseAgent):
    """
    Financial analysis for a transport operation.

    Fallbacks carry zeroed figures and put the start of the model's prose
    reply into the most relevant insight list, so a caller can still show
    something useful.
    """

    role = "Financial AI Agent"

    def _snippet(self, raw: str) -> str:
        return truncate(raw, self._limit("short", 100))

    def analyze_costs(
        self,
        time_range: Any,
        vehicles: list[dict[str, Any]],
        expenses: list[dict[str, Any]],
    ) -> CostAnalysis:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "financial_cost_analysis",
            start=start,
            end=end,
            total_vehicles=len(vehicles),
            active_vehicles=count_where(vehicles, "status", "active"),
            total_expenses=len(expenses),
        )

        def fallback(raw: str) -> CostAnalysis:
            return CostAnalysis(
                period=TimeRange(start=start, end=end),
                total_costs=CostTotals(),
                cost_breakdown=[],
                cost_per_mile=0,
                cost_per_vehicle=0,
                cost_per_driver=0,
                ai_insights=CostInsights(cost_drivers=[self._snippet(raw)]),
            )

        return self._ask(prompt, "analyze costs", fallback)

    def optimize_budget(
        self,
        current_budget: dict[str, Any],
        historical_data: list[Any],
        constraints: dict[str, Any] | None = None,
    ) -> BudgetOptimization:
        self._require_context()
        prompt = self._prompt(
            "financial_budget_optimization",
            budget=to_json(current_budget),
            data_points=len(historical_data),
            constraints=json_or_none(constraints),
        )

        def fallback(raw: str) -> BudgetOptimization:
            return BudgetOptimization(
                current_budget=CostTotals(),
                optimized_budget=CostTotals(),
                savings=BudgetSavings(),
                recommendations=[
                    BudgetRecommendation(
                        category="general",
                        action=self._snippet(raw),
                        expected_savings=0,
                        implementation=[],
                        priority="medium",
                    )
                ],
            )

        return self._ask(prompt, "optimize budget", fallback)

    def generate_financial_forecast(
        self,
        time_horizon: Any,
        historical_data: list[Any],
        assumptions: dict[str, Any] | None = None,
    ) -> FinancialForecast:
        self._require_context()
        start, end = range_bounds(time_horizon)
        prompt = self._prompt(
            "financial_forecast",
            start=start,
            end=end,
            data_points=len(historical_data),
            assumptions=json_or_none(assumptions, "Standard assumptions"),
        )

        def fallback(raw: str) -> FinancialForecast:
            return FinancialForecast(
                time_horizon=TimeRange(start=start, end=end),
                revenue_forecast=[],
                cost_forecast=[],
                profit_forecast=[],
                cash_flow_projection=[],
                risk_assessment=RiskAssessment(high_risk_factors=[self._snippet(raw)]),
            )

        return self._ask(prompt, "generate financial forecast", fallback)

    def manage_expenses(
        self,
        expenses: list[dict[str, Any]],
        policies: dict[str, Any] | None = None,
    ) -> ExpenseManagement:
        self._require_context()
        prompt = self._prompt(
            "financial_expense_management",
            expense_count=len(expenses),
            policies=json_or_none(policies, "Standard policies"),
        )

        def fallback(raw: str) -> ExpenseManagement:
            return ExpenseManagement(
                expenses=[],
                expense_summary=ExpenseSummary(),
                ai_insights=ExpenseInsights(unusual_expenses=[self._snippet(raw)]),
            )

        return self._ask(prompt, "manage expenses", fallback)

    def analyze_profitability(self, time_range: Any, financial_data: list[Any]) -> ProfitabilityAnalysis:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt(
            "financial_profitability",
            start=start,
            end=end,
            data_points=len(financial_data),
        )

        def fallback(raw: str) -> ProfitabilityAnalysis:
            return ProfitabilityAnalysis(
                period=TimeRange(start=start, end=end),
                revenue=RevenueSummary(),
                costs=CostSummary(),
                profitability=ProfitFigures(),
                performance_metrics=ReturnMetrics(),
                ai_insights=ProfitabilityInsights(profitability_drivers=[self._snippet(raw)]),
            )

        return self._ask(prompt, "analyze profitability", fallback)
