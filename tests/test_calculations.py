"""Unit tests for famfinance.calculations."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta

import pytest

from famfinance import calculations as calc
from famfinance.models import (
    BudgetRule,
    Category,
    CategoryRule,
    Goal,
    Investment,
    SpendingBreakdown,
    Transaction,
)
from famfinance.sample_data import sample_investments


# ================================
# Budget rule
# ================================


def test_budget_rule_ideal_split_scores_100() -> None:
    result = calc.calculate_budget_rule(10000, SpendingBreakdown(5000, 3000, 2000))

    assert result.essentials.percentage == 50
    assert result.lifestyle.percentage == 30
    assert result.investments.percentage == 20
    assert result.essentials.deviation == 0
    assert result.lifestyle.deviation == 0
    assert result.investments.deviation == 0
    assert result.score == 100
    assert result.essentials.ideal == 5000
    assert result.total == 10000


def test_budget_rule_penalizes_overspending_on_essentials() -> None:
    result = calc.calculate_budget_rule(10000, SpendingBreakdown(7000, 3000, 0))

    assert result.essentials.percentage == 70
    assert result.essentials.deviation == 20
    assert result.investments.deviation == -20
    assert result.score < 100
    # 40 points capped for essentials, 30 for missing the investment target
    assert result.score == pytest.approx(30)


def test_budget_rule_zero_income_stays_in_range() -> None:
    result = calc.calculate_budget_rule(0, SpendingBreakdown(0, 0, 0))

    assert result.essentials.percentage == 0
    assert result.lifestyle.percentage == 0
    assert result.investments.percentage == 0
    assert math.isfinite(result.score)
    assert 0 <= result.score <= 100
    # under-investing is still penalised
    assert result.score < 100


def test_budget_rule_zero_income_with_spending_has_no_division_error() -> None:
    result = calc.calculate_budget_rule(0, SpendingBreakdown(500, 200, 0))
    assert result.essentials.percentage == 0
    assert 0 <= result.score <= 100


def test_budget_rule_any_small_deviation_drops_below_100() -> None:
    result = calc.calculate_budget_rule(10000, SpendingBreakdown(5001, 3000, 2000))
    assert result.score < 100


def test_budget_rule_underspending_lifestyle_is_penalized() -> None:
    result = calc.calculate_budget_rule(10000, SpendingBreakdown(5000, 1000, 2000))
    assert result.lifestyle.deviation == -20
    assert result.score < 100


def test_budget_rule_extreme_deviation_never_negative() -> None:
    result = calc.calculate_budget_rule(100, SpendingBreakdown(1e9, 1e9, 0))
    assert 0 <= result.score <= 100


def test_budget_rule_score_is_clamped_with_uncapped_policy() -> None:
    harsh = CategoryRule(target_percent=0, over_weight=10, under_weight=10, max_penalty=1000)
    rule = BudgetRule(
        essentials=CategoryRule(target_percent=50, over_weight=10, under_weight=10, max_penalty=1000),
        lifestyle=CategoryRule(target_percent=30, over_weight=10, under_weight=10, max_penalty=1000),
        investments=harsh,
    )
    result = calc.calculate_budget_rule(1000, SpendingBreakdown(1000, 1000, 1000), rule)
    assert result.score == 0


# ================================
# Goal progress
# ================================


def test_goal_progress_percentage_and_remaining() -> None:
    result = calc.calculate_goal_progress(Goal(target_amount=10000, current_amount=5000))
    assert result.percentage == 50
    assert result.remaining == 5000
    assert result.days_remaining is None


def test_goal_progress_caps_percentage_at_100() -> None:
    result = calc.calculate_goal_progress(Goal(target_amount=1000, current_amount=1500))
    assert result.percentage == 100
    assert result.remaining == 0


def test_goal_progress_zero_target() -> None:
    result = calc.calculate_goal_progress(Goal(target_amount=0, current_amount=0))
    assert result.percentage == 0
    assert result.remaining == 0


def test_goal_progress_deadline_tomorrow_is_one_day() -> None:
    now = datetime(2024, 1, 10, 12, 0)
    assert calc.calculate_goal_progress(
        Goal(target_amount=1000, current_amount=500, deadline=date(2024, 1, 11)), now=now
    ).days_remaining == 1
    assert calc.calculate_goal_progress(
        Goal(target_amount=1000, current_amount=500, deadline=now + timedelta(days=1)), now=now
    ).days_remaining == 1


def test_goal_progress_deadline_tomorrow_with_real_clock() -> None:
    tomorrow = datetime.now() + timedelta(days=1)
    result = calc.calculate_goal_progress(Goal(target_amount=1000, current_amount=500, deadline=tomorrow))
    assert result.days_remaining == 1


def test_goal_progress_past_deadline_is_zero_days() -> None:
    now = datetime(2024, 1, 10)
    result = calc.calculate_goal_progress(
        Goal(target_amount=1000, current_amount=500, deadline=date(2024, 1, 1)), now=now
    )
    assert result.days_remaining == 0
    assert result.off_track is False


def test_goal_progress_uses_history_for_rate_and_pace() -> None:
    now = datetime(2024, 2, 1)
    goal = Goal(target_amount=3000, current_amount=1600, deadline=date(2024, 3, 2))
    history = [(date(2024, 1, 31), 1600.0), (date(2024, 1, 1), 1000.0)]

    result = calc.calculate_goal_progress(goal, history=history, now=now)

    assert result.monthly_rate == pytest.approx(600)
    assert result.days_remaining == 30
    assert result.estimated_completion == datetime(2024, 5, 1)
    # 1400 left over one month needs more than 600/month
    assert result.off_track is True


def test_goal_progress_on_pace_is_not_off_track() -> None:
    now = datetime(2024, 2, 1)
    goal = Goal(target_amount=2000, current_amount=1600, deadline=date(2024, 3, 2))
    history = [(date(2024, 1, 1), 1000.0), (date(2024, 1, 31), 1600.0)]
    result = calc.calculate_goal_progress(goal, history=history, now=now)
    assert result.off_track is False


def test_goal_progress_single_history_point_has_no_rate() -> None:
    result = calc.calculate_goal_progress(
        Goal(target_amount=1000, current_amount=100), history=[(date(2024, 1, 1), 100.0)]
    )
    assert result.monthly_rate == 0
    assert result.estimated_completion is None


def test_goal_health_without_deadline_uses_funding_thresholds() -> None:
    assert calc.goal_health_status(Goal(target_amount=100, current_amount=60)) == 'on_track'
    assert calc.goal_health_status(Goal(target_amount=100, current_amount=30)) == 'attention'
    assert calc.goal_health_status(Goal(target_amount=100, current_amount=10)) == 'risk'


def test_goal_health_with_deadline_compares_against_elapsed_time() -> None:
    now = datetime(2024, 7, 1)

    def status(current: float) -> str:
        goal = Goal(
            target_amount=100,
            current_amount=current,
            deadline=date(2024, 12, 31),
            created_at=date(2024, 1, 1),
        )
        return calc.goal_health_status(goal, now=now)

    assert status(50) == 'on_track'
    assert status(40) == 'attention'
    assert status(20) == 'risk'


# ================================
# Investments
# ================================


def test_investment_summary_totals() -> None:
    investments = [
        Investment(name='Tesouro Direto', investment_type='bonds', purchase_price=5000, current_price=5500, quantity=1),
        Investment(name='Ações', investment_type='stocks', purchase_price=300, current_price=280, quantity=10),
    ]
    result = calc.calculate_investment_summary(investments)

    assert result.total_invested == 8000
    assert result.total_value == 8300
    assert result.total_profit == 300
    assert result.total_profitability == pytest.approx(3.75)


def test_investment_summary_empty_portfolio() -> None:
    result = calc.calculate_investment_summary([])

    assert result.total_invested == 0
    assert result.total_value == 0
    assert result.total_profit == 0
    assert result.total_profitability == 0
    assert result.allocation == []
    assert result.by_type == []


def test_investment_summary_allocation_per_holding() -> None:
    investments = [
        Investment(name='A', purchase_price=1000, current_price=5000),
        Investment(name='B', purchase_price=1000, current_price=5000),
    ]
    result = calc.calculate_investment_summary(investments)

    assert [entry.label for entry in result.allocation] == ['A', 'B']
    assert all(entry.percentage == 50 for entry in result.allocation)


def test_investment_allocation_sums_to_100() -> None:
    result = calc.calculate_investment_summary(sample_investments())
    assert sum(entry.percentage for entry in result.allocation) == pytest.approx(100)
    assert sum(entry.percentage for entry in result.by_type) == pytest.approx(100)


def test_investment_summary_groups_by_type_in_first_seen_order() -> None:
    investments = [
        Investment(investment_type='stocks', purchase_price=10, current_price=20, quantity=5),
        Investment(investment_type='bonds', purchase_price=100, current_price=100),
        Investment(investment_type='stocks', purchase_price=10, current_price=10, quantity=10),
    ]
    result = calc.calculate_investment_summary(investments)

    assert [entry.label for entry in result.by_type] == ['stocks', 'bonds']
    assert result.by_type[0].value == 200
    assert result.by_type[0].percentage == pytest.approx(200 / 3)


def test_investment_summary_worthless_portfolio_has_zero_allocation() -> None:
    result = calc.calculate_investment_summary([Investment(purchase_price=100, current_price=0)])
    assert result.total_value == 0
    assert result.total_profitability == pytest.approx(-100)
    assert result.allocation[0].percentage == 0


def test_investment_profitability() -> None:
    assert calc.investment_profitability(Investment(purchase_price=100, current_price=110)) == pytest.approx(10)
    assert calc.investment_profitability(Investment(purchase_price=0, current_price=50)) == 0


# ================================
# Monthly projection and categories
# ================================


def _month_transactions() -> list:
    return [
        Transaction(amount=5000, type='income'),
        Transaction(amount=500),
        Transaction(amount=500),
        Transaction(amount=300, type='transfer'),
    ]


def test_monthly_projection_mid_month() -> None:
    result = calc.calculate_monthly_projection(_month_transactions(), 5000, today=date(2024, 6, 10))

    assert result.days_remaining == 20
    assert result.daily_average == pytest.approx(100)
    assert result.estimated_expenses == pytest.approx(3000)
    assert result.estimated_balance == pytest.approx(2000)
    assert result.daily_limit == pytest.approx(200)


def test_monthly_projection_last_day_has_no_daily_limit() -> None:
    result = calc.calculate_monthly_projection(_month_transactions(), 5000, today=date(2024, 2, 29))
    assert result.days_remaining == 0
    assert result.daily_limit == 0


HOUSING = Category(id='moradia', name='Moradia', monthly_budget=3000)
FOOD = Category(id='alimentacao', name='Alimentação', monthly_budget=1500)
LEISURE = Category(id='lazer', name='Lazer', monthly_budget=800)
STREAMING = Category(id='assinaturas', name='Assinaturas')


def test_analyze_category_spending() -> None:
    current = [
        Transaction(amount=10000, type='income'),
        Transaction(amount=2800, category=HOUSING),
        Transaction(amount=640, category=FOOD),
        Transaction(amount=420, category=FOOD),
        Transaction(amount=180, category=LEISURE),
        Transaction(amount=55.9, category=STREAMING),
        Transaction(amount=99, description='uncategorised'),
    ]
    previous = [
        Transaction(amount=2800, category=HOUSING),
        Transaction(amount=800, category=FOOD),
        Transaction(amount=300, category=LEISURE),
    ]

    result = calc.analyze_category_spending(current, previous)
    by_id = {entry.category_id: entry for entry in result}

    assert [entry.category_id for entry in result] == ['moradia', 'alimentacao', 'lazer', 'assinaturas']
    assert by_id['moradia'].trend == 'stable'
    assert by_id['alimentacao'].trend == 'up'
    assert by_id['lazer'].trend == 'down'
    assert by_id['assinaturas'].trend == 'up'
    assert by_id['alimentacao'].amount_spent == pytest.approx(1060)
    assert by_id['alimentacao'].monthly_average == pytest.approx(930)
    assert by_id['moradia'].percent_used == pytest.approx(2800 / 3000 * 100)
    assert by_id['assinaturas'].budget is None
    assert by_id['assinaturas'].percent_used == 0
    assert sum(entry.percent_of_total for entry in result) == pytest.approx(100)


def test_analyze_category_spending_empty_month() -> None:
    assert calc.analyze_category_spending([], [Transaction(amount=10, category=HOUSING)]) == []


# ================================
# Savings rate
# ================================


def test_savings_rate() -> None:
    assert calc.calculate_savings_rate(10000, 8000) == pytest.approx(20)
    assert calc.calculate_savings_rate(10000, 5000) == pytest.approx(50)
    assert calc.calculate_savings_rate(10000, 10000) == 0


def test_savings_rate_zero_income() -> None:
    assert calc.calculate_savings_rate(0, 100) == 0


def test_savings_rate_never_negative() -> None:
    assert calc.calculate_savings_rate(1000, 1500) == 0


# ================================
# Compound interest and time to goal
# ================================


def test_compound_interest_without_deposit() -> None:
    result = calc.calculate_compound_interest(1000, 1, 12)
    assert result == pytest.approx(1126.83, abs=0.01)
    assert result == pytest.approx(1000 * 1.01 ** 12)


def test_compound_interest_with_deposits_beats_plain_savings() -> None:
    assert calc.calculate_compound_interest(0, 0.5, 12, 100) > 1200


def test_compound_interest_identity() -> None:
    assert calc.calculate_compound_interest(1000, 0, 12, 0) == 1000


def test_compound_growth_series_matches_final_balance() -> None:
    series = calc.compound_growth_series(1000, 1, 12, 50)
    assert len(series) == 13
    assert series[0] == 1000
    assert series[-1] == calc.calculate_compound_interest(1000, 1, 12, 50)


def test_time_to_goal_deposits_only() -> None:
    assert calc.calculate_time_to_goal(0, 1200, 100, 0) == 12


def test_time_to_goal_interest_is_never_slower() -> None:
    without_interest = calc.calculate_time_to_goal(0, 1200, 100, 0)
    for rate in (0.1, 0.5, 1, 2):
        assert calc.calculate_time_to_goal(0, 1200, 100, rate) <= without_interest


def test_time_to_goal_unreachable() -> None:
    assert calc.calculate_time_to_goal(0, 1000, 0, 0) == math.inf
    assert calc.calculate_time_to_goal(0, 1000, 0, 1) == math.inf


def test_time_to_goal_considers_initial_value() -> None:
    from_zero = calc.calculate_time_to_goal(0, 1000, 100, 0)
    from_500 = calc.calculate_time_to_goal(500, 1000, 100, 0)
    assert from_500 < from_zero
    assert from_500 == 5


def test_time_to_goal_already_reached() -> None:
    assert calc.calculate_time_to_goal(1500, 1000, 0, 0) == 0


def test_time_to_goal_interest_only() -> None:
    # 1000 * 1.01^70 is the first balance above 2000
    assert calc.calculate_time_to_goal(1000, 2000, 0, 1) == 70


def test_time_to_goal_bounded_search() -> None:
    assert calc.calculate_time_to_goal(0, 1_000_000, 1, 0) == math.inf
