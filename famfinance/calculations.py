"""Financial calculations for budgets, goals, investments and projections.

Every function here is pure: it takes plain numbers, dates and the records
from :mod:`famfinance.models` and returns new values without touching any
shared state.  Edge cases (zero income, zero target, empty portfolio) are
handled by explicit policies rather than exceptions, so callers can feed
form values straight in.  Input validation (e.g. rejecting negative
amounts) is the caller's job.

The one deliberate non-finite result is ``math.inf`` from
:func:`calculate_time_to_goal` when a goal can never be reached.
"""

from __future__ import annotations

import calendar
import logging
import math
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .models import (
    DEFAULT_BUDGET_RULE,
    AllocationEntry,
    BudgetRule,
    BudgetRuleResult,
    CategoryAnalysis,
    CategoryRule,
    CategoryRuleResult,
    DateLike,
    Goal,
    GoalProgress,
    Investment,
    InvestmentSummary,
    MonthlyProjection,
    SpendingBreakdown,
    Transaction,
)

logger = logging.getLogger(__name__)

# Upper bound on simulated periods (100 years of months).
MAX_PERIODS = 1200

DAYS_PER_MONTH = 30
SECONDS_PER_DAY = 60 * 60 * 24

# Share of the previous month a category must move by to count as a trend.
TREND_THRESHOLD = 0.1


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _now_for(reference: datetime, now: Optional[datetime]) -> datetime:
    """Return ``now`` (or the current time) in the same awareness as ``reference``."""
    if now is None:
        return datetime.now(reference.tzinfo) if reference.tzinfo else datetime.now()
    return now


# ================================
# Budget rule 50/30/20
# ================================


def _category_penalty(deviation: float, rule: CategoryRule) -> float:
    if deviation > 0:
        return min(rule.max_penalty, deviation * rule.over_weight)
    if deviation < 0:
        return min(rule.max_penalty, -deviation * rule.under_weight)
    return 0.0


def calculate_budget_rule(
    income: float,
    spending: SpendingBreakdown,
    rule: BudgetRule = DEFAULT_BUDGET_RULE,
) -> BudgetRuleResult:
    """Score a month's spending against the 50/30/20 rule.

    For each group the share of income consumed and its signed deviation from
    the target share are computed.  The overall score starts at 100 and loses
    points proportionally to each group's absolute deviation, with separate
    weights for over- and under-shooting and a cap per group.  A perfect split
    scores exactly 100; any deviation scores strictly less.  The score is
    clamped to ``[0, 100]``.

    Args:
        income: Monthly income.  Zero yields zero percentages.
        spending: Essentials, lifestyle and investments amounts.
        rule: Targets and penalty weights, defaults to 50/30/20.

    Returns:
        BudgetRuleResult with one entry per group, the income total and score.

    Example:
        >>> result = calculate_budget_rule(10000, SpendingBreakdown(5000, 3000, 2000))
        >>> result.score
        100.0
    """
    amounts = spending.as_dict()
    groups: Dict[str, CategoryRuleResult] = {}
    score = 100.0

    for name, category_rule in rule.groups().items():
        amount = amounts[name]
        percentage = (amount / income) * 100 if income > 0 else 0.0
        deviation = percentage - category_rule.target_percent
        groups[name] = CategoryRuleResult(
            ideal=income * category_rule.target_percent / 100,
            actual=amount,
            percentage=percentage,
            deviation=deviation,
        )
        score -= _category_penalty(deviation, category_rule)

    return BudgetRuleResult(
        essentials=groups['essentials'],
        lifestyle=groups['lifestyle'],
        investments=groups['investments'],
        total=income,
        score=min(100.0, max(0.0, score)),
    )


# ================================
# Goal progress
# ================================


def _monthly_rate(history: Sequence[Tuple[DateLike, float]]) -> float:
    if len(history) < 2:
        return 0.0
    ordered = sorted(history, key=lambda point: _as_datetime(point[0]))
    first_date, first_value = ordered[0]
    last_date, last_value = ordered[-1]
    elapsed = (_as_datetime(last_date) - _as_datetime(first_date)).total_seconds()
    months = elapsed / (SECONDS_PER_DAY * DAYS_PER_MONTH)
    if months <= 0:
        return 0.0
    return (last_value - first_value) / months


def calculate_goal_progress(
    goal: Goal,
    history: Optional[Sequence[Tuple[DateLike, float]]] = None,
    now: Optional[datetime] = None,
) -> GoalProgress:
    """Calculate how far a goal has come and whether it is on pace.

    ``percentage`` is capped at 100 for over-funded goals and is 0 for a zero
    target; ``remaining`` never goes negative.  With a deadline,
    ``days_remaining`` is the ceiling of the whole days left (a deadline of
    tomorrow gives 1) and never drops below 0.

    ``history`` is an optional list of ``(date, value)`` snapshots of the
    goal's balance.  With at least two points it drives the monthly
    contribution rate, the estimated completion date and the off-track flag.
    """
    target = goal.target_amount
    current = goal.current_amount

    percentage = min(100.0, (current / target) * 100) if target > 0 else 0.0
    remaining = max(0.0, target - current)

    days_remaining: Optional[int] = None
    if goal.deadline is not None:
        deadline = _as_datetime(goal.deadline)
        today = _now_for(deadline, now)
        seconds_left = (deadline - today).total_seconds()
        days_remaining = max(0, math.ceil(seconds_left / SECONDS_PER_DAY))

    monthly_rate = _monthly_rate(history or [])

    estimated_completion: Optional[datetime] = None
    if monthly_rate > 0 and remaining > 0:
        months_needed = math.ceil(remaining / monthly_rate)
        start = pd.Timestamp(now if now is not None else datetime.now())
        estimated_completion = (start + pd.DateOffset(months=months_needed)).to_pydatetime()

    off_track = False
    if days_remaining is not None and days_remaining > 0 and remaining > 0:
        required_monthly = remaining / (days_remaining / DAYS_PER_MONTH)
        off_track = monthly_rate < required_monthly

    return GoalProgress(
        percentage=percentage,
        remaining=remaining,
        days_remaining=days_remaining,
        estimated_completion=estimated_completion,
        monthly_rate=monthly_rate,
        off_track=off_track,
    )


def goal_health_status(goal: Goal, now: Optional[datetime] = None) -> str:
    """Classify a goal as ``on_track``, ``attention`` or ``risk``.

    Without a deadline (or creation date) the thresholds are 50% and 25%
    funded.  With both, progress is compared against the share of the
    goal's time window already elapsed.
    """
    if goal.target_amount > 0:
        progress = (goal.current_amount / goal.target_amount) * 100
    else:
        progress = 100.0

    if goal.deadline is None or goal.created_at is None:
        if progress >= 50:
            return 'on_track'
        if progress >= 25:
            return 'attention'
        return 'risk'

    deadline = _as_datetime(goal.deadline)
    today = _now_for(deadline, now)
    days_remaining = (deadline - today).days
    total_days = (deadline - _as_datetime(goal.created_at)).days
    time_progress = ((total_days - days_remaining) / total_days) * 100 if total_days > 0 else 100.0

    if progress >= time_progress:
        return 'on_track'
    if progress >= time_progress * 0.7:
        return 'attention'
    return 'risk'


# ================================
# Investments
# ================================


def _holding_label(investment: Investment, position: int) -> str:
    return investment.name or investment.ticker or f"{investment.investment_type} #{position + 1}"


def investment_profitability(investment: Investment) -> float:
    """Return the holding's profitability (rentabilidade) as a percentage."""
    invested = investment.invested_value
    if invested <= 0:
        return 0.0
    return ((investment.current_value - invested) / invested) * 100


def calculate_investment_summary(investments: Iterable[Investment]) -> InvestmentSummary:
    """Aggregate a portfolio into totals and allocation breakdowns.

    Invested and current values are price times quantity.  ``allocation`` has
    one entry per holding, in input order, with its share of the portfolio's
    current value; ``by_type`` groups the same shares by investment type.
    An empty portfolio yields zero totals and empty allocations.
    """
    holdings = list(investments)
    total_invested = sum(inv.invested_value for inv in holdings)
    total_value = sum(inv.current_value for inv in holdings)
    total_profit = total_value - total_invested
    total_profitability = (total_profit / total_invested) * 100 if total_invested > 0 else 0.0

    def share(value: float) -> float:
        return (value / total_value) * 100 if total_value > 0 else 0.0

    allocation = [
        AllocationEntry(label=_holding_label(inv, i), value=inv.current_value, percentage=share(inv.current_value))
        for i, inv in enumerate(holdings)
    ]

    by_type_values: Dict[str, float] = {}
    for inv in holdings:
        by_type_values[inv.investment_type] = by_type_values.get(inv.investment_type, 0.0) + inv.current_value
    by_type = [
        AllocationEntry(label=kind, value=value, percentage=share(value))
        for kind, value in by_type_values.items()
    ]

    return InvestmentSummary(
        total_value=total_value,
        total_invested=total_invested,
        total_profit=total_profit,
        total_profitability=total_profitability,
        allocation=allocation,
        by_type=by_type,
    )


# ================================
# Monthly projection
# ================================


def calculate_monthly_projection(
    transactions: Iterable[Transaction],
    total_income: float,
    today: Optional[date] = None,
) -> MonthlyProjection:
    """Project month-end expenses from the spending so far this month.

    Only ``expense`` transactions count.  The daily limit spreads what is left
    of the income over the remaining days and is 0 on the last day.
    """
    today = today or date.today()
    current_day = today.day
    last_day = calendar.monthrange(today.year, today.month)[1]
    days_remaining = last_day - current_day

    current_expenses = sum(abs(t.amount) for t in transactions if t.type == 'expense')
    daily_average = current_expenses / current_day
    estimated_expenses = current_expenses + daily_average * days_remaining

    remaining_budget = total_income - current_expenses
    daily_limit = remaining_budget / days_remaining if days_remaining > 0 else 0.0

    return MonthlyProjection(
        estimated_income=total_income,
        estimated_expenses=estimated_expenses,
        estimated_balance=total_income - estimated_expenses,
        days_remaining=days_remaining,
        daily_average=daily_average,
        daily_limit=daily_limit,
    )


# ================================
# Category analysis
# ================================


def _category_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            'category_id': t.category.id,
            'category_name': t.category.name,
            'budget': t.category.monthly_budget,
            'amount': abs(t.amount),
        }
        for t in transactions
        if t.category is not None and t.type == 'expense'
    ]
    return pd.DataFrame(rows, columns=['category_id', 'category_name', 'budget', 'amount'])


def analyze_category_spending(
    current_month: Iterable[Transaction],
    previous_month: Iterable[Transaction],
) -> List[CategoryAnalysis]:
    """Compare this month's spending per category with the previous month.

    A category trends ``up`` when it grew by more than 10% of last month's
    amount, ``down`` when it shrank by more than that, ``stable`` otherwise.
    Results are sorted by amount spent, largest first.
    """
    current = _category_frame(current_month)
    if current.empty:
        return []
    previous = _category_frame(previous_month)

    grouped = current.groupby('category_id', sort=False).agg(
        category_name=('category_name', 'first'),
        budget=('budget', 'first'),
        amount=('amount', 'sum'),
    )
    previous_totals = previous.groupby('category_id')['amount'].sum()
    grouped['previous'] = grouped.index.map(lambda cid: float(previous_totals.get(cid, 0.0)))
    grouped = grouped.sort_values('amount', ascending=False, kind='mergesort')
    total_spent = float(grouped['amount'].sum())

    analysis: List[CategoryAnalysis] = []
    for category_id, row in grouped.iterrows():
        amount = float(row['amount'])
        previous_amount = float(row['previous'])
        budget = None if pd.isna(row['budget']) else float(row['budget'])
        diff = amount - previous_amount

        trend = 'stable'
        if diff > previous_amount * TREND_THRESHOLD:
            trend = 'up'
        elif diff < -previous_amount * TREND_THRESHOLD:
            trend = 'down'

        analysis.append(CategoryAnalysis(
            category_id=str(category_id),
            category_name=str(row['category_name']),
            amount_spent=amount,
            budget=budget,
            percent_used=(amount / budget) * 100 if budget else 0.0,
            percent_of_total=(amount / total_spent) * 100 if total_spent > 0 else 0.0,
            trend=trend,
            monthly_average=(amount + previous_amount) / 2,
        ))
    return analysis


# ================================
# Savings rate
# ================================


def calculate_savings_rate(income: float, spending: float) -> float:
    """Percentage of income saved; never negative, 0 when income is 0."""
    if income <= 0:
        return 0.0
    return max(0.0, ((income - spending) / income) * 100)


# ================================
# Compound interest
# ================================


def calculate_compound_interest(
    principal: float,
    rate: float,
    periods: int,
    deposit: float = 0.0,
) -> float:
    """Balance after ``periods`` rounds of growth at ``rate`` percent plus ``deposit``.

    Example:
        >>> round(calculate_compound_interest(1000, 1, 12), 2)
        1126.83
    """
    balance = principal
    growth = 1 + rate / 100
    for _ in range(periods):
        balance = balance * growth + deposit
    return balance


def compound_growth_series(
    principal: float,
    rate: float,
    periods: int,
    deposit: float = 0.0,
) -> List[float]:
    """Balance at the start and after each period; ``series[-1]`` matches
    :func:`calculate_compound_interest`."""
    balance = principal
    growth = 1 + rate / 100
    series = [balance]
    for _ in range(periods):
        balance = balance * growth + deposit
        series.append(balance)
    return series


def calculate_time_to_goal(
    current_value: float,
    target_value: float,
    deposit: float,
    rate: float = 0.0,
) -> float:
    """Minimum number of periods for the balance to reach ``target_value``.

    Uses the same per-period rule as :func:`calculate_compound_interest`.
    Returns ``0`` when the target is already met and ``math.inf`` when it can
    never be met: no deposit and no growth, or the search exceeds
    :data:`MAX_PERIODS`.
    """
    if current_value >= target_value:
        return 0
    if deposit <= 0 and (rate <= 0 or current_value <= 0):
        logger.debug("Goal of %s unreachable from %s without deposits or growth", target_value, current_value)
        return math.inf

    growth = 1 + rate / 100
    balance = current_value
    periods = 0
    while balance < target_value:
        if periods >= MAX_PERIODS:
            logger.debug("Goal of %s not reached within %d periods", target_value, MAX_PERIODS)
            return math.inf
        balance = balance * growth + deposit
        periods += 1
    return periods
