"""Value types shared by the calculation, formatting and dashboard modules.

Every record here is a plain input or output of a pure function.  None of
them is persisted by this package; the hosted database owns storage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Union

DateLike = Union[date, datetime]

# Budget group keys, in display order.
BUDGET_GROUPS = ('essentials', 'lifestyle', 'investments')


@dataclass
class SpendingBreakdown:
    """Monthly spending split across the three 50/30/20 groups."""
    essentials: float = 0.0
    lifestyle: float = 0.0
    investments: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'essentials': self.essentials,
            'lifestyle': self.lifestyle,
            'investments': self.investments,
        }


@dataclass
class CategoryRule:
    """Target share and penalty policy for one budget group.

    Weights are score points per percentage point of deviation.  Both must be
    strictly positive so that any deviation lowers the score.
    """
    target_percent: float
    over_weight: float
    under_weight: float
    max_penalty: float


@dataclass
class BudgetRule:
    essentials: CategoryRule
    lifestyle: CategoryRule
    investments: CategoryRule

    def groups(self) -> Dict[str, CategoryRule]:
        return {name: getattr(self, name) for name in BUDGET_GROUPS}

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, float]]) -> 'BudgetRule':
        """Build a rule from the ``budget_rule.json`` layout."""
        return cls(**{
            name: CategoryRule(
                target_percent=float(data[name]['target_percent']),
                over_weight=float(data[name]['over_weight']),
                under_weight=float(data[name]['under_weight']),
                max_penalty=float(data[name]['max_penalty']),
            )
            for name in BUDGET_GROUPS
        })


# Overspending on essentials weighs most, under-investing next.
DEFAULT_BUDGET_RULE = BudgetRule(
    essentials=CategoryRule(target_percent=50.0, over_weight=2.0, under_weight=0.5, max_penalty=40.0),
    lifestyle=CategoryRule(target_percent=30.0, over_weight=1.0, under_weight=0.5, max_penalty=20.0),
    investments=CategoryRule(target_percent=20.0, over_weight=0.5, under_weight=1.5, max_penalty=30.0),
)


@dataclass
class Goal:
    target_amount: float
    current_amount: float = 0.0
    deadline: Optional[DateLike] = None
    name: str = ''
    goal_type: str = 'savings'  # savings | investment | patrimony | budget
    created_at: Optional[DateLike] = None
    monthly_contribution: float = 0.0


@dataclass
class Investment:
    purchase_price: float
    current_price: float
    quantity: int = 1
    name: str = ''
    investment_type: str = 'other'  # stocks | bonds | crypto | real_estate | funds | other
    ticker: Optional[str] = None
    institution: Optional[str] = None

    @property
    def invested_value(self) -> float:
        return self.purchase_price * self.quantity

    @property
    def current_value(self) -> float:
        return self.current_price * self.quantity


@dataclass
class Category:
    id: str
    name: str
    budget_group: str = 'essentials'
    monthly_budget: Optional[float] = None


@dataclass
class Transaction:
    amount: float
    type: str = 'expense'  # income | expense | transfer
    date: Optional[DateLike] = None
    description: str = ''
    category: Optional[Category] = None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class CategoryRuleResult:
    ideal: float
    actual: float
    percentage: float
    deviation: float


@dataclass
class BudgetRuleResult:
    essentials: CategoryRuleResult
    lifestyle: CategoryRuleResult
    investments: CategoryRuleResult
    total: float
    score: float

    def groups(self) -> Dict[str, CategoryRuleResult]:
        return {name: getattr(self, name) for name in BUDGET_GROUPS}


@dataclass
class GoalProgress:
    percentage: float
    remaining: float
    days_remaining: Optional[int] = None
    estimated_completion: Optional[datetime] = None
    monthly_rate: float = 0.0
    off_track: bool = False


@dataclass
class AllocationEntry:
    label: str
    value: float
    percentage: float


@dataclass
class InvestmentSummary:
    total_value: float
    total_invested: float
    total_profit: float
    total_profitability: float
    allocation: List[AllocationEntry] = field(default_factory=list)
    by_type: List[AllocationEntry] = field(default_factory=list)


@dataclass
class MonthlyProjection:
    estimated_income: float
    estimated_expenses: float
    estimated_balance: float
    days_remaining: int
    daily_average: float
    daily_limit: float


@dataclass
class CategoryAnalysis:
    category_id: str
    category_name: str
    amount_spent: float
    budget: Optional[float]
    percent_used: float
    percent_of_total: float
    trend: str  # up | down | stable
    monthly_average: float
