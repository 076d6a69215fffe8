"""Streamlit app for FamFinance.

This module builds the household dashboard on top of the calculation,
formatting and visualisation modules.  It has four tabs: the 50/30/20
budget rule, savings goals, the investment portfolio and compound growth
projections.  The last inputs are kept in the JSON cache so the dashboard
reopens where it was left.

The table builders (``budget_rule_rows``, ``goal_rows``, ``allocation_rows``,
``category_rows``) are plain functions so they can be tested without a
running Streamlit session.

To run the dashboard from the command line::

    streamlit run famfinance/dashboard.py
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import streamlit as st

# Conditional imports to support execution both as part of a package and
# directly via ``streamlit run famfinance/dashboard.py``.
if __package__:
    from . import calculations as calc
    from . import colors
    from . import config
    from . import formatters as fmt
    from . import persistent_cache
    from . import sample_data
    from . import visualization as viz
    from .models import (
        AllocationEntry,
        BudgetRuleResult,
        CategoryAnalysis,
        Goal,
        Investment,
        SpendingBreakdown,
    )
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from famfinance import calculations as calc  # type: ignore
    from famfinance import colors  # type: ignore
    from famfinance import config  # type: ignore
    from famfinance import formatters as fmt  # type: ignore
    from famfinance import persistent_cache  # type: ignore
    from famfinance import sample_data  # type: ignore
    from famfinance import visualization as viz  # type: ignore
    from famfinance.models import (  # type: ignore
        AllocationEntry,
        BudgetRuleResult,
        CategoryAnalysis,
        Goal,
        Investment,
        SpendingBreakdown,
    )

logger = logging.getLogger(__name__)

HEALTH_LABELS = {
    'on_track': 'No caminho',
    'attention': 'Atenção',
    'risk': 'Risco',
}

_HEALTH_BY_LABEL = {label: key for key, label in HEALTH_LABELS.items()}

TREND_LABELS = {
    'up': '↑ subindo',
    'down': '↓ caindo',
    'stable': '→ estável',
}


# ---------------------------------------------------------------------------
# Table builders
# ---------------------------------------------------------------------------


def budget_rule_rows(result: BudgetRuleResult, labels: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """One row per budget group with formatted ideal, actual and deviation."""
    labels = labels or {}
    rows = []
    for key, entry in result.groups().items():
        rows.append({
            'Grupo': labels.get(key, key),
            'Ideal': fmt.format_currency(entry.ideal),
            'Real': fmt.format_currency(entry.actual),
            '% da renda': fmt.format_percentage(entry.percentage),
            'Desvio': fmt.format_percentage_with_sign(entry.deviation),
        })
    return pd.DataFrame(rows, columns=['Grupo', 'Ideal', 'Real', '% da renda', 'Desvio'])


def _format_periods(periods: float) -> str:
    if periods == float('inf'):
        return 'Inalcançável'
    return f"{int(periods)} meses"


def goal_rows(goals: Sequence[Goal], now: Optional[datetime] = None) -> pd.DataFrame:
    """Progress table for goals, including months to reach each one."""
    rows = []
    for goal in goals:
        progress = calc.calculate_goal_progress(goal, now=now)
        months = calc.calculate_time_to_goal(goal.current_amount, goal.target_amount, goal.monthly_contribution)
        rows.append({
            'Meta': goal.name,
            'Objetivo': fmt.format_currency(goal.target_amount),
            'Atual': fmt.format_currency(goal.current_amount),
            'Progresso': fmt.format_percentage(progress.percentage),
            'Faltam': fmt.format_currency(progress.remaining),
            'Dias restantes': '—' if progress.days_remaining is None else str(progress.days_remaining),
            'Prazo estimado': _format_periods(months),
            'Situação': HEALTH_LABELS[calc.goal_health_status(goal, now=now)],
        })
    return pd.DataFrame(rows)


def goal_status_style(row: pd.Series) -> List[str]:
    """Colour the ``Situação`` cell of a ``goal_rows`` row by goal health."""
    status = _HEALTH_BY_LABEL.get(row.get('Situação'))
    color = colors.HEALTH_STATUS_COLORS.get(status) if status else None
    return [
        f'color: {color}; font-weight: 600' if color and column == 'Situação' else ''
        for column in row.index
    ]


def allocation_rows(investments: Sequence[Investment]) -> pd.DataFrame:
    """Allocation table sorted by value, largest holding first, with each holding's return."""
    holdings = list(investments)
    summary = calc.calculate_investment_summary(holdings)
    df = pd.DataFrame(
        [
            {
                'Ativo': entry.label,
                'Valor': entry.value,
                'Alocação': entry.percentage,
                'Rentabilidade': calc.investment_profitability(investment),
            }
            for entry, investment in zip(summary.allocation, holdings)
        ],
        columns=['Ativo', 'Valor', 'Alocação', 'Rentabilidade'],
    )
    if df.empty:
        return df
    df = df.sort_values('Valor', ascending=False).reset_index(drop=True)
    df['Valor'] = df['Valor'].map(fmt.format_currency)
    df['Alocação'] = df['Alocação'].map(fmt.format_percentage)
    df['Rentabilidade'] = df['Rentabilidade'].map(fmt.format_percentage_with_sign)
    return df


def category_rows(analysis: Sequence[CategoryAnalysis]) -> pd.DataFrame:
    """Spending per category with budget usage and trend against last month."""
    rows = [
        {
            'Categoria': entry.category_name,
            'Gasto': fmt.format_currency(entry.amount_spent),
            'Orçamento': '—' if entry.budget is None else fmt.format_currency(entry.budget),
            '% usado': '—' if entry.budget is None else fmt.format_percentage(entry.percent_used),
            '% do total': fmt.format_percentage(entry.percent_of_total),
            'Tendência': TREND_LABELS[entry.trend],
        }
        for entry in analysis
    ]
    return pd.DataFrame(rows, columns=['Categoria', 'Gasto', 'Orçamento', '% usado', '% do total', 'Tendência'])


# ---------------------------------------------------------------------------
# Cache conversion
# ---------------------------------------------------------------------------


def goals_to_cache(goals: Sequence[Goal]) -> List[Dict[str, Any]]:
    return [
        {
            'name': goal.name,
            'target_amount': goal.target_amount,
            'current_amount': goal.current_amount,
            'deadline': goal.deadline.isoformat() if goal.deadline else None,
            'monthly_contribution': goal.monthly_contribution,
            'goal_type': goal.goal_type,
            'created_at': goal.created_at.isoformat() if goal.created_at else None,
        }
        for goal in goals
    ]


def goals_from_cache(entries: Sequence[Dict[str, Any]]) -> List[Goal]:
    goals = []
    for entry in entries:
        deadline = entry.get('deadline')
        created_at = entry.get('created_at')
        goals.append(Goal(
            name=str(entry.get('name', '')),
            target_amount=float(entry.get('target_amount', 0.0)),
            current_amount=float(entry.get('current_amount', 0.0)),
            deadline=date.fromisoformat(deadline[:10]) if deadline else None,
            monthly_contribution=float(entry.get('monthly_contribution', 0.0)),
            goal_type=str(entry.get('goal_type', 'savings')),
            created_at=date.fromisoformat(created_at[:10]) if created_at else None,
        ))
    return goals


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------


def _saved_or_default(saved: Dict[str, Any], defaults: Dict[str, Any], key: str) -> float:
    """Cached value for ``key``, or the configured default when never saved."""
    value = saved.get(key)
    if value is None:
        value = defaults.get(key, 0.0)
    return float(value)


def render_budget_tab(cache: Dict[str, Any]) -> None:
    defaults = config.get_config_value('dashboard', 'defaults', default={}) or {}
    spending_cache = cache.get('spending') or {}

    income = st.number_input(
        "Renda mensal (R$)", min_value=0.0, step=100.0,
        value=_saved_or_default(cache, defaults, 'income'),
    )
    col1, col2, col3 = st.columns(3)
    essentials = col1.number_input(
        "Essenciais", min_value=0.0, step=100.0,
        value=_saved_or_default(spending_cache, defaults, 'essentials'),
    )
    lifestyle = col2.number_input(
        "Estilo de vida", min_value=0.0, step=100.0,
        value=_saved_or_default(spending_cache, defaults, 'lifestyle'),
    )
    investments = col3.number_input(
        "Investimentos", min_value=0.0, step=100.0,
        value=_saved_or_default(spending_cache, defaults, 'investments'),
    )

    spending = SpendingBreakdown(essentials=essentials, lifestyle=lifestyle, investments=investments)
    cache['income'] = income
    cache['spending'] = spending.as_dict()

    try:
        rule = config.load_budget_rule()
        labels = config.budget_group_labels()
    except (FileNotFoundError, KeyError, ValueError) as exc:
        logger.warning("Falling back to the default budget rule: %s", exc)
        st.warning("Configuração da regra 50/30/20 inválida; usando os valores padrão.")
        rule, labels = calc.DEFAULT_BUDGET_RULE, {}

    result = calc.calculate_budget_rule(income, spending, rule)
    # Money put into investments counts as saved.
    savings_rate = calc.calculate_savings_rate(income, essentials + lifestyle)

    metric1, metric2 = st.columns(2)
    metric1.metric("Nota do orçamento", f"{result.score:.0f}/100")
    metric2.metric("Taxa de poupança", fmt.format_percentage(savings_rate))

    st.plotly_chart(viz.create_budget_rule_chart(result, labels), use_container_width=True)
    st.dataframe(budget_rule_rows(result, labels), use_container_width=True, hide_index=True)

    render_current_month(income)


def render_current_month(income: float, today: Optional[date] = None) -> None:
    """Month-end projection and category breakdown for the demo transactions."""
    today = today or date.today()
    last_month = (pd.Timestamp(today) - pd.DateOffset(months=1)).date()
    transactions = sample_data.sample_transactions(today.year, today.month)
    previous = sample_data.sample_transactions(last_month.year, last_month.month)

    st.subheader(f"Mês atual · {fmt.format_month_year(today)}")
    projection = calc.calculate_monthly_projection(transactions, income, today=today)
    col1, col2, col3 = st.columns(3)
    col1.metric("Gasto projetado", fmt.format_currency(projection.estimated_expenses))
    col2.metric("Saldo projetado", fmt.format_currency(projection.estimated_balance))
    col3.metric("Limite diário", fmt.format_currency(projection.daily_limit))

    analysis = calc.analyze_category_spending(transactions, previous)
    st.dataframe(category_rows(analysis), use_container_width=True, hide_index=True)


def render_goals_tab(cache: Dict[str, Any]) -> None:
    goals = goals_from_cache(cache.get('goals') or []) or sample_data.sample_goals()

    with st.form("new_goal"):
        st.subheader("Nova meta")
        name = st.text_input("Nome")
        target = st.number_input("Valor objetivo (R$)", min_value=0.0, step=500.0)
        current = st.number_input("Valor atual (R$)", min_value=0.0, step=500.0)
        contribution = st.number_input("Aporte mensal (R$)", min_value=0.0, step=100.0)
        deadline = st.date_input("Prazo", value=None)
        if st.form_submit_button("Adicionar meta"):
            if not name or target <= 0:
                st.error("Informe um nome e um valor objetivo maior que zero.")
            else:
                goals.append(Goal(
                    name=name, target_amount=target, current_amount=current,
                    deadline=deadline, monthly_contribution=contribution,
                    created_at=date.today(),
                ))
                st.success("Meta adicionada!")

    cache['goals'] = goals_to_cache(goals)
    progress = [calc.calculate_goal_progress(goal) for goal in goals]
    st.plotly_chart(viz.create_goal_progress_chart(goals, progress), use_container_width=True)
    st.dataframe(
        goal_rows(goals).style.apply(goal_status_style, axis=1),
        use_container_width=True,
        hide_index=True,
    )


def render_investments_tab() -> None:
    investments = sample_data.sample_investments()
    summary = calc.calculate_investment_summary(investments)

    col1, col2, col3 = st.columns(3)
    col1.metric("Patrimônio", fmt.format_currency_compact(summary.total_value))
    col2.metric("Aplicado", fmt.format_currency_compact(summary.total_invested))
    col3.metric(
        "Lucro",
        fmt.format_currency_with_sign(summary.total_profit),
        fmt.format_percentage_with_sign(summary.total_profitability),
    )

    by_type = [
        AllocationEntry(label=fmt.format_investment_type(entry.label), value=entry.value, percentage=entry.percentage)
        for entry in summary.by_type
    ]
    left, right = st.columns(2)
    left.plotly_chart(viz.create_allocation_pie_chart(by_type, "Por tipo"), use_container_width=True)
    right.plotly_chart(viz.create_allocation_pie_chart(summary.allocation, "Por ativo"), use_container_width=True)
    st.dataframe(allocation_rows(investments), use_container_width=True, hide_index=True)


def render_projection_tab(cache: Dict[str, Any]) -> None:
    defaults = config.get_config_value('dashboard', 'projection', default={}) or {}
    saved = cache.get('projection') or {}

    def initial(key: str) -> float:
        return float(saved.get(key, defaults.get(key, 0.0)))

    col1, col2 = st.columns(2)
    principal = col1.number_input("Valor inicial (R$)", min_value=0.0, step=100.0, value=initial('principal'))
    deposit = col2.number_input("Aporte mensal (R$)", min_value=0.0, step=100.0, value=initial('monthly_deposit'))
    rate = col1.number_input("Juros ao mês (%)", min_value=0.0, step=0.1, value=initial('monthly_rate'))
    months = int(col2.number_input("Meses", min_value=1, max_value=calc.MAX_PERIODS, step=12,
                                   value=int(initial('months') or 12)))
    target = st.number_input("Objetivo (R$)", min_value=0.0, step=1000.0, value=initial('target'))

    cache['projection'] = {
        'principal': principal,
        'monthly_deposit': deposit,
        'monthly_rate': rate,
        'months': months,
        'target': target,
    }

    series = calc.compound_growth_series(principal, rate, months, deposit)
    st.metric("Saldo final", fmt.format_currency(series[-1]))
    st.plotly_chart(viz.create_growth_projection_chart(series, deposit), use_container_width=True)

    if target > 0:
        periods = calc.calculate_time_to_goal(principal, target, deposit, rate)
        if periods == float('inf'):
            st.warning("Com esses valores o objetivo não é alcançado.")
        else:
            st.info(f"Objetivo alcançado em {_format_periods(periods)}.")


def main() -> None:
    """Entry point for the Streamlit app."""
    config.configure_logging()
    ui = config.get_config_value('dashboard', 'ui', default={}) or {}
    st.set_page_config(
        page_title=ui.get('page_title', 'FamFinance'),
        page_icon=ui.get('page_icon'),
        layout="wide",
    )
    st.title(ui.get('page_title', 'FamFinance'))

    config.ensure_data_directories()
    cache = persistent_cache.load_cache()
    budget_tab, goals_tab, investments_tab, projection_tab = st.tabs(
        ["Regra 50/30/20", "Metas", "Investimentos", "Projeções"]
    )
    with budget_tab:
        render_budget_tab(cache)
    with goals_tab:
        render_goals_tab(cache)
    with investments_tab:
        render_investments_tab()
    with projection_tab:
        render_projection_tab(cache)

    try:
        persistent_cache.save_cache(cache)
    except OSError as exc:
        logger.warning("Could not save dashboard cache: %s", exc)
        st.warning("Não foi possível salvar as preferências.")


if __name__ == "__main__":  # pragma: no cover
    main()
