"""Plotly visualisation helpers for the FamFinance dashboard.

Each function accepts the result objects returned by
:mod:`famfinance.calculations` and produces an interactive Plotly figure
that Streamlit can render via ``st.plotly_chart``.  Every builder returns an
empty figure with a "no data" title rather than failing on empty input.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import colors
from .formatters import format_currency, format_percentage
from .models import AllocationEntry, BudgetRuleResult, Goal, GoalProgress

NO_DATA_TITLE = "Sem dados para exibir"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=NO_DATA_TITLE)
    return fig


def create_budget_rule_chart(
    result: BudgetRuleResult,
    labels: Optional[Dict[str, str]] = None,
    targets: Optional[Dict[str, float]] = None,
) -> go.Figure:
    """Grouped bar chart of actual versus target share of income per group.

    Parameters
    ----------
    result : BudgetRuleResult
        Output of :func:`calculate_budget_rule`.
    labels : dict, optional
        Display label per group key.  Defaults to the keys themselves.
    targets : dict, optional
        Target percentage per group.  When omitted it is recovered from
        ``percentage - deviation``.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart; title carries the overall score.
    """
    labels = labels or {}
    groups = result.groups()
    names = [labels.get(key, key) for key in groups]
    actual = [entry.percentage for entry in groups.values()]
    target = [
        (targets or {}).get(key, entry.percentage - entry.deviation)
        for key, entry in groups.items()
    ]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Real",
        x=names,
        y=actual,
        marker_color=[colors.BUDGET_GROUP_COLORS.get(key, colors.NEUTRAL) for key in groups],
        text=[format_percentage(value) for value in actual],
        textposition="outside",
    ))
    fig.add_trace(go.Bar(
        name="Meta",
        x=names,
        y=target,
        marker_color=colors.NEUTRAL,
        opacity=0.5,
    ))
    fig.update_layout(
        barmode="group",
        title=f"Regra 50/30/20 · nota {result.score:.0f}",
        yaxis_title="% da renda",
    )
    return fig


def create_allocation_pie_chart(entries: Sequence[AllocationEntry], title: str | None = None) -> go.Figure:
    """Donut chart of portfolio allocation.

    Parameters
    ----------
    entries : sequence of AllocationEntry
        ``InvestmentSummary.allocation`` or ``InvestmentSummary.by_type``.
    title : str, optional
        Title for the chart.
    """
    if not entries or sum(entry.value for entry in entries) <= 0:
        return _empty_figure()
    df = pd.DataFrame(
        {"Ativo": [entry.label for entry in entries], "Valor": [entry.value for entry in entries]}
    )
    fig = px.pie(
        df,
        names="Ativo",
        values="Valor",
        hole=0.45,
        color_discrete_sequence=colors.palette(len(df)),
    )
    fig.update_layout(title=title or "Alocação da carteira")
    return fig


def create_goal_progress_chart(goals: Sequence[Goal], progress: Sequence[GoalProgress]) -> go.Figure:
    """Horizontal bars with each goal's completion percentage."""
    if not goals:
        return _empty_figure()
    df = pd.DataFrame({
        "Meta": [goal.name or f"Meta {i + 1}" for i, goal in enumerate(goals)],
        "Progresso": [item.percentage for item in progress],
        "Faltam": [format_currency(item.remaining) for item in progress],
    })
    fig = px.bar(
        df,
        x="Progresso",
        y="Meta",
        orientation="h",
        text="Faltam",
        range_x=[0, 100],
        color_discrete_sequence=[colors.SEMANTIC_COLORS['success']['default']],
    )
    fig.update_layout(title="Progresso das metas", xaxis_title="% concluído", yaxis_title="")
    return fig


def create_growth_projection_chart(
    series: Sequence[float],
    deposit: float = 0.0,
    title: str | None = None,
) -> go.Figure:
    """Line chart of a compound growth projection against money deposited.

    Parameters
    ----------
    series : sequence of float
        Output of :func:`compound_growth_series`; index 0 is the principal.
    deposit : float
        Per-period deposit, used to draw the contributed-capital line.
    title : str, optional
        Title for the chart.
    """
    if len(series) == 0:
        return _empty_figure()
    periods = np.arange(len(series))
    contributed = series[0] + deposit * periods
    df = pd.DataFrame({
        "Mês": periods,
        "Saldo projetado": np.asarray(series, dtype=float),
        "Total aportado": contributed,
    })
    long_df = df.melt(id_vars="Mês", var_name="Série", value_name="Valor")
    fig = px.line(
        long_df,
        x="Mês",
        y="Valor",
        color="Série",
        color_discrete_sequence=[
            colors.SEMANTIC_COLORS['investment']['default'],
            colors.NEUTRAL,
        ],
    )
    fig.update_layout(title=title or "Projeção de juros compostos", yaxis_title="R$")
    return fig
