"""Plotly visualisation helpers for the budget dashboard.

Each function takes the output of one of the :mod:`budget_dashboard.metrics`
helpers and returns a `plotly.graph_objects.Figure` that Streamlit renders
via ``st.plotly_chart``.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .metrics import BreakdownSlice

BUDGET_COLOR = "hsl(213, 94%, 68%)"
SPENT_COLOR = "hsl(38, 92%, 58%)"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_breakdown_pie_chart(slices: Sequence[BreakdownSlice], title: str | None = None) -> go.Figure:
    """Generate a pie chart of spend per category.

    Parameters
    ----------
    slices : sequence of BreakdownSlice
        Output of :func:`metrics.breakdown_series`; each slice keeps its
        category colour.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart.
    """
    if not slices:
        return _empty_figure()
    df = pd.DataFrame(list(slices), columns=["Category", "Spent", "Color"])
    fig = px.pie(
        df,
        names="Category",
        values="Spent",
        color="Category",
        color_discrete_map=dict(zip(df["Category"], df["Color"])),
    )
    fig.update_traces(textposition="inside", textinfo="percent+label")
    fig.update_layout(title=title or "Spending breakdown")
    return fig


def create_budget_vs_spent_chart(summary: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bar chart of budgeted against spent per category.

    Parameters
    ----------
    summary : pandas.DataFrame
        Output of :func:`metrics.category_summary`.
    title : str, optional
        Chart title.
    """
    if summary.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Budgeted", x=summary["category"], y=summary["budgeted"], marker_color=BUDGET_COLOR))
    fig.add_trace(go.Bar(name="Spent", x=summary["category"], y=summary["spent"], marker_color=SPENT_COLOR))
    fig.update_layout(title=title or "Budget vs Spent", barmode="group", xaxis_tickangle=-30)
    return fig


def create_spending_trend_chart(trend: Sequence[Dict[str, object]], title: str | None = None) -> go.Figure:
    """Line chart of spending and budget per period."""
    if not trend:
        return _empty_figure()
    df = pd.DataFrame(list(trend))
    fig = go.Figure()
    fig.add_trace(go.Scatter(name="Spending", x=df["month"], y=df["spending"], mode="lines+markers", line_color=SPENT_COLOR))
    fig.add_trace(go.Scatter(name="Budget", x=df["month"], y=df["budget"], mode="lines+markers", line_color=BUDGET_COLOR))
    fig.update_layout(title=title or "Spending trend", xaxis_title="Period", yaxis_title="Amount")
    return fig
