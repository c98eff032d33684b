from __future__ import annotations

import calendar as _calendar
from datetime import date

import numpy as np
import plotly.graph_objects as go

from todo_dashboard.constants import WEEKDAY_LABELS
from todo_dashboard.dates import date_key

NO_TASKS_VALUE = -1


def month_last_day(reference_date):
    days = _calendar.monthrange(reference_date.year, reference_date.month)[1]
    return reference_date.replace(day=days)


def month_weeks(year, month):
    return _calendar.Calendar(firstweekday=6).monthdatescalendar(year, month)


def build_month_progress_grid(year, month, aggregates_by_date):
    """Lay out one month as Sunday-first week rows.

    Cells outside the month are NaN with no label. Days inside the month
    without any task get ``NO_TASKS_VALUE`` so they stay distinguishable
    from days whose tasks are all still open (0 %).
    """
    weeks = month_weeks(year, month)
    z = np.full((len(weeks), 7), np.nan)
    hover = [["" for _ in range(7)] for _ in weeks]
    labels = [["" for _ in range(7)] for _ in weeks]
    for row, week in enumerate(weeks):
        for col, current in enumerate(week):
            if current.month != month:
                continue
            key = date_key(current)
            labels[row][col] = str(current.day)
            item = aggregates_by_date.get(key)
            if item is None:
                z[row, col] = NO_TASKS_VALUE
                hover[row][col] = f"{key} • No tasks"
                continue
            z[row, col] = item.pct_completed
            hover[row][col] = (
                f"{key} • {item.completed_tasks}/{item.total_tasks} done ({item.pct_completed}%)"
            )
    return z, hover, labels


def apply_common_plot_style(fig, title, theme):
    fig.update_layout(
        title=title,
        title_font=dict(color=theme["text_main"], size=16),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=theme["text_main"]),
        margin=dict(l=20, r=20, t=40, b=20),
        xaxis=dict(showgrid=False, zeroline=False, side="top", tickfont=dict(color=theme["text_soft"])),
        yaxis=dict(showgrid=False, zeroline=False, showticklabels=False, autorange="reversed"),
    )
    return fig


def month_progress_heatmap(year, month, aggregates_by_date, theme, today=None):
    z, hover, labels = build_month_progress_grid(year, month, aggregates_by_date)
    colorscale = [
        [0.0, theme["cell_empty"]],
        [0.009, theme["cell_empty"]],
        [0.0099, theme["accent"]],
        [1.0, theme["success"]],
    ]
    fig = go.Figure(
        go.Heatmap(
            z=z,
            x=WEEKDAY_LABELS,
            y=[f"Week {idx + 1}" for idx in range(len(labels))],
            text=labels,
            texttemplate="%{text}",
            customdata=hover,
            hovertemplate="%{customdata}<extra></extra>",
            colorscale=colorscale,
            zmin=NO_TASKS_VALUE,
            zmax=100,
            showscale=False,
            xgap=4,
            ygap=4,
        )
    )
    if today is not None and today.year == year and today.month == month:
        for row, week in enumerate(month_weeks(year, month)):
            if today in week:
                col = week.index(today)
                fig.add_shape(
                    type="rect",
                    x0=col - 0.5,
                    x1=col + 0.5,
                    y0=row - 0.5,
                    y1=row + 0.5,
                    line=dict(color=theme["today_border"], width=2),
                )
    title = date(year, month, 1).strftime("%B %Y") + " Progress"
    return apply_common_plot_style(fig, title, theme)
