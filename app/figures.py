from typing import Any, Mapping, Sequence

import numpy as np
import plotly.graph_objects as go

from chartdata.config import ChartConfig
from chartdata.dates import day_label, month_label
from chartdata.domain import Day, IntensityLevel, Slice
from chartdata.intensity import level_color

NO_DATA = "No data to map"
TEMPLATE = "plotly_dark"


def _empty(title: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=NO_DATA, showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
    fig.update_layout(title=title, template=TEMPLATE, xaxis_visible=False, yaxis_visible=False)
    return fig


def pie_figure(slices: Sequence[Slice], title: str = "Spending by category", hole: float = 0.55) -> go.Figure:
    if not slices:
        return _empty(title)
    fig = go.Figure(go.Pie(
        labels=[s.name for s in slices],
        values=[s.value for s in slices],
        marker=dict(colors=[s.color for s in slices]),
        customdata=[s.key for s in slices],
        hole=hole,
        sort=False,
        textinfo="none",
    ))
    fig.update_layout(title=title, template=TEMPLATE, margin=dict(t=30, b=10, l=10, r=10))
    return fig


def bar_figure(flow: Mapping[str, Any], title: str = "Cash flow") -> go.Figure:
    records = flow["records"]
    if not records:
        return _empty(title)
    x = [day_label(r["date"]) for r in records]
    keys = [r["date"] for r in records]
    fig = go.Figure()
    for name in flow["series"]:
        fig.add_trace(go.Bar(
            x=x,
            y=[r[name] for r in records],
            name=name.title(),
            marker_color=flow["colors"][name],
            customdata=keys,
        ))
    fig.update_layout(title=title, template=TEMPLATE, barmode="group", margin=dict(t=30, b=10, l=10, r=10))
    return fig


def line_figure(trend: Mapping[str, Any], title: str = "Monthly trend") -> go.Figure:
    records = trend["records"]
    if not records:
        return _empty(title)
    x = [month_label(r["month"]) for r in records]
    keys = [r["month"] for r in records]
    fig = go.Figure()
    for name in trend["series"]:
        fig.add_trace(go.Scatter(
            x=x,
            y=[r[name] for r in records],
            mode="lines+markers",
            name=name.title() if name in ("income", "expense") else name,
            line=dict(color=trend["colors"][name], width=3),
            customdata=keys,
        ))
    fig.update_layout(title=title, template=TEMPLATE, margin=dict(t=30, b=10, l=10, r=10))
    return fig


def _level_colorscale(colors: Sequence[str]):
    n = len(colors)
    scale = []
    for i, color in enumerate(colors):
        scale.append([i / n, color])
        scale.append([(i + 1) / n, color])
    return scale


def heatmap_matrices(heatmap: Mapping[str, Any]) -> dict[str, np.ndarray]:
    """Weeks x weekdays arrays of level, amount, day-of-month text and DateKey."""
    rows = heatmap["rows"]
    shape = (len(rows), 7)
    levels = np.full(shape, np.nan)
    amounts = np.full(shape, np.nan)
    text = np.full(shape, "", dtype=object)
    keys = np.full(shape, None, dtype=object)
    for r, row in enumerate(rows):
        for c, cell in enumerate(row):
            if isinstance(cell, Day):
                levels[r, c] = int(cell.level)
                amounts[r, c] = cell.amount
                text[r, c] = str(int(cell.date[-2:]))
                keys[r, c] = cell.date
    return {"levels": levels, "amounts": amounts, "text": text, "keys": keys}


def heatmap_figure(heatmap: Mapping[str, Any], config: ChartConfig = None, dark: bool = True,
                   title: str = "Spending heatmap") -> go.Figure:
    if not heatmap["cells"]:
        return _empty(title)
    config = config or ChartConfig()
    colors = [level_color(level, dark, config) for level in IntensityLevel]
    m = heatmap_matrices(heatmap)
    fig = go.Figure(go.Heatmap(
        z=m["levels"],
        x=list(range(7)),
        text=m["text"],
        texttemplate="%{text}",
        customdata=np.dstack([m["keys"], m["amounts"]]),
        hovertemplate="%{customdata[0]}: %{customdata[1]:,.0f}<extra></extra>",
        colorscale=_level_colorscale(colors),
        zmin=0,
        zmax=len(colors) - 1,
        showscale=False,
        xgap=3,
        ygap=3,
    ))
    fig.update_layout(title=title, template=TEMPLATE if dark else "plotly_white", margin=dict(t=30, b=10, l=10, r=10))
    # weekday letters repeat (T, S), so the axis is numeric with letter ticks
    fig.update_xaxes(tickvals=list(range(7)), ticktext=list(heatmap["headers"]), side="top")
    fig.update_yaxes(autorange="reversed", showticklabels=False)
    return fig
