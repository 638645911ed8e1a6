"""Page stylesheet and plotly defaults for the dashboard."""

from __future__ import annotations

import plotly.io as pio
import streamlit as st

TEMPLATE_NAME = "painel"

SERIES_COLORS = [
    "#2563eb",
    "#7c3aed",
    "#0891b2",
    "#16a34a",
    "#ea580c",
    "#db2777",
]

STYLESHEET = """
<style>
[data-testid="stMetric"] {
    background-color: #ffffff;
    border: 1px solid #e2e8f0;
    border-radius: 16px;
    padding: 1rem 1.25rem;
}
[data-testid="stMetricLabel"] p {
    color: #475569;
    font-size: 0.85rem;
}
.file-badge {
    display: inline-block;
    padding: 0.35rem 1rem;
    border-radius: 999px;
    background-color: #f1f5f9;
    color: #334155;
    font-size: 0.85rem;
    font-weight: 500;
    margin-bottom: 1rem;
}
.headline-caption {
    color: #64748b;
    font-size: 0.75rem;
    margin-top: -0.5rem;
}
.stTabs [data-baseweb="tab"] {
    font-weight: 600;
}
</style>
"""


def register_plotly_template() -> None:
    pio.templates[TEMPLATE_NAME] = {
        "layout": {
            "colorway": SERIES_COLORS,
            "paper_bgcolor": "rgba(0,0,0,0)",
            "plot_bgcolor": "rgba(0,0,0,0)",
            "margin": {"t": 48, "r": 16, "b": 32, "l": 16},
            "legend": {"orientation": "h", "y": -0.2},
        }
    }
    pio.templates.default = f"plotly_white+{TEMPLATE_NAME}"


def apply_dashboard_style() -> None:
    """Inject the card, badge and tab styles and set the chart template."""

    st.markdown(STYLESHEET, unsafe_allow_html=True)
    register_plotly_template()
