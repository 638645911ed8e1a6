"""Session state helpers shared across the dashboard tabs."""

from __future__ import annotations

from typing import MutableMapping, Optional

import streamlit as st

from pipeline import DashboardBundle

DEFAULTS = {
    "bundle": None,
    "error": None,
    "chart_types": {},
    "table_pages": {},
    "table_search": {},
}


def bootstrap_state(state: Optional[MutableMapping] = None) -> None:
    """Ensure key session state entries exist."""

    state = st.session_state if state is None else state
    for key, value in DEFAULTS.items():
        if key not in state:
            state[key] = value.copy() if isinstance(value, dict) else value


def store_bundle(bundle: DashboardBundle, state: Optional[MutableMapping] = None) -> None:
    """Replace the current dashboard with ``bundle`` and clear per-view choices."""

    state = st.session_state if state is None else state
    state["bundle"] = bundle
    state["error"] = None
    state["chart_types"] = {}
    state["table_pages"] = {}
    state["table_search"] = {}


def store_error(message: str, state: Optional[MutableMapping] = None) -> None:
    """Record a failed upload; the previous bundle is left as it was."""

    state = st.session_state if state is None else state
    state["error"] = message


def reset_dashboard(state: Optional[MutableMapping] = None) -> None:
    state = st.session_state if state is None else state
    for key, value in DEFAULTS.items():
        state[key] = value.copy() if isinstance(value, dict) else value
