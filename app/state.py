"""Streamlit session-state storage for the uploaded snapshot."""

from __future__ import annotations

import streamlit as st

from core.models import SessionSnapshot, StoreGrouping

SNAPSHOT_KEY = "splitspend_snapshot"
DRAFT_GROUPS_KEY = "splitspend_draft_groups"


def get_snapshot() -> SessionSnapshot | None:
    return st.session_state.get(SNAPSHOT_KEY)


def set_snapshot(snapshot: SessionSnapshot) -> None:
    st.session_state[SNAPSHOT_KEY] = snapshot


def clear_drafts() -> None:
    st.session_state.pop(DRAFT_GROUPS_KEY, None)


def get_draft_groups() -> list[StoreGrouping] | None:
    return st.session_state.get(DRAFT_GROUPS_KEY)


def set_draft_groups(groups: list[StoreGrouping]) -> None:
    st.session_state[DRAFT_GROUPS_KEY] = list(groups)
