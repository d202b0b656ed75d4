"""Store grouping refinement page.

Suggested groupings are held as an editable draft in session state until the
user saves them, at which point they become the confirmed store mappings.
"""

from __future__ import annotations

import streamlit as st

from analytics import groupings_to_mapping, mapping_to_groupings, merge_groups, split_group
from app.layout import card
from app.state import get_draft_groups, get_snapshot, set_draft_groups, set_snapshot
from config import get_settings
from core import SplitSpendError, StoreGrouping
from core.models import SessionSnapshot
from core.service import apply_mappings, store_suggestions


def _initial_groups(snapshot: SessionSnapshot) -> list[StoreGrouping]:
    if snapshot.store_mappings:
        return mapping_to_groupings(snapshot.store_mappings)
    return store_suggestions(snapshot, threshold=get_settings().similarity_threshold)


def _render_group(index: int, group: StoreGrouping, groups: list[StoreGrouping], snapshot: SessionSnapshot) -> None:
    label = f"{group.canonical_name} ({len(group.variations)} variations)"
    with st.expander(label, expanded=False):
        new_name = st.text_input("Canonical name", value=group.canonical_name, key=f"rename-{index}")
        if group.variations:
            st.caption("Variations: " + ", ".join(group.variations))

        action_cols = st.columns((1, 1, 1))
        if action_cols[0].button("Rename", key=f"rename-btn-{index}") and new_name.strip():
            names = [name for name in group.names if name != new_name.strip()]
            groups[index] = StoreGrouping(canonical_name=new_name.strip(), variations=tuple(names))
            set_draft_groups(groups)
            st.rerun()

        if action_cols[1].button("Delete", key=f"delete-{index}"):
            del groups[index]
            set_draft_groups(groups)
            st.rerun()

        others = [other for other in groups if other is not group]
        if others:
            target = st.selectbox(
                "Merge with",
                others,
                format_func=lambda candidate: candidate.canonical_name,
                key=f"merge-target-{index}",
            )
            if action_cols[2].button("Merge", key=f"merge-{index}"):
                merged, _ = merge_groups(group, target, snapshot.transactions)
                remaining = [other for other in groups if other is not group and other is not target]
                set_draft_groups([merged, *remaining])
                st.rerun()

        if group.variations:
            to_split = st.multiselect("Split out", group.variations, key=f"split-{index}")
            if st.button("Split", key=f"split-btn-{index}", disabled=not to_split):
                original, new_group, _ = split_group(group, to_split, snapshot.transactions)
                groups[index] = original
                if new_group.canonical_name:
                    groups.insert(index + 1, new_group)
                set_draft_groups(groups)
                st.rerun()


def render_page() -> None:
    snapshot = get_snapshot()
    if snapshot is None:
        st.info("Upload a CSV first to refine store names.")
        return

    groups = get_draft_groups()
    if groups is None:
        groups = _initial_groups(snapshot)
        set_draft_groups(groups)
    groups = list(groups)

    with card("Store groupings", suffix=f"{len(groups)} stores"):
        st.caption("Similar descriptions are grouped under the most frequent spelling. Adjust before saving.")
        for index, group in enumerate(groups):
            _render_group(index, group, groups, snapshot)

        with st.form("add-store", clear_on_submit=True):
            standalone = st.text_input("Add a standalone store")
            if st.form_submit_button("Add") and standalone.strip():
                set_draft_groups([*groups, StoreGrouping(canonical_name=standalone.strip())])
                st.rerun()

    if st.button("Save groupings", type="primary"):
        try:
            updated, result = apply_mappings(snapshot, groupings_to_mapping(groups))
        except SplitSpendError as exc:
            st.error(str(exc))
            return
        set_snapshot(updated)
        st.success(f"{result['message']} ({result['transaction_count']} transactions).")
