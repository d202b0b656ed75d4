"""Store-name clustering, mapping and grouping edits."""

from __future__ import annotations

import pytest

from analytics import (
    analyze_similar_stores,
    apply_store_mappings,
    get_balance_analytics,
    get_spending_by,
    groupings_to_mapping,
    mapping_to_groupings,
    merge_groups,
    normalize_store_name,
    split_group,
    store_similarity,
)
from core.models import StoreGrouping
from tests.conftest import make_transaction


def test_normalize_store_name_strips_punctuation_and_case():
    assert normalize_store_name("Trader Joe's!") == "trader joes"
    assert normalize_store_name("  CAFÉ-7 ") == "  caf7 "
    assert normalize_store_name("Crème Brûlée") == "crme brle"


def test_store_similarity_bounds():
    assert store_similarity("mayuri", "mayuri") == pytest.approx(1.0)
    assert store_similarity("", "") == 0.0
    assert store_similarity("mayuri", "mayuris") == pytest.approx(1 - 1 / 7)
    assert store_similarity("mayuri", "mayuri store") == pytest.approx(0.5)


def test_similar_names_group_under_first_seen_on_tie():
    transactions = [
        make_transaction("2025-02-24", "Mayuri", 42.56),
        make_transaction("2025-02-25", "Mayuri's", 27.62),
        make_transaction("2025-02-26", "Shell", 10.0),
    ]

    groupings = analyze_similar_stores(transactions)

    assert groupings == [StoreGrouping("Mayuri", ("Mayuri's",))]


def test_most_frequent_name_becomes_canonical(household_transactions):
    groupings = analyze_similar_stores(household_transactions)

    assert groupings == [StoreGrouping("Trader Joe's", ("Trader Joes",))]


def test_threshold_is_strict():
    transactions = [make_transaction("2025-01-01", "abcde", 1.0), make_transaction("2025-01-02", "abcdx", 1.0)]

    assert analyze_similar_stores(transactions, threshold=0.8) == []
    assert len(analyze_similar_stores(transactions, threshold=0.7)) == 1


def test_apply_store_mappings_rewrites_variations_only(household_transactions):
    mapping = {"Trader Joe's": ("Trader Joes",)}

    updated = apply_store_mappings(household_transactions, mapping)

    assert [t.description for t in updated] == [
        "Trader Joe's",
        "Trader Joe's",
        "Shell",
        "Trader Joe's",
        "Netflix",
        "Shell",
    ]
    assert household_transactions[1].description == "Trader Joes"
    assert apply_store_mappings(updated, mapping) == updated


def test_merge_groups_repicks_canonical_by_count(household_transactions):
    first = StoreGrouping("Trader Joes", ())
    second = StoreGrouping("Trader Joe's", ("TJ",))

    merged, updated = merge_groups(first, second, household_transactions)

    assert merged.canonical_name == "Trader Joe's"
    assert set(merged.variations) == {"Trader Joes", "TJ"}
    assert sum(t.description == "Trader Joe's" for t in updated) == 3


def test_split_group_moves_names_out(household_transactions):
    group = StoreGrouping("Trader Joe's", ("Trader Joes", "Shell"))

    original, new_group, updated = split_group(group, ["Shell"], household_transactions)

    assert original == StoreGrouping("Trader Joe's", ("Trader Joes",))
    assert new_group == StoreGrouping("Shell", ())
    assert [t.description for t in updated] == [t.description for t in household_transactions]


def test_split_group_with_no_names_is_a_no_op(household_transactions):
    group = StoreGrouping("Trader Joe's", ("Trader Joes",))

    original, new_group, updated = split_group(group, [], household_transactions)

    assert original == group
    assert new_group.canonical_name == ""
    assert updated == household_transactions


def test_groupings_mapping_conversion_skips_blank_canonical():
    groupings = [StoreGrouping("Shell", ("Shell Oil",)), StoreGrouping("", ("orphan",))]

    mapping = groupings_to_mapping(groupings)

    assert mapping == {"Shell": ("Shell Oil",)}
    assert mapping_to_groupings(mapping) == [StoreGrouping("Shell", ("Shell Oil",))]


def test_confirmed_mapping_flows_into_store_totals_and_balances(mayuri_transactions):
    mapping = {"Mayuri": ("Mayuri Store",)}
    updated = apply_store_mappings(mayuri_transactions, mapping)

    by_store = get_spending_by(updated, None, mapping, "store")
    balances = get_balance_analytics(updated)

    assert len(by_store) == 1
    assert by_store[0]["label"] == "Mayuri"
    assert by_store[0]["amount"] == pytest.approx(70.18)
    assert balances["current_balance"] == pytest.approx({"A": 35.09, "B": -35.09})
