"""Store-name clustering and canonical mapping helpers."""

from __future__ import annotations

import re
from collections import Counter
from functools import lru_cache
from typing import Iterable, Mapping, Sequence

from rapidfuzz.distance import Levenshtein

from core.errors import safe_entry_point
from core.models import StoreGrouping, StoreMapping, Transaction

__all__ = [
    "DEFAULT_SIMILARITY_THRESHOLD",
    "normalize_store_name",
    "store_similarity",
    "analyze_similar_stores",
    "apply_store_mappings",
    "merge_groups",
    "split_group",
    "canonical_lookup",
    "canonical_store",
    "groupings_to_mapping",
    "mapping_to_groupings",
]

DEFAULT_SIMILARITY_THRESHOLD = 0.8

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)


@lru_cache(maxsize=1024)
def normalize_store_name(raw_name: str) -> str:
    """Lowercase ``raw_name`` and drop everything but ASCII word characters and whitespace."""

    return _PUNCTUATION.sub("", raw_name.lower())


def store_similarity(first: str, second: str) -> float:
    """Return ``1 - levenshtein / longest`` for two normalised names.

    Two empty names share no characters to compare and score ``0.0``.
    """

    longest = max(len(first), len(second))
    if longest == 0:
        return 0.0
    return 1.0 - Levenshtein.distance(first, second) / longest


def _most_frequent(names: Sequence[str], counts: Mapping[str, int]) -> str:
    # max() keeps the first of equally frequent names
    return max(names, key=lambda name: counts.get(name, 0))


def _occurrences(transactions: Iterable[Transaction]) -> Counter[str]:
    return Counter(transaction.description for transaction in transactions)


@safe_entry_point(list)
def analyze_similar_stores(
    transactions: Sequence[Transaction],
    *,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[StoreGrouping]:
    """Suggest groupings of near-duplicate store descriptions.

    Clustering is greedy: each unassigned name absorbs every later unassigned
    name whose similarity exceeds ``threshold``. Singletons are dropped and the
    most frequent member of each cluster becomes its canonical name.
    """

    counts = _occurrences(transactions)
    names = list(counts)
    normalized = {name: normalize_store_name(name) for name in names}

    assigned: set[str] = set()
    groupings: list[StoreGrouping] = []
    for name in names:
        if name in assigned:
            continue
        assigned.add(name)
        cluster = [name]

        for other in names:
            if other in assigned:
                continue
            if store_similarity(normalized[name], normalized[other]) > threshold:
                cluster.append(other)
                assigned.add(other)

        if len(cluster) < 2:
            continue

        canonical = _most_frequent(cluster, counts)
        groupings.append(
            StoreGrouping(
                canonical_name=canonical,
                variations=tuple(member for member in cluster if member != canonical),
            )
        )

    return groupings


def canonical_lookup(mapping: StoreMapping, *, include_canonical: bool = True) -> dict[str, str]:
    """Build a reverse index from store description to canonical name."""

    lookup: dict[str, str] = {}
    for canonical, variations in mapping.items():
        if include_canonical:
            lookup[canonical] = canonical
        for variation in variations:
            lookup[variation] = canonical
    return lookup


def canonical_store(description: str, lookup: Mapping[str, str]) -> str:
    """Return the canonical name for ``description``, or the description itself."""

    return lookup.get(description, description)


def _rewrite(transactions: Sequence[Transaction], lookup: Mapping[str, str]) -> list[Transaction]:
    return [
        transaction.with_description(lookup[transaction.description])
        if transaction.description in lookup
        else transaction
        for transaction in transactions
    ]


def apply_store_mappings(transactions: Sequence[Transaction], mapping: StoreMapping) -> list[Transaction]:
    """Return transactions with every mapped variation replaced by its canonical name."""

    return _rewrite(transactions, canonical_lookup(mapping, include_canonical=False))


def merge_groups(
    first: StoreGrouping,
    second: StoreGrouping,
    transactions: Sequence[Transaction],
) -> tuple[StoreGrouping, list[Transaction]]:
    """Combine two groupings and re-pick the canonical name by occurrence count."""

    pool = list(dict.fromkeys((*first.names, *second.names)))
    canonical = _most_frequent(pool, _occurrences(transactions))
    new_group = StoreGrouping(canonical_name=canonical, variations=tuple(pool))
    updated = _rewrite(transactions, {name: canonical for name in pool})
    return new_group, updated


def split_group(
    group: StoreGrouping,
    names_to_split: Sequence[str],
    transactions: Sequence[Transaction],
) -> tuple[StoreGrouping, StoreGrouping, list[Transaction]]:
    """Move ``names_to_split`` out of ``group`` into a grouping of their own.

    An empty ``names_to_split`` leaves the transactions untouched and yields an
    empty grouping with no canonical name; callers should check for it.
    """

    split = list(dict.fromkeys(names_to_split))
    original = StoreGrouping(
        canonical_name=group.canonical_name,
        variations=tuple(name for name in group.variations if name not in split),
    )
    if not split:
        return original, StoreGrouping(canonical_name="", variations=()), list(transactions)

    canonical = _most_frequent(split, _occurrences(transactions))
    new_group = StoreGrouping(canonical_name=canonical, variations=tuple(split))
    updated = _rewrite(transactions, {name: canonical for name in split})
    return original, new_group, updated


def groupings_to_mapping(groupings: Iterable[StoreGrouping]) -> dict[str, tuple[str, ...]]:
    """Convert confirmed groupings into the persisted canonical-to-variations form."""

    mapping: dict[str, tuple[str, ...]] = {}
    for grouping in groupings:
        if not grouping.canonical_name:
            continue
        existing = mapping.get(grouping.canonical_name, ())
        mapping[grouping.canonical_name] = tuple(dict.fromkeys((*existing, *grouping.variations)))
    return mapping


def mapping_to_groupings(mapping: StoreMapping) -> list[StoreGrouping]:
    return [
        StoreGrouping(canonical_name=canonical, variations=tuple(variations))
        for canonical, variations in mapping.items()
    ]
