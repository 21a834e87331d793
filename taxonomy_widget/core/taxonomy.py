# taxonomy_widget/core/taxonomy.py
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Sequence

from rapidfuzz import fuzz

from .models import TaxonomyItem

logger = logging.getLogger(__name__)

Predicate = Callable[[TaxonomyItem], bool]


class InconsistentTreeError(ValueError):
    """Raised when item depths do not agree with the actual nesting."""


# ---------------------------- utils ---------------------------- #

def _norm(s: str) -> str:
    s = (s or "").lower()
    s = re.sub(r"[^a-z0-9]+", " ", s)
    return re.sub(r"\s+", " ", s).strip()

# ---------------------------- flatten / reconstruct ---------------------------- #

def flatten(items: Sequence[TaxonomyItem]) -> List[TaxonomyItem]:
    """
    Pre-order linearization of the forest: every node is followed by its
    whole subtree before the next sibling. Entries are the caller's own
    objects; nothing is copied or modified.
    """
    flat: List[TaxonomyItem] = []
    # explicit stack so very deep trees do not hit the recursion limit
    stack = [(item, 0) for item in reversed(items)]
    while stack:
        item, expected_depth = stack.pop()
        if item.depth != expected_depth:
            raise InconsistentTreeError(
                f"Item {list(item.path)!r} has depth {item.depth}, expected {expected_depth}"
            )
        flat.append(item)
        for child in reversed(item.children or []):
            stack.append((child, expected_depth + 1))
    return flat


def reconstruct(flat: Sequence[TaxonomyItem], predicate: Predicate) -> List[TaxonomyItem]:
    """
    Rebuild a pruned forest from a pre-order flat sequence.

    A node is kept when it matches ``predicate`` or when one of its
    descendants does. Non-matching ancestors are kept with only the kept
    descendants attached. Works in one backward pass: children found so
    far wait in ``pending[depth]`` until their parent shows up.
    """
    roots: List[TaxonomyItem] = []
    pending: Dict[int, List[TaxonomyItem]] = {}
    closing = -1
    following_depth = 0

    # buffers are filled back to front and reversed when attached
    for i in range(len(flat) - 1, -1, -1):
        item = flat[i]
        if following_depth > item.depth + 1:
            raise InconsistentTreeError(
                f"Depth jumps from {item.depth} to {following_depth} after item {list(item.path)!r}"
            )
        following_depth = item.depth

        if item.depth == closing:
            children = pending.pop(closing, [])
            children.reverse()
            adjusted = item.model_copy(update={"children": children})
            if closing:
                pending.setdefault(closing - 1, []).append(adjusted)
            else:
                roots.append(adjusted)
            closing -= 1
            continue

        if predicate(item):
            adjusted = item.model_copy(update={"children": []})
            if item.depth == 0:
                roots.append(adjusted)
            else:
                closing = item.depth - 1
                pending.setdefault(closing, []).append(adjusted)

    if flat and flat[0].depth != 0:
        raise InconsistentTreeError(f"Flat sequence starts at depth {flat[0].depth}, expected 0")

    roots.reverse()
    return roots

# ---------------------------- search predicates ---------------------------- #

def label_predicate(search: str) -> Predicate:
    needle = (search or "").lower()

    def predicate(item: TaxonomyItem) -> bool:
        return needle in item.label.lower()

    return predicate


def fuzzy_predicate(search: str, threshold: float = 80.0) -> Predicate:
    """Match labels whose normalized form partially matches ``search`` (0-100 score)."""
    needle = _norm(search)

    def predicate(item: TaxonomyItem) -> bool:
        # partial_ratio handles short queries against long labels well
        return fuzz.partial_ratio(needle, _norm(item.label)) >= threshold

    return predicate


def build_predicate(search: str, mode: str = "substring", threshold: float = 80.0) -> Predicate:
    if mode == "fuzzy":
        return fuzzy_predicate(search, threshold)
    if mode != "substring":
        raise ValueError(f"Unknown search mode: {mode!r}")
    return label_predicate(search)


def filter_items(flat: Sequence[TaxonomyItem], search: str, mode: str = "substring", threshold: float = 80.0) -> List[TaxonomyItem]:
    result = reconstruct(flat, build_predicate(search, mode, threshold))
    logger.debug("Search %r (%s) kept %d root(s) out of %d node(s)", search, mode, len(result), len(flat))
    return result

# ---------------------------- item construction ---------------------------- #

def build_items(
    raw: Any,
    label_field: str = "label",
    children_field: str = "children",
) -> List[TaxonomyItem]:
    """
    Turn nested JSON-like dicts into TaxonomyItems, computing path and depth
    from the nesting. ``raw`` may be a single root dict or a list of roots.
    """

    items: List[TaxonomyItem] = []
    roots = raw if isinstance(raw, list) else [raw]
    # (raw node, parent path, list the built item goes into)
    stack = [(r, (), items) for r in reversed(roots) if isinstance(r, dict)]
    while stack:
        node, parent_path, siblings = stack.pop()
        label = str(node.get(label_field, ""))
        path_now = parent_path + (label,)
        kids = [c for c in node.get(children_field) or [] if isinstance(c, dict)]
        item = TaxonomyItem(
            label=label,
            path=path_now,
            depth=len(parent_path),
            children=[] if kids else None,
            custom=bool(node.get("custom", False)),
        )
        siblings.append(item)
        for c in reversed(kids):
            stack.append((c, path_now, item.children))
    return items


def count_nodes(items: Sequence[TaxonomyItem]) -> int:
    return len(flatten(items))
