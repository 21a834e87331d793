# taxonomy_widget/core/selection.py
"""
Path-based selection model.

Selection never cascades: selecting a parent does not touch its descendants
and the other way round. A node is "indeterminate" when it is not selected
itself but something below it is.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .models import Path, SelectedEntry, TaxonomyItem, TaxonomyOptions, TaxonomyOptionsResolved
from .paths import format_path, is_strict_descendant, paths_equal

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Optional[TaxonomyItem], List[Path]], None]

REASON_LEAFS_ONLY = "Only leaf nodes allowed"


def is_checked(selected: Sequence[Sequence[str]], path: Sequence[str]) -> bool:
    return any(paths_equal(current, path) for current in selected)


def is_indeterminate(selected: Sequence[Sequence[str]], path: Sequence[str]) -> bool:
    if is_checked(selected, path):
        return False
    return any(is_strict_descendant(current, path) for current in selected)


def toggle(selected: Sequence[Sequence[str]], path: Sequence[str], make_selected: bool) -> List[Path]:
    """Return a new selection with ``path`` added or removed; the argument is left alone."""
    if make_selected:
        if is_checked(selected, path):
            return [tuple(p) for p in selected]
        return [tuple(p) for p in selected] + [tuple(path)]
    return [tuple(p) for p in selected if not paths_equal(p, path)]


def max_usages_reason(max_usages: Optional[int]) -> str:
    return f"Maximum {max_usages} items already selected"


@dataclass(frozen=True)
class NodeStatus:
    checked: bool
    indeterminate: bool
    disabled: bool
    reason: Optional[str] = None


def node_status(
    item: TaxonomyItem,
    selected: Sequence[Sequence[str]],
    options: TaxonomyOptionsResolved,
) -> NodeStatus:
    """
    Checkbox state for one node. ``item`` must be the node from the full
    tree: filtered copies may have lost their children.
    """
    checked = is_checked(selected, item.path)
    indeterminate = is_indeterminate(selected, item.path)

    if options.leafs_only and not item.is_leaf:
        return NodeStatus(checked, indeterminate, True, REASON_LEAFS_ONLY)
    if options.max_usages_reached and not checked:
        return NodeStatus(checked, indeterminate, True, max_usages_reason(options.max_usages))
    return NodeStatus(checked, indeterminate, False)


def summary(selected: Sequence[Sequence[str]], options: TaxonomyOptions) -> List[SelectedEntry]:
    return [
        SelectedEntry(
            path=tuple(p),
            text=format_path(p, options.path_separator, options.show_full_path),
        )
        for p in selected
    ]


class SelectionModel:
    """
    Holds the working copy of a caller-owned selection.

    ``sync`` replaces the copy whenever the caller's value changes; every
    change made here is reported straight back through ``on_change``.
    """

    def __init__(self, selected: Optional[Sequence[Sequence[str]]] = None, on_change: Optional[ChangeCallback] = None):
        self.on_change = on_change
        self._selected: List[Path] = []
        self.sync(selected or [])

    @property
    def selected(self) -> List[Path]:
        return list(self._selected)

    def sync(self, external: Sequence[Sequence[str]]) -> None:
        deduped: List[Path] = []
        for p in external:
            if not is_checked(deduped, p):
                deduped.append(tuple(p))
        self._selected = deduped

    def set(self, path: Sequence[str], value: bool, node: Optional[TaxonomyItem] = None) -> List[Path]:
        new_selected = toggle(self._selected, path, value)
        self._selected = new_selected
        logger.debug("%s %r, %d path(s) selected", "Selected" if value else "Deselected", list(path), len(new_selected))
        if self.on_change:
            self.on_change(node, list(new_selected))
        return list(new_selected)

    def remove(self, path: Sequence[str]) -> List[Path]:
        return self.set(path, False)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, path) -> bool:
        return is_checked(self._selected, path)
