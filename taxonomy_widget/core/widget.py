# taxonomy_widget/core/widget.py
"""
TaxonomyWidget: the state holder a presentation layer talks to.

It keeps the flat index of the current tree, the working copy of the
caller's selection and the caller's options, and turns them into
annotated NodeViews for rendering. It draws nothing itself.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from ..config import DEFAULT_PATH_SEPARATOR, DEFAULT_PLACEHOLDER, FUZZY_THRESHOLD, SEARCH_MODE
from .models import NodeView, Path, SelectedEntry, TaxonomyItem, TaxonomyOptions, TaxonomyOptionsResolved
from .options import resolve
from .paths import is_strict_descendant
from .selection import ChangeCallback, SelectionModel, node_status, summary
from .taxonomy import filter_items, flatten

logger = logging.getLogger(__name__)


class TaxonomyWidget:
    def __init__(
        self,
        items: Sequence[TaxonomyItem],
        selected: Optional[Sequence[Sequence[str]]] = None,
        options: Optional[TaxonomyOptions] = None,
        *,
        on_change: Optional[ChangeCallback] = None,
        on_add_label: Optional[Callable[[Path], None]] = None,
        search_mode: str = SEARCH_MODE,
        fuzzy_threshold: float = FUZZY_THRESHOLD,
    ):
        self._items: Optional[Sequence[TaxonomyItem]] = None
        self._flat: List[TaxonomyItem] = []
        self._index: Dict[Path, TaxonomyItem] = {}
        self.items = items
        self.selection = SelectionModel(selected, on_change)
        self.options = options or TaxonomyOptions(path_separator=DEFAULT_PATH_SEPARATOR)
        self.on_add_label = on_add_label
        self.search_mode = search_mode
        self.fuzzy_threshold = fuzzy_threshold

    # ---- tree ---- #
    @property
    def items(self) -> Sequence[TaxonomyItem]:
        return self._items

    @items.setter
    def items(self, items: Sequence[TaxonomyItem]) -> None:
        # the flat index only depends on the tree object, rebuild on identity change
        if items is self._items:
            return
        flat = flatten(items)
        self._items = items
        self._flat = flat
        self._index = {tuple(item.path): item for item in flat}
        logger.debug("Indexed %d taxonomy node(s)", len(flat))

    @property
    def flat(self) -> List[TaxonomyItem]:
        return list(self._flat)

    def find(self, path: Sequence[str]) -> Optional[TaxonomyItem]:
        return self._index.get(tuple(path))

    # ---- selection ---- #
    @property
    def selected(self) -> List[Path]:
        return self.selection.selected

    def sync(self, selected: Sequence[Sequence[str]]) -> None:
        """Adopt the caller's selection wholesale."""
        self.selection.sync(selected)

    @property
    def resolved_options(self) -> TaxonomyOptionsResolved:
        return resolve(self.options, self.selection.selected)

    @property
    def placeholder(self) -> str:
        return self.options.placeholder or DEFAULT_PLACEHOLDER

    def refusal(self, path: Sequence[str]) -> Optional[str]:
        """Reason the checkbox at ``path`` cannot be toggled, or None."""
        key = tuple(path)
        item = self._index.get(key)
        if item is None:
            # unknown paths are treated as leaves
            item = TaxonomyItem(label=key[-1] if key else "", path=key, depth=max(len(key) - 1, 0))
        status = node_status(item, self.selection.selected, self.resolved_options)
        return status.reason if status.disabled else None

    def toggle(self, path: Sequence[str], value: bool) -> List[Path]:
        reason = self.refusal(path)
        if reason:
            logger.debug("Refused to %s %r: %s", "select" if value else "deselect", list(path), reason)
            return self.selection.selected
        return self.selection.set(path, value, self.find(path))

    def remove(self, path: Sequence[str]) -> List[Path]:
        """Drop ``path`` from the selection regardless of policies (summary list action)."""
        return self.selection.remove(path)

    def summary(self) -> List[SelectedEntry]:
        return summary(self.selection.selected, self.options)

    # ---- rendering ---- #
    def visible(self, search: str = "") -> List[TaxonomyItem]:
        if not search:
            return list(self._items)
        return filter_items(self._flat, search, self.search_mode, self.fuzzy_threshold)

    def view(self, search: str = "") -> List[NodeView]:
        searching = bool(search)
        selected = self.selection.selected
        options = self.resolved_options

        roots: List[NodeView] = []
        # (node, list its view goes into, is a root of the visible forest)
        stack = [(node, roots, True) for node in reversed(self.visible(search))]
        while stack:
            node, siblings, is_root = stack.pop()
            # filtered copies may have lost children, policies look at the full tree
            source = self._index.get(tuple(node.path), node)
            status = node_status(source, selected, options)
            child_selected = any(is_strict_descendant(p, node.path) for p in selected)
            # a search opens the visible roots only, deeper nodes open for selected descendants
            view = NodeView(
                label=node.label,
                path=node.path,
                depth=node.depth,
                custom=node.custom,
                leaf=source.is_leaf,
                checked=status.checked,
                indeterminate=status.indeterminate,
                disabled=status.disabled,
                reason=status.reason,
                expanded=bool(node.children) and (child_selected or (searching and is_root)),
            )
            siblings.append(view)
            for child in reversed(node.children or []):
                stack.append((child, view.children, False))
        return roots

    # ---- custom labels ---- #
    def add_label(self, label: str) -> TaxonomyItem:
        label = (label or "").strip()
        if not label:
            raise ValueError("Label must not be empty")
        if (label,) in self._index:
            raise ValueError(f"Label already exists: {label!r}")
        item = TaxonomyItem(label=label, path=(label,), depth=0, custom=True)
        self.items = list(self._items) + [item]
        if self.on_add_label:
            self.on_add_label(item.path)
        return item
