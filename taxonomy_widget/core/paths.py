# taxonomy_widget/core/paths.py
from typing import Sequence

def paths_equal(a: Sequence[str], b: Sequence[str]) -> bool:
    if len(a) != len(b):
        return False
    return all(x == y for x, y in zip(a, b))

def is_strict_descendant(candidate: Sequence[str], ancestor: Sequence[str]) -> bool:
    """True when ``ancestor`` is a proper leading part of ``candidate``."""
    if len(candidate) <= len(ancestor):
        return False
    return all(candidate[i] == part for i, part in enumerate(ancestor))

def format_path(path: Sequence[str], separator: str = " / ", full: bool = False) -> str:
    if not path:
        return ""
    return separator.join(path) if full else path[-1]
