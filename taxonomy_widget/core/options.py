# taxonomy_widget/core/options.py
from typing import Optional, Sequence

from .models import TaxonomyOptions, TaxonomyOptionsResolved


def resolve(options: Optional[TaxonomyOptions], selected: Sequence[Sequence[str]]) -> TaxonomyOptionsResolved:
    options = options or TaxonomyOptions()
    # max_usages of None or 0 means "no cap"
    reached = len(selected) >= options.max_usages if options.max_usages else False
    # already-resolved options carry a stale flag, recompute it
    fields = options.model_dump(exclude={"max_usages_reached"})
    return TaxonomyOptionsResolved(**fields, max_usages_reached=reached)
