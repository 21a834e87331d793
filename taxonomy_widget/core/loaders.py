import json
import os
from typing import Any, List, Optional
from ..config import CHILDREN_FIELD, LABEL_FIELD, TAXONOMY_FILE
from .models import TaxonomyItem
from .taxonomy import build_items

def load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def load_taxonomy(
    path: Optional[str] = None,
    label_field: str = LABEL_FIELD,
    children_field: str = CHILDREN_FIELD,
) -> List[TaxonomyItem]:
    path = path or TAXONOMY_FILE
    if not os.path.exists(path):
        raise FileNotFoundError(f"Taxonomy file not found: {path}")
    return build_items(load_json(path), label_field=label_field, children_field=children_field)
