from flask import Flask, request, jsonify
from pydantic import ValidationError
import os
from typing import Any, Dict, List, Optional
from ..config import (
    DATA_DIR,
    TAXONOMY_FILE,
    SEARCH_MODE,
    PORT,
    configure_logging,
)
from ..core.models import TaxonomyItem, ToggleRequest, ToggleResponse, ViewRequest
from ..core.loaders import load_taxonomy
from ..core.taxonomy import InconsistentTreeError, count_nodes
from ..core.widget import TaxonomyWidget

app = Flask(__name__)


def _items_or_default(items: Optional[List[TaxonomyItem]]) -> List[TaxonomyItem]:
    return items if items is not None else load_taxonomy()

def _payload() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a single JSON object")
    return payload

def _error(message: str, details: Any, status: int):
    return jsonify({"error": message, "details": details}), status


@app.errorhandler(ValidationError)
def _on_validation_error(e: ValidationError):
    return _error("Invalid request body", e.errors(include_url=False, include_context=False), 400)

@app.errorhandler(InconsistentTreeError)
def _on_inconsistent_tree(e: InconsistentTreeError):
    return _error("Inconsistent taxonomy tree", str(e), 422)

@app.errorhandler(FileNotFoundError)
def _on_missing_file(e: FileNotFoundError):
    return _error("Taxonomy not available", str(e), 404)

@app.errorhandler(ValueError)
def _on_value_error(e: ValueError):
    return _error("Invalid request body", str(e), 400)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "data_dir": os.path.abspath(DATA_DIR),
        "taxonomy_file": os.path.abspath(TAXONOMY_FILE),
        "taxonomy_loaded": os.path.exists(TAXONOMY_FILE),
        "search_mode": SEARCH_MODE,
    }

@app.get("/taxonomy")
def taxonomy():
    items = load_taxonomy()
    return jsonify({
        "items": [i.model_dump(mode="json", exclude_none=True) for i in items],
        "nodes": count_nodes(items),
    })

@app.post("/taxonomy/view")
def view():
    req = ViewRequest.model_validate(_payload())
    widget = TaxonomyWidget(_items_or_default(req.items), req.selected, req.options)
    # search is matched case-insensitively
    nodes = widget.view(req.search.lower())
    return jsonify({
        "nodes": [n.model_dump(mode="json") for n in nodes],
        "options": widget.resolved_options.model_dump(mode="json"),
        "summary": [e.model_dump(mode="json") for e in widget.summary()],
        "placeholder": widget.placeholder,
    })

@app.post("/taxonomy/toggle")
def toggle():
    req = ToggleRequest.model_validate(_payload())
    widget = TaxonomyWidget(_items_or_default(req.items), req.selected, req.options)
    before = widget.selected
    reason = widget.refusal(req.path)
    if reason:
        resp = ToggleResponse(selected=before, changed=False, reason=reason)
    else:
        after = widget.toggle(req.path, req.value)
        resp = ToggleResponse(selected=after, changed=after != before)
    return jsonify(resp.model_dump(mode="json")), 200


if __name__ == "__main__":
    configure_logging()
    app.run(
        host="0.0.0.0",
        port=PORT,
        debug=False,
        use_reloader=False
    )
