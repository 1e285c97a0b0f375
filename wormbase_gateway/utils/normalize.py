from __future__ import annotations
"""
Normalization of WormBase widget payloads.

What this module does:
- Unwrap the `{"fields": {...}}` envelope the REST widgets return.
- Drop null-valued keys.
- Collapse entity references (`id` + `label`) to `{id, label, class}`.
- Collapse value wrappers (`data` plus at most one other key) to the wrapped value.

The walk is pure and idempotent: each shape it recognizes is structurally
terminal, and a generic object keeps exactly the keys that were already
recognized as not being a reference or a wrapper.
"""

from typing import Any, Dict

JSONScalar = (str, int, float, bool)

# --------------------------------------------------------------------------------------
# Shape recognizers (applied to the null-stripped view of an object)
# --------------------------------------------------------------------------------------

def _present(obj: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in obj.items() if v is not None}

def _is_reference(obj: Dict[str, Any]) -> bool:
    return "id" in obj and "label" in obj

def _is_wrapper(obj: Dict[str, Any]) -> bool:
    return "data" in obj and len(obj) <= 2

def _is_envelope(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("fields"), dict)

def _reference(obj: Dict[str, Any]) -> Dict[str, Any]:
    ref = {"id": obj["id"], "label": obj["label"]}
    cls = obj.get("class", obj.get("taxonomy"))
    if cls is not None:
        ref["class"] = cls
    return ref

# --------------------------------------------------------------------------------------
# Walk
# --------------------------------------------------------------------------------------

def simplify_value(value: Any) -> Any:
    """Recursively simplify an arbitrary JSON value."""
    if value is None or isinstance(value, JSONScalar):
        return value
    if isinstance(value, list):
        return [simplify_value(v) for v in value]
    if isinstance(value, dict):
        obj = _present(value)
        if _is_reference(obj):
            return _reference(obj)
        if _is_wrapper(obj):
            return simplify_value(obj["data"])
        return {k: simplify_value(v) for k, v in obj.items()}
    return value

def clean_widget_data(data: Any) -> Any:
    """
    Normalize one widget payload.

    `None` becomes `{}`. Envelopes are unwrapped until the simplified result is
    no longer one; each pass strictly descends into the payload, so this ends.
    """
    if data is None:
        return {}
    value = data
    while True:
        while _is_envelope(value):
            value = value["fields"]
        value = simplify_value(value)
        if not _is_envelope(value):
            return value
