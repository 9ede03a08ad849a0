"""
Shared clean-ups and schema normalisation for model output.

Only the *shape* is repaired here (nulls, strings where lists belong, alias
keys). Wording is left exactly as the model wrote it.
"""
from __future__ import annotations
import re
from typing import Any, Dict

_FENCE_OPEN  = re.compile(r"^```(json)?\s*", re.I)
_FENCE_CLOSE = re.compile(r"\s*```$")

_LIST_FIELDS = ("skills", "experience", "education")


# ───────────────────────────────────────── helpers ──
def strip_code_fence(text: str) -> str:
    """Remove a ```json … ``` (or bare ```) wrapper around a payload."""
    cleaned = _FENCE_OPEN.sub("", text.strip())
    return _FENCE_CLOSE.sub("", cleaned).strip()


def _as_list(value: Any) -> Any:
    """None → [], str → [str]; anything else is returned as is for the decoder to judge."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


# ───────────────────────────────────────── cleaner ──
def normalise_payload(r: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(r, dict):
        return r

    # list fields are never null
    for key in _LIST_FIELDS:
        r[key] = _as_list(r.get(key))

    # contact: missing optionals stay missing, nulls are dropped
    if isinstance(r.get("contact"), dict):
        r["contact"] = {k: v for k, v in r["contact"].items() if v is not None}

    # experience; a non-list is left for from_dict to reject
    if isinstance(r["experience"], list):
        for j in r["experience"]:
            if isinstance(j, dict):
                j["description"] = _as_list(j.get("description"))

    # projects → guarantee dict shape, or drop when the model sent null
    if r.get("projects") is None:
        r.pop("projects", None)
    elif isinstance(projects := _as_list(r["projects"]), list):
        fixed = []
        for p in projects:
            if isinstance(p, str):
                fixed.append({"name": p, "description": ""})
            elif isinstance(p, dict):
                item = {
                    "name": p.get("name") or p.get("title") or "",
                    "description": p.get("description") or "",
                }
                if link := p.get("link") or p.get("url"):
                    item["link"] = link
                fixed.append(item)
        r["projects"] = fixed
    return r
