# recall_app/games/core/coerce_utils.py
from typing import Any, List


def coerce_name_list(val: Any) -> List[str]:
    """Coerce JSON-ish input to a list of non-blank, stripped names."""
    if val is None:
        return []
    if isinstance(val, str):
        val = val.replace("[", "").replace("]", "").split(",")
    if not isinstance(val, (list, tuple)):
        return []
    out: List[str] = []
    for item in val:
        if item is None or isinstance(item, (dict, list)):
            continue
        text = str(item).strip()
        if text:
            out.append(text)
    return out


def coerce_bool(val: Any, default: bool = False) -> bool:
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in ("1", "true", "yes", "on")
