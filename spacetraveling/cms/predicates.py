import json
from typing import Iterable


def at(path: str, value: str) -> str:
    """Exact-match predicate, e.g. ``[at(document.type, "post")]``."""
    return f"[at({path}, {json.dumps(value)})]"


def build_query(predicates: Iterable[str]) -> str:
    return "[" + "".join(predicates) + "]"
