import time
from typing import Any, Dict, Iterable


def next_record_id(records: Iterable[Dict[str, Any]]) -> int:
    """
    Millisecond wall-clock id, bumped past the largest id already stored.

    Two records created in the same millisecond would otherwise share an id.
    """
    candidate = int(time.time() * 1000)
    highest = max((r["id"] for r in records if isinstance(r.get("id"), int)), default=0)
    return max(candidate, highest + 1)
