import json
from collections.abc import Iterable, Mapping
from typing import Any

__all__ = ("identity_key", "merge_unique")


def identity_key(item: Any) -> Any:
    """
    Key used to detect the same record on two different pages.

    The record's hashable `id` when it has one, otherwise its JSON serialization.
    """
    if isinstance(item, Mapping):
        item_id = item.get("id")
    else:
        item_id = getattr(item, "id", None)
    if item_id is not None:
        try:
            hash(item_id)
        except TypeError:
            pass
        else:
            return item_id

    if hasattr(item, "model_dump"):
        item = item.model_dump(mode="json")
    return json.dumps(item, sort_keys=True, default=str)


def merge_unique(seed: Iterable[Any], *batches: Iterable[Any]) -> list[Any]:
    """
    Append every item of `batches` to `seed` unless its identity key was already seen.

    `seed` is kept whole and only primes the seen set; the first occurrence of a key wins.
    """
    merged = list(seed)
    seen = {identity_key(item) for item in merged}
    for batch in batches:
        for item in batch:
            key = identity_key(item)
            if key in seen:
                continue
            seen.add(key)
            merged.append(item)
    return merged
