from copy import deepcopy
from typing import Any, Mapping


def deep_update(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict:
    """Return a new dict with *override* merged into *base*.

    Mappings present on both sides are merged key by key; any other value in
    ``override`` replaces the one in ``base``.  Neither argument is mutated.
    """
    result = {k: deepcopy(v) for k, v in base.items()}
    for k, v in override.items():
        if isinstance(v, Mapping) and isinstance(result.get(k), Mapping):
            result[k] = deep_update(result[k], v)
        else:
            result[k] = deepcopy(v)
    return result
