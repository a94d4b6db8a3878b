"""Deep merge of partial questionnaire dictionaries"""

import copy
from typing import Any, Dict


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge ``source`` into ``target`` in place and return ``target``

    Nested dicts merge recursively. Lists and scalars from ``source``
    replace whatever ``target`` held under the same key.
    """
    for key, value in source.items():
        current = target.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            deep_merge(current, value)
        else:
            target[key] = copy.deepcopy(value)
    return target
