from __future__ import annotations

import hashlib
import json
import random
from typing import Any, Mapping


def _canonical(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _canonical(val) for key, val in sorted(value.items(), key=lambda item: str(item[0]))}
    if isinstance(value, (set, frozenset)):
        return sorted((_canonical(item) for item in value), key=lambda item: json.dumps(item, sort_keys=True, default=str))
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    return value


def derive_seed(namespace: str, context: Mapping[str, Any]) -> int:
    """Stable 32-bit seed for a namespace and context, independent of dict ordering."""
    payload = {"namespace": str(namespace), "context": _canonical(context)}
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str, allow_nan=False)
    digest = hashlib.sha256(serialized.encode("utf-8")).hexdigest()
    return int(digest, 16) % (2**32)


class SeededRngFactory:
    """Hands out reproducible ``random.Random`` streams per (namespace, context)."""

    def __init__(self, base_seed: int) -> None:
        self.base_seed = int(base_seed)
        self._draws: dict[str, int] = {}

    def next_rng(self, namespace: str, context: Mapping[str, Any] | None = None) -> random.Random:
        key = json.dumps({"namespace": namespace, "context": _canonical(dict(context or {}))}, sort_keys=True, default=str)
        draw = self._draws.get(key, 0)
        self._draws[key] = draw + 1
        seed = derive_seed(namespace, {"base": self.base_seed, "draw": draw, **dict(context or {})})
        return random.Random(seed)
