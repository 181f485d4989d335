from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, List, Tuple

class Annotations:
    """Comments keyed by the resolved index of the instruction they precede.

    Read-only once built; collect comments with ``collect`` and freeze them.
    """
    def __init__(self, items=None):
        frozen = {k: tuple(v) for k, v in sorted(dict(items or {}).items()) if v}
        self._map = MappingProxyType(frozen)
    @staticmethod
    def collect(pairs: Iterable[Tuple[int, str]]) -> "Annotations":
        acc: Dict[int, List[str]] = {}
        for key, text in pairs:
            acc.setdefault(key, []).append(text)
        return Annotations(acc)
    def get(self, key: int, default=()):
        return tuple(self._map.get(key, default))
    def items(self) -> List[Tuple[int, Tuple[str, ...]]]:
        return list(self._map.items())
    def __eq__(self, other):
        return isinstance(other, Annotations) and self.items() == other.items()
    def __hash__(self):
        return hash(tuple(self.items()))
    def __len__(self):
        return sum(len(v) for v in self._map.values())
    def __repr__(self) -> str:
        return f"Annotations({dict(self._map)!r})"
