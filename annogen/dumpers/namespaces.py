"""Registry of top-level names the namespace index has to declare."""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple


class NamespaceRegistry:
    """Insertion-ordered map of root namespace segment or bare type name.

    The flag is ``True`` for the first segment of a dotted namespace and
    ``False`` for a type declared in the global namespace. The first
    registration of a key wins.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, bool] = {}

    def register(self, namespace: str, type_name: str) -> None:
        if namespace:
            root = namespace.split(".", 1)[0]
            if root:
                self._entries.setdefault(root, True)
        else:
            self._entries.setdefault(type_name, False)

    def items(self) -> List[Tuple[str, bool]]:
        return list(self._entries.items())

    def __iter__(self) -> Iterator[Tuple[str, bool]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["NamespaceRegistry"]
