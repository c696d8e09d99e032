import typing as t

from patina import None_, Option, Some


class BackrefTable:
    """Offsets of nodes already written to the symbol being mangled.

    Keys are the structural nodes themselves. An offset always points at the
    first literal emission of its node, never at a back-reference.
    """

    def __init__(self) -> None:
        self._offsets: t.Dict[t.Hashable, int] = {}

    def lookup(self, key: t.Hashable) -> Option[int]:
        if key in self._offsets:
            return Some(self._offsets[key])
        return None_()

    def record(self, key: t.Hashable, offset: int) -> None:
        self._offsets.setdefault(key, offset)

    def __contains__(self, key: t.Hashable) -> bool:
        return key in self._offsets

    def __len__(self) -> int:
        return len(self._offsets)
