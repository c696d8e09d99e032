import typing as t


class Emitter:
    def __init__(self) -> None:
        self._buf: t.List[str] = []
        self._len = 0

    def emit(self, *parts: str) -> None:
        for part in parts:
            self._buf.append(part)
            self._len += len(part)

    @property
    def offset(self) -> int:
        return self._len

    def __len__(self) -> int:
        return self._len

    def get(self) -> str:
        return "".join(self._buf)
