import pytest

from rmangle import diagnostics


@pytest.fixture(autouse=True)
def _isolated_diagnostics(monkeypatch):
    monkeypatch.setattr(
        diagnostics, "enabled_diagnostics", set(diagnostics.enabled_diagnostics)
    )


def decode_base_62(digits: str) -> int:
    """Inverse of to_base_62, used to check encodings and recover crate hashes."""
    from rmangle.base62 import CHARS

    value = 0
    for ch in digits:
        value = value * 62 + CHARS.index(ch)
    return value
