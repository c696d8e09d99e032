"""Identifier encoding.

An identifier is written as ``[u]<decimal length>[_]<bytes>``:

- ``u`` marks a Punycode identifier, used when the name has any non-ASCII
  character. The Punycode delimiter ``-`` is replaced with ``_`` so the
  result stays within the symbol alphabet.
- ``_`` separates the length from the bytes when the bytes start with a
  digit or an underscore.

    "example" -> "7example"
    "_foo"    -> "4__foo"
    "café"    -> "u7caf_dma"
"""

from string import ascii_letters, digits

from rmangle.diagnostics import Diagnostic
from rmangle.emit import Emitter
from rmangle.exc import EncodingError

IDENT_CHARS = frozenset(ascii_letters + digits + "_")


def punycode(ident: str) -> str:
    encoded = ident.encode("punycode").decode("ascii")
    basic, delimiter, tail = encoded.rpartition("-")
    if delimiter:
        return f"{basic}_{tail}"
    return encoded


def _validate(ident: str) -> bool:
    """Check ``ident`` is encodable and report whether it needs Punycode."""
    try:
        ident.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(ident, "unpaired surrogate") from e

    use_punycode = False
    for ch in ident:
        if ord(ch) >= 0x80:
            use_punycode = True
        elif ch not in IDENT_CHARS:
            raise EncodingError(ident, f"invalid character {ch!r}")
    return use_punycode


def push_ident(ident: str, out: Emitter) -> None:
    if _validate(ident):
        encoded = punycode(ident)
        Diagnostic.punycode_identifier(ident, encoded)
        out.emit("u")
        ident = encoded

    out.emit(str(len(ident)))
    if ident[:1] == "_" or ident[:1].isdigit():
        out.emit("_")
    out.emit(ident)


def encode_ident(ident: str) -> str:
    out = Emitter()
    push_ident(ident, out)
    return out.get()
