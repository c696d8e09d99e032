"""Tests for identifier encoding, including Punycode."""

import pytest

from rmangle import EncodingError, diagnostics
from rmangle.emit import Emitter
from rmangle.ident import encode_ident, punycode, push_ident


def test_ascii():
    assert encode_ident("example") == "7example"
    assert encode_ident("foo") == "3foo"


def test_separator_after_leading_underscore_or_digit():
    assert encode_ident("_foo") == "4__foo"
    assert encode_ident("0abc") == "4_0abc"


def test_empty_identifier():
    # closures and other anonymous items have no name
    assert encode_ident("") == "0"


def test_punycode_with_basic_prefix():
    assert encode_ident("gödel") == "u8gdel_5qa"
    assert encode_ident("föö") == "u6f_1gaa"


def test_punycode_from_real_symbol():
    # _RNvNtCsaRN1VPjcjfp_12test_symbols7unicodeu7caf_dma
    assert encode_ident("café") == "u7caf_dma"


def test_punycode_without_basic_prefix():
    # no ASCII characters, so no delimiter to replace
    assert encode_ident("日本語") == "u10wgv71a119e"
    assert punycode("ü") == "tda"
    assert encode_ident("ü") == "u3tda"


def test_punycode_replaces_only_last_delimiter():
    assert punycode("gödel") == "gdel_5qa"


def test_push_appends():
    out = Emitter()
    out.emit("C")
    push_ident("mycrate", out)
    assert out.get() == "C7mycrate"


def test_unpaired_surrogate():
    with pytest.raises(EncodingError, match="surrogate"):
        encode_ident("a\ud800b")


def test_invalid_ascii_character():
    with pytest.raises(EncodingError, match="invalid character"):
        encode_ident("foo-bar")
    with pytest.raises(EncodingError):
        encode_ident("foo bar")


def test_encoding_error_is_value_error():
    with pytest.raises(ValueError):
        encode_ident("a\udfff")


def test_punycode_diagnostic(capsys):
    encode_ident("café")
    assert capsys.readouterr().err == ""

    diagnostics.enabled_diagnostics.add(diagnostics.Diagnostic.punycode_identifier)
    encode_ident("café")
    err = capsys.readouterr().err
    assert "WARN(punycode-identifier)" in err
    assert "caf_dma" in err
