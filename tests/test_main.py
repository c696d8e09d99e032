"""Tests for the command line front end."""

import pytest

from rmangle import diagnostics
from rmangle.__main__ import main


def test_default_namespaces(capsys):
    assert main(["mycrate::module::function"]) == 0
    assert capsys.readouterr().out.strip() == "_RNvNtC7mycrate6module8function"


def test_crate_only(capsys):
    assert main(["mycrate"]) == 0
    assert capsys.readouterr().out.strip() == "_RC7mycrate"


def test_explicit_namespaces_and_disambiguators(capsys):
    assert main(["mycrate::main::", "--namespaces", "vC", "--disambiguators", "0,1"]) == 0
    assert capsys.readouterr().out.strip() == "_RNCNvC7mycrate4mains_0"


def test_crate_disambiguator_hex(capsys):
    assert main(["mycrate::foo", "--crate-disambiguator", "0x2"]) == 0
    assert capsys.readouterr().out.strip() == "_RNvCs0_7mycrate3foo"


def test_instantiating_crate(capsys):
    assert main(["mycrate::foo", "--instantiating-crate", "mycrate", "--no-warnings"]) == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == "_RNvC7mycrate3fooB1_"
    assert captured.err == ""


def test_enable_warning(capsys):
    assert main(["mycrate::café", "-W", "punycode-identifier"]) == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == "_RNvC7mycrateu7caf_dma"
    assert "WARN(punycode-identifier)" in captured.err
    assert diagnostics.Diagnostic.punycode_identifier in diagnostics.enabled_diagnostics


def test_dump_llvm(capsys):
    assert main(["mycrate::foo", "--dump-llvm"]) == 0
    out = capsys.readouterr().out
    assert "declare" in out
    assert "_RNvC7mycrate3foo" in out


def test_bad_identifier(capsys):
    assert main(["my-crate::foo"]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_namespace_count_mismatch(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["mycrate::a::b", "--namespaces", "t"])
    assert exc_info.value.code == 2
    assert "expected 2 namespace tags" in capsys.readouterr().err


def test_unknown_namespace_tag(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["mycrate::a", "--namespaces", "q"])
    assert exc_info.value.code == 2
    assert "unknown namespace tag 'q'" in capsys.readouterr().err


def test_bad_disambiguators(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["mycrate::a", "--disambiguators", "x"])
    assert exc_info.value.code == 2
    assert "invalid disambiguators" in capsys.readouterr().err
    with pytest.raises(SystemExit):
        main(["mycrate::a", "--disambiguators", "1,2"])
    assert "expected 1 disambiguators" in capsys.readouterr().err


def test_negative_disambiguator_is_encoder_error(capsys):
    assert main(["mycrate::a", "--disambiguators", "-1"]) == 1
    assert capsys.readouterr().err.startswith("error:")
