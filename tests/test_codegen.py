"""Tests for declaring mangled symbols in an LLVM module."""

import pytest
from llvmlite import ir

from rmangle import CrateRoot, GenericPath, Namespace, NestedPath, PrimitiveType
from rmangle.codegen import SymbolConflict, declare_function, declare_global

MYCRATE = CrateRoot("mycrate")
FOO = NestedPath(MYCRATE, Namespace.value, "foo")


def test_declare_function():
    ir_module = ir.Module(name="mycrate")
    fn = declare_function(ir_module, FOO, ir.FunctionType(ir.VoidType(), []))
    assert fn.name == "_RNvC7mycrate3foo"
    assert "_RNvC7mycrate3foo" in str(ir_module)


def test_declare_function_twice_returns_same():
    ir_module = ir.Module(name="mycrate")
    fnty = ir.FunctionType(ir.IntType(32), [ir.IntType(32)])
    first = declare_function(ir_module, FOO, fnty)
    second = declare_function(ir_module, FOO, fnty)
    assert first is second


def test_declare_generic_function_with_instantiating_crate():
    ir_module = ir.Module(name="mycrate")
    path = GenericPath(FOO, (PrimitiveType.u32,))
    fn = declare_function(
        ir_module,
        path,
        ir.FunctionType(ir.VoidType(), []),
        instantiating_crate=MYCRATE,
    )
    assert fn.name == "_RINvC7mycrate3foomEB2_"


def test_declare_global():
    ir_module = ir.Module(name="mycrate")
    static = NestedPath(MYCRATE, Namespace.value, "STATIC_VALUE")
    gv = declare_global(ir_module, static, ir.IntType(32))
    assert gv.name == "_RNvC7mycrate12STATIC_VALUE"
    assert declare_global(ir_module, static, ir.IntType(32)) is gv


def test_declare_function_type_mismatch():
    ir_module = ir.Module(name="mycrate")
    declare_function(ir_module, FOO, ir.FunctionType(ir.VoidType(), []))
    with pytest.raises(SymbolConflict, match="_RNvC7mycrate3foo"):
        declare_function(
            ir_module, FOO, ir.FunctionType(ir.IntType(32), [ir.IntType(32)])
        )


def test_declare_global_type_mismatch():
    ir_module = ir.Module(name="mycrate")
    static = NestedPath(MYCRATE, Namespace.value, "STATIC_VALUE")
    declare_global(ir_module, static, ir.IntType(32))
    with pytest.raises(SymbolConflict):
        declare_global(ir_module, static, ir.IntType(64))


def test_function_and_global_share_name():
    ir_module = ir.Module(name="mycrate")
    declare_global(ir_module, FOO, ir.IntType(8))
    with pytest.raises(SymbolConflict):
        declare_function(ir_module, FOO, ir.FunctionType(ir.VoidType(), []))
