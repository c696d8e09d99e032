import typing as t

from llvmlite import ir

from rmangle.exc import ManglingError
from rmangle.symbol import encode_symbol
from rmangle.types_ import CrateRoot, Path


class SymbolConflict(ManglingError):
    """A mangled name is already declared in the module with another type."""


def declare_function(
    ir_module: ir.Module,
    path: Path,
    function_type: ir.FunctionType,
    *,
    instantiating_crate: t.Optional[CrateRoot] = None,
) -> ir.Function:
    name = encode_symbol(path, instantiating_crate)
    existing = ir_module.globals.get(name)
    if existing is None:
        return ir.Function(ir_module, function_type, name)
    if not isinstance(existing, ir.Function) or existing.ftype != function_type:
        raise SymbolConflict(
            f"{name} already declared as {existing!r}, requested {function_type}"
        )
    return existing


def declare_global(
    ir_module: ir.Module, path: Path, value_type: ir.Type
) -> ir.GlobalVariable:
    name = encode_symbol(path)
    existing = ir_module.globals.get(name)
    if existing is None:
        return ir.GlobalVariable(ir_module, value_type, name)
    if not isinstance(existing, ir.GlobalVariable) or existing.value_type != value_type:
        raise SymbolConflict(
            f"{name} already declared as {existing!r}, requested {value_type}"
        )
    return existing
