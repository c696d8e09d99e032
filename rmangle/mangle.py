"""The v0 symbol mangler.

A `SymbolMangler` owns one output buffer and one back-reference table and
lives for exactly one symbol. Every path, type and const it prints is first
looked up in the table; a hit is written as ``B<offset>`` instead of being
printed again. Offsets are relative to the end of the ``_R`` prefix.
"""

import typing as t

from rmangle.backrefs import BackrefTable
from rmangle.base62 import push_integer_62, push_opt_integer_62
from rmangle.diagnostics import Diagnostic
from rmangle.disambiguator import push_disambiguator
from rmangle.emit import Emitter
from rmangle.exc import InvalidArgument
from rmangle.ident import push_ident
from rmangle.types_ import (
    Array,
    Const,
    CrateRoot,
    FnPtr,
    GenericArg,
    GenericPath,
    InherentImpl,
    Lifetime,
    Namespace,
    NestedPath,
    Path,
    PrimitiveType,
    QualifiedPath,
    RawPtr,
    Ref,
    Slice,
    TraitImpl,
    Tuple,
    TypeLike,
    is_basic_type,
)

SYMBOL_PREFIX = "_R"


def has_escaping_lifetimes(node: object, depth: int = 0) -> bool:
    """Whether ``node`` mentions a bound lifetime that it does not bind itself.

    ``depth`` is the number of lifetimes bound by function pointers between
    ``node`` and the point of the check. Such nodes print differently
    depending on the enclosing binder, so they are never recorded for
    back-references.
    """
    if isinstance(node, Lifetime):
        return node.index > depth
    if isinstance(node, (PrimitiveType, Const, CrateRoot)):
        return False
    if isinstance(node, NestedPath):
        return has_escaping_lifetimes(node.parent, depth)
    if isinstance(node, GenericPath):
        return has_escaping_lifetimes(node.path, depth) or any(
            has_escaping_lifetimes(arg, depth) for arg in node.args
        )
    if isinstance(node, InherentImpl):
        return has_escaping_lifetimes(node.parent, depth) or has_escaping_lifetimes(
            node.self_type, depth
        )
    if isinstance(node, TraitImpl):
        return (
            has_escaping_lifetimes(node.parent, depth)
            or has_escaping_lifetimes(node.self_type, depth)
            or has_escaping_lifetimes(node.trait_, depth)
        )
    if isinstance(node, QualifiedPath):
        return has_escaping_lifetimes(node.self_type, depth) or has_escaping_lifetimes(
            node.trait_, depth
        )
    if isinstance(node, Ref):
        return has_escaping_lifetimes(node.lifetime, depth) or has_escaping_lifetimes(
            node.inner, depth
        )
    if isinstance(node, (RawPtr, Array, Slice)):
        return has_escaping_lifetimes(node.inner, depth)
    if isinstance(node, Tuple):
        return any(has_escaping_lifetimes(ty, depth) for ty in node.elements)
    if isinstance(node, FnPtr):
        depth += node.bound_lifetimes
        return has_escaping_lifetimes(node.output, depth) or any(
            has_escaping_lifetimes(ty, depth) for ty in node.inputs
        )
    raise InvalidArgument(f"unknown node {node!r}")


def is_generic(path: Path) -> bool:
    while True:
        if isinstance(path, GenericPath):
            return True
        if isinstance(path, (NestedPath, InherentImpl, TraitImpl)):
            path = path.parent
        else:
            return False


class SymbolMangler:
    """Prints one symbol.

    The ``print_*`` methods return how many lifetimes the printed node
    reaches past its own binders, computed while printing. A node is only
    recorded for back-references when that is zero.
    """

    def __init__(self, prefix: str = SYMBOL_PREFIX) -> None:
        self.out = Emitter()
        self.out.emit(prefix)
        self.start_offset = len(prefix)
        self.backrefs = BackrefTable()

    def push(self, s: str) -> None:
        self.out.emit(s)

    def get(self) -> str:
        return self.out.get()

    def print_backref(self, i: int) -> None:
        assert self.start_offset <= i < self.out.offset
        self.push("B")
        push_integer_62(i - self.start_offset, self.out)

    def _try_backref(self, key: object) -> bool:
        cached = self.backrefs.lookup(key)
        if cached.is_some():
            self.print_backref(cached.unwrap())
            return True
        return False

    def _record(self, key: object, start: int, escapes: int) -> None:
        if escapes == 0:
            self.backrefs.record(key, start)

    def path_crate(self, crate: CrateRoot) -> int:
        self.push("C")
        push_disambiguator(crate.disambiguator, self.out)
        push_ident(crate.name, self.out)
        return 0

    def path_append_ns(
        self,
        print_prefix: t.Callable[[], int],
        ns: str,
        disambiguator: int,
        name: str,
    ) -> int:
        self.push("N")
        self.push(ns)
        escapes = print_prefix()
        push_disambiguator(disambiguator, self.out)
        push_ident(name, self.out)
        return escapes

    def path_generic_args(
        self, print_prefix: t.Callable[[], int], args: t.Sequence[GenericArg]
    ) -> int:
        # Lifetimes are only printed if at least one of them is not erased.
        print_lifetimes = any(
            isinstance(arg, Lifetime) and not arg.erased for arg in args
        )
        args = [
            arg for arg in args if print_lifetimes or not isinstance(arg, Lifetime)
        ]
        if not args:
            return print_prefix()

        self.push("I")
        escapes = print_prefix()
        for arg in args:
            if isinstance(arg, Lifetime):
                escapes = max(escapes, self.print_lifetime(arg))
            elif isinstance(arg, Const):
                self.push("K")
                escapes = max(escapes, self.print_const(arg))
            else:
                escapes = max(escapes, self.print_type(arg))
        self.push("E")
        return escapes

    def print_impl_path(self, impl: t.Union[InherentImpl, TraitImpl]) -> int:
        self.push("X" if isinstance(impl, TraitImpl) else "M")
        push_disambiguator(impl.disambiguator, self.out)
        escapes = max(self.print_path(impl.parent), self.print_type(impl.self_type))
        if isinstance(impl, TraitImpl):
            escapes = max(escapes, self.print_path(impl.trait_))
        return escapes

    def print_path(self, path: Path) -> int:
        if self._try_backref(path):
            return 0
        start = self.out.offset

        if isinstance(path, CrateRoot):
            escapes = self.path_crate(path)
        elif isinstance(path, NestedPath):
            if path.namespace is Namespace.crate:
                raise InvalidArgument(f"crate namespace on nested segment {path.name!r}")
            escapes = self.path_append_ns(
                lambda: self.print_path(path.parent),
                path.namespace.tag,
                path.disambiguator,
                path.name,
            )
        elif isinstance(path, (InherentImpl, TraitImpl)):
            escapes = self.print_impl_path(path)
        elif isinstance(path, QualifiedPath):
            self.push("Y")
            # The qualified prefix itself is never a back-reference target.
            return max(self.print_type(path.self_type), self.print_path(path.trait_))
        elif isinstance(path, GenericPath):
            escapes = self.path_generic_args(lambda: self.print_path(path.path), path.args)
        else:
            raise InvalidArgument(f"unknown path node {path!r}")

        self._record(path, start, escapes)
        return escapes

    def print_type(self, ty: TypeLike) -> int:
        # Basic types are a single letter and never cached.
        if is_basic_type(ty):
            self.push(ty.value)
            return 0
        if isinstance(ty, Tuple) and not ty.elements:
            self.push(PrimitiveType.unit.value)
            return 0

        if self._try_backref(ty):
            return 0
        start = self.out.offset

        if isinstance(ty, Ref):
            self.push("Q" if ty.mutable else "R")
            escapes = 0
            if not ty.lifetime.erased:
                escapes = self.print_lifetime(ty.lifetime)
            escapes = max(escapes, self.print_type(ty.inner))
        elif isinstance(ty, RawPtr):
            self.push("O" if ty.mutable else "P")
            escapes = self.print_type(ty.inner)
        elif isinstance(ty, Array):
            self.push("A")
            escapes = self.print_type(ty.inner)
            self.print_const(Const(PrimitiveType.usize, ty.length))
        elif isinstance(ty, Slice):
            self.push("S")
            escapes = self.print_type(ty.inner)
        elif isinstance(ty, Tuple):
            self.push("T")
            escapes = max(self.print_type(element) for element in ty.elements)
            self.push("E")
        elif isinstance(ty, FnPtr):
            escapes = self.print_fn_ptr(ty)
        elif isinstance(ty, Path):
            escapes = self.print_path(ty)
        else:
            raise InvalidArgument(f"unknown type {ty!r}")

        self._record(ty, start, escapes)
        return escapes

    def print_fn_ptr(self, fn: FnPtr) -> int:
        self.push("F")
        push_opt_integer_62("G", fn.bound_lifetimes, self.out)
        if fn.unsafe:
            self.push("U")
        if fn.abi != "Rust":
            self.push("K")
            if fn.abi == "C":
                self.push("C")
            else:
                push_ident(fn.abi.replace("-", "_"), self.out)
        escapes = 0
        for ty in fn.inputs:
            escapes = max(escapes, self.print_type(ty))
        if fn.variadic:
            self.push("v")
        self.push("E")
        escapes = max(escapes, self.print_type(fn.output))
        return max(0, escapes - fn.bound_lifetimes)

    def print_lifetime(self, lifetime: Lifetime) -> int:
        self.push("L")
        push_integer_62(lifetime.index, self.out)
        return lifetime.index

    def print_const(self, const: Const) -> int:
        if self._try_backref(const):
            return 0
        start = self.out.offset

        if const.value is None:
            self.push("p")
        else:
            self.push(const.type.value)
            self.push(_const_data(const))

        self._record(const, start, 0)
        return 0

    def print_symbol(
        self, path: Path, instantiating_crate: t.Optional[CrateRoot] = None
    ) -> str:
        self.print_path(path)
        if instantiating_crate is not None:
            if not is_generic(path):
                Diagnostic.non_generic_instantiating_crate(instantiating_crate.name)
            self.print_path(instantiating_crate)
        return self.get()


def _const_data(const: Const) -> str:
    ty, value = const.type, const.value
    assert value is not None
    if isinstance(value, bool):
        value = int(value)
    if not isinstance(value, int):
        raise InvalidArgument(f"const value must be an integer, got {value!r}")

    if ty is PrimitiveType.bool:
        if value not in (0, 1):
            raise InvalidArgument(f"bool const must be 0 or 1, got {value}")
    elif ty is PrimitiveType.char:
        if not 0 <= value <= 0x10FFFF:
            raise InvalidArgument(f"char const out of range: {value}")
    elif not ty.integer:
        raise InvalidArgument(f"cannot mangle a const of type {ty.name}")
    elif value < 0 and not ty.signed:
        raise InvalidArgument(f"negative const {value} of unsigned type {ty.name}")

    sign = "n" if value < 0 else ""
    return f"{sign}{abs(value):x}_"


def mangle(path: Path, instantiating_crate: t.Optional[CrateRoot] = None) -> str:
    return SymbolMangler().print_symbol(path, instantiating_crate)
