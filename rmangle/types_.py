"""Paths, types and generic arguments fed to the mangler.

All nodes are frozen dataclasses, so equal structure means equal hash. The
mangler uses the nodes themselves as back-reference keys.
"""

from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass

from typing_extensions import TypeGuard

from rmangle.exc import InvalidArgument


class Namespace(enum.Enum):
    crate = enum.auto()
    type = enum.auto()
    value = enum.auto()
    closure = enum.auto()
    shim = enum.auto()
    constructor = enum.auto()
    anon_const = enum.auto()
    opaque = enum.auto()
    coroutine_body = enum.auto()

    @property
    def tag(self) -> str:
        return _namespace_tags[self]


_namespace_tags = {
    Namespace.crate: "C",
    Namespace.type: "t",
    Namespace.value: "v",
    Namespace.closure: "C",
    Namespace.shim: "S",
    Namespace.constructor: "c",
    Namespace.anon_const: "k",
    Namespace.opaque: "i",
    Namespace.coroutine_body: "s",
}


class PrimitiveType(enum.Enum):
    bool = "b"
    char = "c"
    str = "e"
    unit = "u"
    i8 = "a"
    i16 = "s"
    i32 = "l"
    i64 = "x"
    i128 = "n"
    isize = "i"
    u8 = "h"
    u16 = "t"
    u32 = "m"
    u64 = "y"
    u128 = "o"
    usize = "j"
    f16 = "C3f16"
    f32 = "f"
    f64 = "d"
    f128 = "C4f128"
    never = "z"

    @property
    def signed(self) -> bool:
        return self in _signed_integers

    @property
    def integer(self) -> bool:
        return self in _signed_integers or self in _unsigned_integers


_signed_integers = frozenset(
    {
        PrimitiveType.i8,
        PrimitiveType.i16,
        PrimitiveType.i32,
        PrimitiveType.i64,
        PrimitiveType.i128,
        PrimitiveType.isize,
    }
)
_unsigned_integers = frozenset(
    {
        PrimitiveType.u8,
        PrimitiveType.u16,
        PrimitiveType.u32,
        PrimitiveType.u64,
        PrimitiveType.u128,
        PrimitiveType.usize,
    }
)


@dataclass(frozen=True)
class Type:
    pass


@dataclass(frozen=True)
class Lifetime:
    # 0 is the erased lifetime; anything else is a bound lifetime already
    # resolved to its distance from the innermost binder.
    index: int = 0

    @property
    def erased(self) -> bool:
        return self.index == 0


ERASED = Lifetime(0)


@dataclass(frozen=True)
class Const:
    type: PrimitiveType
    # None is a placeholder for a value the caller could not evaluate
    value: t.Optional[int] = None


@dataclass(frozen=True)
class Path(Type):
    pass


@dataclass(frozen=True)
class CrateRoot(Path):
    name: str
    disambiguator: int = 0


@dataclass(frozen=True)
class NestedPath(Path):
    parent: Path
    namespace: Namespace
    name: str
    disambiguator: int = 0


@dataclass(frozen=True)
class InherentImpl(Path):
    parent: Path
    self_type: TypeLike
    disambiguator: int = 0


@dataclass(frozen=True)
class TraitImpl(Path):
    parent: Path
    self_type: TypeLike
    trait_: Path
    disambiguator: int = 0


@dataclass(frozen=True)
class QualifiedPath(Path):
    """``<self_type as trait_>``, used as the prefix of a trait item."""

    self_type: TypeLike
    trait_: Path


@dataclass(frozen=True)
class GenericPath(Path):
    path: Path
    args: t.Tuple[GenericArg, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class Ref(Type):
    inner: TypeLike
    mutable: bool = False
    lifetime: Lifetime = ERASED


@dataclass(frozen=True)
class RawPtr(Type):
    inner: TypeLike
    mutable: bool = False


@dataclass(frozen=True)
class Array(Type):
    inner: TypeLike
    length: int


@dataclass(frozen=True)
class Slice(Type):
    inner: TypeLike


@dataclass(frozen=True)
class Tuple(Type):
    elements: t.Tuple[TypeLike, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))


@dataclass(frozen=True)
class FnPtr(Type):
    inputs: t.Tuple[TypeLike, ...] = ()
    output: TypeLike = PrimitiveType.unit
    unsafe: bool = False
    abi: str = "Rust"
    variadic: bool = False
    # Number of lifetimes introduced by a `for<...>` binder on this pointer.
    bound_lifetimes: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))


TypeLike = t.Union[Type, PrimitiveType]
GenericArg = t.Union[TypeLike, Lifetime, Const]


def is_basic_type(ty: object) -> TypeGuard[PrimitiveType]:
    return isinstance(ty, PrimitiveType)


@dataclass(frozen=True)
class PathSegment:
    name: str
    namespace: Namespace
    disambiguator: int = 0

    @classmethod
    def coerce(cls, segment: t.Union[PathSegment, t.Sequence[t.Any]]) -> PathSegment:
        if isinstance(segment, PathSegment):
            return segment
        return cls(*segment)


def path_from_segments(
    segments: t.Iterable[t.Union[PathSegment, t.Sequence[t.Any]]],
) -> Path:
    """Build a nested path from ``(name, namespace, disambiguator)`` triples.

    The first segment is the crate root and must use ``Namespace.crate``;
    no later segment may.
    """
    path: t.Optional[Path] = None
    for segment in map(PathSegment.coerce, segments):
        if path is None:
            if segment.namespace is not Namespace.crate:
                raise InvalidArgument(
                    f"path must start with a crate root, got {segment.namespace.name} "
                    f"segment {segment.name!r}"
                )
            path = CrateRoot(segment.name, segment.disambiguator)
        elif segment.namespace is Namespace.crate:
            raise InvalidArgument(f"crate segment {segment.name!r} inside a path")
        else:
            path = NestedPath(
                path, segment.namespace, segment.name, segment.disambiguator
            )
    if path is None:
        raise InvalidArgument("empty path")
    return path

