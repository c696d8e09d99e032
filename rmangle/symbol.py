import typing as t

from rmangle.base62 import push_integer_62
from rmangle.disambiguator import push_disambiguator
from rmangle.ident import push_ident
from rmangle.mangle import SymbolMangler
from rmangle.types_ import CrateRoot, Path, PathSegment, TypeLike, path_from_segments

__all__ = [
    "push_integer_62",
    "push_ident",
    "push_disambiguator",
    "encode_crate_root",
    "encode_simple_path",
    "encode_path",
    "encode_type",
    "encode_symbol",
]

SegmentLike = t.Union[PathSegment, t.Sequence[t.Any]]


def encode_crate_root(name: str, disambiguator: int = 0) -> str:
    return encode_path(CrateRoot(name, disambiguator))


def encode_simple_path(segments: t.Iterable[SegmentLike]) -> str:
    """Mangle a flat list of ``(name, namespace, disambiguator)`` triples.

    The result has no ``_R`` prefix:

        [("mycrate", Namespace.crate, 0), ("module", Namespace.type, 0),
         ("function", Namespace.value, 0)]
        -> "NvNtC7mycrate6module8function"
    """
    return encode_path(path_from_segments(segments))


def encode_path(path: Path) -> str:
    mangler = SymbolMangler(prefix="")
    mangler.print_path(path)
    return mangler.get()


def encode_type(ty: TypeLike) -> str:
    mangler = SymbolMangler(prefix="")
    mangler.print_type(ty)
    return mangler.get()


def encode_symbol(
    path: t.Union[Path, t.Iterable[SegmentLike]],
    instantiating_crate: t.Union[CrateRoot, str, None] = None,
) -> str:
    """Full linker symbol: ``_R``, the path, then the instantiating crate.

    ``path`` may also be a list of segments as accepted by
    `encode_simple_path`. A string ``instantiating_crate`` is a crate root
    with no disambiguator.
    """
    if not isinstance(path, Path):
        path = path_from_segments(path)
    if isinstance(instantiating_crate, str):
        instantiating_crate = CrateRoot(instantiating_crate)
    return SymbolMangler().print_symbol(path, instantiating_crate)
