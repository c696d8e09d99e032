from rmangle.base62 import encode_integer_62, push_integer_62
from rmangle.disambiguator import encode_disambiguator, push_disambiguator
from rmangle.exc import EncodingError, InvalidArgument, ManglingError
from rmangle.ident import encode_ident, push_ident
from rmangle.symbol import (
    encode_crate_root,
    encode_path,
    encode_simple_path,
    encode_symbol,
    encode_type,
)
from rmangle.types_ import (
    ERASED,
    Array,
    Const,
    CrateRoot,
    FnPtr,
    GenericPath,
    InherentImpl,
    Lifetime,
    Namespace,
    NestedPath,
    Path,
    PathSegment,
    PrimitiveType,
    QualifiedPath,
    RawPtr,
    Ref,
    Slice,
    TraitImpl,
    Tuple,
    path_from_segments,
)
