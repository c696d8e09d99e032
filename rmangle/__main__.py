import sys
import typing as t
from argparse import ArgumentParser

from llvmlite import ir

from rmangle import diagnostics
from rmangle.codegen import declare_function
from rmangle.exc import ManglingError
from rmangle.symbol import encode_symbol
from rmangle.types_ import CrateRoot, Namespace, PathSegment, path_from_segments

_namespaces_by_tag = {
    ns.tag: ns for ns in Namespace if ns is not Namespace.crate
}

arg_parser = ArgumentParser(prog="rmangle", description="Print the v0 symbol for a path")
arg_parser.add_argument("PATH", type=str, help="Path to mangle, e.g. mycrate::module::function")
arg_parser.add_argument(
    "--namespaces",
    type=str,
    help="Namespace tag per segment after the crate (default: 't' for all but a final 'v')",
)
arg_parser.add_argument(
    "--disambiguators",
    type=str,
    help="Comma separated disambiguator per segment after the crate",
)
arg_parser.add_argument(
    "--crate-disambiguator",
    type=lambda s: int(s, 0),
    default=0,
    help="Crate disambiguator, decimal or 0x-prefixed hex",
)
arg_parser.add_argument(
    "--instantiating-crate", type=str, help="Append this crate as the instantiating crate"
)
arg_parser.add_argument(
    "--dump-llvm", action="store_true", help="Dump an LLVM module declaring the symbol"
)
arg_parser.add_argument(
    "-W",
    dest="warnings",
    action="append",
    default=[],
    choices=[d.value for d in diagnostics.Diagnostic],
    help="Enable a diagnostic",
)
arg_parser.add_argument("--no-warnings", action="store_true", help="Disable all diagnostics")


def _segments(args) -> t.List[PathSegment]:
    crate, *names = args.PATH.split("::")
    tags = args.namespaces
    if tags is None:
        tags = "t" * (len(names) - 1) + "v" if names else ""
    if len(tags) != len(names):
        arg_parser.error(f"expected {len(names)} namespace tags, got {tags!r}")

    dis = [0] * len(names)
    if args.disambiguators:
        try:
            dis = [int(d, 0) for d in args.disambiguators.split(",")]
        except ValueError:
            arg_parser.error(f"invalid disambiguators {args.disambiguators!r}")
        if len(dis) != len(names):
            arg_parser.error(f"expected {len(names)} disambiguators, got {len(dis)}")

    segments = [PathSegment(crate, Namespace.crate, args.crate_disambiguator)]
    for name, tag, d in zip(names, tags, dis):
        if tag not in _namespaces_by_tag:
            arg_parser.error(f"unknown namespace tag {tag!r}")
        segments.append(PathSegment(name, _namespaces_by_tag[tag], d))
    return segments


def main(argv: t.Optional[t.Sequence[str]] = None) -> int:
    args = arg_parser.parse_args(argv)

    if args.no_warnings:
        diagnostics.enabled_diagnostics.clear()
    for name in args.warnings:
        diagnostics.enabled_diagnostics.add(diagnostics.by_name(name))

    instantiating_crate = (
        CrateRoot(args.instantiating_crate) if args.instantiating_crate else None
    )
    segments = _segments(args)
    try:
        path = path_from_segments(segments)
        symbol = encode_symbol(path, instantiating_crate)
    except ManglingError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.dump_llvm:
        ir_module = ir.Module(name=args.PATH)
        declare_function(
            ir_module,
            path,
            ir.FunctionType(ir.VoidType(), []),
            instantiating_crate=instantiating_crate,
        )
        print(ir_module)
    else:
        print(symbol)
    return 0


if __name__ == "__main__":
    sys.exit(main())
