import enum
import sys


class Diagnostic(enum.Enum):
    punycode_identifier = "punycode-identifier"
    non_generic_instantiating_crate = "non-generic-instantiating-crate"

    @property
    def message(self) -> str:
        return _diagnostic_messages[self]

    def __call__(self, *args, **kwargs) -> None:
        warn(self, *args, **kwargs)  # type: ignore


def warn(type: Diagnostic, *args, **kwargs) -> None:
    if type not in enabled_diagnostics:
        return

    if args or kwargs:  # type: ignore
        assert (bool(args) ^ bool(kwargs))  # type: ignore

    diagnostic_message = type.message % (args or kwargs)  # type: ignore
    print(f"WARN({type.value}): {diagnostic_message}", file=sys.stderr)


def by_name(name: str) -> Diagnostic:
    return Diagnostic(name)


enabled_diagnostics = {
    Diagnostic.non_generic_instantiating_crate,
}


_diagnostic_messages = {
    Diagnostic.punycode_identifier: "Identifier '%s' is not ASCII and was encoded as Punycode '%s'",
    Diagnostic.non_generic_instantiating_crate: "Instantiating crate '%s' appended to a path with no generic arguments",
}
