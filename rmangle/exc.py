class ManglingError(Exception):
    pass


class InvalidArgument(ManglingError, ValueError):
    """Input that no symbol can be produced for.

    Raised for negative integers, empty paths and node kinds the mangler does
    not know about.
    """


class EncodingError(ManglingError, ValueError):
    def __init__(self, ident: str, message: str):
        super().__init__(f"{message} in identifier {ident!r}")
        self.ident = ident
