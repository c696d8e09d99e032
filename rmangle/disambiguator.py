from rmangle.base62 import push_opt_integer_62
from rmangle.emit import Emitter


def push_disambiguator(dis: int, out: Emitter) -> None:
    # 0 is omitted, 1 is a bare "s_"
    push_opt_integer_62("s", dis, out)


def encode_disambiguator(dis: int) -> str:
    out = Emitter()
    push_disambiguator(dis, out)
    return out.get()
