from ._errors import (
    DanglingReferenceError,
    DecodeError,
    GshhgError,
    IdMismatchError,
    InvalidIdError,
    TruncatedRecordError,
)
from .flags import Flags, Level, Source, decode_flags, encode_flags
from .core import Decoder, Gshhg, Point, Polygon, decode, decode_polygon
from ._version import __version__
