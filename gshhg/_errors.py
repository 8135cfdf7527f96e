__all__ = (
    "GshhgError",
    "DecodeError",
    "TruncatedRecordError",
    "InvalidIdError",
    "IdMismatchError",
    "DanglingReferenceError",
)


class GshhgError(Exception):
    """Base class for all errors raised by gshhg"""


class DecodeError(GshhgError, ValueError):
    """The byte stream is not a well-formed GSHHG file"""


class TruncatedRecordError(DecodeError):
    """The stream ended partway through a record.

    Parameters
    ----------
    offset : int
        Stream offset of the start of the truncated record.
    expected : int
        Number of bytes requested by the failing read.
    received : int
        Number of bytes actually available.
    """

    def __init__(self, offset: int, expected: int, received: int):
        self.offset = offset
        self.expected = expected
        self.received = received
        super().__init__(
            f"Truncated record at offset {offset}: expected {expected} bytes, "
            f"got {received}"
        )


class InvalidIdError(DecodeError):
    """A record's own ``id`` is negative"""

    def __init__(self, offset: int, value: int):
        self.offset = offset
        self.value = value
        super().__init__(f"Invalid negative polygon id {value} at offset {offset}")


class IdMismatchError(DecodeError):
    """A record's stored ``id`` doesn't match its position in the stream"""

    def __init__(self, position: int, value: int):
        self.position = position
        self.value = value
        super().__init__(
            f"Polygon at position {position} has stored id {value}, expected {position}"
        )


class DanglingReferenceError(DecodeError):
    """A ``container`` reference points outside the decoded collection"""

    def __init__(self, polygon: int, container: int, size: int):
        self.polygon = polygon
        self.container = container
        super().__init__(
            f"Polygon {polygon} references container {container}, but only "
            f"{size} polygons were decoded"
        )


class _EndOfStream(Exception):
    # Raised when the source is exhausted exactly at a record boundary. Never
    # escapes the package.
    pass
