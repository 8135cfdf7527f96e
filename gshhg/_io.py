import io
import struct
from typing import Optional

from ._errors import TruncatedRecordError, _EndOfStream

__all__ = ("Reader",)

_I32 = struct.Struct(">i")
_U32 = struct.Struct(">I")

# Upper bound on a single call to ``source.read``. A corrupt point count can
# request gigabytes, and some raw file objects allocate the full request up
# front.
_CHUNK_SIZE = 1 << 20


class Reader:
    """A cursor over a byte source, reading exact-length big-endian fields.

    Parameters
    ----------
    source : file-like or bytes-like
        Either an object with a binary ``read(n)`` method, or a bytes-like
        object. The source is never seeked or closed.
    """

    def __init__(self, source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            # call `memoryview` first, since `bytes(1)` is actually valid
            source = io.BytesIO(bytes(memoryview(source)))
        elif not callable(getattr(source, "read", None)):
            raise TypeError(
                f"Expected a bytes-like object or a binary file, got {type(source).__name__}"
            )
        self._source = source
        self.offset = 0
        self.record_start = 0

    def begin_record(self) -> None:
        """Mark the current offset as the start of a new record"""
        self.record_start = self.offset

    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes.

        Raises ``_EndOfStream`` if the source is already exhausted at the
        start of a record, and `TruncatedRecordError` for any other short
        read.
        """
        chunks = []
        remaining = n
        while remaining:
            chunk = self._source.read(min(remaining, _CHUNK_SIZE))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        if remaining:
            received = n - remaining
            if received == 0 and self.offset == self.record_start:
                raise _EndOfStream()
            raise TruncatedRecordError(self.record_start, n, received)
        self.offset += n
        if len(chunks) == 1:
            return chunks[0]
        return b"".join(chunks)

    def read_i32(self) -> int:
        return _I32.unpack(self.read_exact(4))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read_exact(4))[0]

    def read_optional_id(self) -> Optional[int]:
        """Read a signed id where any negative value means "absent"."""
        value = self.read_i32()
        return None if value < 0 else value
