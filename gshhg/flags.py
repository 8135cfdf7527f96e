import enum

import msgspec

__all__ = ("Level", "Source", "Flags", "decode_flags", "encode_flags")


def __dir__():
    return __all__


class Level(enum.IntEnum):
    """The hierarchical level of a shoreline polygon."""

    LAND = 1
    LAKE = 2
    ISLAND_IN_LAKE = 3
    POND_IN_ISLAND_IN_LAKE = 4


class Source(enum.IntEnum):
    """The dataset a shoreline polygon was extracted from.

    Source byte 1 decodes to ``CIA_WDBII`` and 0 to ``WVS``, so a flag word of
    ``0x01000001`` is a CIA WDBII polygon with the river bit set. This is the
    reverse of the ``0 = CIA WDBII, 1 = WVS`` assignment in the GSHHG
    documentation.
    """

    WVS = 0
    CIA_WDBII = 1


class Flags(msgspec.Struct, frozen=True):
    """The decoded form of a polygon's 32-bit flag word.

    Parameters
    ----------
    level : int
        Bits 0-7, as a `Level` member. Byte values without a `Level` member
        are kept as a plain ``int``.
    version : int
        Bits 8-15, the raw version byte.
    greenwich_crossed : bool
        Bit 16, set if the polygon crosses the 0° meridian.
    source : int
        Bits 24-31, as a `Source` member. Byte values without a `Source`
        member are kept as a plain ``int``.
    river : bool
        Bit 24. This is the low bit of the source byte; the two fields alias
        each other on disk.
    """

    level: int
    version: int
    greenwich_crossed: bool
    source: int
    river: bool


def _to_enum(cls, value):
    try:
        return cls(value)
    except ValueError:
        return value


def decode_flags(word: int) -> Flags:
    """Decode a raw flag word.

    Parameters
    ----------
    word : int
        The unsigned 32-bit flag word, as stored.

    Returns
    -------
    flags : Flags
    """
    return Flags(
        level=_to_enum(Level, word & 0xFF),
        version=(word >> 8) & 0xFF,
        greenwich_crossed=bool((word >> 16) & 1),
        source=_to_enum(Source, (word >> 24) & 0xFF),
        river=bool((word >> 24) & 1),
    )


def encode_flags(flags: Flags) -> int:
    """Pack a `Flags` back into its 32-bit word.

    ``encode_flags(decode_flags(word)) == word`` holds for every word with
    bits 17-23 clear. ``river`` is OR-ed into bit 24, so a `Flags` whose
    ``river`` disagrees with the low bit of ``source`` doesn't survive a
    round trip.

    See Also
    --------
    decode_flags
    """
    return (
        (int(flags.level) & 0xFF)
        | (flags.version & 0xFF) << 8
        | int(flags.greenwich_crossed) << 16
        | (int(flags.source) & 0xFF) << 24
        | int(flags.river) << 24
    )
