import logging
import struct
from typing import Iterator, List, Optional, Tuple

import msgspec
from msgspec.structs import replace as _replace

from ._errors import (
    DanglingReferenceError,
    IdMismatchError,
    InvalidIdError,
    _EndOfStream,
)
from ._io import Reader
from .flags import Flags, decode_flags

__all__ = ("Point", "Polygon", "Gshhg", "Decoder", "decode", "decode_polygon")

logger = logging.getLogger(__name__)

_POINT = struct.Struct(">ii")


def __dir__():
    return __all__


class Point(msgspec.Struct, frozen=True, array_like=True, gc=False):
    """A coordinate pair in micro-degrees.

    Parameters
    ----------
    x : int
        Longitude, in degrees × 10⁶.
    y : int
        Latitude, in degrees × 10⁶.
    """

    x: int
    y: int


class Polygon(msgspec.Struct, frozen=True):
    """A single shoreline polygon.

    Parameters
    ----------
    id : int
        The polygon id, equal to its position in the file.
    point_count : int
        The number of points in ``points``.
    level : int
        The hierarchical level, a `Level` member (``LAND``, ``LAKE``,
        ``ISLAND_IN_LAKE``, ``POND_IN_ISLAND_IN_LAKE``) when the byte is known,
        and the raw byte otherwise.
    version : int
        The raw version byte of the flag word.
    greenwich_crossed : bool
        Whether the polygon crosses the 0° meridian.
    source : int
        The source dataset, a `Source` member (``CIA_WDBII``, ``WVS``) when the
        byte is known, and the raw byte otherwise.
    river : bool
        The river bit, which aliases the low bit of the source byte.
    west, east, south, north : int
        The stored bounding box, in micro-degrees.
    area : int
        Area of the polygon at this resolution, in units of 0.1 km².
    area_full : int
        Area of the full-resolution polygon, in units of 0.1 km².
    container : int or None
        The id of the polygon enclosing this one, if any.
    ancestor : int or None
        The id of the full-resolution polygon this one was derived from, if
        any.
    points : tuple of Point
        The polygon ring, in file order.
    children : tuple of int
        Ids of the polygons whose ``container`` is this polygon, ascending.
    """

    id: int
    point_count: int
    level: int
    version: int
    greenwich_crossed: bool
    source: int
    river: bool
    west: int
    east: int
    south: int
    north: int
    area: int
    area_full: int
    container: Optional[int]
    ancestor: Optional[int]
    points: Tuple[Point, ...]
    children: Tuple[int, ...] = ()

    @property
    def flags(self) -> Flags:
        """The flag word fields, as a `Flags` record"""
        return Flags(
            level=self.level,
            version=self.version,
            greenwich_crossed=self.greenwich_crossed,
            source=self.source,
            river=self.river,
        )

    def point_bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """The ``(west, east, south, north)`` extent covered by ``points``.

        This is computed from the points rather than read from the file, and
        is ``None`` for a polygon without points. Useful for cross-checking
        the stored bounding box.
        """
        if not self.points:
            return None
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return min(xs), max(xs), min(ys), max(ys)


class Gshhg(msgspec.Struct, frozen=True):
    """A decoded GSHHG file.

    Polygons are stored by position, so ``gshhg[k].id == k``.

    Parameters
    ----------
    polygons : tuple of Polygon
        Every polygon in the file, in file order.
    """

    polygons: Tuple[Polygon, ...] = ()

    def __len__(self) -> int:
        return len(self.polygons)

    def __getitem__(self, id: int) -> Polygon:
        return self.polygons[id]

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def roots(self) -> Tuple[Polygon, ...]:
        """All polygons without a container"""
        return tuple(p for p in self.polygons if p.container is None)

    def parent(self, id: int) -> Optional[Polygon]:
        """The polygon enclosing polygon ``id``, or ``None``"""
        container = self.polygons[id].container
        return None if container is None else self.polygons[container]

    def children_of(self, id: int) -> Tuple[Polygon, ...]:
        """The polygons directly contained by polygon ``id``"""
        return tuple(self.polygons[c] for c in self.polygons[id].children)

    def descendants(self, id: int) -> Iterator[Polygon]:
        """Iterate over every polygon nested inside polygon ``id``.

        Polygons are yielded depth-first, in file order among siblings.
        Polygon ``id`` itself is not included. Each polygon is yielded at
        most once, even if the containment links form a cycle.
        """
        seen = {id}
        stack = list(reversed(self.polygons[id].children))
        while stack:
            child = stack.pop()
            if child in seen:
                continue
            seen.add(child)
            polygon = self.polygons[child]
            yield polygon
            stack.extend(reversed(polygon.children))


def _read_polygon(reader: Reader) -> Polygon:
    reader.begin_record()
    id = reader.read_i32()
    if id < 0:
        raise InvalidIdError(reader.record_start, id)
    point_count = reader.read_u32()
    flags = decode_flags(reader.read_u32())
    west = reader.read_i32()
    east = reader.read_i32()
    south = reader.read_i32()
    north = reader.read_i32()
    area = reader.read_u32()
    area_full = reader.read_u32()
    container = reader.read_optional_id()
    ancestor = reader.read_optional_id()
    data = reader.read_exact(point_count * _POINT.size)
    points = tuple(Point(x, y) for x, y in _POINT.iter_unpack(data))
    return Polygon(
        id=id,
        point_count=point_count,
        level=flags.level,
        version=flags.version,
        greenwich_crossed=flags.greenwich_crossed,
        source=flags.source,
        river=flags.river,
        west=west,
        east=east,
        south=south,
        north=north,
        area=area,
        area_full=area_full,
        container=container,
        ancestor=ancestor,
        points=points,
    )


def _link_children(polygons: List[Polygon]) -> Tuple[Polygon, ...]:
    size = len(polygons)
    children: List[List[int]] = [[] for _ in range(size)]
    for position, polygon in enumerate(polygons):
        container = polygon.container
        if container is None:
            continue
        if container >= size:
            raise DanglingReferenceError(position, container, size)
        children[container].append(position)
    logger.debug(
        "Linked %d contained polygons", sum(len(ids) for ids in children)
    )
    return tuple(
        _replace(polygon, children=tuple(ids)) if ids else polygon
        for polygon, ids in zip(polygons, children)
    )


class Decoder:
    """A GSHHG decoder.

    Parameters
    ----------
    validate_ids : bool, optional
        If ``True`` (the default), each record's stored ``id`` must equal its
        position in the stream, and an `IdMismatchError` is raised otherwise.
        If ``False`` the stored ids are trusted as-is, and containment links
        are resolved by position.
    """

    def __init__(self, *, validate_ids: bool = True):
        self.validate_ids = validate_ids

    def __repr__(self) -> str:
        return f"Decoder(validate_ids={self.validate_ids!r})"

    def decode_polygon(self, source) -> Tuple[Polygon, int]:
        """Decode a single record.

        Parameters
        ----------
        source : file-like or bytes-like
            A binary stream positioned at the start of a record, or a buffer
            starting with one. A stream is left positioned after the record.

        Returns
        -------
        polygon : Polygon
            The decoded polygon, with empty ``children``.
        size : int
            The number of bytes consumed.

        Raises
        ------
        EOFError
            If the source is empty.
        """
        reader = Reader(source)
        try:
            polygon = _read_polygon(reader)
        except _EndOfStream:
            raise EOFError("No GSHHG record available in source") from None
        return polygon, reader.offset

    def decode(self, source) -> Gshhg:
        """Decode every record in ``source`` into a `Gshhg` collection.

        Parameters
        ----------
        source : file-like or bytes-like
            A binary stream or buffer holding zero or more records. Streams
            are read to exhaustion but never closed.

        Returns
        -------
        gshhg : Gshhg
        """
        reader = Reader(source)
        polygons: List[Polygon] = []
        while True:
            try:
                polygon = _read_polygon(reader)
            except _EndOfStream:
                break
            if self.validate_ids and polygon.id != len(polygons):
                raise IdMismatchError(len(polygons), polygon.id)
            polygons.append(polygon)
        logger.debug("Decoded %d polygons from %d bytes", len(polygons), reader.offset)
        return Gshhg(_link_children(polygons))


def decode(source, *, validate_ids: bool = True) -> Gshhg:
    """Decode a GSHHG file.

    Parameters
    ----------
    source : file-like or bytes-like
        An open binary file (or any object with a ``read(n)`` method), or the
        file contents as a bytes-like object.
    validate_ids : bool, optional
        Whether to check that each record's stored ``id`` matches its
        position. Default is ``True``.

    Returns
    -------
    gshhg : Gshhg

    Raises
    ------
    TruncatedRecordError
        If the data ends partway through a record.
    InvalidIdError
        If a record has a negative ``id``.
    IdMismatchError
        If ``validate_ids`` and a record's ``id`` doesn't match its position.
    DanglingReferenceError
        If a ``container`` refers past the end of the file.

    See Also
    --------
    Decoder.decode
    """
    return Decoder(validate_ids=validate_ids).decode(source)


def decode_polygon(source) -> Tuple[Polygon, int]:
    """Decode a single record, returning the polygon and the bytes consumed.

    See Also
    --------
    Decoder.decode_polygon
    """
    return Decoder().decode_polygon(source)
