import struct

from gshhg import Level, Point, Polygon, Source, encode_flags

HEADER = struct.Struct(">iII4i2I2i")
POINT = struct.Struct(">ii")


def make_polygon(
    id,
    points=((0, 0), (1000000, 0), (1000000, 1000000)),
    *,
    container=None,
    ancestor=None,
    level=Level.LAND,
    version=12,
    greenwich_crossed=False,
    source=Source.WVS,
    river=None,
    bounds=None,
    area=100,
    area_full=120,
):
    points = tuple(Point(x, y) for x, y in points)
    if river is None:
        river = bool(int(source) & 1)
    if bounds is None:
        if points:
            xs = [p.x for p in points]
            ys = [p.y for p in points]
            bounds = (min(xs), max(xs), min(ys), max(ys))
        else:
            bounds = (0, 0, 0, 0)
    west, east, south, north = bounds
    return Polygon(
        id=id,
        point_count=len(points),
        level=level,
        version=version,
        greenwich_crossed=greenwich_crossed,
        source=source,
        river=river,
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


def encode_polygon(polygon, *, id=None, point_count=None, absent=-1):
    """Encode a polygon the way it's laid out on disk.

    ``id`` and ``point_count`` override the stored values, for producing
    malformed records. ``absent`` is the raw value written for a missing
    ``container`` or ``ancestor``.
    """
    header = HEADER.pack(
        polygon.id if id is None else id,
        polygon.point_count if point_count is None else point_count,
        encode_flags(polygon.flags),
        polygon.west,
        polygon.east,
        polygon.south,
        polygon.north,
        polygon.area,
        polygon.area_full,
        absent if polygon.container is None else polygon.container,
        absent if polygon.ancestor is None else polygon.ancestor,
    )
    return header + b"".join(POINT.pack(p.x, p.y) for p in polygon.points)


def encode_file(polygons):
    return b"".join(encode_polygon(p) for p in polygons)


class TrickleReader:
    """A stream that returns at most ``step`` bytes per read"""

    def __init__(self, data, step=3):
        self.data = data
        self.step = step
        self.pos = 0
        self.reads = 0

    def read(self, n):
        self.reads += 1
        chunk = self.data[self.pos : self.pos + min(n, self.step)]
        self.pos += len(chunk)
        return chunk


class FailingReader:
    def __init__(self, data=b"", exc=None):
        self.data = data
        self.exc = exc or OSError("device error")
        self.pos = 0

    def read(self, n):
        if self.pos >= len(self.data):
            raise self.exc
        chunk = self.data[self.pos : self.pos + n]
        self.pos += len(chunk)
        return chunk
