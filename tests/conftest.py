import pytest
from utils import encode_file, make_polygon

from gshhg import Level, Source


@pytest.fixture
def hierarchy():
    """A small nested collection.

    0 land
    ├── 1 lake
    │   └── 2 island in lake
    │       └── 5 pond in island in lake
    └── 4 lake
    3 land (greenwich crossing, full-resolution ancestor 17)
    """
    return [
        make_polygon(0, level=Level.LAND),
        make_polygon(1, level=Level.LAKE, container=0),
        make_polygon(2, level=Level.ISLAND_IN_LAKE, container=1),
        make_polygon(
            3,
            ((-1000, 5), (2000, 5), (2000, -7), (-1000, -7)),
            level=Level.LAND,
            greenwich_crossed=True,
            source=Source.CIA_WDBII,
            ancestor=17,
        ),
        make_polygon(4, (), level=Level.LAKE, container=0),
        make_polygon(5, level=Level.POND_IN_ISLAND_IN_LAKE, container=2),
    ]


@pytest.fixture
def hierarchy_bytes(hierarchy):
    return encode_file(hierarchy)


@pytest.fixture
def hierarchy_path(tmp_path, hierarchy_bytes):
    path = tmp_path / "gshhs_test.b"
    path.write_bytes(hierarchy_bytes)
    return path
