import argparse
import collections
import logging
import os
import sys
from typing import List, Optional

import msgspec

from ._errors import GshhgError
from .core import Gshhg, decode

logger = logging.getLogger(__name__)

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _log_level(verbose: int) -> int:
    if verbose:
        return _LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)]
    name = os.environ.get("GSHHG_LOG_LEVEL", "WARNING")
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown GSHHG_LOG_LEVEL {name!r}")
    return level


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
    )


def check_bounds(gshhg: Gshhg) -> int:
    """Log a warning for every polygon whose stored box disagrees with its
    points. Returns the number of mismatches."""
    mismatches = 0
    for polygon in gshhg:
        computed = polygon.point_bounds()
        if computed is None:
            continue
        stored = (polygon.west, polygon.east, polygon.south, polygon.north)
        if computed != stored:
            mismatches += 1
            logger.warning(
                "Polygon %d: stored bounds %s, points cover %s",
                polygon.id,
                stored,
                computed,
            )
    return mismatches


def summarize(gshhg: Gshhg) -> str:
    counts = collections.Counter(polygon.level for polygon in gshhg)
    lines = [f"polygons: {len(gshhg)}", f"roots: {len(gshhg.roots())}"]
    for level, count in sorted(counts.items(), key=lambda item: int(item[0])):
        name = getattr(level, "name", f"level {level}")
        lines.append(f"{name}: {count}")
    return "\n".join(lines)


def _render(gshhg: Gshhg, fmt: str) -> bytes:
    if fmt == "json":
        return msgspec.json.format(msgspec.json.encode(gshhg)) + b"\n"
    elif fmt == "msgpack":
        return msgspec.msgpack.encode(gshhg)
    elif fmt == "yaml":
        return msgspec.yaml.encode(gshhg)
    return repr(gshhg).encode("utf-8") + b"\n"


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gshhg-dump", description="Decode and dump a GSHHG shoreline file"
    )
    parser.add_argument("path", help="The GSHHG binary file to read")
    parser.add_argument(
        "-f",
        "--format",
        choices=["repr", "json", "msgpack", "yaml"],
        default="repr",
        help="The output format, defaults to repr",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print polygon counts per level instead of the full collection",
    )
    parser.add_argument(
        "--check-bounds",
        action="store_true",
        help="Warn about polygons whose stored bounding box doesn't match their points",
    )
    parser.add_argument(
        "--no-validate-ids",
        dest="validate_ids",
        action="store_false",
        help="Don't require stored polygon ids to match their file position",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (may be repeated)",
    )
    args = parser.parse_args(argv)

    try:
        level = _log_level(args.verbose)
    except ValueError as exc:
        parser.error(str(exc))
    _configure_logging(level)

    try:
        with open(args.path, "rb") as f:
            gshhg = decode(f, validate_ids=args.validate_ids)
    except (OSError, GshhgError) as exc:
        print(f"gshhg-dump: {args.path}: {exc}", file=sys.stderr)
        return 1
    logger.info("Read %d polygons from %s", len(gshhg), args.path)

    if args.check_bounds:
        check_bounds(gshhg)

    if args.summary:
        out = summarize(gshhg).encode("utf-8") + b"\n"
    else:
        out = _render(gshhg, args.format)
    sys.stdout.buffer.write(out)
    sys.stdout.flush()
    return 0
