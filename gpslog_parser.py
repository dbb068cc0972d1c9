#!/usr/bin/env python3
"""
gpslog_parser.py — GPS Log Archive Parser & GPX Exporter

Parses GPS track recordings stored as a zip archive holding two members:
  - a ``.gps`` log: UTF-8 text, one comma-separated tagged record per line
  - a ``.acc`` log: the accelerometer stream (recognised, never opened)

and reconstructs the track as GPX 1.0 (time, position, elevation, speed and
course per trackpoint).

The GPS log is a stream of absolute "H" anchor records, each followed by
"D" delta records that are offsets from that anchor. Every delta becomes one
trackpoint; anchors only seed the position.

Usage:
    python3 gpslog_parser.py recording.zip                     # Export out.gpx
    python3 gpslog_parser.py recording.zip --info              # Print summary only
    python3 gpslog_parser.py recording.zip -o track.gpx        # Custom output file
    python3 gpslog_parser.py recording.zip --elevation-scale 100
    python3 gpslog_parser.py recording.zip -v                  # Log every record

License: MIT
"""

from __future__ import annotations

import argparse
import dataclasses
import datetime
import io
import logging
import re
import sys
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Sequence, Union

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

# Archive member suffixes. Any other member name is rejected.
GPS_SUFFIX = ".gps"
ACC_SUFFIX = ".acc"

# Record tags in the GPS log
TAG_USER = "U"
TAG_RECORDER_VERSION = "V"
TAG_APP_VERSION = "A"
TAG_DEVICE = "I"
TAG_ANCHOR = "H"
TAG_DELTA = "D"

TAG_NAMES = {
    TAG_USER: "USER",
    TAG_RECORDER_VERSION: "VERSION",
    TAG_APP_VERSION: "APP_VERSION",
    TAG_DEVICE: "DEVICE",
    TAG_ANCHOR: "ANCHOR",
    TAG_DELTA: "DELTA",
}

FIELD_SEPARATOR = ","

# Fixed-point scales of the delta record.
# Position deltas are in millionths of a degree.
DEGREE_SCALE = 1_000_000
# Elevation deltas have been seen in decimetres and in centimetres depending
# on the recorder. Decimetres is what the reference decoder assumes.
ELEVATION_SCALE_DECIMETRES = 10
ELEVATION_SCALE_CENTIMETRES = 100
DEFAULT_ELEVATION_SCALE = ELEVATION_SCALE_DECIMETRES

# Datetime strings carried by anchor records: YYYY-MM-DDTHH:MM:SS[.fraction]
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
_DATETIME_RE = re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?", re.ASCII)

# Integers are signed 64-bit on the producer side
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

DEFAULT_OUTPUT = "out.gpx"

MPH_PER_MPS = 2.2369363
KMH_PER_MPS = 3.6

# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────


class GpsLogError(ValueError):
    """Base class for every failure that aborts a conversion."""


class ContainerError(GpsLogError):
    """The archive is unreadable or does not hold exactly one .gps and one .acc."""


class DecodeError(GpsLogError):
    """A GPS log line does not match the record grammar."""


class ReconstructionError(GpsLogError):
    """The record stream cannot be folded into a track."""


class InputReadError(GpsLogError):
    """A line of the GPS log could not be read."""


class OutputWriteError(GpsLogError):
    """The output track could not be written."""


def error_chain(exc: BaseException) -> list[str]:
    """Return the messages of ``exc`` and each exception it was raised from."""
    messages = []
    current: BaseException | None = exc
    while current is not None:
        messages.append(str(current) or type(current).__name__)
        current = current.__cause__
    return messages


# ─────────────────────────────────────────────────────────────────────────────
# Data classes
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class User:
    """U record: account name of the recording user."""
    name: str


@dataclass(frozen=True)
class RecorderVersion:
    """V record: firmware/recorder version string."""
    version: str


@dataclass(frozen=True)
class AppVersion:
    """A record: companion application version string."""
    version: str


@dataclass(frozen=True)
class Device:
    """I record: free-form device identification fields."""
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class Anchor:
    """H record: absolute position and time that following deltas refer to."""
    timestamp: datetime.datetime  # UTC instant in the recorder's fixed offset
    latitude: float               # Degrees (WGS84)
    longitude: float              # Degrees (WGS84)
    elevation: float              # Meters


@dataclass(frozen=True)
class Delta:
    """D record: offset from the most recent anchor plus instantaneous motion."""
    duration: datetime.timedelta  # Time since the anchor (ms resolution)
    latitude_delta: float         # Degrees since the anchor
    longitude_delta: float        # Degrees since the anchor
    elevation_delta: float        # Meters since the anchor
    speed: float                  # m/s
    heading: float                # Degrees (0-360)


Record = Union[User, RecorderVersion, AppVersion, Device, Anchor, Delta]


@dataclass
class TrackPoint:
    """A single reconstructed trackpoint."""
    time: datetime.datetime
    latitude: float
    longitude: float
    elevation: float
    speed: float = 0.0   # m/s
    course: float = 0.0  # Degrees


@dataclass
class RecordSummary:
    """Aggregate statistics over a decoded record stream (for diagnostics)."""
    record_count: int = 0
    tag_counts: dict[str, int] = field(default_factory=dict)
    max_speed: float | None = None  # None until a Delta record is seen

    # Informational header records
    user: str = ""
    recorder_version: str = ""
    app_version: str = ""
    device: tuple[str, ...] = ()

    def add(self, record: Record) -> None:
        """Account for one decoded record."""
        self.record_count += 1
        tag = tag_of(record)
        self.tag_counts[tag] = self.tag_counts.get(tag, 0) + 1

        if isinstance(record, Delta):
            if self.max_speed is None or record.speed > self.max_speed:
                self.max_speed = record.speed
        elif isinstance(record, User):
            self.user = record.name
        elif isinstance(record, RecorderVersion):
            self.recorder_version = record.version
        elif isinstance(record, AppVersion):
            self.app_version = record.version
        elif isinstance(record, Device):
            self.device = record.fields

    @property
    def has_data(self) -> bool:
        return self.max_speed is not None

    @property
    def max_speed_mph(self) -> float | None:
        if self.max_speed is None:
            return None
        return self.max_speed * MPH_PER_MPS

    @property
    def max_speed_kmh(self) -> float | None:
        if self.max_speed is None:
            return None
        return self.max_speed * KMH_PER_MPS

    def max_speed_text(self) -> str:
        """Human-readable maximum speed, or "no data" without delta records."""
        if self.max_speed is None:
            return "no data"
        return f"{self.max_speed} m/s, {self.max_speed_mph:.1f} MPH"


@dataclass
class GpsLogSession:
    """Everything recovered from one recording archive."""
    file_path: str = ""
    gps_member: str = ""
    acc_member: str = ""
    summary: RecordSummary = field(default_factory=RecordSummary)
    points: list[TrackPoint] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        """Time covered by the reconstructed track."""
        if len(self.points) < 2:
            return 0.0
        return (self.points[-1].time - self.points[0].time).total_seconds()


def tag_of(record: Record) -> str:
    """Return the tag a record is written with."""
    if isinstance(record, User):
        return TAG_USER
    if isinstance(record, RecorderVersion):
        return TAG_RECORDER_VERSION
    if isinstance(record, AppVersion):
        return TAG_APP_VERSION
    if isinstance(record, Device):
        return TAG_DEVICE
    if isinstance(record, Anchor):
        return TAG_ANCHOR
    if isinstance(record, Delta):
        return TAG_DELTA
    raise TypeError(f"not a GPS log record: {record!r}")


# ─────────────────────────────────────────────────────────────────────────────
# Field parsing
# ─────────────────────────────────────────────────────────────────────────────

def _parse_int(value: str) -> int:
    """Parse a signed 64-bit decimal integer."""
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid digit found in {value!r}")
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"number {value!r} does not fit in 64 bits")
    return number


def _parse_float(value: str) -> float:
    if not value.isascii() or value != value.strip() or "_" in value:
        raise ValueError(f"invalid float literal {value!r}")
    return float(value)


def _parse_datetime(value: str) -> datetime.datetime:
    """Parse YYYY-MM-DDTHH:MM:SS with an optional fraction of any length.

    The fraction is checked for digits only; seconds resolution is enough
    for the sanity check the anchor record needs.
    """
    match = _DATETIME_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"{value!r} does not match {DATETIME_FORMAT}[.fraction]")
    return datetime.datetime.strptime(match.group(1), DATETIME_FORMAT)


class _Fields:
    """Cursor over the value fields of one line, naming each field it reads."""

    def __init__(self, values: Sequence[str]):
        self._values = values
        self._pos = 0

    def next(self, name: str) -> str:
        if self._pos >= len(self._values):
            raise DecodeError(f"missing field {name}")
        value = self._values[self._pos]
        self._pos += 1
        return value

    def rest(self) -> tuple[str, ...]:
        values = tuple(self._values[self._pos:])
        self._pos = len(self._values)
        return values

    def next_int(self, name: str) -> int:
        value = self.next(name)
        try:
            return _parse_int(value)
        except ValueError as exc:
            raise DecodeError(f"invalid {name}") from exc

    def next_float(self, name: str) -> float:
        value = self.next(name)
        try:
            return _parse_float(value)
        except ValueError as exc:
            raise DecodeError(f"invalid {name}") from exc

    def next_datetime(self, name: str) -> datetime.datetime:
        value = self.next(name)
        try:
            return _parse_datetime(value)
        except ValueError as exc:
            raise DecodeError(f"invalid {name}") from exc


# ─────────────────────────────────────────────────────────────────────────────
# Timestamp resolution
# ─────────────────────────────────────────────────────────────────────────────

def resolve_timestamp(utc_ms: int, local_ms: int) -> datetime.datetime:
    """Build the anchor instant from its UTC and local epoch milliseconds.

    The UTC offset is not stored by the recorder; it is the difference of the
    two epoch values, truncated toward zero to whole seconds. The returned
    datetime is exactly ``utc_ms`` after the Unix epoch, shown in that offset.
    """
    diff_ms = local_ms - utc_ms
    offset_s = abs(diff_ms) // 1000
    if diff_ms < 0:
        offset_s = -offset_s
    if diff_ms % 1000:
        logger.warning(
            "UTC offset of %d ms is not a whole number of seconds, truncated to %d s",
            diff_ms, offset_s,
        )

    try:
        tz = datetime.timezone(datetime.timedelta(seconds=offset_s))
    except (ValueError, OverflowError) as exc:
        raise DecodeError(f"UTC offset of {offset_s} s is out of range") from exc

    try:
        instant = UNIX_EPOCH + datetime.timedelta(milliseconds=utc_ms)
        return instant.astimezone(tz)
    except OverflowError as exc:
        raise DecodeError(f"timestamp {utc_ms} is out of range") from exc


# ─────────────────────────────────────────────────────────────────────────────
# Record decoder
# ─────────────────────────────────────────────────────────────────────────────

class GpsLogDecoder:
    """Decodes single GPS log lines into records.

    Line grammar (fields separated by ``,``, no quoting):
      U,<username>
      V,<recorder version>
      A,<app version>
      I[,<device field>...]
      H,<utc ms>,<lat>,<lon>,<ele m>,<local ms>,<utc datetime>,<local datetime>
      D,<ms since H>,<dlat µdeg>,<dlon µdeg>,<dele>,<speed m/s>,<heading deg>

    The D elevation change is an integer in 1/elevation_scale metres.
    Fields beyond the ones listed are ignored.
    """

    def __init__(self, elevation_scale: int = DEFAULT_ELEVATION_SCALE):
        if elevation_scale <= 0:
            raise ValueError(f"elevation scale must be positive, got {elevation_scale}")
        self.elevation_scale = elevation_scale

    def decode_line(self, line: str) -> Record:
        """Decode one line (without its line terminator) into a record."""
        tag, *values = line.split(FIELD_SEPARATOR)
        if not tag:
            raise DecodeError("missing tag field")
        fields = _Fields(values)

        if tag == TAG_USER:
            return User(fields.next("username"))
        if tag == TAG_RECORDER_VERSION:
            return RecorderVersion(fields.next("version"))
        if tag == TAG_APP_VERSION:
            return AppVersion(fields.next("app version"))
        if tag == TAG_DEVICE:
            return Device(fields.rest())
        if tag == TAG_ANCHOR:
            return self._decode_anchor(fields)
        if tag == TAG_DELTA:
            return self._decode_delta(fields)
        raise DecodeError(f"unrecognized tag {tag}")

    def _decode_anchor(self, fields: _Fields) -> Anchor:
        utc_ms = fields.next_int("timestamp")
        latitude = fields.next_float("latitude")
        longitude = fields.next_float("longitude")
        elevation = fields.next_float("elevation")
        local_ms = fields.next_int("local timestamp")
        # Only checked for shape; the epoch values are authoritative.
        fields.next_datetime("first datetime")
        fields.next_datetime("second datetime")

        return Anchor(
            timestamp=resolve_timestamp(utc_ms, local_ms),
            latitude=latitude,
            longitude=longitude,
            elevation=elevation,
        )

    def _decode_delta(self, fields: _Fields) -> Delta:
        millis = fields.next_int("milliseconds")
        lat_change_udeg = fields.next_int("latitude change")
        lon_change_udeg = fields.next_int("longitude change")
        ele_change = fields.next_int("elevation change")
        speed = fields.next_float("speed")
        heading = fields.next_float("heading")

        try:
            duration = datetime.timedelta(milliseconds=millis)
        except OverflowError as exc:
            raise DecodeError("invalid milliseconds") from exc

        return Delta(
            duration=duration,
            latitude_delta=lat_change_udeg / DEGREE_SCALE,
            longitude_delta=lon_change_udeg / DEGREE_SCALE,
            elevation_delta=ele_change / self.elevation_scale,
            speed=speed,
            heading=heading,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Track reconstruction
# ─────────────────────────────────────────────────────────────────────────────

class TrackBuilder:
    """Folds records into trackpoints, one per Delta.

    Holds the most recent anchor as a TrackPoint with zero speed and course.
    Each Delta yields a copy of that anchor moved by the delta; the anchor
    itself only changes when the next Anchor record arrives.
    """

    def __init__(self) -> None:
        self.anchor: TrackPoint | None = None
        self.points: list[TrackPoint] = []

    def add(self, record: Record) -> TrackPoint | None:
        """Fold one record; return the emitted trackpoint, if any."""
        if isinstance(record, Anchor):
            self.anchor = TrackPoint(
                time=record.timestamp,
                latitude=record.latitude,
                longitude=record.longitude,
                elevation=record.elevation,
            )
            return None

        if isinstance(record, Delta):
            if self.anchor is None:
                raise ReconstructionError("delta record without a preceding anchor record")
            try:
                time = self.anchor.time + record.duration
            except OverflowError as exc:
                raise ReconstructionError("delta time out of range") from exc
            point = dataclasses.replace(
                self.anchor,
                time=time,
                latitude=self.anchor.latitude + record.latitude_delta,
                longitude=self.anchor.longitude + record.longitude_delta,
                elevation=self.anchor.elevation + record.elevation_delta,
                speed=record.speed,
                course=record.heading,
            )
            self.points.append(point)
            return point

        return None


def reconstruct_track(records: Iterable[Record]) -> list[TrackPoint]:
    """Reconstruct the trackpoints of a complete record sequence."""
    builder = TrackBuilder()
    for record in records:
        builder.add(record)
    return builder.points


def summarize(records: Iterable[Record]) -> RecordSummary:
    """Compute the diagnostic summary of a record sequence."""
    summary = RecordSummary()
    for record in records:
        summary.add(record)
    return summary


# ─────────────────────────────────────────────────────────────────────────────
# Archive container
# ─────────────────────────────────────────────────────────────────────────────

def find_members(names: Iterable[str]) -> tuple[str, str]:
    """Pick the .gps and .acc members out of an archive listing.

    Raises ContainerError unless the archive holds exactly one of each and
    nothing else.
    """
    gps = None
    acc = None
    for name in names:
        print(f"found file {name}")
        if name.endswith(GPS_SUFFIX):
            if gps is not None:
                raise ContainerError(f"more than one {GPS_SUFFIX} file in archive: {gps}, {name}")
            gps = name
        elif name.endswith(ACC_SUFFIX):
            if acc is not None:
                raise ContainerError(f"more than one {ACC_SUFFIX} file in archive: {acc}, {name}")
            acc = name
        else:
            raise ContainerError(f"unrecognized filename {name} in input archive")
    if gps is None:
        raise ContainerError(f"missing a {GPS_SUFFIX} file in archive")
    if acc is None:
        raise ContainerError(f"missing a {ACC_SUFFIX} file in archive")
    return gps, acc


def read_lines(stream: BinaryIO) -> Iterator[str]:
    """Yield UTF-8 lines from a binary stream, without line terminators."""
    line_number = 0
    while True:
        try:
            raw = stream.readline()
        except (OSError, zipfile.BadZipFile, zlib.error) as exc:
            raise InputReadError(f"read error after line {line_number}") from exc
        if not raw:
            return
        line_number += 1
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InputReadError(f"read error at line {line_number}") from exc
        if text.endswith("\n"):
            text = text[:-1]
            if text.endswith("\r"):
                text = text[:-1]
        yield text


# ─────────────────────────────────────────────────────────────────────────────
# Parser
# ─────────────────────────────────────────────────────────────────────────────

class GpsLogParser:
    """Sequential parser for GPS log recording archives.

    Lines are decoded and folded one at a time: each record goes to the
    track builder and to the summary before the next line is read. The
    first malformed line aborts the parse.
    """

    def __init__(self, elevation_scale: int = DEFAULT_ELEVATION_SCALE):
        self.decoder = GpsLogDecoder(elevation_scale)

    def parse(self, path: str | Path) -> GpsLogSession:
        """Parse a recording archive and return its session."""
        path = Path(path)
        session = GpsLogSession(file_path=str(path))

        try:
            archive = zipfile.ZipFile(path)
        except zipfile.BadZipFile as exc:
            raise ContainerError(f"failed to read zip file {path}") from exc
        except OSError as exc:
            raise ContainerError(f"failed to open file {path}") from exc

        with archive:
            session.gps_member, session.acc_member = find_members(archive.namelist())
            try:
                gps_file = archive.open(session.gps_member)
            except (OSError, zipfile.BadZipFile, RuntimeError, NotImplementedError) as exc:
                raise ContainerError(
                    f"failed to get {GPS_SUFFIX} file {session.gps_member} from archive"
                ) from exc
            with gps_file:
                self.parse_lines(read_lines(gps_file), session)
        return session

    def parse_lines(self, lines: Iterable[str], session: GpsLogSession) -> GpsLogSession:
        """Decode and fold GPS log lines into ``session``."""
        builder = TrackBuilder()
        for line_number, line in enumerate(lines, start=1):
            try:
                record = self.decoder.decode_line(line)
                builder.add(record)
            except GpsLogError as exc:
                raise type(exc)(f"line {line_number}: {line!r}") from exc
            logger.debug("line %d: %r", line_number, record)
            session.summary.add(record)
        session.points = builder.points
        return session


# ─────────────────────────────────────────────────────────────────────────────
# Exporters
# ─────────────────────────────────────────────────────────────────────────────

def _format_time(time: datetime.datetime) -> str:
    """ISO-8601 with milliseconds and the numeric UTC offset."""
    return time.isoformat(timespec="milliseconds")


def _xml_escape(s: str) -> str:
    """Escape special XML characters."""
    return (s.replace("&", "&amp;")
             .replace("<", "&lt;")
             .replace(">", "&gt;")
             .replace('"', "&quot;"))


def render_gpx(tracks: Sequence[Sequence[TrackPoint]], name: str = "") -> str:
    """Render point sequences as a GPX 1.0 document.

    GPX 1.0 is used because it defines <course> and <speed> on trackpoints.
    Each sequence becomes one <trkseg> of a single <trk>.
    """
    buf = io.StringIO()
    buf.write('<?xml version="1.0" encoding="UTF-8"?>\n')
    buf.write('<gpx version="1.0" creator="gpslog_parser.py"\n')
    buf.write('     xmlns="http://www.topografix.com/GPX/1/0"\n')
    buf.write('     xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"\n')
    buf.write('     xsi:schemaLocation="http://www.topografix.com/GPX/1/0 ')
    buf.write('http://www.topografix.com/GPX/1/0/gpx.xsd">\n')
    buf.write('  <trk>\n')
    if name:
        buf.write(f'    <name>{_xml_escape(name)}</name>\n')

    for points in tracks:
        buf.write('    <trkseg>\n')
        for point in points:
            buf.write(f'      <trkpt lat="{point.latitude:.7f}" lon="{point.longitude:.7f}">\n')
            buf.write(f'        <ele>{point.elevation:.2f}</ele>\n')
            buf.write(f'        <time>{_format_time(point.time)}</time>\n')
            buf.write(f'        <course>{point.course:.2f}</course>\n')
            buf.write(f'        <speed>{point.speed:.2f}</speed>\n')
            buf.write('      </trkpt>\n')
        buf.write('    </trkseg>\n')

    buf.write('  </trk>\n')
    buf.write('</gpx>\n')
    return buf.getvalue()


def export_gpx(
    tracks: Sequence[Sequence[TrackPoint]], output_path: str | Path, name: str = ""
) -> int:
    """Write point sequences to a GPX file and return the number of trackpoints.

    The document goes to a temporary sibling file that replaces the target
    only once fully written.
    """
    total = sum(len(points) for points in tracks)
    if total == 0:
        print(f"  Warning: No trackpoints to export to {output_path}", file=sys.stderr)

    output_path = Path(output_path)
    document = render_gpx(tracks, name=name)
    tmp = output_path.with_suffix(output_path.suffix + ".tmp")
    try:
        tmp.write_text(document, encoding="utf-8")
        tmp.replace(output_path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise OutputWriteError(f"failed to write {output_path}") from exc

    print(f"  GPX: {output_path} ({total} trackpoints)")
    return total


# ─────────────────────────────────────────────────────────────────────────────
# Session summary
# ─────────────────────────────────────────────────────────────────────────────

def print_session_info(session: GpsLogSession) -> None:
    """Print a human-readable summary of a parsed recording."""
    summary = session.summary
    print(f"\n{'═' * 60}")
    print(f"  GPS log: {Path(session.file_path).name}")
    print(f"{'═' * 60}")
    print(f"  GPS member:     {session.gps_member}")
    print(f"  ACC member:     {session.acc_member}")
    if summary.user:
        print(f"  User:           {summary.user}")
    if summary.recorder_version:
        print(f"  Recorder:       {summary.recorder_version}")
    if summary.app_version:
        print(f"  App:            {summary.app_version}")
    if summary.device:
        print(f"  Device:         {', '.join(summary.device)}")

    print(f"\n  Record counts:")
    for tag, count in sorted(summary.tag_counts.items()):
        print(f"    {TAG_NAMES[tag]:12s} ({tag}): {count:,}")
    print(f"    {'TOTAL':12s}    : {summary.record_count:,}")

    if not summary.has_data:
        print(f"\n  Track: no data")
    else:
        lats = [p.latitude for p in session.points]
        lons = [p.longitude for p in session.points]
        eles = [p.elevation for p in session.points]
        print(f"\n  Track:")
        print(f"    Points:       {len(session.points):,}")
        print(f"    Start:        {_format_time(session.points[0].time)}")
        print(f"    Duration:     {session.duration_seconds:.0f}s ({session.duration_seconds / 60:.1f} min)")
        print(f"    Max speed:    {summary.max_speed_kmh:.1f} km/h ({summary.max_speed_mph:.1f} mph)")
        print(f"    Lat range:    {min(lats):.7f} – {max(lats):.7f}")
        print(f"    Lon range:    {min(lons):.7f} – {max(lons):.7f}")
        print(f"    Ele range:    {min(eles):.1f} – {max(eles):.1f} m")

    print(f"{'═' * 60}\n")


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def process_file(
    archive_path: Path,
    output_path: str | Path = DEFAULT_OUTPUT,
    info_only: bool = False,
    elevation_scale: int = DEFAULT_ELEVATION_SCALE,
) -> GpsLogSession:
    """Parse a recording archive and optionally export its track as GPX."""
    parser = GpsLogParser(elevation_scale=elevation_scale)
    session = parser.parse(archive_path)

    print(f"read {session.summary.record_count} records")
    print(f"max speed: {session.summary.max_speed_text()}")

    if info_only:
        print_session_info(session)
        return session

    print(f"writing to {output_path}")
    export_gpx([session.points], output_path, name=Path(archive_path).stem)
    return session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="GPS log parser — Reconstruct the GPS track of a .gps/.acc "
                    "recording archive and export it as GPX.",
        epilog="Example: python3 gpslog_parser.py recording.zip --info",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the recording archive",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="FILE",
        default=DEFAULT_OUTPUT,
        help=f"Output GPX file (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print session summary only (no file export)",
    )
    parser.add_argument(
        "--elevation-scale",
        type=int,
        choices=[ELEVATION_SCALE_DECIMETRES, ELEVATION_SCALE_CENTIMETRES],
        default=DEFAULT_ELEVATION_SCALE,
        help="Sub-units per metre of the delta elevation field "
             f"(default: {DEFAULT_ELEVATION_SCALE}, i.e. decimetres)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every decoded record",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(format="%(levelname)s:%(message)s", level=logging.DEBUG)
    else:
        logging.basicConfig(format="%(levelname)s:%(message)s", level=logging.WARNING)

    if not args.input:
        parser.print_help()
        sys.exit(1)

    try:
        process_file(
            Path(args.input),
            output_path=args.output,
            info_only=args.info,
            elevation_scale=args.elevation_scale,
        )
    except GpsLogError as exc:
        message, *causes = error_chain(exc)
        print(f"Error: {message}", file=sys.stderr)
        for cause in causes:
            print(f"  caused by: {cause}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
