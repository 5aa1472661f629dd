"""
Load and normalise a TikTok scraper CSV export.

The export is a flat CSV with one row per video and slash-separated column
names (``authorMeta/fans``, ``hashtags/0/name`` ...). Every row is mapped to a
``VideoRecord``; missing or malformed cells fall back to field defaults so no
row is ever rejected. Only a file that cannot be read at all raises
``DatasetLoadError``.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Tuple

import pandas as pd

from .errors import DatasetLoadError

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"
UNKNOWN_LANGUAGE = "unknown"
MAX_HASHTAGS = 7

AUTHOR_COLUMNS = ["authorMeta/nickName", "authorMeta/name"]
HASHTAG_COLUMNS = [f"hashtags/{idx}/name" for idx in range(MAX_HASHTAGS)]

INTEGER_COLUMNS: Dict[str, str] = {
    "followers": "authorMeta/fans",
    "following": "authorMeta/following",
    "hearts": "authorMeta/heart",
    "play_count": "playCount",
    "digg_count": "diggCount",
    "comment_count": "commentCount",
    "share_count": "shareCount",
    "duration": "videoMeta/duration",
}

FRAME_COLUMNS = [
    "id",
    "author",
    "followers",
    "following",
    "hearts",
    "play_count",
    "digg_count",
    "comment_count",
    "share_count",
    "duration",
    "text",
    "language",
    "create_time",
    "hashtags",
    "verified",
    "engagement",
    "hour",
]

_INT_PREFIX = re.compile(r"^[+-]?\d+")


@dataclass(frozen=True)
class VideoRecord:
    id: str
    author: str = UNKNOWN_AUTHOR
    followers: int = 0
    following: int = 0
    hearts: int = 0
    play_count: int = 0
    digg_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    duration: int = 0
    text: str = ""
    language: str = UNKNOWN_LANGUAGE
    create_time: datetime = field(default_factory=lambda: datetime.now().astimezone())
    hashtags: Tuple[str, ...] = ()
    verified: bool = False

    @property
    def engagement(self) -> int:
        """Likes + comments + shares."""
        return self.digg_count + self.comment_count + self.share_count


@dataclass(frozen=True)
class VideoDataset:
    """Immutable record set produced by a single load."""

    records: Tuple[VideoRecord, ...]
    source: Path
    loaded_at: datetime

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[VideoRecord]:
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def to_frame(self) -> pd.DataFrame:
        """Flatten the records into a new DataFrame, one row per video, in load order."""
        rows = [
            {
                "id": record.id,
                "author": record.author,
                "followers": record.followers,
                "following": record.following,
                "hearts": record.hearts,
                "play_count": record.play_count,
                "digg_count": record.digg_count,
                "comment_count": record.comment_count,
                "share_count": record.share_count,
                "duration": record.duration,
                "text": record.text,
                "language": record.language,
                "create_time": record.create_time,
                "hashtags": list(record.hashtags),
                "verified": record.verified,
                "engagement": record.engagement,
                "hour": record.create_time.hour,
            }
            for record in self.records
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _cell(row: Mapping[str, Any], column: str) -> str:
    value = row.get(column)
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def parse_int(value: Any) -> int:
    """Best-effort non-negative integer parsing.

    Numeric literals are truncated toward zero (``"12.7"`` -> 12), otherwise
    a leading integer prefix is used (``"42k"`` -> 42). Anything else,
    including NaN and infinities, yields 0. Negative values clamp to 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    text = str(value).strip()
    if not text:
        return 0

    try:
        number = int(text)
    except ValueError:
        try:
            as_float = float(text)
        except ValueError:
            match = _INT_PREFIX.match(text)
            number = int(match.group(0)) if match else 0
        else:
            number = int(as_float) if math.isfinite(as_float) else 0
    return max(number, 0)


def parse_verified(value: Any) -> bool:
    # Case-sensitive on purpose: "TRUE", "True" and "1" are all False.
    return isinstance(value, str) and value == "true"


def parse_create_time(value: Any, *, tz: tzinfo | None, default: datetime) -> datetime:
    """Parse an ISO timestamp into ``tz`` (system local when ``None``).

    Offset-less values such as ``2025-05-27T10:15:00`` are read as UTC, not as
    wall-clock time in ``tz``; the scraper always emits a ``Z`` suffix.
    """
    text = str(value).strip() if value is not None else ""
    if not text:
        return default
    parsed = pd.to_datetime(text, errors="coerce", utc=True)
    if pd.isna(parsed):
        return default
    return parsed.to_pydatetime().astimezone(tz)


def parse_hashtags(row: Mapping[str, Any]) -> Tuple[str, ...]:
    tags = (_cell(row, column).strip() for column in HASHTAG_COLUMNS)
    return tuple(tag for tag in tags if tag)


def _parse_author(row: Mapping[str, Any]) -> str:
    for column in AUTHOR_COLUMNS:
        name = _cell(row, column).strip()
        if name:
            return name
    return UNKNOWN_AUTHOR


def parse_record(row: Mapping[str, Any], *, tz: tzinfo | None, loaded_at: datetime) -> VideoRecord:
    counts = {name: parse_int(row.get(column)) for name, column in INTEGER_COLUMNS.items()}
    return VideoRecord(
        id=_cell(row, "id").strip(),
        author=_parse_author(row),
        text=_cell(row, "text"),
        language=_cell(row, "textLanguage").strip() or UNKNOWN_LANGUAGE,
        create_time=parse_create_time(row.get("createTimeISO"), tz=tz, default=loaded_at),
        hashtags=parse_hashtags(row),
        verified=parse_verified(row.get("authorMeta/verified")),
        **counts,
    )


def _normalise_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.rename(columns={col: str(col).strip() for col in df.columns})


def parse_records(
    frame: pd.DataFrame, *, tz: tzinfo | None, loaded_at: datetime
) -> Tuple[VideoRecord, ...]:
    """Map a raw string-typed export frame to records, preserving row order."""
    frame = _normalise_columns(frame)
    rows: List[Dict[str, Any]] = frame.to_dict(orient="records")
    return tuple(parse_record(row, tz=tz, loaded_at=loaded_at) for row in rows)


def _read_export(path: Path) -> pd.DataFrame:
    header = pd.read_csv(path, header=None, nrows=1, dtype=str, encoding="utf-8-sig", engine="python")
    width = header.shape[1]

    def _truncate(fields: List[str]) -> List[str]:
        # Rows longer than the header keep their leading fields.
        logger.warning(
            "Dropping %d extra field(s) in %s: %r", len(fields) - width, path, fields[width:]
        )
        return fields[:width]

    # header=None keeps pandas from turning a long first row into an implicit index.
    raw = pd.read_csv(
        path,
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding="utf-8-sig",
        engine="python",
        on_bad_lines=_truncate,
    )
    frame = raw.iloc[1:].reset_index(drop=True)
    frame.columns = [str(name) for name in raw.iloc[0]]
    return frame


def load_videos(
    path: Path | str, *, tz: tzinfo | None = None, now: datetime | None = None
) -> VideoDataset:
    """Load ``path`` and return the immutable dataset.

    Args:
        path: CSV export with a header row.
        tz: Zone used for ``create_time``; ``None`` means system local time.
        now: Load timestamp, also the fallback for unparsable ``createTimeISO``.

    Raises:
        DatasetLoadError: If the file is missing, unreadable, empty or not CSV.
    """
    source = Path(path)
    loaded_at = now if now is not None else datetime.now(tz).astimezone(tz)

    try:
        frame = _read_export(source)
    except FileNotFoundError as error:
        logger.error("Dataset not found: %s", source)
        raise DatasetLoadError(source, "file not found") from error
    except UnicodeDecodeError as error:
        logger.error("Dataset is not valid UTF-8: %s", source)
        raise DatasetLoadError(source, "file is not valid UTF-8") from error
    except pd.errors.EmptyDataError as error:
        logger.error("Dataset is empty: %s", source)
        raise DatasetLoadError(source, "file is empty") from error
    except pd.errors.ParserError as error:
        logger.error("Dataset is not parseable CSV: %s (%s)", source, error)
        raise DatasetLoadError(source, f"malformed CSV ({error})") from error
    except OSError as error:
        logger.error("Dataset could not be read: %s (%s)", source, error)
        raise DatasetLoadError(source, str(error)) from error

    records = parse_records(frame, tz=tz, loaded_at=loaded_at)
    logger.info("Loaded %d videos from %s", len(records), source)
    return VideoDataset(records=records, source=source, loaded_at=loaded_at)
