"""Export recent searches as downloadable files.

Lesson entries export as indented JSON; essay entries export as delimited
plain text. File names follow
``simple-explain-{lang}-{NN}-{YYYY-MM-DD}-{topic-slug}.{ext}``.
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Protocol

from simple_explain.prompts.lesson import SCHEMA_VERSION
from simple_explain.services.history import RecentSearchEntry, parse_iso
from simple_explain.utils.logger import get_logger

logger = get_logger(__name__)

FILE_NAME_PREFIX = "simple-explain"
MAX_SLUG_LENGTH = 60
FALLBACK_SLUG = "lesson"
ESSAY_SEPARATOR = "-" * 3

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ExportFile:
    file_name: str
    content: bytes
    media_type: str


class FileSaver(Protocol):
    """Anything that can save bytes under a file name."""

    def save(self, export_file: ExportFile) -> Path: ...


class DirectoryFileSaver:
    """Saves exported files into a directory, creating it on demand."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def save(self, export_file: ExportFile) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / export_file.file_name
        path.write_bytes(export_file.content)
        logger.info("Exported recent search", path=str(path), size=len(export_file.content))
        return path


def sanitize_file_name(value: str) -> str:
    base = _WHITESPACE.sub("-", _UNSAFE_CHARS.sub("", value.strip()))[:MAX_SLUG_LENGTH]
    return base or FALLBACK_SLUG


def export_file_name(
    lang: str,
    index: int,
    searched_at: str,
    topic: str,
    extension: str,
    today: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> str:
    """Build the export file name for the entry at zero-based ``index``."""
    moment = parse_iso(searched_at) or today()
    file_date = moment.astimezone(timezone.utc).date().isoformat()
    return (
        f"{FILE_NAME_PREFIX}-{lang}-{index + 1:02d}-{file_date}-"
        f"{sanitize_file_name(topic)}.{extension}"
    )


def render_lesson_export(entry: RecentSearchEntry) -> str:
    """JSON for a lesson entry; entries without a lesson export blank levels."""
    if entry.lesson is not None:
        payload = entry.lesson.model_dump(mode="json")
    else:
        payload = {
            "schema_version": SCHEMA_VERSION,
            "topic": entry.topic,
            "lesson": {"beginner": "", "intermediate": "", "advance": ""},
        }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_essay_export(entry: RecentSearchEntry) -> str:
    """Plain text with a header block, a separator line and the essay body."""
    essay = entry.essay
    lines = [
        f"Topic: {entry.topic}",
        f"Level: {essay.level.value if essay else ''}",
        f"Searched at: {entry.searched_at}",
        ESSAY_SEPARATOR,
        essay.text if essay else "",
    ]
    return "\n".join(lines) + "\n"


def build_export(entry: RecentSearchEntry, index: int, lang: str) -> ExportFile:
    if entry.essay is not None and entry.lesson is None:
        return ExportFile(
            file_name=export_file_name(lang, index, entry.searched_at, entry.topic, "txt"),
            content=render_essay_export(entry).encode("utf-8"),
            media_type="text/plain;charset=utf-8",
        )
    return ExportFile(
        file_name=export_file_name(lang, index, entry.searched_at, entry.topic, "json"),
        content=render_lesson_export(entry).encode("utf-8"),
        media_type="application/json;charset=utf-8",
    )


def export_entry(
    entry: RecentSearchEntry, index: int, lang: str, saver: FileSaver
) -> Path:
    """Render ``entry`` and hand it to ``saver``."""
    return saver.save(build_export(entry, index, lang))
