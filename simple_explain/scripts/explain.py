"""Terminal front end for Simple Explain.

Talks to a running API (``uvicorn simple_explain.main:app``) and keeps the
recent searches history in a local directory, like the browser page keeps it
in local storage.

Examples:
    python -m simple_explain.scripts.explain "Photosynthesis"
    python -m simple_explain.scripts.explain --recent --lang vi
    python -m simple_explain.scripts.explain --open 1
    python -m simple_explain.scripts.explain --export 1 --out exports
"""

import argparse
import asyncio
import sys
import textwrap
from pathlib import Path

from simple_explain.client.api_client import GenerateApiClient
from simple_explain.client.controller import EssayLevelChosen, Variant, ViewState
from simple_explain.client.session import ExplainSession
from simple_explain.client.view_models import (
    EssayView,
    LessonView,
    format_datetime,
    next_level,
)
from simple_explain.dictionaries import LOCALES, get_dictionary
from simple_explain.schemas.lesson import EssayLevel
from simple_explain.services.export import DirectoryFileSaver
from simple_explain.services.history import RecentHistoryCache
from simple_explain.utils.logger import configure_logger
from simple_explain.utils.storage import FileStorage

DEFAULT_HISTORY_DIR = Path.home() / ".simple-explain"
WRAP_WIDTH = 88


def render_lesson(view: LessonView, lang: str, all_levels: bool) -> str:
    dictionary = get_dictionary(lang)
    lines = [
        view.title,
        "=" * len(view.title),
        f"{dictionary.lesson.generated_on}: {view.generated_date}",
        f"{dictionary.lesson.total_words}: {view.total_words} {dictionary.lesson.words_suffix}",
        "",
    ]
    levels = view.levels if all_levels else view.levels[:1]
    for level in levels:
        lines.append(
            f"## {level.label} ({level.word_count} {dictionary.lesson.words_suffix})"
        )
        lines.extend(
            textwrap.fill(paragraph, WRAP_WIDTH) + "\n" for paragraph in level.paragraphs
        )
    if not all_levels:
        following = next_level(levels[-1].key)
        if following is not None:
            lines.append(
                f"{dictionary.lesson.continue_to_next} {view.level(following).label} "
                "(--all-levels)"
            )
    lines.append(dictionary.article.footer)
    return "\n".join(lines)


def render_essay(view: EssayView, lang: str) -> str:
    dictionary = get_dictionary(lang)
    lines = [
        view.title,
        "=" * len(view.title),
        f"{view.generated_date} · {view.reading_minutes} {dictionary.article.min_read}",
        "",
    ]
    lines.extend(textwrap.fill(p, WRAP_WIDTH) + "\n" for p in view.paragraphs)
    lines.append(dictionary.article.footer)
    return "\n".join(lines)


def render_recent(session: ExplainSession) -> str:
    dictionary = get_dictionary(session.lang)
    if not session.recent:
        return dictionary.recent.empty
    lines = [dictionary.recent.heading]
    for index, entry in enumerate(session.recent, start=1):
        cached = "" if entry.has_payload else " *"
        when = format_datetime(entry.searched_at, dictionary)
        lines.append(f"{index:>2}. {entry.topic}{cached}  ({when})")
    return "\n".join(lines)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Complex topics, explained simply")
    parser.add_argument("topic", nargs="?", help="Topic to explain")
    parser.add_argument("--lang", choices=LOCALES, default="en")
    parser.add_argument(
        "--variant", choices=[v.value for v in Variant], default=Variant.LESSON.value
    )
    parser.add_argument(
        "--level",
        choices=[level.value for level in EssayLevel],
        default=EssayLevel.INTERMEDIATE.value,
        help="Essay level (essay variant only)",
    )
    parser.add_argument("--api-url", default="http://localhost:8000")
    parser.add_argument("--history-dir", type=Path, default=DEFAULT_HISTORY_DIR)
    parser.add_argument("--recent", action="store_true", help="List recent searches")
    parser.add_argument("--open", type=int, metavar="N", help="Re-open recent search N")
    parser.add_argument("--export", type=int, metavar="N", help="Export recent search N")
    parser.add_argument("--out", type=Path, default=Path("."), help="Export directory")
    parser.add_argument("--all-levels", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    session = ExplainSession(
        lang=args.lang,
        api=GenerateApiClient(args.api_url),
        history=RecentHistoryCache(FileStorage(args.history_dir)),
        saver=DirectoryFileSaver(args.out),
        notifier=lambda message: print(message, file=sys.stderr),
        variant=Variant(args.variant),
    )

    if args.recent:
        print(render_recent(session))
        return 0

    if args.export is not None:
        if not 1 <= args.export <= len(session.recent):
            print(get_dictionary(args.lang).recent.empty, file=sys.stderr)
            return 1
        await session.export_recent(args.export - 1)
        for path in session.exported:
            print(path)
        return 0

    if args.open is not None:
        if not 1 <= args.open <= len(session.recent):
            print(get_dictionary(args.lang).recent.empty, file=sys.stderr)
            return 1
        await session.open_recent(args.open - 1)
    else:
        if not (args.topic or "").strip():
            print(get_dictionary(args.lang).input.heading, file=sys.stderr)
            return 2
        await session.dispatch(EssayLevelChosen(EssayLevel(args.level)))
        print(get_dictionary(args.lang).loading.text, file=sys.stderr)
        await session.submit(args.topic or "")

    if session.state.view != ViewState.RESULT:
        return 1

    result = session.state.result
    if isinstance(result, LessonView):
        print(render_lesson(result, args.lang, args.all_levels))
    elif isinstance(result, EssayView):
        print(render_essay(result, args.lang))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logger(level=args.log_level)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
