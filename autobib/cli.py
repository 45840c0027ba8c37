"""Command-line interface for autobib."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, TextIO

from pydantic import ValidationError
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from autobib import build_service
from autobib.clients.base import RateLimitedError
from autobib.config import AutobibConfig
from autobib.core.models import BackendKind, DisplayItem, RawPayload
from autobib.exceptions import AutobibError, ConfigError, SourceUnavailable
from autobib.services.citation_service import ENTRY_TYPES
from autobib.services.search_service import PublicationSearchService
from autobib.sinks import FileSink, StreamSink

logger = logging.getLogger(__name__)

_BACKEND_CHOICES = {
    "dblp": BackendKind.DBLP,
    "scholar": BackendKind.GOOGLE_SCHOLAR,
}


_fallback_wait = wait_exponential(multiplier=0.5, min=0.5, max=8)
_MAX_RETRY_AFTER_S = 60.0


def _retry_wait(retry_state: RetryCallState) -> float:
    """Wait as long as a rate-limited backend asked, else back off exponentially."""

    if retry_state.outcome is not None and retry_state.outcome.failed:
        exception = retry_state.outcome.exception()
        if isinstance(exception, RateLimitedError) and exception.retry_after is not None:
            return min(exception.retry_after, _MAX_RETRY_AFTER_S)
    return _fallback_wait(retry_state)


class RetryingSourceClient:
    """Wrap a source client so failed fetches are retried with exponential backoff."""

    def __init__(self, client: Any, retries: int) -> None:
        self.client = client
        self.retries = max(0, retries)

    def fetch(self, query: str, backend: BackendKind) -> RawPayload:
        retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(self.retries + 1),
            wait=_retry_wait,
            retry=retry_if_exception_type(SourceUnavailable),
            before_sleep=lambda state: logger.warning(
                "Fetch attempt %d for %r failed, retrying", state.attempt_number, query
            ),
        )
        return retrying(self.client.fetch, query, backend)


class LoggingProgress:
    """Report batch progress on a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.done = 0.0

    def report(self, message: str, increment: float) -> None:
        self.done = min(100.0, self.done + increment)
        print(f"[{self.done:5.1f}%] {message}", file=self.stream)


def parse_selection(text: str, count: int) -> List[int]:
    """Parse ``"1, 3"`` into zero-based positions, keeping the given order."""

    positions: List[int] = []
    for token in text.replace(" ", "").split(","):
        if not token:
            continue
        if not token.isdigit():
            raise ValueError(f"Not a result number: {token!r}")
        number = int(token)
        if not 1 <= number <= count:
            raise ValueError(f"Result number out of range: {number}")
        if number - 1 not in positions:
            positions.append(number - 1)
    return positions


def print_items(items: Sequence[DisplayItem], stream: TextIO) -> List[DisplayItem]:
    """Print grouped items with running numbers and return the numbered ones."""

    numbered: List[DisplayItem] = []
    for item in items:
        if item.separator:
            print(f"\n== {item.label} ==", file=stream)
            continue
        numbered.append(item)
        print(f"{len(numbered):3d}. {item.label}", file=stream)
        if item.description:
            print(f"     {item.description}", file=stream)
        if item.detail:
            print(f"     {item.detail}", file=stream)
    return numbered


def make_selector(
    *,
    choice: Optional[str],
    select_all: bool,
    stream: TextIO,
    read_line: Callable[[str], str] = input,
) -> Callable[[Sequence[DisplayItem]], List[DisplayItem]]:
    def select(items: Sequence[DisplayItem]) -> List[DisplayItem]:
        numbered = print_items(items, stream)
        if select_all:
            return numbered
        text = choice
        if text is None:
            try:
                text = read_line("Select publications (e.g. 1,3), empty to cancel: ")
            except EOFError:
                return []
        return [numbered[position] for position in parse_selection(text, len(numbered))]

    return select


def _load_config() -> AutobibConfig:
    try:
        return AutobibConfig()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Retrieve BibTeX entries from DBLP or Google Scholar")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (written to stderr)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--backend",
            choices=sorted(_BACKEND_CHOICES),
            default=None,
            help="Publication database (defaults to AUTOBIB_PUBLICATION_DATABASE)",
        )
        subparser.add_argument(
            "--entry-type", choices=ENTRY_TYPES, default=None, help="BibTeX entry type"
        )
        subparser.add_argument(
            "--output", type=Path, default=None, help="Write entries to this file instead of stdout"
        )
        subparser.add_argument(
            "--retries",
            type=int,
            default=0,
            help="Retry failed requests this many times with exponential backoff",
        )

    search = subparsers.add_parser("search", help="Search for a paper and pick entries interactively")
    search.add_argument("query", help="Free-text title and/or author keywords")
    search.add_argument("--select", default=None, help="Comma-separated result numbers to insert")
    search.add_argument("--all", action="store_true", dest="select_all", help="Insert every result")
    add_common(search)

    process_list = subparsers.add_parser(
        "process-list", help="Resolve a paper list (one paper per line) into one BibTeX document"
    )
    process_list.add_argument("paper_list", type=Path, help="Text file with one paper per line")
    add_common(process_list)

    return parser


def _configure(args: argparse.Namespace) -> tuple[PublicationSearchService, BackendKind, Any]:
    config = _load_config()
    if args.entry_type:
        config.entry_type = args.entry_type
    backend = _BACKEND_CHOICES[args.backend] if args.backend else config.publication_database
    service = build_service(config)
    if args.retries:
        service.client = RetryingSourceClient(service.client, args.retries)
    sink = FileSink(args.output) if args.output else StreamSink(sys.stdout)
    return service, backend, sink


def _run_search(args: argparse.Namespace) -> None:
    service, backend, sink = _configure(args)
    service.notify = lambda message: print(message, file=sys.stderr)
    selector = make_selector(choice=args.select, select_all=args.select_all, stream=sys.stderr)
    blocks = service.run(args.query, backend, selector, sink)
    logger.info("Inserted %d entries", len(blocks))


def _run_process_list(args: argparse.Namespace) -> None:
    service, backend, sink = _configure(args)
    service.notify = lambda message: print(message, file=sys.stderr)
    try:
        papers = args.paper_list.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise AutobibError(f"Cannot read paper list {args.paper_list}: {exc}") from exc
    service.process_paper_list(papers, backend, sink, progress=LoggingProgress(sys.stderr))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr)

    commands: dict[str, Any] = {
        "search": _run_search,
        "process-list": _run_process_list,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.error("Unknown command")
        return 1

    try:
        handler(args)
    except (AutobibError, ValueError) as exc:
        print(f"autobib: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
