"""Output targets for generated BibTeX entries."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO


class StreamSink:
    """Write entries to an open text stream such as ``sys.stdout``."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def insert(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def open_document(self, text: str) -> None:
        self.insert(text)


class FileSink:
    """Append single entries to a file, or write a whole new document to it."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def insert(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fp:
            fp.write(text)

    def open_document(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
