"""
SignScribe Text Sinks.
=====================

Destinations for committed characters and word boundaries.

- MemoryTextSink: plain in-memory buffer (tests, replay tool).
- FileTextSink: survives restarts. The whole text is rewritten after every
  append, so a crash loses at most the character being written.
"""
import logging
import os
from pathlib import Path
from typing import Union

from signscribe.core.interfaces import ITextSink

log = logging.getLogger(__name__)


class MemoryTextSink(ITextSink):
    def __init__(self, initial: str = ""):
        self._parts = [initial] if initial else []

    def append(self, text: str) -> None:
        self._parts.append(text)

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def reset(self) -> None:
        self._parts.clear()


class FileTextSink(ITextSink):
    """
    File-backed sink.

    Storage errors are logged, never raised: the in-memory copy stays
    authoritative for the session and the engine is never disturbed by I/O.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._text = self._load()

    def _load(self) -> str:
        if not self.path.exists():
            return ""
        try:
            saved = self.path.read_text(encoding="utf-8")
            log.info("restored %d chars from %s", len(saved), self.path)
            return saved
        except (OSError, UnicodeDecodeError) as exc:
            log.error("could not read saved text %s: %s", self.path, exc)
            return ""

    def _save(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(self._text, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            log.error("could not persist text to %s: %s", self.path, exc)

    def append(self, text: str) -> None:
        self._text += text
        self._save()

    @property
    def text(self) -> str:
        return self._text

    def reset(self) -> None:
        self._text = ""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.error("could not remove %s: %s", self.path, exc)
