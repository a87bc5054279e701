"""The pages shown by the application: the home screen and the documentation view."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from . import docset


class HomeAction(Enum):
    """Buttons on the home page's action bar."""

    SETTINGS = "settings"
    HELP = "help"
    ADD = "add"


@dataclass(frozen=True)
class SearchInput:
    """The search field's text changed."""

    text: str


@dataclass(frozen=True)
class DocsetEvent:
    """A progress report from a running documentation import."""

    message: docset.Message


Message = Union[HomeAction, SearchInput, DocsetEvent]

_DONE = object()


@dataclass
class HomeViewModel:
    """State of the home page."""

    search: str = ""
    manifest_path: Path = field(default_factory=lambda: Path("Cargo.toml"))
    store_path: Path | None = None
    docsets: list[docset.DocSetHandle] = field(default_factory=list)
    output: Callable[[str], None] = field(default=print, repr=False, compare=False)

    def update(self, message: Message) -> Iterator[DocsetEvent] | None:
        """Apply a message; adding a docset returns a stream of import events."""
        match message:
            case SearchInput(text=text):
                self.search = text
            case HomeAction.ADD:
                return self._import_stream()
            case DocsetEvent(message=event):
                self._report(event)
            case HomeAction.SETTINGS | HomeAction.HELP:
                pass
            case _:
                raise TypeError(f"not a home page message: {message!r}")
        return None

    def _import_stream(self) -> Iterator[DocsetEvent]:
        events: queue.Queue[object] = queue.Queue()
        source = docset.DocSource(
            protocol=docset.Protocol.FILE,
            kind=docset.DocKind.RUST_CRATE,
            path=self.manifest_path,
        )

        def run() -> None:
            try:
                handle = docset.import_docset(source, events.put, self.store_path)
            except docset.DocsetError as why:
                self.output(f"Import error: {why}")
            else:
                self.docsets.append(handle)
                self.output("Import successful")
            finally:
                events.put(_DONE)

        threading.Thread(target=run, daemon=True).start()
        while (item := events.get()) is not _DONE:
            yield DocsetEvent(item)

    def _report(self, event: docset.Message) -> None:
        match event:
            case docset.CurrentProgress(completed=completed, total=total):
                self.output(f"Progress: {completed}/{total}")
            case docset.ImportComplete(success=success):
                self.output(
                    "Import completed successfully" if success else "Import failed"
                )
            case docset.CompilerMessage():
                self.output(f"Compiler message: {event!r}")
            case docset.ReadPackageMetadata():
                self.output("Reading package metadata")
            case _:
                raise TypeError(f"not a docset message: {event!r}")


@dataclass
class DocsViewModel:
    """State of the documentation page."""

    heading: str = "Welcome to Cosmonaute"

    def update(self, message: object) -> None:
        """The documentation page defines no messages, so any message is rejected."""
        raise TypeError(f"not a docs page message: {message!r}")


Page = Union[HomeViewModel, DocsViewModel]