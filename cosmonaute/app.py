"""The application model and its command-line entry point."""

from __future__ import annotations

import argparse
import os
import sys
import webbrowser
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

from .config import Config, load_config
from .i18n import fl, init
from .pages import DocsViewModel, HomeAction, HomeViewModel, Page

APP_ID = "com.github.genericconfluent.cosmonaute"
REPOSITORY_ENV = "COSMONAUTE_REPOSITORY"
_SVG_NS = "http://www.w3.org/2000/svg"


def icondata_svg(data: str, view_box: str | None = None) -> bytes:
    """Wrap icon path data in a standalone SVG document."""
    if view_box is not None:
        svg = f'<svg xmlns="{_SVG_NS}" viewBox="{view_box}">{data}</svg>'
    else:
        svg = f'<svg xmlns="{_SVG_NS}">{data}</svg>'
    return svg.encode("utf-8")


class ContextPage(Enum):
    """The page shown in the context drawer."""

    ABOUT = "about"


@dataclass(frozen=True)
class OpenRepositoryUrl:
    pass


@dataclass(frozen=True)
class ToggleContextPage:
    page: ContextPage


@dataclass(frozen=True)
class UpdateConfig:
    config: Config


@dataclass(frozen=True)
class LaunchUrl:
    url: str


@dataclass(frozen=True)
class HomeMessage:
    message: Any


@dataclass(frozen=True)
class DocsMessage:
    message: Any


AppMessage = Union[
    OpenRepositoryUrl, ToggleContextPage, UpdateConfig, LaunchUrl, HomeMessage, DocsMessage
]


class MenuAction(Enum):
    """Actions reachable from the menu bar."""

    ABOUT = "about"

    def message(self) -> AppMessage:
        """The application message this action sends."""
        match self:
            case MenuAction.ABOUT:
                return ToggleContextPage(ContextPage.ABOUT)
        raise ValueError(self)


def _wrap(task: Iterator[Any] | None, wrapper: Callable[[Any], AppMessage]) -> Iterator[AppMessage] | None:
    if task is None:
        return None
    return (wrapper(message) for message in task)


@dataclass
class AppModel:
    """Application state and the logic that drives it."""

    view: Page = field(default_factory=HomeViewModel)
    config: Config = field(default_factory=Config)
    context_page: ContextPage = ContextPage.ABOUT
    show_context: bool = False
    repository: str | None = field(
        default_factory=lambda: os.environ.get(REPOSITORY_ENV) or None
    )
    git_sha: str = field(default_factory=lambda: os.environ.get("VERGEN_GIT_SHA", "unknown"))
    git_commit_date: str = field(
        default_factory=lambda: os.environ.get("VERGEN_GIT_COMMIT_DATE", "unknown")
    )
    opener: Callable[[str], bool] = field(default=webbrowser.open, repr=False, compare=False)

    @classmethod
    def create(cls, config_path: str | os.PathLike[str] | None = None, **kwargs: Any) -> AppModel:
        """Build the model with the persisted configuration."""
        return cls(config=load_config(config_path), **kwargs)

    def update(self, message: AppMessage) -> Iterator[AppMessage] | None:
        """Apply a message; returns a stream of follow-up messages when work continues."""
        match message:
            case OpenRepositoryUrl():
                if self.repository:
                    self._open(self.repository, report=False)
            case ToggleContextPage(page=page):
                if self.context_page == page:
                    self.show_context = not self.show_context
                else:
                    self.context_page = page
                    self.show_context = True
            case UpdateConfig(config=config):
                self.config = config
            case LaunchUrl(url=url):
                self._open(url, report=True)
            case DocsMessage(message=inner):
                if isinstance(self.view, DocsViewModel):
                    return _wrap(self.view.update(inner), DocsMessage)
            case HomeMessage(message=inner):
                if isinstance(self.view, HomeViewModel):
                    return _wrap(self.view.update(inner), HomeMessage)
            case _:
                raise TypeError(f"not an application message: {message!r}")
        return None

    def _open(self, url: str, report: bool) -> None:
        try:
            opened = self.opener(url)
            error = None if opened else "no browser available"
        except (OSError, webbrowser.Error) as err:
            error = str(err)
        if error is not None and report:
            print(f"failed to open {url!r}: {error}", file=sys.stderr)

    @property
    def docsets(self) -> list:
        """Documentation sets imported so far."""
        return list(self.view.docsets) if isinstance(self.view, HomeViewModel) else []

    def about(self) -> dict[str, str | None]:
        """Contents of the about page."""
        short_hash = self.git_sha[:7]
        commit_url = f"{self.repository}/commits/{self.git_sha}" if self.repository else None
        return {
            "title": fl("app-title"),
            "repository": self.repository,
            "git_description": fl("git-description", hash=short_hash, date=self.git_commit_date),
            "commit_url": commit_url,
        }

    def context_drawer(self) -> dict[str, Any] | None:
        """The context drawer to display, or None when it is closed."""
        if not self.show_context:
            return None
        return {
            "title": fl("about"),
            "content": self.about(),
            "on_close": ToggleContextPage(ContextPage.ABOUT),
        }

    def title(self) -> str:
        """The window title."""
        return fl("app-title")


def _requested_languages(environ: Mapping[str, str] = os.environ) -> list[str]:
    languages: list[str] = []
    for tag in environ.get("LANGUAGE", "").split(":"):
        if tag:
            languages.append(tag)
    for key in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = environ.get(key)
        if value:
            languages.append(value.split(".", 1)[0].split("@", 1)[0])
    return [tag for tag in languages if tag not in ("C", "POSIX")]


def main(argv: list[str] | None = None) -> int:
    """Show application information or import a crate's documentation."""
    parser = argparse.ArgumentParser(prog="cosmonaute", description="Documentation viewer.")
    parser.add_argument("--import", dest="manifest", type=Path, help="Cargo.toml to import")
    parser.add_argument("--store", type=Path, help="directory for imported documentation")
    parser.add_argument("--config", type=Path, help="configuration file")
    args = parser.parse_args(argv)

    init(_requested_languages())
    app = AppModel.create(args.config)

    if args.manifest is None:
        about = app.about()
        print(about["title"])
        if about["repository"]:
            print(about["repository"])
        print(about["git_description"])
        return 0

    app.view = HomeViewModel(manifest_path=args.manifest, store_path=args.store)
    task = app.update(HomeMessage(HomeAction.ADD))
    for message in task or ():
        app.update(message)
    return 0 if app.docsets else 1