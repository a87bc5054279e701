"""Importing, storing and searching documentation sets."""

from __future__ import annotations

import gzip
import json
import os
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

DOCDIR = Path.home() / ".cosmonaute"
_STORE_SUFFIX = ".json.gz"
_DOC_TARGET_KINDS = {"lib", "dylib", "proc-macro"}


class DocKind(Enum):
    RUST_CRATE = "rust-crate"
    TOML_BOOK = "toml-book"


class Protocol(Enum):
    FILE = "file"


@dataclass
class DocSource:
    """Where a documentation set comes from."""

    protocol: Protocol
    kind: DocKind
    path: Path


@dataclass
class DocSetHandle:
    """Identifies an imported documentation set."""

    name: str
    version: str
    language: str


class DocsetError(Exception):
    """Failure while importing or loading documentation."""

    _MESSAGES = {
        "command_failed": "Command failed",
        "parse_error": "Parse error",
        "network_issue": "Network issue",
        "failed_to_find_doc_output": "Failed to find documentation output",
        "utf8": "UTF-8 error",
        "join": "Join error",
        "io": "IO error",
        "json": "JSON error",
    }

    def __init__(self, kind: str, cause: BaseException | None = None) -> None:
        if kind not in self._MESSAGES:
            raise ValueError(f"unknown docset error kind: {kind!r}")
        self.kind = kind
        self.cause = cause
        base = self._MESSAGES[kind]
        super().__init__(f"{base}: {cause}" if cause is not None else base)


@dataclass(frozen=True)
class CurrentProgress:
    completed: int
    total: int


@dataclass(frozen=True)
class CompilerMessage:
    package_id: str
    target: dict
    message: dict


@dataclass(frozen=True)
class ImportComplete:
    success: bool


@dataclass(frozen=True)
class ReadPackageMetadata:
    pass


Message = Union[CurrentProgress, CompilerMessage, ImportComplete, ReadPackageMetadata]


@dataclass
class Documentation:
    """A loaded rustdoc JSON crate together with its handle."""

    inner: dict[str, Any]
    handle: DocSetHandle = field(default_factory=lambda: DocSetHandle("", "???", "rust"))

    def search(self, query: str) -> list[str]:
        """Ids of items whose name contains the query, ignoring case."""
        needle = query.casefold()
        results: list[str] = []
        seen: set[str] = set()

        def consider(item_id: str, name: object) -> None:
            if isinstance(name, str) and needle in name.casefold() and item_id not in seen:
                seen.add(item_id)
                results.append(item_id)

        for item_id, item in self.inner.get("index", {}).items():
            consider(item_id, item.get("name"))
        for item_id, summary in self.inner.get("paths", {}).items():
            path = summary.get("path") or []
            if path:
                consider(item_id, path[-1])
        return results


def crate_metadata(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Run `cargo metadata` for a manifest and return the parsed output."""
    command = ["cargo", "metadata", "--format-version", "1", "--manifest-path", os.fspath(path)]
    try:
        completed = subprocess.run(command, stdout=subprocess.PIPE, check=False)
    except OSError as exc:
        raise DocsetError("io", exc) from exc
    try:
        text = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DocsetError("utf8", exc) from exc
    if completed.returncode != 0:
        raise DocsetError("command_failed")
    try:
        metadata = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocsetError("json", exc) from exc
    if not isinstance(metadata, dict):
        raise DocsetError("json", ValueError("metadata is not a JSON object"))
    return metadata


def _root_package(metadata: dict[str, Any]) -> dict[str, Any]:
    packages = metadata.get("packages", [])
    resolve = metadata.get("resolve")
    if resolve is not None:
        root = resolve.get("root")
        found = next((p for p in packages if root is not None and p.get("id") == root), None)
    else:
        manifest = Path(metadata.get("workspace_root", "")) / "Cargo.toml"
        found = next((p for p in packages if Path(p.get("manifest_path", "")) == manifest), None)
    if found is None:
        raise DocsetError("parse_error")
    return found


def find_doc_target(metadata: dict[str, Any]) -> str:
    """Name of the first documented library target of the root package."""
    for target in _root_package(metadata).get("targets", []):
        if target.get("doc", True) and _DOC_TARGET_KINDS & set(target.get("kind", [])):
            return target["name"]
    raise DocsetError("failed_to_find_doc_output")


def parse_cargo_message(line: str) -> dict[str, Any] | None:
    """Parse one line of cargo's JSON output; None unless it is a JSON object."""
    try:
        message = json.loads(line)
    except json.JSONDecodeError:
        return None
    return message if isinstance(message, dict) else None


def _compiler_message(obj: dict[str, Any]) -> CompilerMessage | None:
    package_id = obj.get("package_id")
    target = obj.get("target")
    message = obj.get("message")
    if isinstance(package_id, str) and isinstance(target, dict) and isinstance(message, dict):
        return CompilerMessage(package_id, target, message)
    return None


def _read_messages(proc: subprocess.Popen, emit: Callable[[Message], None], total: int) -> None:
    completed = 0
    emit(CurrentProgress(completed, total))
    for line in proc.stdout:
        obj = parse_cargo_message(line)
        if obj is None:
            continue
        reason = obj.get("reason")
        if reason == "compiler-message":
            message = _compiler_message(obj)
            if message is not None:
                emit(message)
        elif reason == "compiler-artifact":
            completed += 1
            emit(CurrentProgress(completed, total))
        elif reason == "build-finished":
            break


def import_docset(
    source: DocSource,
    send: Callable[[Message], None] | None = None,
    store_path: str | os.PathLike[str] | None = None,
) -> DocSetHandle:
    """Generate rustdoc JSON for a crate and store it in the documentation directory."""
    emit = send if send is not None else (lambda _message: None)

    emit(ReadPackageMetadata())
    metadata = crate_metadata(source.path)
    total = len(metadata.get("packages", []))
    root = _root_package(metadata)

    command = [
        "cargo", "rustdoc",
        "--manifest-path", root["manifest_path"],
        "--message-format", "json",
        "-Z", "unstable-options",
        "--output-format", "json",
    ]
    try:
        proc = subprocess.Popen(command, stdout=subprocess.PIPE, text=True, encoding="utf-8")
    except OSError as exc:
        raise DocsetError("io", exc) from exc

    with proc:
        try:
            _read_messages(proc, emit, total)
            proc.communicate()
        except (OSError, UnicodeDecodeError) as exc:
            proc.kill()
            raise DocsetError("io", exc) from exc

    if proc.returncode != 0:
        raise DocsetError("command_failed")
    emit(ImportComplete(True))

    name = find_doc_target(metadata)
    json_source = Path(metadata["target_directory"]) / "doc" / f"{name}.json"
    try:
        json_content = json_source.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocsetError("io", exc) from exc
    try:
        crate_docs = json.loads(json_content)
    except json.JSONDecodeError as exc:
        raise DocsetError("json", exc) from exc
    del json_content

    store = Path(store_path) if store_path is not None else DOCDIR
    destination = store / f"{name}{_STORE_SUFFIX}"
    try:
        store.mkdir(parents=True, exist_ok=True)
        with gzip.open(destination, "wt", encoding="utf-8") as handle:
            json.dump(crate_docs, handle, separators=(",", ":"))
    except OSError as exc:
        raise DocsetError("io", exc) from exc

    return DocSetHandle(
        name=name,
        version=crate_docs.get("crate_version") or "???",
        language="rust",
    )


def load_documentation(path: str | os.PathLike[str]) -> Documentation:
    """Load a documentation set written by import_docset."""
    target = Path(path)
    try:
        with gzip.open(target, "rt", encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, EOFError) as exc:
        raise DocsetError("io", exc) from exc
    try:
        crate_docs = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocsetError("json", exc) from exc
    if not isinstance(crate_docs, dict):
        raise DocsetError("json", ValueError("documentation is not a JSON object"))

    name = target.name
    if name.endswith(_STORE_SUFFIX):
        name = name[: -len(_STORE_SUFFIX)]
    handle = DocSetHandle(name, crate_docs.get("crate_version") or "???", "rust")
    return Documentation(crate_docs, handle)