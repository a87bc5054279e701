from pathlib import Path
from unittest import mock

import pytest

from cosmonaute import docset
from cosmonaute.pages import (
    DocsetEvent,
    DocsViewModel,
    HomeAction,
    HomeViewModel,
    SearchInput,
)


def make_home(**kwargs):
    lines = []
    model = HomeViewModel(output=lines.append, **kwargs)
    return model, lines


def test_search_input_sets_search():
    model, _ = make_home()
    assert model.update(SearchInput("widget")) is None
    assert model.search == "widget"


@pytest.mark.parametrize("action", [HomeAction.SETTINGS, HomeAction.HELP])
def test_settings_and_help_change_nothing(action):
    model, lines = make_home(search="abc")
    assert model.update(action) is None
    assert model.search == "abc"
    assert lines == []


@pytest.mark.parametrize(
    "event, expected",
    [
        (docset.CurrentProgress(3, 7), "Progress: 3/7"),
        (docset.ImportComplete(True), "Import completed successfully"),
        (docset.ImportComplete(False), "Import failed"),
        (docset.ReadPackageMetadata(), "Reading package metadata"),
    ],
)
def test_docset_events_are_reported(event, expected):
    model, lines = make_home()
    assert model.update(DocsetEvent(event)) is None
    assert lines == [expected]


def test_compiler_message_reported_with_repr():
    model, lines = make_home()
    message = docset.CompilerMessage("pkg", {"name": "t"}, {"level": "warning"})
    model.update(DocsetEvent(message))
    assert lines == [f"Compiler message: {message!r}"]


def test_unknown_message_rejected():
    model, _ = make_home()
    with pytest.raises(TypeError):
        model.update("bogus")


def test_add_streams_events_and_reports_error(tmp_path):
    model, lines = make_home(manifest_path=tmp_path / "Cargo.toml", store_path=tmp_path)
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("cargo")):
        events = list(model.update(HomeAction.ADD))
    assert events == [DocsetEvent(docset.ReadPackageMetadata())]
    assert len(lines) == 1
    assert lines[0].startswith("Import error: IO error")
    assert model.docsets == []


def test_default_manifest_path():
    model, _ = make_home()
    assert model.manifest_path == Path("Cargo.toml")


def test_docs_page_rejects_messages():
    with pytest.raises(TypeError):
        DocsViewModel().update(SearchInput("x"))