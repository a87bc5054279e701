# cosmonaute

Imports documentation sets for crates, produced by `cargo rustdoc` in JSON
form, stores them locally in compressed form and searches the items they
contain. It also holds the state and message handling of a documentation
viewer application: a home page, a documentation page and an about drawer.

## Installing

```
pip install .
```

Importing a crate needs `cargo` on your `PATH`, with a toolchain that accepts
`-Z unstable-options --output-format json` for `cargo rustdoc`.

## The command

```
cosmonaute
```

prints the application title, the repository address when the
`COSMONAUTE_REPOSITORY` environment variable is set, and a line describing the
git commit (taken from `VERGEN_GIT_SHA` and `VERGEN_GIT_COMMIT_DATE`, or
`unknown`).

```
cosmonaute --import path/to/Cargo.toml [--store DIR] [--config FILE]
```

runs `cargo metadata` and `cargo rustdoc` for the crate and prints progress
as it goes: `Reading package metadata`, `Progress: n/total` for each built
artifact, compiler messages, `Import completed successfully`, and finally
`Import successful` or `Import error: ...`. The documentation is written to
`DIR/<target>.json.gz` (by default `~/.cosmonaute`). The command exits with 0
when the import succeeded and 1 otherwise.

`--config` names the configuration file to read; by default it is
`$XDG_CONFIG_HOME/cosmic/com.github.genericconfluent.cosmonaute/v1/config.json`
(or under `~/.config`). A missing or unreadable file gives the defaults.

The language is chosen from `LANGUAGE`, `LC_ALL`, `LC_MESSAGES` and `LANG`;
only English strings are included, so every other choice falls back to them.

## Using it as a library

Import a crate's documentation, following progress as it goes:

```python
from pathlib import Path

from cosmonaute.docset import DocKind, DocSource, Protocol, import_docset

source = DocSource(
    protocol=Protocol.FILE,
    kind=DocKind.RUST_CRATE,
    path=Path("path/to/Cargo.toml"),
)
handle = import_docset(source, send=print, store_path=Path("docs-store"))
print(handle.name, handle.version, handle.language)
```

While the import runs, `send` receives `ReadPackageMetadata`,
`CurrentProgress`, `CompilerMessage` and `ImportComplete` messages. Failures
raise `DocsetError`, whose `kind` says what went wrong (`command_failed`,
`parse_error`, `failed_to_find_doc_output`, `io`, `utf8`, `json`, ...).
The documented target is the first library, dylib or proc-macro target of the
root package (`find_doc_target(metadata)`); when the crate has no version the
handle's version is `???`.

Load a stored documentation set and search it:

```python
from pathlib import Path

from cosmonaute.docset import load_documentation

docs = load_documentation(Path("docs-store/mycrate.json.gz"))
for item_id in docs.search("widget"):
    print(item_id)
```

`search` is case-insensitive. It returns the ids of items whose name contains
the query, looking at the names in the crate's `index` and at the last segment
of each entry in its `paths`, each id once, in that order.

Other pieces:

- `cosmonaute.docset` — also `crate_metadata(path)`, which runs
  `cargo metadata`, and `parse_cargo_message(line)`, which parses one line of
  cargo's JSON output.
- `cosmonaute.config` — `Config`, `load_config(path)` and
  `save_config(config, path)`.
- `cosmonaute.i18n` — `init(requested_languages)`, `fl(message_id, **kwargs)`
  and `current_language()` for localized strings.
- `cosmonaute.pages` — `HomeViewModel` and `DocsViewModel`, the state behind
  the home and documentation pages. `HomeViewModel.update` takes
  `SearchInput`, `HomeAction` and `DocsetEvent` messages; `HomeAction.ADD`
  returns an iterator of `DocsetEvent`s from an import running in the
  background.
- `cosmonaute.app` — `AppModel`, which routes `HomeMessage` and `DocsMessage`
  to the current page and handles `ToggleContextPage`, `UpdateConfig`,
  `LaunchUrl` and `OpenRepositoryUrl`; `MenuAction`, `icondata_svg(data,
  view_box)` and `main()`.

## What it does not do

There is no graphical window. The pages and the about drawer exist as state
and messages only; nothing draws them. The documentation page shows no
content and accepts no messages, and only crates (not books) can be imported,
from local manifests only.

## Running the tests

```
pip install .[test]
pytest
```