# stamp

Building blocks for a project and file scaffolding tool: generator packages
kept on disk, a store that installs, updates and removes them, value
modifiers for merging content, encoders for JSON, YAML and text, and a few
filesystem and text helpers.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modifying values

`stamp.modify.modifier.modifier(action, arg, *options)` builds a function
that applies an action (`append`, `prepend`, `replace` or `delete`) to a
value and returns `(altered, changed)`. Strings and bytes are concatenated,
numbers are added, booleans are combined with logical and, dictionaries are
merged recursively and lists are joined. The argument is cast to the type of
the value; for lists it may be a list or a single item. Values of other types
come back untouched with `changed` set to `False`.

`with_merge_type(...)` selects how lists, strings and bytes are combined:
`concat` (the default), `upsert` (only add what is not already there) or
`replace`.

```python
from stamp.modify.enums import Action, MergeType
from stamp.modify.modifier import modifier, with_merge_type

append_three = modifier(Action.APPEND, 3)
append_three(2)            # (5, True)
append_three([1, 2])       # ([1, 2, 3], True)

upsert = modifier(Action.APPEND, [2, 3], with_merge_type(MergeType.UPSERT))
upsert([1, 2])             # ([1, 2, 3], True)
```

The per-type operations (`modify_string`, `modify_map`, `modify_slice`, and
so on) live in `stamp.modify.operations`, configured by `ModifierConf`.
`stamp.modify.enums` defines `Action` and `MergeType`, with `parse_action`
and `parse_merge_type` raising `ValueError` for unknown names.
`stamp.modify.set.OrderedSet` is an insertion-ordered set that also accepts
lists and dictionaries.

## Encoders

`stamp.encode` offers `JSONEncoder`, `YAMLEncoder` and `TextEncoder`, each
with `decode(encoded)` and `encode(data)`. JSON is written with sorted keys
and four-space indentation, YAML with two-space indentation and sorted keys.
`TextEncoder.decode` returns a copy of the bytes; `TextEncoder.encode` casts
strings, numbers, booleans and bytes to text. Failures raise `EncodeError`.

```python
from stamp.encode import JSONEncoder

JSONEncoder().encode({"b": 1, "a": 2})
```

## Packages and the store

A package is a directory holding a metadata file (`package.yaml` by
default). Nested directories hold sub-packages whose names join path
segments with `:`, e.g. `nested:aaa:111`. Directories whose names start with
`_` are skipped.

`stamp.pkg.package.Package` exposes `name`, `description`,
`short_description`, `origin`, `path` and `meta_path` as properties, and
`children()`, `all()`, `parent()` and `root()` for walking the tree. Metadata
keys are looked up as given and then in PascalCase (`foo_bar` → `FooBar`).

```python
from stamp.pkg.store import Store

store = Store("/path/to/packages")
for package in store.load_all():
    print(package.name, "-", package.short_description)

installed = store.install("./my-generator")
store.update(installed.name)
store.uninstall(installed.name)
```

`Store.load(name)` accepts a package name or a direct path to a package
directory. `Store.stage(src)` is a context manager that copies a source into
a temporary directory, records its origin and removes the directory on exit.

Errors live in `stamp.pkg.errors`: a missing package raises `NotFoundError`,
installing a name already present raises `PackageExistsError`, an invalid
name raises `PackageNameError`, and metadata of the wrong type raises
`MetadataTypeCastError`; all derive from `PackageError`.

## Configuration

`stamp.config.new_config(path)` returns a `Config` with `debug`, `defaults`,
`dry_run` and `store_path` (default `~/.stamp/packages`). With no path it
uses `.stamp.yaml` if present, otherwise `$HOME/.stamp/config.yaml`. When the
file exists, its values are applied, then the environment variables
`STAMP_DEBUG`, `STAMP_DRY_RUN` and `STAMP_STORE_PATH`. A file that cannot be
read or parsed raises `ConfigError`.

## Utilities

- `stamp.fsutil`: `path_exists`, `no_path_exists`, `path_is_dir`,
  `normalize_path` (expands environment variables and `~`),
  `ensure_dir_writable`, `ensure_path_relative_to_root` (raises `ValueError`
  for paths that escape the root) and `is_sub_dir`.
- `stamp.mdutil`: `dedent` and `to_markdown` for help text.

## What this package does not do

There is no command-line program and no way to run a generator: templates,
prompts and generator tasks are not part of the package. Package sources can
only be local directories or `file://` URLs; remote sources are rejected by
`stamp.pkg.getter.default_getter`.