"""Deep merge and environment-variable flattening of config trees.

Merging works on leaf paths: both trees are flattened to
``{("a", "b"): value}`` maps, the override map is laid over the base map,
and the result is rebuilt into nested dicts. Lists and empty mappings are
leaves, so an override list replaces the base list whole.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from enx.core.constants import ENV_SEPARATOR, PATH_SEPARATOR
from enx.parsers.base import ParseOptions

if TYPE_CHECKING:
    from enx.environ import EnvironProvider

LeafPath = tuple[Any, ...]


def _leaf_paths(tree: Mapping[Any, Any], prefix: LeafPath = ()) -> dict[LeafPath, Any]:
    leaves: dict[LeafPath, Any] = {}
    for key, value in tree.items():
        path = (*prefix, key)
        if isinstance(value, Mapping) and value:
            leaves.update(_leaf_paths(value, path))
        else:
            leaves[path] = value
    return leaves


def _descendants(flat: Mapping[LeafPath, Any], path: LeafPath) -> list[LeafPath]:
    n = len(path)
    return [p for p in flat if len(p) > n and p[:n] == path]


def _overlay(flat: dict[LeafPath, Any], path: LeafPath, value: Any) -> None:
    """Set path in flat, dropping base entries whose shape conflicts with it."""
    if path in flat:
        flat[path] = value
        return
    below = _descendants(flat, path)
    if below and isinstance(value, Mapping):
        # Empty override mapping over a populated subtree: nothing to change.
        return
    for p in below:
        del flat[p]
    for i in range(1, len(path)):
        flat.pop(path[:i], None)
    flat[path] = value


def _build(flat: Mapping[LeafPath, Any]) -> dict[Any, Any]:
    result: dict[Any, Any] = {}
    for path, value in flat.items():
        node = result
        for key in path[:-1]:
            node = node.setdefault(key, {})
        node[path[-1]] = copy.deepcopy(value)
    return result


def merge(base: Mapping[Any, Any], override: Mapping[Any, Any]) -> dict[Any, Any]:
    """Deep-merge override into base and return a new tree. Override wins per leaf."""
    flat = _leaf_paths(base)
    for path, value in _leaf_paths(override).items():
        _overlay(flat, path, value)
    return _build(flat)


def flatten_paths(tree: Mapping[Any, Any], sep: str = PATH_SEPARATOR) -> dict[str, Any]:
    """Leaf values keyed by joined path, e.g. {"db.host": "localhost"}."""
    return {sep.join(str(k) for k in path): value for path, value in _leaf_paths(tree).items()}


def stringify(value: Any) -> str:
    """Render a scalar the way it would read back from JSON (true, null, 1.5)."""
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return str(value)


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def flatten(tree: Mapping[Any, Any], sep: str = ENV_SEPARATOR) -> dict[str, str]:
    """Flatten a tree into environment-variable style names.

    Every leaf becomes ``parent_child = str(value)``. Every subtree (mapping
    or list) additionally gets an entry holding its JSON text, so both
    ``db`` and ``db_host`` are available after injection.
    """
    flat: dict[str, str] = {}

    def _walk(node: Mapping[Any, Any] | list[Any] | tuple[Any, ...], prefix: str | None) -> None:
        items = node.items() if isinstance(node, Mapping) else enumerate(node)
        for key, value in items:
            name = str(key) if prefix is None else f"{prefix}{sep}{key}"
            if isinstance(value, (Mapping, list, tuple)):
                flat[name] = _to_json(value)
                _walk(value, name)
            else:
                flat[name] = stringify(value)

    _walk(tree, None)
    return flat


def _split_name(name: str, sep: str) -> list[str]:
    segments = name.split(sep)
    if any(not s for s in segments):
        return [name]
    return segments


def unflatten(flat: Mapping[str, Any], sep: str = ENV_SEPARATOR) -> dict[str, Any]:
    """Rebuild a nested tree from joined names.

    A name that is both a value and a parent of other names (``db`` next to
    ``db_host``) becomes the nested dict; the scalar is dropped. Names with
    empty segments (``_X``, ``A__B``) stay unsplit at the top level.
    """
    result: dict[str, Any] = {}
    for name, value in flat.items():
        segments = _split_name(name, sep)
        node = result
        for seg in segments[:-1]:
            child = node.get(seg)
            if not isinstance(child, dict):
                child = {}
                node[seg] = child
            node = child
        last = segments[-1]
        if isinstance(node.get(last), dict):
            continue
        node[last] = value
    return result


def from_environ(environ: EnvironProvider, sep: str = ENV_SEPARATOR) -> dict[str, Any]:
    """Tree view of the variables currently set in environ."""
    return unflatten(dict(environ.items()), sep)


def inject(
    tree: Mapping[Any, Any],
    environ: EnvironProvider,
    sep: str = ENV_SEPARATOR,
    options: ParseOptions | None = None,
) -> dict[str, str]:
    """Write flatten(tree) into environ and return what was written.

    Names or values the OS rejects (empty name, `=` in the name, NUL bytes)
    are skipped and logged in debug mode.
    """
    options = options or ParseOptions()
    written: dict[str, str] = {}
    for name, value in flatten(tree, sep).items():
        try:
            environ.set(name, value)
        except ValueError as exc:
            options.log(exc, prefix=f"skipped environment variable {name!r}")
            continue
        written[name] = value
    return written
