"""Application-layer merge policy.

Purpose
-------
Convert an ordered sequence of configuration mappings into a single coherent
mapping. The module performs no I/O so both the file-based composition root and
the service configurator can reuse it for in-memory sources.

Contents
    - ``merge_configs``: public entry point driven by a simple loop.
    - ``_overlay``: recursive stanza applying one mapping on top of another.

Merge Rules
-----------
For every key present in the incoming mapping:

* (mapping, mapping) – recurse key by key.
* any other pairing – the incoming value replaces the existing one, including
  sequences (which are not concatenated) and type conflicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Iterable


def merge_configs(configs: Iterable[Mapping[str, object]]) -> dict[str, object]:
    """Merge *configs* left to right so later mappings win.

    Why
    ----
    Configuration split over several files needs a deterministic precedence:
    later files override earlier ones while nested sections are combined rather
    than replaced wholesale.

    Parameters
    ----------
    configs:
        Iterable of mappings ordered from lowest to highest precedence.

    Returns
    -------
    dict[str, object]
        Fresh nested ``dict``; the inputs are never mutated.

    Examples
    --------
    >>> merge_configs([
    ...     {"keyA": "valueA", "keyB": "valueX", "db": {"host": "localhost"}},
    ...     {"keyB": "valueB", "db": {"port": 5432}},
    ... ])
    {'keyA': 'valueA', 'keyB': 'valueB', 'db': {'host': 'localhost', 'port': 5432}}
    >>> merge_configs([{"flags": [1, 2]}, {"flags": [3]}])
    {'flags': [3]}
    """

    merged: dict[str, object] = {}
    for config in configs:
        _overlay(merged, config)
    return merged


def _overlay(target: dict[str, object], incoming: Mapping[str, object]) -> None:
    """Apply *incoming* on top of *target* in place."""

    for key, value in incoming.items():
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, Mapping):
            branch = dict(existing)
            _overlay(branch, value)
            target[key] = branch
        elif isinstance(value, Mapping):
            branch = {}
            _overlay(branch, value)
            target[key] = branch
        else:
            target[key] = deepcopy(value)
