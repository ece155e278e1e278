"""Glob-based configuration file discovery.

Purpose
-------
Implement the :class:`lib_container_config.application.ports.FileLocator`
protocol by expanding shell-style patterns against the filesystem.

Ordering
--------
Results are concatenated in pattern order. Within one pattern the matches are
sorted so the outcome does not depend on directory listing order. A path
matched by two patterns appears twice; the later occurrence then wins again
during the merge, which is harmless.
"""

from __future__ import annotations

import glob
import os
from typing import Sequence

from ...observability import log_debug, make_event


class GlobFileLocator:
    """Expand glob patterns (``*``, ``?``, ``[...]``, ``**``) into file paths."""

    def locate(self, patterns: Sequence[str]) -> list[str]:
        """Return existing regular files matching *patterns*.

        Examples
        --------
        >>> from pathlib import Path
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> for name in ("b.json", "a.json", "c.txt"):
        ...     _ = (Path(tmp.name) / name).write_text("{}", encoding="utf-8")
        >>> [Path(p).name for p in GlobFileLocator().locate([str(Path(tmp.name) / "*.json")])]
        ['a.json', 'b.json']
        >>> tmp.cleanup()
        """

        located: list[str] = []
        for pattern in patterns:
            matches = sorted(path for path in glob.glob(pattern, recursive=True) if os.path.isfile(path))
            log_debug("config_files_located", **make_event("locate", None, {"pattern": pattern, "files": len(matches)}))
            located.extend(matches)
        return located
