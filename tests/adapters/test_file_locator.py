from __future__ import annotations

from pathlib import Path

from lib_container_config.adapters.file_locator.default import GlobFileLocator


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{}", encoding="utf-8")
    return path


def test_matches_are_sorted_within_a_pattern(tmp_path: Path) -> None:
    for name in ("c.json", "a.json", "b.json"):
        _touch(tmp_path / name)
    located = GlobFileLocator().locate([str(tmp_path / "*.json")])
    assert [Path(path).name for path in located] == ["a.json", "b.json", "c.json"]


def test_pattern_order_is_preserved(tmp_path: Path) -> None:
    first = _touch(tmp_path / "z.json")
    second = _touch(tmp_path / "a.json")
    located = GlobFileLocator().locate([str(first), str(second)])
    assert located == [str(first), str(second)]


def test_overlapping_patterns_are_not_deduplicated(tmp_path: Path) -> None:
    target = _touch(tmp_path / "a.json")
    located = GlobFileLocator().locate([str(tmp_path / "*.json"), str(target)])
    assert located == [str(target), str(target)]


def test_character_classes_and_single_wildcards(tmp_path: Path) -> None:
    for name in ("a1.json", "a2.json", "b1.json"):
        _touch(tmp_path / name)
    located = GlobFileLocator().locate([str(tmp_path / "[ab]1.json"), str(tmp_path / "a?.json")])
    assert [Path(path).name for path in located] == ["a1.json", "b1.json", "a1.json", "a2.json"]


def test_recursive_pattern_and_directories_skipped(tmp_path: Path) -> None:
    _touch(tmp_path / "conf" / "nested" / "deep.json")
    (tmp_path / "conf" / "dir.json").mkdir(parents=True)
    located = GlobFileLocator().locate([str(tmp_path / "conf" / "**" / "*.json")])
    assert [Path(path).name for path in located] == ["deep.json"]


def test_no_matches_returns_empty_list(tmp_path: Path) -> None:
    assert GlobFileLocator().locate([str(tmp_path / "*.unknownext")]) == []
