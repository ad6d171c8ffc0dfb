import os
import sys
from pathlib import Path

import pytest

from spectral_report.adapters import SpecLocator
from spectral_report.adapters.spec_locator import is_spec_file


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("openapi: 3.1.0\n", encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "filename",
    [
        "quotes.openapi.yaml",
        "quotes.openapi.yml",
        "quotes.openapi.json",
        "openapi.yaml",
        "openapi.yml",
        "openapi.json",
    ],
)
def test_spec_patterns_match(filename):
    assert is_spec_file(filename)


@pytest.mark.parametrize(
    "filename",
    [
        "openapi.yaml.bak",
        "OpenAPI.yaml",
        "quotes.OPENAPI.yaml",
        "myopenapi.yaml",
        "swagger.json",
        "openapi.txt",
        "quotes.openapi.yaml\n",
        "openapi.json\n",
    ],
)
def test_spec_patterns_reject(filename):
    assert not is_spec_file(filename)


def test_discovers_specs_up_to_depth(tmp_path):
    top = touch(tmp_path / "openapi.yaml")
    nested = touch(tmp_path / "services" / "quotes" / "quotes.openapi.json")
    touch(tmp_path / "a" / "b" / "c" / "too-deep.openapi.yaml")
    touch(tmp_path / "README.md")

    found = SpecLocator(tmp_path).locate()

    assert sorted(found) == sorted([top.resolve(), nested.resolve()])


def test_depth_zero_finds_nothing(tmp_path):
    touch(tmp_path / "openapi.yaml")

    assert SpecLocator(tmp_path, max_depth=0).locate() == []


def test_skips_hidden_and_dependency_directories(tmp_path):
    kept = touch(tmp_path / "api" / "openapi.json")
    touch(tmp_path / ".git" / "openapi.yaml")
    touch(tmp_path / "node_modules" / "pkg" / "openapi.yaml")
    touch(tmp_path / ".hidden.openapi.yaml")

    found = SpecLocator(tmp_path).locate()

    assert found == [kept.resolve()]


def test_custom_excluded_dirs(tmp_path):
    touch(tmp_path / "vendor" / "openapi.yaml")
    kept = touch(tmp_path / "node_modules" / "openapi.yaml")

    found = SpecLocator(tmp_path, excluded_dirs=["vendor"]).locate()

    assert found == [kept.resolve()]


def test_matches_only_files(tmp_path):
    (tmp_path / "openapi.yaml").mkdir()
    inside = touch(tmp_path / "openapi.yaml" / "openapi.json")

    assert SpecLocator(tmp_path).locate() == [inside.resolve()]


def test_traversal_follows_filesystem_order(tmp_path):
    for name in ("b", "a", "c"):
        touch(tmp_path / name / "openapi.yaml")

    expected = []
    for entry in tmp_path.iterdir():
        expected.append((entry / "openapi.yaml").resolve())

    assert SpecLocator(tmp_path).locate() == expected


def test_explicit_paths_skip_discovery(tmp_path):
    touch(tmp_path / "unrelated.openapi.yaml")
    first = touch(tmp_path / "specs" / "first.yaml")
    absolute = tmp_path / "elsewhere" / "second.json"

    found = SpecLocator(tmp_path).locate(["specs/first.yaml", str(absolute)])

    assert found == [first.resolve(), absolute.resolve()]


def test_explicit_paths_are_not_checked_for_existence(tmp_path):
    found = SpecLocator(tmp_path).locate(["missing.openapi.yaml"])

    assert found == [(tmp_path / "missing.openapi.yaml").resolve()]


@pytest.mark.skipif(
    sys.platform.startswith("win") or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)
def test_unreadable_directory_is_skipped(tmp_path):
    locked = tmp_path / "locked"
    touch(locked / "openapi.yaml")
    kept = touch(tmp_path / "open" / "openapi.yaml")
    locked.chmod(0)
    try:
        found = SpecLocator(tmp_path).locate()
    finally:
        locked.chmod(0o755)

    assert found == [kept.resolve()]


def test_unreadable_directory_is_skipped_when_listing_fails(tmp_path, monkeypatch):
    touch(tmp_path / "locked" / "openapi.yaml")
    kept = touch(tmp_path / "open" / "openapi.yaml")
    original_iterdir = Path.iterdir

    def fake_iterdir(self):
        if self.name == "locked":
            raise PermissionError("denied")
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", fake_iterdir)

    assert SpecLocator(tmp_path).locate() == [kept.resolve()]
