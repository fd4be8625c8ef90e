# Tests for packaging and dependency sanity.

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _load_pyproject() -> dict:
    return tomllib.loads(PYPROJECT.read_text())


def _names(deps: list[str]) -> list[str]:
    return [
        d.lower().split(">=")[0].split(">")[0].split("==")[0].split("[")[0].strip()
        for d in deps
    ]


def test_core_deps_cover_runtime_imports():
    """Settings and logging libraries must be core dependencies."""
    core = _names(_load_pyproject()["project"]["dependencies"])
    for pkg in ("pydantic", "pydantic-settings", "rich"):
        assert pkg in core


def test_playwright_is_optional():
    """The diff engine works without a browser installed."""
    data = _load_pyproject()
    core = _names(data["project"]["dependencies"])
    browser = _names(data["project"]["optional-dependencies"]["browser"])
    assert "playwright" not in core
    assert "playwright" in browser


def test_no_duplicate_core_deps():
    names = _names(_load_pyproject()["project"]["dependencies"])
    dupes = [n for n in set(names) if names.count(n) > 1]
    assert not dupes, f"Duplicate core deps: {dupes}"


def test_console_script():
    scripts = _load_pyproject()["project"]["scripts"]
    assert scripts["axdiff"] == "axdiff.__main__:main"
