"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _no_sudo(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test as if rmapp was not started through sudo."""
    monkeypatch.delenv("SUDO_USER", raising=False)


@pytest.fixture
def demo_home(tmp_path: Path) -> Path:
    """A fake home directory holding the files of a "Demo" app.

    Layout::

        Library/Caches/com.example.demo/cache.db
        Library/Preferences/com.example.demo.plist
        Library/Application Support/Demo/state.json
        Library/Application Support/Other/notes.txt
        Documents/Demo Notes.txt
    """
    home = tmp_path.resolve() / "home"
    library = home / "Library"

    caches = library / "Caches" / "com.example.demo"
    caches.mkdir(parents=True)
    (caches / "cache.db").write_bytes(b"x" * 2048)

    prefs = library / "Preferences"
    prefs.mkdir(parents=True)
    (prefs / "com.example.demo.plist").write_text("<plist/>")

    support = library / "Application Support" / "Demo"
    support.mkdir(parents=True)
    (support / "state.json").write_text("{}")

    other = library / "Application Support" / "Other"
    other.mkdir(parents=True)
    (other / "notes.txt").write_text("unrelated")

    documents = home / "Documents"
    documents.mkdir()
    (documents / "Demo Notes.txt").write_text("notes")

    return home


@pytest.fixture
def mdls_output() -> str:
    """Sample mdls output for a bundle identifier query."""
    return 'kMDItemCFBundleIdentifier = "com.example.demo"\n'
