"""Shared fixtures: small content trees on disk."""

from pathlib import Path

import pytest


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """content/a.md and content/child/b.md."""
    root = tmp_path / "content"
    child = root / "child"
    child.mkdir(parents=True)
    (root / "a.md").write_text("---\ntitle: A\n---\n# A\n")
    (child / "b.md").write_text("# B\n")
    return root


@pytest.fixture
def nested_dir(tmp_path: Path) -> Path:
    """A deeper tree with an image, an empty directory and three levels."""
    root = tmp_path / "site"
    (root / "docs" / "guide" / "advanced").mkdir(parents=True)
    (root / "photos").mkdir()
    (root / "empty").mkdir()
    (root / "index.md").write_text("# Home\n")
    (root / "docs" / "intro.md").write_text("# Intro\n")
    (root / "docs" / "guide" / "setup.md").write_text("# Setup\n")
    (root / "docs" / "guide" / "advanced" / "tuning.md").write_text("# Tuning\n")
    (root / "docs" / "guide" / "diagram.jpg").write_bytes(b"\xff\xd8\xff")
    (root / "photos" / "photo.jpg").write_bytes(b"\xff\xd8\xff")
    return root
