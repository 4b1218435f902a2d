"""Shared fixtures for backup mirror tests."""

import os

import pytest


def write_tree(root, files):
    """Create files below root from a {relative path: content} mapping."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)


@pytest.fixture
def roots(tmp_path):
    """Empty source and target directories side by side."""
    source = tmp_path / "source"
    target = tmp_path / "target"
    source.mkdir()
    target.mkdir()
    return source, target


@pytest.fixture
def deny_scandir(monkeypatch):
    """Make os.scandir raise PermissionError for selected directories."""
    denied = set()
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.path.abspath(path) in denied:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def deny(path):
        denied.add(os.path.abspath(str(path)))

    return deny


@pytest.fixture
def make_tree():
    return write_tree
