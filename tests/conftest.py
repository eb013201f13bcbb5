"""Shared test fixtures for fsguard."""

from pathlib import Path

import pytest

from fsguard_core.config.models import FsGuardConfig
from fsguard_core.hashing import Sha256Hasher


@pytest.fixture
def hasher():
    return Sha256Hasher()


@pytest.fixture
def sample_blocks():
    return [b"block1", b"block2", b"block3", b"block4"]


@pytest.fixture
def sample_config():
    return FsGuardConfig()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A small directory tree to ingest."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").write_text("print('hi')")
    (root / "src" / "util.py").write_text("def helper(): pass")
    (root / "README.md").write_text("# Readme")
    return root
