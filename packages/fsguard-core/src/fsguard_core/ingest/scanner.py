"""Turn files and directories into ordered data blocks for the Merkle tree."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from fsguard_core.config.models import ScanConfig
from fsguard_core.errors import IngestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataBlock:
    """One leaf's worth of input: a label for display plus the raw bytes."""

    label: str
    data: bytes


def _matches_any(path: Path, patterns: set[str]) -> bool:
    """Check whether any component of *path* matches one of *patterns*."""
    return any(part in patterns for part in path.parts)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise IngestError(f"Cannot read {path}: {e}") from e


def read_blocks(path: Path, config: ScanConfig | None = None) -> list[DataBlock]:
    """Read *path* into blocks.

    A directory yields one block per file, ordered by relative POSIX path.
    A single file yields one block, or fixed-size chunks when
    ``config.chunk_size`` is set.
    """
    config = config or ScanConfig()
    path = Path(path)
    if not path.exists():
        raise IngestError(f"Path does not exist: {path}")
    if path.is_dir():
        return _read_directory(path, config)
    return _read_file(path, config)


def _read_file(path: Path, config: ScanConfig) -> list[DataBlock]:
    data = _read_bytes(path)
    size = config.chunk_size
    if size is None:
        return [DataBlock(label=path.name, data=data)]
    if not data:
        return [DataBlock(label=f"{path.name}#0", data=b"")]
    return [
        DataBlock(label=f"{path.name}#{n}", data=data[offset : offset + size])
        for n, offset in enumerate(range(0, len(data), size))
    ]


def _read_directory(root: Path, config: ScanConfig) -> list[DataBlock]:
    ignore = set(config.ignore_patterns)
    limit = config.max_file_size_mb * 1024 * 1024
    files: list[tuple[str, Path]] = []
    visited: set[str] = set()

    for dirpath, dirnames, filenames in os.walk(root, followlinks=config.follow_symlinks):
        current = Path(dirpath)
        real = os.path.realpath(dirpath)
        if real in visited:
            # Symlink cycle back into an already scanned directory
            logger.debug("Skipping %s: already visited as %s", current, real)
            dirnames[:] = []
            continue
        visited.add(real)

        # os.walk descends only into what is left in dirnames
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in ignore and (config.follow_symlinks or not (current / d).is_symlink())
        )
        for name in filenames:
            p = current / name
            rel = p.relative_to(root)
            if _matches_any(rel, ignore):
                continue
            if p.is_symlink() and not config.follow_symlinks:
                continue
            if not p.is_file():
                continue
            files.append((rel.as_posix(), p))

    blocks: list[DataBlock] = []
    for rel, p in sorted(files):
        size = p.stat().st_size
        if size > limit:
            logger.warning("Skipping %s: %d bytes exceeds max_file_size_mb=%d", rel, size, config.max_file_size_mb)
            continue
        blocks.append(DataBlock(label=rel, data=_read_bytes(p)))

    logger.debug("Read %d blocks from %s", len(blocks), root)
    return blocks


def find_block(blocks: Sequence[DataBlock], label: str) -> int | None:
    """Index of the block labelled *label*, or ``None``."""
    for i, block in enumerate(blocks):
        if block.label == label:
            return i
    return None
