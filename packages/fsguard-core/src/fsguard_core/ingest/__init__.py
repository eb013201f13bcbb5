"""Data ingestion: files and directories to ordered byte blocks."""

from fsguard_core.ingest.scanner import DataBlock, find_block, read_blocks

__all__ = [
    "DataBlock",
    "find_block",
    "read_blocks",
]
