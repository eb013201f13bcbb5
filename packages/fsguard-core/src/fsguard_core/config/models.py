from pydantic import BaseModel, Field
from typing import Literal


class HashingConfig(BaseModel):
    engine: Literal["reference", "fast"] = "fast"


class ScanConfig(BaseModel):
    ignore_patterns: list[str] = Field(default_factory=lambda: [
        ".git", "node_modules", "__pycache__", ".venv", "build", "dist", ".tox"
    ])
    follow_symlinks: bool = False
    chunk_size: int | None = Field(default=None, gt=0)
    max_file_size_mb: int = Field(default=512, gt=0)


class BenchConfig(BaseModel):
    sizes: list[int] = Field(default_factory=lambda: [1024])
    iterations: int = Field(default=200, gt=0)


class FsGuardConfig(BaseModel):
    hashing: HashingConfig = Field(default_factory=HashingConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    bench: BenchConfig = Field(default_factory=BenchConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
