"""CLI entry point for fsguard."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from fsguard_core.benchmark import run_benchmark
from fsguard_core.config import FsGuardConfig, configure_logging, load_config
from fsguard_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from fsguard_core.encoding import bytes_to_hex, hex_to_bytes, proof_from_hex, proof_to_hex
from fsguard_core.errors import FsGuardError
from fsguard_core.hashing import Sha256Hasher
from fsguard_core.ingest import DataBlock, find_block, read_blocks
from fsguard_core.merkle import MerkleTree, verify_proof

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="fsguard",
    help="SHA-256 digests and Merkle inclusion proofs for files and directories.",
)

config_app = typer.Typer(help="Manage fsguard configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: FsGuardConfig | None = None


def _get_config() -> FsGuardConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to fsguard.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def _hasher(engine: str | None = None) -> Sha256Hasher:
    cfg = _get_config()
    return Sha256Hasher(engine or cfg.hashing.engine)


def _load_blocks(path: str, chunk_size: int | None) -> list[DataBlock]:
    """Read blocks with the configured scan settings, exiting on failure."""
    scan = _get_config().scan
    if chunk_size is not None:
        scan = scan.model_copy(update={"chunk_size": chunk_size})
    try:
        return read_blocks(Path(path), scan)
    except FsGuardError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _build(blocks: list[DataBlock]) -> MerkleTree:
    logger.debug("Building merkle tree over %d blocks", len(blocks))
    tree = MerkleTree(_hasher())
    tree.build(block.data for block in blocks)
    return tree


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


@app.command("hash")
def hash_cmd(
    target: Annotated[str, typer.Argument(help="File to hash, or literal text with --text")],
    text: Annotated[bool, typer.Option("--text", help="Hash TARGET as a UTF-8 string")] = False,
    engine: Annotated[
        str | None, typer.Option("--engine", help="Hash engine: fast or reference")
    ] = None,
) -> None:
    """Print the SHA-256 digest of a file or string."""
    if text:
        data = target.encode("utf-8")
    else:
        path = Path(target)
        if not path.is_file():
            rprint(f"[red]Error:[/red] Not a file: {target}")
            raise typer.Exit(1)
        data = path.read_bytes()

    try:
        hasher = _hasher(engine)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    typer.echo(bytes_to_hex(hasher.hash(data)))


# ---------------------------------------------------------------------------
# Merkle tree commands (root, proof, verify)
# ---------------------------------------------------------------------------


@app.command()
def root(
    path: Annotated[str, typer.Argument(help="File or directory to build the tree over")],
    chunk_size: Annotated[
        int | None, typer.Option("--chunk-size", min=1, help="Split a single file into blocks of N bytes")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Machine-readable output")] = False,
) -> None:
    """Build a Merkle tree and show its leaves and root."""
    blocks = _load_blocks(path, chunk_size)
    tree = _build(blocks)
    root_digest = tree.root()

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "root": bytes_to_hex(root_digest) if root_digest is not None else None,
                    "leaves": [
                        {"label": b.label, "digest": bytes_to_hex(d)}
                        for b, d in zip(blocks, tree.leaves)
                    ],
                },
                indent=2,
            )
        )
        return

    if root_digest is None:
        rprint("[yellow]Merkle tree is empty.[/yellow]")
        return

    table = Table(title=f"Leaves ({tree.leaf_count})")
    table.add_column("#", justify="right")
    table.add_column("Block", style="cyan")
    table.add_column("Digest", style="dim")
    for i, (block, leaf) in enumerate(zip(blocks, tree.leaves)):
        table.add_row(str(i), block.label, bytes_to_hex(leaf))
    rprint(table)
    rprint(f"\n[bold]Merkle root:[/bold] {bytes_to_hex(root_digest)}")


@app.command()
def proof(
    path: Annotated[str, typer.Argument(help="File or directory the tree is built over")],
    index: Annotated[int | None, typer.Option("--index", "-i", help="Leaf index")] = None,
    leaf: Annotated[str | None, typer.Option("--leaf", help="Leaf label (relative path)")] = None,
    chunk_size: Annotated[
        int | None, typer.Option("--chunk-size", min=1, help="Split a single file into blocks of N bytes")
    ] = None,
    out: Annotated[str | None, typer.Option("--out", "-o", help="Write the proof JSON to a file")] = None,
) -> None:
    """Generate an inclusion proof for one leaf."""
    if (index is None) == (leaf is None):
        rprint("[red]Error:[/red] Pass exactly one of --index or --leaf.")
        raise typer.Exit(1)

    blocks = _load_blocks(path, chunk_size)
    if leaf is not None:
        index = find_block(blocks, leaf)
        if index is None:
            rprint(f"[red]No proof available:[/red] no leaf labelled {leaf!r}")
            raise typer.Exit(1)

    tree = _build(blocks)
    siblings = tree.generate_proof(index)
    if siblings is None:
        rprint(f"[red]No proof available:[/red] index {index} out of range ({tree.leaf_count} leaves)")
        raise typer.Exit(1)

    document = {
        "index": index,
        "leaf": blocks[index].label,
        "leaf_digest": bytes_to_hex(tree.leaves[index]),
        "root": bytes_to_hex(tree.root()),
        "proof": proof_to_hex(siblings),
    }
    rendered = json.dumps(document, indent=2)
    if out:
        Path(out).write_text(rendered + "\n")
        rprint(f"[green]Wrote proof:[/green] {out}")
    else:
        typer.echo(rendered)


def _load_proof_file(proof_file: str) -> tuple[list[bytes], bytes]:
    try:
        document = json.loads(Path(proof_file).read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read proof file {proof_file}: {e}") from e

    if not isinstance(document, dict):
        raise ValueError(f"Cannot read proof file {proof_file}: expected a JSON object")
    root_hex = document.get("root")
    siblings = document.get("proof")
    if not isinstance(root_hex, str):
        raise ValueError(f"Cannot read proof file {proof_file}: 'root' must be a hex string")
    if not isinstance(siblings, list) or not all(isinstance(s, str) for s in siblings):
        raise ValueError(f"Cannot read proof file {proof_file}: 'proof' must be a list of hex strings")
    return proof_from_hex(siblings), hex_to_bytes(root_hex)


@app.command()
def verify(
    leaf: Annotated[str, typer.Argument(help="Leaf data file, or literal text with --text")],
    proof_file: Annotated[
        str | None, typer.Option("--proof-file", help="Proof JSON written by 'fsguard proof'")
    ] = None,
    root_hex: Annotated[str | None, typer.Option("--root", help="Trusted root digest (hex)")] = None,
    proof_hex: Annotated[
        list[str] | None, typer.Option("--proof", help="Sibling digest (hex), leaf to root; repeatable")
    ] = None,
    text: Annotated[bool, typer.Option("--text", help="Treat LEAF as a UTF-8 string")] = False,
) -> None:
    """Verify an inclusion proof against a trusted root."""
    if text:
        leaf_data = leaf.encode("utf-8")
    else:
        leaf_path = Path(leaf)
        if not leaf_path.is_file():
            rprint(f"[red]Error:[/red] Not a file: {leaf}")
            raise typer.Exit(1)
        leaf_data = leaf_path.read_bytes()

    try:
        if proof_file is not None:
            siblings, expected_root = _load_proof_file(proof_file)
            # An explicit --root overrides the one stored in the proof file
            if root_hex is not None:
                expected_root = hex_to_bytes(root_hex)
        elif root_hex is not None:
            siblings = proof_from_hex(proof_hex or [])
            expected_root = hex_to_bytes(root_hex)
        else:
            raise ValueError("Pass --proof-file or --root (with --proof entries).")
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if verify_proof(leaf_data, siblings, expected_root, hasher=_hasher()):
        rprint("[green]valid[/green]")
    else:
        rprint("[red]invalid[/red]")
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Benchmark
# ---------------------------------------------------------------------------


@app.command()
def bench(
    size: Annotated[
        list[int] | None, typer.Option("--size", "-s", help="Input size in bytes; repeatable")
    ] = None,
    iterations: Annotated[
        int | None, typer.Option("--iterations", "-n", min=1, help="Calls per engine and size")
    ] = None,
) -> None:
    """Compare throughput of the reference and fast SHA-256 engines."""
    cfg = _get_config().bench
    try:
        results = run_benchmark(
            sizes=size or cfg.sizes,
            iterations=iterations or cfg.iterations,
        )
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="SHA-256 benchmark")
    table.add_column("Engine", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Iterations", justify="right")
    table.add_column("us/call", justify="right")
    table.add_column("MiB/s", justify="right", style="green")
    for r in results:
        table.add_row(
            r.engine,
            f"{r.size} B",
            str(r.iterations),
            f"{r.per_call_us:.1f}",
            f"{r.throughput_mib_s:.2f}",
        )
    rprint(table)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default fsguard.yaml in current directory."""
    target = Path("fsguard.yaml")
    if target.exists() and not force:
        rprint("[yellow]fsguard.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
