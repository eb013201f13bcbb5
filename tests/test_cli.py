"""Tests for the fsguard command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fsguard.cli import app
from fsguard_core.encoding import bytes_to_hex
from fsguard_core.ingest import read_blocks
from fsguard_core.merkle import build_tree, verify_proof

runner = CliRunner()

HELLO_WORLD = "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9"


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch):
    """Keep config resolution away from the real cwd and home directory."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return workdir


# ── fsguard hash ─────────────────────────────────────────────────────


def test_hash_text():
    result = runner.invoke(app, ["hash", "--text", "hello world"])
    assert result.exit_code == 0
    assert result.stdout.strip() == HELLO_WORLD


def test_hash_file_both_engines(tmp_path: Path):
    f = tmp_path / "greeting.txt"
    f.write_bytes(b"hello world")
    fast = runner.invoke(app, ["hash", str(f)])
    ref = runner.invoke(app, ["hash", str(f), "--engine", "reference"])
    assert fast.stdout.strip() == ref.stdout.strip() == HELLO_WORLD


def test_hash_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["hash", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "Not a file" in result.output


def test_hash_unknown_engine():
    result = runner.invoke(app, ["hash", "--text", "x", "--engine", "md5"])
    assert result.exit_code == 1
    assert "Unknown hash engine" in result.output


# ── fsguard root ─────────────────────────────────────────────────────


def test_root_json(project_dir: Path):
    result = runner.invoke(app, ["root", str(project_dir), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)

    blocks = read_blocks(project_dir)
    tree = build_tree([b.data for b in blocks])
    assert data["root"] == bytes_to_hex(tree.root())
    assert [leaf["label"] for leaf in data["leaves"]] == ["README.md", "src/main.py", "src/util.py"]


def test_root_table(project_dir: Path):
    result = runner.invoke(app, ["root", str(project_dir)])
    assert result.exit_code == 0
    assert "Merkle root" in result.output
    assert "README.md" in result.output


def test_root_empty_directory(tmp_path: Path):
    empty = tmp_path / "empty"
    empty.mkdir()
    result = runner.invoke(app, ["root", str(empty)])
    assert result.exit_code == 0
    assert "Merkle tree is empty" in result.output

    as_json = runner.invoke(app, ["root", str(empty), "--json"])
    assert json.loads(as_json.stdout) == {"root": None, "leaves": []}


def test_root_chunked_file(tmp_path: Path):
    f = tmp_path / "data.bin"
    f.write_bytes(b"abcdefghij")
    result = runner.invoke(app, ["root", str(f), "--chunk-size", "4", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert len(data["leaves"]) == 3
    assert data["root"] == bytes_to_hex(build_tree([b"abcd", b"efgh", b"ij"]).root())


def test_root_missing_path(tmp_path: Path):
    result = runner.invoke(app, ["root", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "Error" in result.output


# ── fsguard proof ────────────────────────────────────────────────────


def test_proof_by_index(project_dir: Path):
    result = runner.invoke(app, ["proof", str(project_dir), "--index", "1"])
    assert result.exit_code == 0
    doc = json.loads(result.stdout)
    assert doc["index"] == 1
    assert doc["leaf"] == "src/main.py"
    siblings = [bytes.fromhex(h) for h in doc["proof"]]
    assert verify_proof(b"print('hi')", siblings, bytes.fromhex(doc["root"]))


def test_proof_by_leaf(project_dir: Path):
    result = runner.invoke(app, ["proof", str(project_dir), "--leaf", "src/util.py"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["index"] == 2


def test_proof_out_of_range(project_dir: Path):
    result = runner.invoke(app, ["proof", str(project_dir), "--index", "99"])
    assert result.exit_code == 1
    assert "No proof available" in result.output


def test_proof_unknown_leaf(project_dir: Path):
    result = runner.invoke(app, ["proof", str(project_dir), "--leaf", "nope.py"])
    assert result.exit_code == 1
    assert "No proof available" in result.output


def test_proof_requires_exactly_one_selector(project_dir: Path):
    neither = runner.invoke(app, ["proof", str(project_dir)])
    both = runner.invoke(app, ["proof", str(project_dir), "--index", "0", "--leaf", "README.md"])
    assert neither.exit_code == 1
    assert both.exit_code == 1


# ── fsguard verify ───────────────────────────────────────────────────


def test_proof_file_roundtrip(project_dir: Path, tmp_path: Path):
    out = tmp_path / "proof.json"
    made = runner.invoke(app, ["proof", str(project_dir), "--leaf", "README.md", "--out", str(out)])
    assert made.exit_code == 0
    assert out.is_file()

    result = runner.invoke(app, ["verify", str(project_dir / "README.md"), "--proof-file", str(out)])
    assert result.exit_code == 0
    assert "valid" in result.output
    assert "invalid" not in result.output


def test_verify_detects_tampered_leaf(project_dir: Path, tmp_path: Path):
    out = tmp_path / "proof.json"
    runner.invoke(app, ["proof", str(project_dir), "--leaf", "README.md", "--out", str(out)])
    (project_dir / "README.md").write_text("# Tampered")

    result = runner.invoke(app, ["verify", str(project_dir / "README.md"), "--proof-file", str(out)])
    assert result.exit_code == 1
    assert "invalid" in result.output


def test_verify_inline_scenario(sample_blocks):
    tree = build_tree(sample_blocks)
    args = ["verify", "--text", "block1", "--root", bytes_to_hex(tree.root())]
    for sibling in tree.generate_proof(0):
        args += ["--proof", bytes_to_hex(sibling)]
    result = runner.invoke(app, args)
    assert result.exit_code == 0
    assert "invalid" not in result.output


def test_verify_wrong_root(sample_blocks):
    tree = build_tree(sample_blocks)
    args = ["verify", "--text", "block1", "--root", "00" * 32]
    for sibling in tree.generate_proof(0):
        args += ["--proof", bytes_to_hex(sibling)]
    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "invalid" in result.output


def test_verify_malformed_hex():
    result = runner.invoke(app, ["verify", "--text", "block1", "--root", "zz"])
    assert result.exit_code == 1
    assert "Invalid hex" in result.output


def test_verify_requires_root_or_file():
    result = runner.invoke(app, ["verify", "--text", "block1"])
    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"proof": [], "root": null}',
        '{"proof": [1], "root": "00"}',
        '{"root": "00"}',
        '["not", "an", "object"]',
    ],
)
def test_verify_bad_proof_file(tmp_path: Path, content: str):
    bad = tmp_path / "bad.json"
    bad.write_text(content)
    result = runner.invoke(app, ["verify", "--text", "block1", "--proof-file", str(bad)])
    assert result.exit_code == 1
    assert "Cannot read proof file" in result.output
    assert not isinstance(result.exception, AttributeError)


# ── fsguard bench ────────────────────────────────────────────────────


def test_bench_table():
    result = runner.invoke(app, ["bench", "--size", "64", "--iterations", "2"])
    assert result.exit_code == 0
    assert "reference" in result.output
    assert "fast" in result.output


def test_bench_rejects_zero_iterations():
    result = runner.invoke(app, ["bench", "--size", "64", "--iterations", "0"])
    assert result.exit_code != 0


# ── fsguard config ───────────────────────────────────────────────────


def test_config_init_and_show(isolated: Path):
    created = runner.invoke(app, ["config", "init"])
    assert created.exit_code == 0
    assert (isolated / "fsguard.yaml").is_file()

    again = runner.invoke(app, ["config", "init"])
    assert again.exit_code == 1
    assert "already exists" in again.output

    forced = runner.invoke(app, ["config", "init", "--force"])
    assert forced.exit_code == 0

    shown = runner.invoke(app, ["config", "show"])
    assert shown.exit_code == 0
    assert "engine" in shown.output


def test_config_option_used(tmp_path: Path):
    cfg = tmp_path / "ref.yaml"
    cfg.write_text("hashing:\n  engine: reference\n")
    result = runner.invoke(app, ["--config", str(cfg), "config", "show"])
    assert result.exit_code == 0
    assert "reference" in result.output


def test_invalid_config_file(tmp_path: Path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("log_level: loud\n")
    result = runner.invoke(app, ["--config", str(cfg), "hash", "--text", "x"])
    assert result.exit_code == 1
    assert "Invalid config" in result.output
