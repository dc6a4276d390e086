"""
Command-line script tests:
- Batch generation keeps every task's output, even for a repeated radius
"""

import importlib.util
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import PROJECT_ROOT


def _load_script(name):
    path = Path(PROJECT_ROOT) / "scripts" / f"{name}.py"
    module_spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def generate_puzzles(tmp_path, monkeypatch):
    module = _load_script("generate_puzzles")
    # Keep ensure_dirs() out of the project tree
    monkeypatch.setattr(module.config, "PUZZLES_DIR", tmp_path / "data" / "puzzles")
    monkeypatch.setattr(module.config, "RESULTS_LOGS_DIR", tmp_path / "results" / "logs")
    return module


def test_batch_with_repeated_radius_keeps_all_puzzles(generate_puzzles, tmp_path):
    out = tmp_path / "out"
    result = CliRunner().invoke(generate_puzzles.main, [
        "--batch", "1:2", "--batch", "1:3", "-o", str(out), "--seed", "1",
    ])
    assert result.exit_code == 0, result.output
    assert "Successfully generated 5/5 puzzles" in result.output

    files = sorted((out / "radius_1").glob("*.json"))
    assert len(files) == 5
    assert len({f.name for f in files}) == 5

    summary_path = next(out.glob("generation_summary_*.json"))
    summary = json.loads(summary_path.read_text())
    assert summary['total_generated'] == 5
    assert summary['configurations'] == [
        {'radius': 1, 'requested': 2, 'generated': 2},
        {'radius': 1, 'requested': 3, 'generated': 3},
    ]


def test_batch_rejects_malformed_task(generate_puzzles, tmp_path):
    result = CliRunner().invoke(generate_puzzles.main, ["--batch", "1-2", "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert "format: RADIUS:COUNT" in result.output
