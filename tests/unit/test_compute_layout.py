"""Unit tests for the batch layout script."""

import json
from pathlib import Path

import pytest

from scripts.compute_layout import main


def write_snapshot(path: Path, connections: list[dict]) -> Path:
    path.write_text(
        json.dumps(
            {
                "nodes": [{"id": "A", "title": "Basics"}, {"id": "B", "title": "React"}],
                "connections": connections,
            }
        ),
        encoding="utf-8",
    )
    return path


class TestComputeLayoutScript:
    """Tests for compute_layout exit codes and output."""

    def test_prints_layout(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a valid snapshot is laid out and printed as JSON."""
        snapshot = write_snapshot(
            tmp_path / "roadmap.json",
            [{"id": "ab", "fromNodeId": "A", "toNodeId": "B"}],
        )

        assert main([str(snapshot), "--orientation", "LR"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["orientation"] == "LR"
        assert {n["id"]: n["rank"] for n in data["nodes"]} == {"A": 0, "B": 1}

    def test_writes_output_file(self, tmp_path: Path) -> None:
        snapshot = write_snapshot(tmp_path / "roadmap.json", [])
        output = tmp_path / "layout.json"

        assert main([str(snapshot), "-o", str(output)]) == 0
        assert len(json.loads(output.read_text(encoding="utf-8"))["nodes"]) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.json")]) == 1

    def test_dangling_connection(self, tmp_path: Path) -> None:
        snapshot = write_snapshot(
            tmp_path / "roadmap.json",
            [{"id": "ax", "fromNodeId": "A", "toNodeId": "ghost"}],
        )
        assert main([str(snapshot)]) == 2

    def test_strength_out_of_range(self, tmp_path: Path) -> None:
        """Test an invalid field value is a rejected snapshot, not a crash."""
        snapshot = write_snapshot(
            tmp_path / "roadmap.json",
            [{"id": "ab", "fromNodeId": "A", "toNodeId": "B", "strength": 5}],
        )
        assert main([str(snapshot)]) == 2

    def test_missing_endpoint(self, tmp_path: Path) -> None:
        snapshot = write_snapshot(tmp_path / "roadmap.json", [{"id": "ab", "fromNodeId": "A"}])
        assert main([str(snapshot)]) == 2

    def test_malformed_json(self, tmp_path: Path) -> None:
        snapshot = tmp_path / "roadmap.json"
        snapshot.write_text("{not json", encoding="utf-8")
        assert main([str(snapshot)]) == 2
