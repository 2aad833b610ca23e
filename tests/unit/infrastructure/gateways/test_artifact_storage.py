"""Tests for LocalArtifactStorage."""

from pathlib import Path
from unittest.mock import MagicMock

from spfx_doctor.infrastructure.gateways.artifact_storage_gateway import LocalArtifactStorage
from spfx_doctor.infrastructure.gateways.filesystem_gateway import FileSystemGateway


def test_write_creates_parent_folders(tmp_path: Path) -> None:
    storage = LocalArtifactStorage(base_path=str(tmp_path), filesystem=FileSystemGateway())

    written = storage.write_artifact(".tours/validation.tour", '{"steps": []}')

    target = tmp_path / ".tours" / "validation.tour"
    assert written == str(target)
    assert target.read_text(encoding="utf-8") == '{"steps": []}'


def test_write_overwrites_existing(tmp_path: Path) -> None:
    storage = LocalArtifactStorage(base_path=str(tmp_path), filesystem=FileSystemGateway())
    storage.write_artifact("report.md", "old")
    storage.write_artifact("report.md", "new")

    assert (tmp_path / "report.md").read_text(encoding="utf-8") == "new"


def test_top_level_key_does_not_create_folders() -> None:
    fs = MagicMock()
    fs.join_path.side_effect = lambda *p: "/".join(p)
    storage = LocalArtifactStorage(base_path="/project", filesystem=fs)

    storage.write_artifact("validation.tour", "x")

    fs.make_dirs.assert_not_called()
    fs.write_text.assert_called_once_with("/project/validation.tour", "x", encoding="utf-8")
