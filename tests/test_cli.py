"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import create_minimal_png
from pdf_converter.cli import _build_parser, _format_size, main


class TestFormatSize:
    def test_bytes(self):
        assert _format_size(512) == "512.0 B"

    def test_kilobytes(self):
        assert _format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert _format_size(5 * 1024 * 1024) == "5.0 MB"


class TestParser:
    def test_defaults(self):
        args = _build_parser().parse_args(["images"])

        assert args.inputs == [Path("images")]
        assert args.output is None
        assert args.page_width == 210.0
        assert args.page_height == 297.0
        assert args.margin == 20.0
        assert args.dpi == 300.0
        assert args.title == "Generated PDF"
        assert not args.verbose

    def test_requires_input(self):
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args([])

        assert exc_info.value.code == 2


class TestMain:
    def test_folder(self, tmp_path: Path, capsys):
        folder = tmp_path / "scans"
        folder.mkdir()
        create_minimal_png(path=folder / "a.png")
        create_minimal_png(path=folder / "b.png")
        out = tmp_path / "scans.pdf"

        main([str(folder), "--output", str(out)])

        assert out.read_bytes()[:5] == b"%PDF-"
        assert "Found 2 images" in capsys.readouterr().out

    def test_image_files_with_options(self, tmp_path: Path):
        create_minimal_png(path=tmp_path / "b.png")
        create_minimal_png(path=tmp_path / "a.png")
        out = tmp_path / "out.pdf"

        main([
            str(tmp_path / "b.png"),
            str(tmp_path / "a.png"),
            "-o",
            str(out),
            "--margin",
            "5",
            "--dpi",
            "72",
            "--title",
            "Two Pages",
        ])

        assert b"Two Pages" in out.read_bytes()

    def test_single_image_default_name(self, tmp_path: Path, monkeypatch):
        create_minimal_png(path=tmp_path / "photo.png")
        monkeypatch.chdir(tmp_path)

        main([str(tmp_path / "photo.png")])

        assert (tmp_path / "photo.pdf").exists()

    def test_conversion_error_exits_1(self, tmp_path: Path, capsys):
        folder = tmp_path / "docs"
        folder.mkdir()
        (folder / "notes.txt").write_text("hello")

        with pytest.raises(SystemExit) as exc_info:
            main([str(folder), "-o", str(tmp_path / "out.pdf")])

        assert exc_info.value.code == 1
        assert "No images found" in capsys.readouterr().err
        assert not (tmp_path / "out.pdf").exists()

    def test_missing_image_exits_1(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.png"), "-o", str(tmp_path / "out.pdf")])

        assert exc_info.value.code == 1

    def test_invalid_config_is_usage_error(self, tmp_path: Path):
        create_minimal_png(path=tmp_path / "a.png")

        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "a.png"), "--dpi", "0"])

        assert exc_info.value.code == 2

    def test_oversized_margin_exits_1(self, tmp_path: Path):
        create_minimal_png(path=tmp_path / "a.png")

        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "a.png"), "--margin", "200", "-o", str(tmp_path / "o.pdf")])

        assert exc_info.value.code == 1

    def test_folder_mixed_with_files_is_usage_error(self, tmp_path: Path):
        folder = tmp_path / "scans"
        folder.mkdir()
        create_minimal_png(path=tmp_path / "a.png")

        with pytest.raises(SystemExit) as exc_info:
            main([str(folder), str(tmp_path / "a.png")])

        assert exc_info.value.code == 2
