"""
Tests for the command-line entry point.
"""

import json
import zipfile

import pytest

from titlepdf.cli import main


@pytest.fixture
def inputs(tmp_path):
    content = tmp_path / "content.txt"
    content.write_text("Hello world\nSecond line", encoding="utf-8")
    titles = tmp_path / "titles.txt"
    titles.write_text("Coinbase Customer Service\nRobinhood Support\n", encoding="utf-8")
    return content, titles


class TestCli:
    """Tests for titlepdf.cli.main()."""

    def test_writes_archive(self, inputs, tmp_path):
        content, titles = inputs
        out = tmp_path / "out"

        code = main(["--content", str(content), "--titles", str(titles), "--output", str(out)])

        assert code == 0
        with zipfile.ZipFile(out / "all_pdfs.zip") as zf:
            assert zf.namelist() == [
                "pdfs/coinbase-customer-service.pdf",
                "pdfs/robinhood-support.pdf",
            ]

    def test_separate_writes_each_pdf(self, inputs, tmp_path):
        content, titles = inputs
        names = tmp_path / "names.txt"
        names.write_text("cb\nrh", encoding="utf-8")
        out = tmp_path / "out"

        code = main([
            "--content", str(content),
            "--titles", str(titles),
            "--filenames", str(names),
            "--output", str(out),
            "--separate",
        ])

        assert code == 0
        assert (out / "cb.pdf").read_bytes().startswith(b"%PDF-")
        assert (out / "rh.pdf").exists()

    def test_config_file_changes_archive_layout(self, inputs, tmp_path):
        content, titles = inputs
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"archive_folder": "docs", "archive_name": "bundle.zip"}))

        code = main([
            "--content", str(content),
            "--titles", str(titles),
            "--config", str(config),
            "--output", str(tmp_path),
        ])

        assert code == 0
        with zipfile.ZipFile(tmp_path / "bundle.zip") as zf:
            assert all(n.startswith("docs/") for n in zf.namelist())

    def test_when_titles_empty_then_exit_code_1(self, inputs, tmp_path):
        content, _ = inputs
        titles = tmp_path / "empty.txt"
        titles.write_text("\n\n", encoding="utf-8")

        code = main(["--content", str(content), "--titles", str(titles), "--output", str(tmp_path)])

        assert code == 1
        assert not (tmp_path / "all_pdfs.zip").exists()

    def test_when_input_missing_then_exit_code_2(self, tmp_path):
        code = main(["--content", str(tmp_path / "nope.txt"), "--titles", str(tmp_path / "nope.txt")])

        assert code == 2

    def test_when_config_font_unknown_then_exit_code_2(self, inputs, tmp_path):
        content, titles = inputs
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"geometry": {"font_name": "NoSuchFont"}}))

        code = main([
            "--content", str(content),
            "--titles", str(titles),
            "--config", str(config),
            "--output", str(tmp_path),
        ])

        assert code == 2
        assert not (tmp_path / "all_pdfs.zip").exists()

    def test_when_output_not_writable_then_exit_code_2(self, inputs, tmp_path):
        content, titles = inputs
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        code = main(["--content", str(content), "--titles", str(titles), "--output", str(blocker)])

        assert code == 2
