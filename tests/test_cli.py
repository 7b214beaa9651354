"""Tests for CLI commands."""

import json
from pathlib import Path

from typer.testing import CliRunner

from fieldtoc.cli import app

runner = CliRunner()

EXAMPLE = str(Path(__file__).parent.parent / "examples" / "site_content.yaml")
BASE = "https://docs.example.com/node/1"


class TestOutlineCommand:
    """Test the outline command."""

    def test_markdown_output(self) -> None:
        result = runner.invoke(
            app, ["outline", EXAMPLE, "--entity", "node:1", "--format", "markdown"]
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.rstrip("\n").splitlines() == [
            f"- [Requirements]({BASE}#Requirements)",
            f"  - [Hardware]({BASE}#Hardware)",
            f"  - [Software & tools]({BASE}#software)",
            f"- [Downloading]({BASE}#Downloading)",
            f"  - [Mirrors]({BASE}#Mirrors)",
            f"    - [Note on checksums]({BASE}#Note-on-checksums)",
            f"- [Configuring]({BASE}#Configuring)",
            f"- [First run]({BASE}#First-run)",
        ]

    def test_relative_html_output(self) -> None:
        result = runner.invoke(
            app,
            ["outline", EXAMPLE, "--entity", "node:1", "--relative", "--title", "Contents"],
        )

        assert result.exit_code == 0, result.output
        assert '<nav class="table-of-contents">' in result.stdout
        assert "<h2>Contents</h2>" in result.stdout
        assert '<a href="#Requirements">Requirements</a>' in result.stdout

    def test_json_output(self) -> None:
        result = runner.invoke(app, ["outline", EXAMPLE, "-e", "node:2", "-f", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["root"] == "node:2"
        assert data["outline"] == [
            {
                "label": "Version 2.0",
                "id": "Version-2.0",
                "level": 0,
                "children": [
                    {
                        "label": "Breaking changes",
                        "id": "Breaking-changes",
                        "level": 1,
                        "children": [],
                    }
                ],
            }
        ]

    def test_explicit_config(self, fixtures_dir: Path) -> None:
        result = runner.invoke(
            app,
            [
                "--config",
                str(fixtures_dir / "config.yaml"),
                "outline",
                EXAMPLE,
                "--entity",
                "node:1",
                "--format",
                "markdown",
            ],
        )

        # That config only scans text_long and does not descend into paragraphs
        assert result.exit_code == 0, result.output
        assert "Requirements" not in result.stdout
        assert "Downloading" not in result.stdout

    def test_output_file(self, tmp_path: Path) -> None:
        output = tmp_path / "toc.html"
        result = runner.invoke(
            app, ["outline", EXAMPLE, "--entity", "node:1", "--output", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert f"Table of contents written to {output}" in result.stdout
        assert "Note on checksums" in output.read_text(encoding="utf-8")

    def test_verbose_logs_headings(self) -> None:
        result = runner.invoke(
            app, ["-v", "1", "outline", EXAMPLE, "--entity", "node:2", "-f", "markdown"]
        )

        assert result.exit_code == 0, result.output
        assert "Generating table of contents for node:2" in result.output

    def test_unknown_entity(self) -> None:
        result = runner.invoke(app, ["outline", EXAMPLE, "--entity", "node:404"])

        assert result.exit_code == 1
        assert "Entity 'node:404' not found" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["outline", str(tmp_path / "nope.yaml"), "-e", "node:1"])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_config(self, fixtures_dir: Path) -> None:
        result = runner.invoke(
            app,
            ["-c", str(fixtures_dir / "invalid_config.yaml"), "outline", EXAMPLE, "-e", "node:1"],
        )

        assert result.exit_code == 1
        assert "Invalid config" in result.output


class TestAnchorsCommand:
    """Test the anchors command."""

    def test_rewrites_listed(self) -> None:
        result = runner.invoke(app, ["anchors", EXAMPLE, "--entity", "node:1"])

        assert result.exit_code == 0, result.output
        assert "node:1 body[0]" in result.stdout
        assert '<a id="Requirements"></a><h2>Requirements</h2>' in result.stdout
        assert '<h3 id="software">' in result.stdout
        assert "paragraph:10 field_title[0]\nDownloading" in result.stdout
        assert "paragraph:12 field_text[0]" in result.stdout

    def test_no_headings(self, tmp_path: Path) -> None:
        content = tmp_path / "content.yaml"
        content.write_text(
            "entities:\n  - {type: node, id: 1, fields: {body: plain}}\n", encoding="utf-8"
        )

        result = runner.invoke(app, ["anchors", str(content), "--entity", "node:1"])

        assert result.exit_code == 0, result.output
        assert "No headings found" in result.stdout


class TestRenderFieldCommand:
    """Test the render-field command."""

    def test_field_targeting_other_page(self) -> None:
        result = runner.invoke(
            app, ["render-field", EXAMPLE, "--entity", "node:2", "--field", "field_toc"]
        )

        assert result.exit_code == 0, result.output
        assert f'<h2><a href="{BASE}">Installation steps</a></h2>' in result.stdout
        assert f'<a href="{BASE}#Mirrors">Mirrors</a>' in result.stdout

    def test_field_on_same_page(self) -> None:
        result = runner.invoke(
            app, ["render-field", EXAMPLE, "--entity", "node:1", "--field", "field_toc"]
        )

        assert result.exit_code == 0, result.output
        assert "<h2>On this page</h2>" in result.stdout
        assert '<a href="#Downloading">Downloading</a>' in result.stdout

    def test_empty_field(self) -> None:
        result = runner.invoke(
            app, ["render-field", EXAMPLE, "--entity", "node:1", "--field", "field_nothing"]
        )

        assert result.exit_code == 1
        assert "has no values" in result.output
