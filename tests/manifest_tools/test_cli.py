"""
CLI tests.

Drives the Typer app through ``CliRunner``; HTTP commands are pointed at the
per-test mocked site by patching the client factory the CLI uses.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ManifestTools.cli import app
from tests.fixtures.http_mocking import html_page

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in list(os.environ):
        if key.startswith("MANIFEST_TOOLS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_site(mock_site, monkeypatch):
    monkeypatch.setattr(
        "ManifestTools.cli.build_http_client", lambda settings=None: mock_site.client
    )
    return mock_site


class TestFetch:
    def test_declared_manifest_is_printed(self, cli_site) -> None:
        cli_site.route("/", content=html_page('<link rel="manifest" href="manifest.json">'))
        cli_site.route("/manifest.json", content={"name": "Notes", "start_url": "/app"})

        result = runner.invoke(app, ["fetch", cli_site.url("/")])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"name": "Notes", "start_url": "/app"}

    def test_site_without_manifest_writes_default(self, cli_site, tmp_path: Path) -> None:
        cli_site.route("/", content=html_page())
        out = tmp_path / "default.json"

        # The "no manifest declared" warning goes to stderr; read the file instead.
        result = runner.invoke(app, ["fetch", cli_site.url("/"), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8")) == {"start_url": cli_site.url("/")}

    def test_convert_while_fetching(self, cli_site, tmp_path: Path) -> None:
        cli_site.route("/", content=html_page('<link rel="manifest" href="manifest.json">'))
        cli_site.route("/manifest.json", content={"name": "Notes", "start_url": "/app"})
        out = tmp_path / "chrome.json"

        result = runner.invoke(app, ["fetch", cli_site.url("/"), "-f", "chromeOS", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8")) == {
            "name": "Notes",
            "app": {"launch": {"web_url": "/app"}},
        }

    def test_default_format_comes_from_config(self, cli_site, tmp_path: Path) -> None:
        cli_site.route("/", content=html_page())
        config = tmp_path / "config.yaml"
        config.write_text("default_format: chromeOS\n", encoding="utf-8")
        out = tmp_path / "chrome.json"

        result = runner.invoke(
            app, ["--config", str(config), "fetch", cli_site.url("/"), "-o", str(out)]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8")) == {
            "app": {"launch": {"web_url": cli_site.url("/")}}
        }

    def test_unreachable_site_exits_with_error(self, cli_site) -> None:
        result = runner.invoke(app, ["fetch", cli_site.url("/notfound")])

        assert result.exit_code == 1
        assert "Failed to retrieve manifest from site." in result.output

    def test_invalid_url_exits_with_hint(self, cli_site) -> None:
        result = runner.invoke(app, ["fetch", "invalid url"])

        assert result.exit_code == 1
        assert "http://" in result.output
        assert cli_site.requests == []


class TestConvert:
    def test_convert_to_stdout(self, assets_dir: Path) -> None:
        result = runner.invoke(app, ["convert", str(assets_dir / "manifest.json"), "-f", "chromeOS"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["app"]["launch"]["web_url"] == "http://www.contoso.com/"

    def test_convert_from_chrome_os_to_file(self, assets_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "w3c.json"

        result = runner.invoke(
            app,
            [
                "convert",
                str(assets_dir / "chromeos_manifest.json"),
                "--from",
                "chromeOS",
                "-f",
                "w3c",
                "-o",
                str(out),
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["start_url"] == "http://www.contoso.com/"

    def test_same_format_is_a_copy(self, assets_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "same.json"

        result = runner.invoke(
            app, ["convert", str(assets_dir / "manifest.json"), "-f", "W3C", "-o", str(out)]
        )

        assert result.exit_code == 0, result.output
        original = json.loads((assets_dir / "manifest.json").read_text(encoding="utf-8"))
        assert json.loads(out.read_text(encoding="utf-8")) == original

    def test_unknown_format(self, assets_dir: Path) -> None:
        result = runner.invoke(app, ["convert", str(assets_dir / "manifest.json"), "-f", "android"])

        assert result.exit_code == 1
        assert "Manifest format is not recognized." in result.output

    def test_invalid_file(self, assets_dir: Path) -> None:
        result = runner.invoke(app, ["convert", str(assets_dir / "invalid.json"), "-f", "w3c"])

        assert result.exit_code == 1
        assert "Invalid manifest format" in result.output

    def test_missing_output_directory(self, assets_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "missing" / "out.json"

        result = runner.invoke(
            app, ["convert", str(assets_dir / "manifest.json"), "-f", "w3c", "-o", str(out)]
        )

        assert result.exit_code == 1
        assert not out.exists()


class TestLocate:
    def test_prints_resolved_url(self, cli_site) -> None:
        cli_site.route("/app/", content=html_page('<link rel="manifest" href="site.webmanifest">'))

        result = runner.invoke(app, ["locate", cli_site.url("/app/")])

        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == cli_site.url("/app/site.webmanifest")

    def test_reports_missing_manifest(self, cli_site) -> None:
        cli_site.route("/", content=html_page())

        result = runner.invoke(app, ["locate", cli_site.url("/")])

        assert result.exit_code == 0, result.output
        assert "No manifest declared" in result.output


class TestGlobalOptions:
    def test_invalid_config_exits_with_code_2(self, tmp_path: Path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("http:\n  timeout_read_s: -1\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config), "schema"])

        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_config_from_environment(self, tmp_path: Path, monkeypatch) -> None:
        config = tmp_path / "config.json"
        config.write_text('{"output": {"indent": 4}}', encoding="utf-8")
        monkeypatch.setenv("MANIFEST_TOOLS_CONFIG", str(config))
        source = tmp_path / "in.json"
        source.write_text('{"name": "A"}', encoding="utf-8")

        result = runner.invoke(app, ["convert", str(source), "-f", "w3c"])

        assert result.exit_code == 0, result.output
        assert result.stdout == '{\n    "name": "A"\n}\n'


def test_schema_to_file(tmp_path: Path) -> None:
    out = tmp_path / "schema.json"

    result = runner.invoke(app, ["schema", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))["title"] == "ManifestToolsConfig"
