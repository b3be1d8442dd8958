# tests/test_cli.py
"""Test the saavn command-line interface"""

import json

import pytest
from click.testing import CliRunner

from saavn_client import __version__
from saavn_client.cli import cli


@pytest.fixture
def run(fake_transport, temp_dir, monkeypatch):
    """Invoke the CLI against the fake transport, from an empty directory"""
    for name in ("SAAVN_BASE_URL", "SAAVN_TIMEOUT", "SAAVN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(temp_dir)
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(
            cli,
            ["--log-level", "CRITICAL", "--no-color", *args],
            obj={"transport": fake_transport},
        )

    return invoke


class TestCli:
    """Test CLI commands"""

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_search_songs(self, run, fake_transport):
        fake_transport.responses["search.getResults"] = {"results": [{"id": "s1", "title": "Believer"}]}

        result = run("search", "songs", "believer", "--limit", "5")

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["success"] is True
        assert payload["data"]["total"] == 1
        assert payload["data"]["results"][0]["title"] == "Believer"
        assert fake_transport.params_for("search.getResults")[0]["n"] == "5"

    def test_failure_exits_with_one(self, run, fake_transport):
        fake_transport.responses["content.getAlbumDetails"] = {}

        result = run("--compact", "album", "missing")

        assert result.exit_code == 1
        assert json.loads(result.output) == {"success": False, "message": "Album not found", "code": "NOT_FOUND"}

    def test_link_dispatches_by_type(self, run, fake_transport, raw_song):
        fake_transport.responses["webapi.get"] = {"songs": [raw_song]}

        result = run("link", "https://www.jiosaavn.com/song/believer/KgEpWkBmQFk")

        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["type"] == "song"
        assert fake_transport.params_for("webapi.get")[0]["type"] == "song"

    def test_link_rejects_unknown_urls(self, run, fake_transport):
        result = run("link", "https://example.com/")

        assert result.exit_code == 2
        assert fake_transport.calls == []

    def test_timeout_option(self, run, fake_transport):
        fake_transport.responses["content.getTrending"] = []

        result = run("--timeout", "3", "trending", "--type", "album")

        assert result.exit_code == 0
        params, timeout = fake_transport.calls[0]
        assert timeout == 3.0
        assert params["entity_type"] == "album"

    def test_suggest(self, run, fake_transport):
        result = run("suggest", "K1P9Eu3B", "--limit", "3")

        # createEntityStation answered with a null body
        assert result.exit_code == 1
        assert json.loads(result.output)["code"] == "API"

    def test_missing_config_file(self, run):
        result = run("--config", "does-not-exist.yaml", "trending")
        assert result.exit_code == 2
