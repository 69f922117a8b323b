"""Tests for the mdsite CLI (build, serve, config)."""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from mdsite.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config resolution away from the real cwd and home directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
    return work


# ---------------------------------------------------------------------------
# build
# ---------------------------------------------------------------------------


class TestBuildCommand:
    def test_build_writes_site(self, docs_tree):
        result = runner.invoke(app, ["build", str(docs_tree)])
        assert result.exit_code == 0, result.output
        assert "Site Build" in result.output
        assert "Pages" in result.output
        assert (docs_tree / "html_output" / "index.html").is_file()
        assert (docs_tree / "html_output" / "guide" / "1-intro.html").is_file()

    def test_build_clean(self, docs_tree):
        stale = docs_tree / "html_output" / "stale.html"
        stale.parent.mkdir()
        stale.write_text("old")
        result = runner.invoke(app, ["build", str(docs_tree), "--clean"])
        assert result.exit_code == 0, result.output
        assert not stale.exists()

    def test_build_missing_argument(self):
        result = runner.invoke(app, ["build"])
        assert result.exit_code == 2

    def test_build_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["build", str(tmp_path / "nowhere")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_build_uses_config_file(self, docs_tree, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("output:\n  dir_name: public\n")
        result = runner.invoke(app, ["--config", str(cfg), "build", str(docs_tree)])
        assert result.exit_code == 0, result.output
        assert (docs_tree / "public" / "index.html").is_file()

    def test_bad_config_path(self, docs_tree):
        result = runner.invoke(app, ["--config", "missing.yaml", "build", str(docs_tree)])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_config_values(self, docs_tree, isolated_cwd):
        (isolated_cwd / "mdsite.yaml").write_text("server:\n  port: -1\n")
        result = runner.invoke(app, ["build", str(docs_tree)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


class TestServeCommand:
    def test_serve_builds_then_serves(self, docs_tree):
        server = MagicMock()
        server.server_address = ("127.0.0.1", 8123)
        server.serve_forever.side_effect = KeyboardInterrupt
        with patch("mdsite.server.create_server", return_value=server) as create:
            result = runner.invoke(app, ["serve", str(docs_tree), "--port", "8123"])
        assert result.exit_code == 0, result.output
        create.assert_called_once_with(docs_tree.resolve() / "html_output", "127.0.0.1", 8123)
        server.server_close.assert_called_once()
        assert "Server stopped" in result.output
        assert (docs_tree / "html_output" / "index.html").is_file()

    def test_serve_bind_failure(self, docs_tree):
        with patch("mdsite.server.create_server", side_effect=OSError("Address already in use")):
            result = runner.invoke(app, ["serve", str(docs_tree)])
        assert result.exit_code == 1
        assert "could not bind" in result.output

    def test_serve_with_watch_starts_and_stops_watcher(self, docs_tree):
        server = MagicMock()
        server.server_address = ("127.0.0.1", 8080)
        server.serve_forever.side_effect = KeyboardInterrupt
        with patch("mdsite.server.create_server", return_value=server), \
             patch("mdsite.site.watcher.SiteWatcher") as watcher_cls:
            result = runner.invoke(app, ["serve", str(docs_tree), "--watch"])
        assert result.exit_code == 0, result.output
        watcher_cls.return_value.start.assert_called_once()
        watcher_cls.return_value.stop.assert_called_once()


class TestBareSourceDir:
    def _server(self):
        server = MagicMock()
        server.server_address = ("127.0.0.1", 8080)
        server.serve_forever.side_effect = KeyboardInterrupt
        return server

    def test_source_dir_alone_builds_and_serves(self, docs_tree):
        server = self._server()
        with patch("mdsite.server.create_server", return_value=server) as create:
            result = runner.invoke(app, [str(docs_tree)])
        assert result.exit_code == 0, result.output
        create.assert_called_once_with(docs_tree.resolve() / "html_output", "127.0.0.1", 8080)
        assert (docs_tree / "html_output" / "index.html").is_file()

    def test_source_dir_with_global_config_and_serve_options(self, docs_tree, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("output:\n  dir_name: public\n")
        server = self._server()
        with patch("mdsite.server.create_server", return_value=server) as create:
            result = runner.invoke(app, ["--config", str(cfg), str(docs_tree), "--port", "9001"])
        assert result.exit_code == 0, result.output
        create.assert_called_once_with(docs_tree.resolve() / "public", "127.0.0.1", 9001)

    def test_missing_source_dir_is_an_error(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "nowhere")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_no_arguments_prints_usage(self):
        result = runner.invoke(app, [])
        assert result.exit_code != 0
        assert "Usage" in result.output

    def test_named_commands_still_win(self, docs_tree):
        with patch("mdsite.server.create_server") as create:
            result = runner.invoke(app, ["build", str(docs_tree)])
        assert result.exit_code == 0, result.output
        create.assert_not_called()


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


class TestConfigCommands:
    def test_show_prints_resolved_config(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "html_output" in result.output
        assert "alert_buffer_limit" in result.output

    def test_init_creates_file(self, isolated_cwd):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert (isolated_cwd / "mdsite.yaml").is_file()
        assert "Created" in result.output

    def test_init_refuses_to_overwrite(self, isolated_cwd):
        (isolated_cwd / "mdsite.yaml").write_text("log_level: debug\n")
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (isolated_cwd / "mdsite.yaml").read_text() == "log_level: debug\n"

    def test_init_force_overwrites(self, isolated_cwd):
        (isolated_cwd / "mdsite.yaml").write_text("log_level: debug\n")
        result = runner.invoke(app, ["config", "init", "--force"])
        assert result.exit_code == 0
        assert "html_output" in (isolated_cwd / "mdsite.yaml").read_text()
