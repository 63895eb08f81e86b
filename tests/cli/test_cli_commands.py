"""Tests for the overridefromenv CLI: key, resolve, and root options."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from overridefromenv import __version__
from overridefromenv.cli import app

runner = CliRunner()


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "overridefromenv" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "resolve" in result.output
        assert "key" in result.output

    def test_version_constant(self):
        assert __version__.count(".") == 2


class TestKey:
    def test_keys_for_names(self):
        result = runner.invoke(app, ["key", "app", "config-file", "port"])
        assert result.exit_code == 0, result.output
        assert result.output.split() == ["APP_CONFIG_FILE", "APP_PORT"]

    def test_empty_prefix(self):
        result = runner.invoke(app, ["key", "", "bool-test"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "BOOL_TEST"

    def test_prefix_with_separator(self):
        result = runner.invoke(app, ["key", "OVERRIDEFROMENVTEST_", "uint_64-test"])
        assert result.output.strip() == "OVERRIDEFROMENVTEST_UINT_64_TEST"


class TestResolve:
    def _resolve(self, *args: str, env: dict[str, str | None] | None = None):
        return runner.invoke(app, ["resolve", *args], env=env)

    def test_sources_json(self):
        result = self._resolve(
            "--prefix", "APP",
            "--flag", "host=localhost",
            "--flag", "port:int=8080",
            "--flag", "config-file=config.toml",
            "--set", "port=7777",
            "--json",
            env={"APP_PORT": "9090", "APP_CONFIG_FILE": "my-config.toml", "APP_HOST": None},
        )

        assert result.exit_code == 0, result.output
        rows = {row["flag"]: row for row in json.loads(result.stdout)}
        assert rows["host"] == {"flag": "host", "env_key": "APP_HOST", "source": "default", "value": "localhost"}
        assert rows["port"]["source"] == "explicit"
        assert rows["port"]["value"] == "7777"
        assert rows["config-file"]["source"] == "env"
        assert rows["config-file"]["value"] == "my-config.toml"

    def test_table_output(self):
        result = self._resolve("-p", "APP", "-f", "port:int=8080", env={"APP_PORT": "9090"})
        assert result.exit_code == 0, result.output
        assert "APP_PORT" in result.output
        assert "9090" in result.output

    def test_bool_flag_hyphenated(self):
        result = self._resolve(
            "--prefix", "OVERRIDEFROMENVTEST",
            "--flag", "bool-test:bool=true",
            "--json",
            env={"OVERRIDEFROMENVTEST_BOOL_TEST": "false"},
        )
        assert result.exit_code == 0, result.output
        (row,) = json.loads(result.stdout)
        assert row["value"] == "false"
        assert row["source"] == "env"

    def test_conversion_error_exits_1(self):
        result = self._resolve(
            "--prefix", "PREFIX_",
            "--flag", "test:float=0.1",
            env={"PREFIX_TEST": "override"},
        )
        assert result.exit_code == 1
        assert "unable to set flag test" in result.output

    def test_no_flags(self):
        result = self._resolve("--prefix", "APP")
        assert result.exit_code == 0
        assert "No flags" in result.output

    def test_unknown_type(self):
        result = self._resolve("--flag", "port:complex")
        assert result.exit_code == 2

    def test_bad_default(self):
        result = self._resolve("--flag", "port:int=eighty")
        assert result.exit_code == 2

    def test_set_unknown_flag(self):
        result = self._resolve("--flag", "port:int", "--set", "host=x")
        assert result.exit_code == 2

    def test_set_malformed(self):
        result = self._resolve("--flag", "port:int", "--set", "port")
        assert result.exit_code == 2

    def test_duplicate_flag_is_usage_error(self):
        result = self._resolve("--flag", "port:int", "--flag", "port:int")
        assert result.exit_code == 2
        assert isinstance(result.exception, SystemExit)
        assert "duplicate flag" in result.output


class TestSettingsErrors:
    def test_invalid_log_level_exits_1(self):
        result = runner.invoke(app, ["key", "APP", "port"], env={"OVERRIDEFROMENV_LOG_LEVEL": "LOUD"})
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid settings" in result.output
