"""CLI tests with click's CliRunner."""

import pytest
from click.testing import CliRunner

from awair_exporter import main as main_module
from awair_exporter.main import cli
from awair_exporter.mock.fake_awair_device import make_handler


@pytest.fixture
def runner():
    # click 8.2 dropped mix_stderr; stderr is always captured separately there
    try:
        return CliRunner(mix_stderr=False)
    except TypeError:
        return CliRunner()


def test_missing_hostname_is_usage_error(runner):
    result = runner.invoke(cli, [])
    assert result.exit_code == 2
    assert "Usage:" in result.stderr


def test_extra_positional_is_usage_error(runner):
    result = runner.invoke(cli, ["10.0.0.5", "10.0.0.6"])
    assert result.exit_code == 2
    assert "Usage:" in result.stderr


def test_bad_listen_address_is_usage_error(runner):
    result = runner.invoke(cli, ["-l", "nope", "10.0.0.5"])
    assert result.exit_code == 2


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "awair-exporter" in result.output


def test_once_prints_reading(runner, device):
    host = device(make_handler({"score": 88, "co2": 612}))
    result = runner.invoke(cli, ["--once", host])

    assert result.exit_code == 0, result.output
    assert "awair_awair_score" in result.output
    assert "612" in result.output


def test_once_fails_cleanly_when_unreachable(runner, dead_host):
    result = runner.invoke(cli, ["--once", "--timeout", "1", dead_host])
    assert result.exit_code == 1


def test_serve_gets_parsed_config(runner, monkeypatch):
    seen = []
    monkeypatch.setattr(main_module, "serve", seen.append)

    result = runner.invoke(cli, ["-l", "127.0.0.1:9101", "--timeout", "2.5", "--ignore-status", "awair"])

    assert result.exit_code == 0, result.output
    (config,) = seen
    assert config.host == "awair"
    assert config.bind == ("127.0.0.1", 9101)
    assert config.timeout_seconds == 2.5
    assert config.check_status is False


def test_listen_address_from_env(runner, monkeypatch):
    seen = []
    monkeypatch.setattr(main_module, "serve", seen.append)

    result = runner.invoke(cli, ["awair"], env={"AWAIR_LISTEN_ADDRESS": ":9200"})

    assert result.exit_code == 0, result.output
    assert seen[0].bind == ("0.0.0.0", 9200)


def test_namespace_and_verbose_reach_config(runner, monkeypatch):
    seen = []
    monkeypatch.setattr(main_module, "serve", seen.append)

    result = runner.invoke(cli, ["--namespace", "office", "--verbose", "awair"])

    assert result.exit_code == 0, result.output
    assert seen[0].namespace == "office"
    assert seen[0].verbose is True


def test_namespace_from_env(runner, monkeypatch):
    seen = []
    monkeypatch.setattr(main_module, "serve", seen.append)

    result = runner.invoke(cli, ["awair"], env={"AWAIR_NAMESPACE": "lab"})

    assert result.exit_code == 0, result.output
    assert seen[0].namespace == "lab"


def test_bad_namespace_is_usage_error(runner):
    result = runner.invoke(cli, ["--namespace", "bad-name", "10.0.0.5"])
    assert result.exit_code == 2


def test_once_uses_namespace(runner, device):
    host = device(make_handler({"score": 88}))
    result = runner.invoke(cli, ["--once", "--namespace", "office", host])

    assert result.exit_code == 0, result.output
    assert "office_awair_score" in result.output
