"""Tests for the seedprovider CLI."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from seedprovider import __version__
from seedprovider.cli import app
from seedprovider.discovery.resolver import SeedResolver
from seedprovider.exceptions import EndpointLookupError

runner = CliRunner()

QUIET = ["--log-level", "CRITICAL"]


@pytest.fixture
def use_resolver(host_resolver):
    """Route the CLI through a resolver with fake collaborators."""

    def _use(source):
        resolver = SeedResolver(endpoint_source=source, host_resolver=host_resolver)
        return patch("seedprovider.cli.SeedResolver", return_value=resolver)

    return _use


def test_help_command():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Resolve Cassandra seed addresses" in result.stdout


def test_version_command():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"seedprovider {__version__}"


def test_seeds_from_endpoints(use_resolver, make_source, make_endpoints):
    source = make_source(make_endpoints(["10.0.0.1", "10.0.0.2"], ["10.0.0.3"]))

    with use_resolver(source):
        result = runner.invoke(app, [*QUIET, "seeds"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "10.0.0.1,10.0.0.2,10.0.0.3"


def test_seeds_options_override_env(monkeypatch, use_resolver, make_source):
    monkeypatch.setenv("CASSANDRA_SERVICE", "from-env")
    monkeypatch.setenv("POD_NAMESPACE", "env-namespace")
    source = make_source()

    with use_resolver(source):
        result = runner.invoke(app, [*QUIET, "seeds", "--service", "cassandra-peers"])

    assert result.exit_code == 0
    assert source.calls == [("env-namespace", "cassandra-peers")]


def test_seeds_custom_separator(use_resolver, make_source, make_endpoints):
    source = make_source(make_endpoints(["10.0.0.1", "10.0.0.2"]))

    with use_resolver(source):
        result = runner.invoke(app, [*QUIET, "seeds", "--separator", " "])

    assert result.stdout.strip() == "10.0.0.1 10.0.0.2"


def test_seeds_json(use_resolver, make_source):
    source = make_source(error=EndpointLookupError("down"))

    with use_resolver(source):
        result = runner.invoke(app, [*QUIET, "seeds", "--json", "--seeds", "10.0.0.1,10.0.0.2"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "source": "fallback",
        "seeds": ["10.0.0.1", "10.0.0.2"],
        "dropped": 0,
    }


def test_seeds_fatal_misconfiguration_exits_1(use_resolver, make_source):
    """An unresolvable fallback seed exits non-zero and prints no seeds."""
    source = make_source(error=EndpointLookupError("down"))

    with use_resolver(source):
        result = runner.invoke(app, [*QUIET, "seeds", "--seeds", "not-a-real-host,10.0.0.2"])

    assert result.exit_code == 1
    assert "10.0.0.2" not in result.stdout
    assert "not-a-real-host" in result.output


def test_seeds_unconfigured_fallback_exits_1(use_resolver, make_source):
    source = make_source(error=EndpointLookupError("down"))

    with use_resolver(source):
        result = runner.invoke(app, [*QUIET, "seeds"])

    assert result.exit_code == 1


def test_seeds_invalid_settings_exit_1(monkeypatch):
    monkeypatch.setenv("CASSANDRA_SERVICE_NUM_SEEDS", "eight")

    result = runner.invoke(app, [*QUIET, "seeds"])

    assert result.exit_code == 1
    assert "Invalid seed provider settings" in result.output


def test_settings_command(monkeypatch):
    monkeypatch.setenv("POD_NAMESPACE", "storage")
    monkeypatch.setenv("POD_IP", "10.0.0.7")

    result = runner.invoke(app, [*QUIET, "settings"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["namespace"] == "storage"
    assert data["service"] == "cassandra"
    assert data["fallback_spec"] == "10.0.0.7"


def test_unknown_log_level_is_usage_error():
    result = runner.invoke(app, ["--log-level", "LOUD", "version"])

    assert result.exit_code == 2
    assert "Unknown log level" in result.output
