"""Typer-based CLI for resolving Cassandra seeds."""

import json
from typing import Any

import typer

from . import __version__
from .config import load_settings
from .discovery.resolver import EXIT_MISCONFIGURED, FatalMisconfiguration, SeedResolver
from .exceptions import ConfigurationError
from .logging import configure_logging

app = typer.Typer(
    help="Resolve Cassandra seed addresses from Kubernetes endpoints.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


def _overrides(**options: Any) -> dict[str, Any]:
    """Keep only options given on the command line."""
    return {name: value for name, value in options.items() if value is not None}


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="SEEDPROVIDER_LOG_LEVEL",
        help="Logging level. Logs go to stderr.",
    ),
) -> None:
    """Configure logging before running a command."""
    try:
        configure_logging(level=log_level)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


@app.command("version")
def version() -> None:
    """Print the CLI version."""
    typer.echo(f"seedprovider {__version__}")


@app.command("seeds")
def seeds(
    service: str | None = typer.Option(None, "--service", "-s", help="Service to query (CASSANDRA_SERVICE)."),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Namespace of the service (POD_NAMESPACE)."),
    fallback_seeds: str | None = typer.Option(None, "--seeds", help="Comma-separated fallback seeds (CASSANDRA_SEEDS)."),
    pod_ip: str | None = typer.Option(None, "--pod-ip", help="Last-resort fallback seed (POD_IP)."),
    num_seeds: int | None = typer.Option(None, "--num-seeds", min=0, help="Cap on seeds from endpoints, 0 for none."),
    kubeconfig: str | None = typer.Option(None, "--kubeconfig", help="Kubeconfig file for out-of-cluster use."),
    separator: str = typer.Option(",", "--separator", help="Separator between printed seeds."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Resolve seeds and print them. Exits 1 if the fallback seeds are unusable."""
    try:
        settings = load_settings(
            **_overrides(
                service=service,
                namespace=namespace,
                seeds=fallback_seeds,
                pod_ip=pod_ip,
                num_seeds=num_seeds,
                kubeconfig=kubeconfig,
            )
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_MISCONFIGURED) from e

    result = SeedResolver().resolve(settings)
    if isinstance(result, FatalMisconfiguration):
        typer.echo(f"Error: {result.reason}", err=True)
        raise typer.Exit(code=EXIT_MISCONFIGURED)

    if as_json:
        typer.echo(json.dumps(result.to_dict()))
    else:
        typer.echo(separator.join(result.hosts))


@app.command("settings")
def show_settings() -> None:
    """Print the effective discovery parameters as JSON."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_MISCONFIGURED) from e

    typer.echo(json.dumps(settings.describe(), indent=2, sort_keys=True))


def run() -> None:
    """Console script entry point."""
    app()
