"""Typer-based CLI entrypoint for Kubernetes discovery."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from injector import Injector

from k8s_discovery import __version__
from k8s_discovery.args_parser import parse_pairs
from k8s_discovery.configs import load_config
from k8s_discovery.exceptions import K8sDiscoveryError
from k8s_discovery.k8s_provider import K8sProvider


app = typer.Typer(help="Kubernetes pod address discovery", no_args_is_help=True, pretty_exceptions_enable=False)


def _build_injector() -> Injector:
    return Injector()


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
) -> None:
    """Initialize logging before executing any subcommand."""

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    logging.basicConfig(
        level=log_level.upper(),
        format='%(asctime)s %(levelname)s: [%(name)s] %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%SZ',
        handlers=[logging.StreamHandler()],
    )


@app.command("version")
def version() -> None:
    """Print the CLI version."""

    typer.echo(f"k8s-discovery {__version__}")


@app.command("help")
def provider_help() -> None:
    """Print the options understood by the k8s provider."""

    typer.echo(_build_injector().get(K8sProvider).help())


@app.command("addrs")
def addrs(
    args: Optional[List[str]] = typer.Argument(None, help="Discovery options as key=value pairs."),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="YAML file with a 'k8s_discovery' section. Command line options override it.",
    ),
) -> None:
    """Print the discovered addresses separated by spaces."""

    merged: Dict[str, str] = {}
    try:
        if config:
            merged.update(load_config(config).to_args())
        merged.update(parse_pairs(args or []))
        addresses = _build_injector().get(K8sProvider).addrs(merged)
    except K8sDiscoveryError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    typer.echo(" ".join(addresses))
