"""Main CLI entry point for routedns."""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from routedns.core.models import RouteKind, SourceConfig

# Create the main app
app = typer.Typer(
    name="routedns",
    help="DNS endpoints from Traefik IngressRoute, IngressRouteTCP and IngressRouteUDP resources",
    no_args_is_help=True,
)

console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


class RuleKind(str, Enum):
    """Kinds whose routes carry match expressions."""

    HTTP = "http"
    TCP = "tcp"


# Global options stored in context
class GlobalOptions:
    def __init__(self):
        self.output: OutputFormat = OutputFormat.TABLE
        self.verbose: bool = False
        self.debug: bool = False
        self.kubeconfig: Optional[Path] = None
        self.context: Optional[str] = None


def _source_config(
    namespace: str,
    selector: str,
    kinds: Optional[List[RouteKind]],
    ignore_hostname_annotation: bool,
    **extra,
) -> SourceConfig:
    values = dict(
        namespace=namespace,
        selector=selector,
        ignore_hostname_annotation=ignore_hostname_annotation,
        **{k: v for k, v in extra.items() if v is not None},
    )
    if kinds:
        values["enabled_kinds"] = kinds
    return SourceConfig(**values)


# ============================================================================
# Endpoint Commands
# ============================================================================


@app.command("endpoints")
def endpoints(
    ctx: typer.Context,
    namespace: str = typer.Option("", "--namespace", "-n", help="Namespace, empty for all"),
    selector: str = typer.Option(
        "", "--selector", "-l", help="Selector matched against annotations"
    ),
    kinds: Optional[List[RouteKind]] = typer.Option(
        None, "--kind", "-k", help="Kinds to list (repeatable)"
    ),
    api_group: str = typer.Option("traefik.containo.us", "--api-group", help="Traefik CRD group"),
    api_version: str = typer.Option("v1alpha1", "--api-version", help="Traefik CRD version"),
    ignore_hostname_annotation: bool = typer.Option(
        False, "--ignore-hostname-annotation", help="Only use hosts from route rules"
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Deadline in seconds"),
):
    """List endpoints derived from routing objects in the cluster."""
    from routedns.cli.commands.endpoints import list_endpoints

    config = _source_config(
        namespace,
        selector,
        kinds,
        ignore_hostname_annotation,
        api_group=api_group,
        api_version=api_version,
        timeout=timeout,
    )
    asyncio.run(list_endpoints(config, ctx.obj))


@app.command("render")
def render(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(..., help="Manifest files (YAML or JSON)"),
    namespace: str = typer.Option("", "--namespace", "-n", help="Namespace, empty for all"),
    selector: str = typer.Option(
        "", "--selector", "-l", help="Selector matched against annotations"
    ),
    kinds: Optional[List[RouteKind]] = typer.Option(
        None, "--kind", "-k", help="Kinds to render (repeatable)"
    ),
    ignore_hostname_annotation: bool = typer.Option(
        False, "--ignore-hostname-annotation", help="Only use hosts from route rules"
    ),
):
    """Render endpoints from manifest files without a cluster."""
    from routedns.cli.commands.endpoints import render_manifests

    config = _source_config(namespace, selector, kinds, ignore_hostname_annotation)
    asyncio.run(render_manifests(files, config, ctx.obj))


@app.command("parse-rule")
def parse_rule(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Match expression, e.g. Host(`a.example.com`)"),
    kind: RuleKind = typer.Option(RuleKind.HTTP, "--kind", "-k", help="Route kind"),
):
    """Show the hostnames extracted from a match expression."""
    from routedns.cli.commands.endpoints import show_rule_hosts

    show_rule_hosts(expression, RouteKind(kind.value), ctx.obj)


# ============================================================================
# Version Command
# ============================================================================


@app.command("version")
def version():
    """Show version information."""
    from routedns import __version__

    console.print(f"routedns version {__version__}")


# ============================================================================
# Main Callback (Global Options)
# ============================================================================


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=debug)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--output", "-o", help="Output format"
    ),
    kubeconfig: Optional[Path] = typer.Option(
        None, "--kubeconfig", help="Path to kubeconfig"
    ),
    context: Optional[str] = typer.Option(None, "--context", help="Kubeconfig context"),
):
    """routedns - DNS endpoints from Traefik routing resources."""
    ctx.ensure_object(GlobalOptions)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.output = output
    ctx.obj.kubeconfig = kubeconfig
    ctx.obj.context = context
    _configure_logging(verbose, debug)


if __name__ == "__main__":
    app()
