"""Endpoint listing commands."""

import json
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from routedns.core.errors import RouteDNSError
from routedns.core.k8s.manifests import ManifestRoutingObjectLister
from routedns.core.models import DecodeFailure, Endpoint, RouteKind, SourceConfig
from routedns.core.source import TraefikSource, create_source
from routedns.core.traefik.rules import parse_hostnames

console = Console()


def _output(options) -> str:
    return options.output.value if options is not None else "table"


def print_endpoints(endpoints: list[Endpoint], options, title: str = "Endpoints") -> None:
    """Print endpoints in the selected output format."""
    output = _output(options)

    if output == "json":
        console.print_json(json.dumps([e.to_dict() for e in endpoints]))
        return
    if output == "yaml":
        console.print(
            yaml.safe_dump([e.to_dict() for e in endpoints], sort_keys=False),
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    if not endpoints:
        console.print("[yellow]No endpoints found[/]")
        return

    table = Table(title=title)
    table.add_column("DNS Name", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Targets", style="green")
    table.add_column("TTL", justify="right")
    table.add_column("Resource", style="dim")

    for endpoint in endpoints:
        table.add_row(
            endpoint.dns_name,
            endpoint.record_type.value,
            ", ".join(endpoint.targets),
            str(endpoint.record_ttl) if endpoint.record_ttl else "-",
            endpoint.labels.get("resource", ""),
        )

    console.print(table)


def print_failures(failures: list[DecodeFailure]) -> None:
    for failure in failures:
        console.print(
            f"[yellow]⚠ Skipped {failure.kind.kind_name} "
            f"{failure.namespace}/{failure.name}: {failure.reason}[/]"
        )


async def _run(source: TraefikSource, options, title: str) -> None:
    try:
        endpoints = await source.endpoints()
    except RouteDNSError as e:
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(1)

    if _output(options) == "table":
        print_failures(source.last_failures)
    print_endpoints(endpoints, options, title)


async def list_endpoints(config: SourceConfig, options):
    """List endpoints from the cluster."""
    kubeconfig = str(options.kubeconfig) if options and options.kubeconfig else None
    context = options.context if options else None

    try:
        source = create_source(config, kubeconfig=kubeconfig, context=context)
    except RouteDNSError as e:
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(1)

    await _run(source, options, "Cluster Endpoints")


async def render_manifests(files: list[Path], config: SourceConfig, options):
    """Render endpoints from manifest files."""
    try:
        lister = ManifestRoutingObjectLister.from_files(files)
        source = TraefikSource(lister, config)
    except (OSError, yaml.YAMLError, RouteDNSError) as e:
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(1)

    await _run(source, options, "Rendered Endpoints")


def show_rule_hosts(expression: str, kind: RouteKind, options):
    """Show hostnames extracted from a match expression."""
    hosts = parse_hostnames(expression, kind.host_functions)
    output = _output(options)

    if output == "json":
        console.print_json(json.dumps(hosts))
    elif output == "yaml":
        console.print(yaml.safe_dump(hosts), markup=False, emoji=False, highlight=False, soft_wrap=True)
    elif not hosts:
        console.print("[yellow]No hostnames in expression[/]")
    else:
        for host in hosts:
            console.print(host, markup=False, highlight=False)
