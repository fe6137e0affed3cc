"""Typer CLI for the topic provisioner."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from topic_provisioner.config.loader import load_provisioner_config
from topic_provisioner.config.models import ProvisionerConfig
from topic_provisioner.errors import ProvisionerError
from topic_provisioner.observability.logs import LogLevel, configure_logging
from topic_provisioner.provisioner import TopicProvisioner, provision_from_config

logger = structlog.get_logger()
console = Console()
app = typer.Typer(name="topic-provisioner", help="Kafka topic provisioning CLI")


def _load(config_path: str | None) -> ProvisionerConfig:
    path = Path(config_path) if config_path else None
    if path is not None and not path.exists():
        console.print(f"[red]Config file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return load_provisioner_config(path)
    except (ValueError, TypeError) as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        raise typer.Exit(1) from exc


@app.callback()
def main(
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines"),
    log_level: LogLevel = typer.Option(
        LogLevel.INFO, "--log-level", case_sensitive=False, help="Log level"
    ),
) -> None:
    """Provision Kafka topics through an administrative session."""
    configure_logging(json=json_logs, level=log_level.value)


@app.command()
def provision(
    config_path: str | None = typer.Option(
        None, "--config", help="YAML merged over the built-in defaults"
    ),
) -> None:
    """Connect, create the configured topic, and disconnect."""
    config = _load(config_path)
    try:
        asyncio.run(provision_from_config(config))
    except ProvisionerError as exc:
        console.print(f"[red]{exc.phase} failed:[/red] {exc}")
        raise typer.Exit(1) from exc
    console.print(
        f"[green]Topic created:[/green] {config.topic.name} "
        f"({config.topic.num_partitions} partition(s))"
    )


@app.command()
def topics(
    config_path: str | None = typer.Option(
        None, "--config", help="YAML merged over the built-in defaults"
    ),
) -> None:
    """List topics and their partition counts."""
    config = _load(config_path)

    async def _list() -> dict[str, int]:
        provisioner = TopicProvisioner(config.kafka)
        async with provisioner.session():
            return await provisioner.list_topics()

    try:
        found = asyncio.run(_list())
    except ProvisionerError as exc:
        console.print(f"[red]{exc.phase} failed:[/red] {exc}")
        raise typer.Exit(1) from exc

    if not found:
        console.print("[yellow]No topics found[/yellow]")
        return

    table = Table(title=f"Topics on {config.kafka.bootstrap_servers}")
    table.add_column("Topic", style="cyan")
    table.add_column("Partitions")
    for name in sorted(found):
        table.add_row(name, str(found[name]))
    console.print(table)
