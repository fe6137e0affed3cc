#!/usr/bin/env python3
"""Runnable demo: create the ``rider-updates`` topic with two partitions.

Prerequisites:
    a Kafka broker at $KAFKA_BOOTSTRAP_SERVERS (default localhost:9092)
    uv run python examples/provision_rider_updates.py
"""

from __future__ import annotations

import asyncio
import os
import sys

from rich.console import Console

from topic_provisioner.config.models import KafkaConfig, TopicSpec
from topic_provisioner.errors import ProvisionerError
from topic_provisioner.observability.logs import configure_logging
from topic_provisioner.provisioner import TopicProvisioner

console = Console()


def main() -> None:
    configure_logging()
    config = KafkaConfig(
        bootstrap_servers=os.environ.get("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
        client_id="rider-admin",
    )
    spec = TopicSpec(name="rider-updates", num_partitions=2)

    try:
        asyncio.run(TopicProvisioner(config).provision(spec))
    except ProvisionerError as exc:
        console.print(f"[red]{exc.phase} failed:[/red] {exc}")
        sys.exit(1)
    console.print(f"[green]Created[/green] {spec.name}")


if __name__ == "__main__":
    main()
