"""Broker fixtures for integration tests.

Point ``KAFKA_BOOTSTRAP_SERVERS`` at a disposable broker; tests skip when
nothing answers there.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator

import pytest
from confluent_kafka import KafkaException
from confluent_kafka.admin import AdminClient

from topic_provisioner.config.models import KafkaConfig


@pytest.fixture(scope="session")
def bootstrap_servers() -> str:
    return os.environ.get("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092")


@pytest.fixture(scope="session")
def admin_client(bootstrap_servers: str) -> AdminClient:
    admin = AdminClient({"bootstrap.servers": bootstrap_servers})
    try:
        admin.list_topics(timeout=5)
    except KafkaException:
        pytest.skip(f"No Kafka broker at {bootstrap_servers}")
    return admin


@pytest.fixture
def kafka_config(bootstrap_servers: str, admin_client: AdminClient) -> KafkaConfig:
    return KafkaConfig(
        bootstrap_servers=bootstrap_servers,
        client_id="topic-provisioner-it",
        connect_timeout_seconds=5,
    )


@pytest.fixture
def topic_name(admin_client: AdminClient) -> Generator[str, None, None]:
    """A unique topic name, deleted after the test."""
    name = f"rider-updates-{uuid.uuid4().hex[:8]}"
    yield name
    futures = admin_client.delete_topics([name], operation_timeout=10)
    for fut in futures.values():
        try:
            fut.result()
        except KafkaException:
            # Topic was never created by the test.
            pass
