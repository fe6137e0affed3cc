"""Administrative session over the confluent_kafka AdminClient."""

from __future__ import annotations

import asyncio

import structlog
from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic  # type: ignore[attr-defined]

from topic_provisioner.admin.auth import build_admin_config
from topic_provisioner.config.models import KafkaConfig, TopicSpec
from topic_provisioner.errors import (
    BrokerConnectionError,
    BrokerRequestError,
    DisconnectError,
    TopicAlreadyExistsError,
)

logger = structlog.get_logger()

# NewTopic sentinel for "use the broker's default.replication.factor".
BROKER_DEFAULT_REPLICATION = -1


def _kafka_error_text(exc: KafkaException) -> str:
    err = exc.args[0] if exc.args else None
    if isinstance(err, KafkaError):
        return err.str()  # type: ignore[no-any-return]
    return str(exc)


class AdminSession:
    """One open AdminClient, verified reachable, owned by a single caller.

    librdkafka calls block, so each one runs in the loop's default executor.
    """

    def __init__(self, config: KafkaConfig) -> None:
        self._config = config
        self._admin: AdminClient | None = None

    @property
    def is_open(self) -> bool:
        return self._admin is not None

    async def open(self) -> None:
        """Build the client and request cluster metadata within the connect timeout."""
        if self._admin is not None:
            msg = "Administrative session is already open"
            raise RuntimeError(msg)
        loop = asyncio.get_running_loop()
        try:
            admin = AdminClient(build_admin_config(self._config))
            meta = await loop.run_in_executor(
                None,
                lambda: admin.list_topics(
                    timeout=self._config.connect_timeout_seconds
                ),
            )
        except KafkaException as exc:
            msg = (
                f"No broker reachable at {self._config.bootstrap_servers} "
                f"within {self._config.connect_timeout_seconds}s: "
                f"{_kafka_error_text(exc)}"
            )
            raise BrokerConnectionError(msg) from exc
        self._admin = admin
        logger.debug("admin.session_opened", brokers=len(meta.brokers))

    async def create_topic(self, spec: TopicSpec) -> None:
        """Send exactly one CreateTopics request and wait for the broker's answer."""
        admin = self._require_open()
        replication = spec.replication_factor or BROKER_DEFAULT_REPLICATION
        new_topic = NewTopic(
            spec.name,
            num_partitions=spec.num_partitions,
            replication_factor=replication,
        )
        loop = asyncio.get_running_loop()
        try:
            futures = admin.create_topics(
                [new_topic],
                request_timeout=self._config.request_timeout_seconds,
                operation_timeout=self._config.request_timeout_seconds,
            )
            await loop.run_in_executor(None, futures[spec.name].result)
        except KafkaException as exc:
            err = exc.args[0] if exc.args else None
            if (
                isinstance(err, KafkaError)
                and err.code() == KafkaError.TOPIC_ALREADY_EXISTS
            ):
                raise TopicAlreadyExistsError(spec.name, err.str()) from exc
            raise BrokerRequestError(spec.name, _kafka_error_text(exc)) from exc

    async def list_topics(self, *, include_internal: bool = False) -> dict[str, int]:
        """Return ``{topic: partition_count}`` as reported by the cluster."""
        admin = self._require_open()
        loop = asyncio.get_running_loop()
        try:
            meta = await loop.run_in_executor(
                None,
                lambda: admin.list_topics(
                    timeout=self._config.request_timeout_seconds
                ),
            )
        except KafkaException as exc:
            msg = f"Failed to list topics: {_kafka_error_text(exc)}"
            raise BrokerConnectionError(msg) from exc
        return {
            name: len(topic.partitions)
            for name, topic in meta.topics.items()
            if include_internal or not name.startswith("__")
        }

    async def close(self) -> None:
        """Drain pending client callbacks and drop the client."""
        if self._admin is None:
            msg = "Administrative session is not open"
            raise DisconnectError(msg)
        admin, self._admin = self._admin, None
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, admin.poll, 0)
        except (KafkaException, RuntimeError) as exc:
            msg = f"Failed to close administrative session: {exc}"
            raise DisconnectError(msg) from exc

    def _require_open(self) -> AdminClient:
        if self._admin is None:
            msg = "Administrative session is not open; call open() first"
            raise RuntimeError(msg)
        return self._admin
