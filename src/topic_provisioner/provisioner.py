"""TopicProvisioner: connect, create one topic, disconnect."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import structlog

from topic_provisioner.admin.session import AdminSession
from topic_provisioner.config.models import KafkaConfig, ProvisionerConfig, TopicSpec
from topic_provisioner.errors import (
    BrokerConnectionError,
    BrokerRequestError,
    DisconnectError,
    TopicAlreadyExistsError,
)

logger = structlog.get_logger()

SessionFactory = Callable[[KafkaConfig], AdminSession]


class TopicProvisioner:
    """Runs a single administrative action against a Kafka cluster.

    The phases are strictly ordered: ``connect`` → ``create_topic`` →
    ``disconnect``.  Use :meth:`provision` (or :meth:`session`) to get the
    guaranteed-release behaviour; the individual phase methods are public so
    callers can drive them by hand.
    """

    def __init__(
        self,
        config: KafkaConfig,
        *,
        session_factory: SessionFactory = AdminSession,
    ) -> None:
        self._config = config
        self._session_factory = session_factory
        self._session: AdminSession | None = None

    @property
    def connected(self) -> bool:
        return self._session is not None

    async def connect(self) -> AdminSession:
        if self._session is not None:
            msg = "TopicProvisioner is already connected"
            raise RuntimeError(msg)
        logger.info(
            "admin.connecting",
            bootstrap_servers=self._config.bootstrap_servers,
            client_id=self._config.client_id,
        )
        session = self._session_factory(self._config)
        try:
            await session.open()
        except BrokerConnectionError as exc:
            logger.error("admin.connect_failed", error=str(exc))
            raise
        self._session = session
        logger.info(
            "admin.connected", bootstrap_servers=self._config.bootstrap_servers
        )
        return session

    async def create_topic(self, spec: TopicSpec) -> None:
        session = self._require_session()
        logger.info(
            "topic.creating",
            topic=spec.name,
            num_partitions=spec.num_partitions,
            replication_factor=spec.replication_factor,
        )
        try:
            await session.create_topic(spec)
        except TopicAlreadyExistsError:
            logger.warning("topic.already_exists", topic=spec.name)
            raise
        except BrokerRequestError as exc:
            logger.error("topic.create_failed", topic=spec.name, error=exc.reason)
            raise
        logger.info("topic.created", topic=spec.name)

    async def list_topics(self) -> dict[str, int]:
        return await self._require_session().list_topics()

    async def disconnect(self) -> None:
        session = self._require_session()
        # Cleared first so a failed close never leaves a half-owned session.
        self._session = None
        logger.info("admin.disconnecting")
        try:
            await session.close()
        except DisconnectError as exc:
            logger.error("admin.disconnect_failed", error=str(exc))
            raise
        logger.info("admin.disconnected")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AdminSession]:
        """Connect, yield the session, and always disconnect on the way out.

        A failure inside the block takes precedence over a disconnect failure;
        the latter is logged and attached to it as a note.
        """
        session = await self.connect()
        try:
            yield session
        except BaseException as exc:
            try:
                await self.disconnect()
            except DisconnectError as disconnect_exc:
                logger.warning(
                    "admin.disconnect_error_superseded",
                    error=str(disconnect_exc),
                    cause=type(exc).__name__,
                )
                exc.add_note(f"Disconnect also failed: {disconnect_exc}")
            raise
        await self.disconnect()

    async def provision(self, spec: TopicSpec) -> None:
        """Create *spec* inside a scoped administrative session."""
        async with self.session():
            await self.create_topic(spec)

    def _require_session(self) -> AdminSession:
        if self._session is None:
            msg = "TopicProvisioner is not connected; call connect() first"
            raise RuntimeError(msg)
        return self._session


async def provision_from_config(
    config: ProvisionerConfig,
    *,
    session_factory: SessionFactory = AdminSession,
) -> None:
    """Provision the topic described by a loaded :class:`ProvisionerConfig`."""
    provisioner = TopicProvisioner(config.kafka, session_factory=session_factory)
    await provisioner.provision(config.topic)
