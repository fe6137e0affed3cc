"""Error types raised by the provisioning phases."""

from __future__ import annotations


class ProvisionerError(Exception):
    """Base class for every provisioning failure."""

    phase = "provision"


class BrokerConnectionError(ProvisionerError, ConnectionError):
    """No broker in the configured set answered within the connect timeout."""

    phase = "connect"


class BrokerRequestError(ProvisionerError):
    """The broker rejected the topic-creation request."""

    phase = "create"

    def __init__(self, topic: str, reason: str) -> None:
        super().__init__(f"Failed to create topic '{topic}': {reason}")
        self.topic = topic
        self.reason = reason


class TopicAlreadyExistsError(BrokerRequestError):
    """A topic with the requested name already exists on the cluster."""

    def __init__(self, topic: str, reason: str = "topic already exists") -> None:
        super().__init__(topic, reason)


class DisconnectError(ProvisionerError):
    """Tearing down the administrative session failed."""

    phase = "disconnect"
