"""Pydantic configuration models for topic provisioning."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)

# Kafka's own legal-character rule for topic names.
_TOPIC_NAME_PATTERN = re.compile(r"[a-zA-Z0-9._-]{1,249}")


class KafkaAuthMechanism(StrEnum):
    """Kafka SASL authentication mechanisms."""

    NONE = "none"
    SASL_PLAIN = "sasl_plain"
    SASL_SCRAM_256 = "sasl_scram_256"
    SASL_SCRAM_512 = "sasl_scram_512"


class KafkaConfig(BaseModel, extra="forbid"):
    """Broker connection parameters for the administrative session."""

    bootstrap_servers: str = "localhost:9092"
    client_id: str = "topic-provisioner"
    connect_timeout_seconds: float = Field(default=10.0, gt=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    # Auth / security
    security_protocol: str = "PLAINTEXT"
    auth_mechanism: KafkaAuthMechanism = KafkaAuthMechanism.NONE
    sasl_username: str | None = None
    sasl_password: SecretStr | None = None
    ssl_ca_location: str | None = None
    ssl_certificate_location: str | None = None
    ssl_key_location: str | None = None

    @field_validator("bootstrap_servers")
    @classmethod
    def validate_bootstrap_servers(cls, v: str) -> str:
        servers = [s.strip() for s in v.split(",") if s.strip()]
        if not servers:
            msg = "bootstrap_servers must list at least one broker address"
            raise ValueError(msg)
        return ",".join(servers)

    @model_validator(mode="after")
    def check_auth_requirements(self) -> Self:
        """SASL mechanisms need both credentials."""
        mech = self.auth_mechanism
        if mech != KafkaAuthMechanism.NONE and (
            not self.sasl_username or not self.sasl_password
        ):
            msg = (
                "sasl_username and sasl_password are required "
                f"when auth_mechanism is '{mech.value}'"
            )
            raise ValueError(msg)
        return self


class TopicSpec(BaseModel):
    """A single topic-creation request.

    ``replication_factor`` left as ``None`` lets the broker apply its
    ``default.replication.factor``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    num_partitions: int = Field(ge=1)
    replication_factor: int | None = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if v in (".", ".."):
            msg = f"Topic name cannot be '{v}'"
            raise ValueError(msg)
        if not _TOPIC_NAME_PATTERN.fullmatch(v):
            msg = (
                f"Topic name '{v}' must be 1-249 characters of "
                "ASCII letters, digits, '.', '_' or '-'"
            )
            raise ValueError(msg)
        return v


class ProvisionerConfig(BaseModel, extra="forbid"):
    """Top-level config: where to connect and what to create."""

    kafka: KafkaConfig = KafkaConfig()
    topic: TopicSpec
