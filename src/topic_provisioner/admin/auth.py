"""librdkafka settings for the admin client: brokers, identity, TLS and SASL."""

from __future__ import annotations

from typing import Any

from topic_provisioner.config.models import KafkaAuthMechanism, KafkaConfig

_SASL_MECHANISMS = {
    KafkaAuthMechanism.SASL_PLAIN: "PLAIN",
    KafkaAuthMechanism.SASL_SCRAM_256: "SCRAM-SHA-256",
    KafkaAuthMechanism.SASL_SCRAM_512: "SCRAM-SHA-512",
}

_SSL_LOCATIONS = {
    "ssl_ca_location": "ssl.ca.location",
    "ssl_certificate_location": "ssl.certificate.location",
    "ssl_key_location": "ssl.key.location",
}


def build_admin_config(config: KafkaConfig) -> dict[str, Any]:
    """Build the full ``AdminClient`` constructor dict for *config*."""
    admin_conf: dict[str, Any] = {
        "bootstrap.servers": config.bootstrap_servers,
        "client.id": config.client_id,
        "socket.timeout.ms": int(config.request_timeout_seconds * 1000),
    }
    admin_conf.update(build_kafka_auth_config(config))
    return admin_conf


def build_kafka_auth_config(config: KafkaConfig) -> dict[str, Any]:
    """Security entries for *config*; empty for a plaintext, unauthenticated broker.

    TLS file locations apply on their own (mutual TLS needs no SASL), and
    SASL credentials are added only when a mechanism is selected.
    """
    auth: dict[str, Any] = {}
    if config.security_protocol.upper() != "PLAINTEXT":
        auth["security.protocol"] = config.security_protocol

    for field_name, key in _SSL_LOCATIONS.items():
        location = getattr(config, field_name)
        if location:
            auth[key] = location

    mechanism = _SASL_MECHANISMS.get(config.auth_mechanism)
    if mechanism is not None:
        assert config.sasl_password is not None
        auth["sasl.mechanism"] = mechanism
        auth["sasl.username"] = config.sasl_username
        auth["sasl.password"] = config.sasl_password.get_secret_value()

    return auth
