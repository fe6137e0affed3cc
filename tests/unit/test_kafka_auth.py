"""Unit tests for admin client settings and Kafka auth config."""

from __future__ import annotations

from pydantic import SecretStr

from topic_provisioner.admin.auth import build_admin_config, build_kafka_auth_config
from topic_provisioner.config.models import KafkaAuthMechanism, KafkaConfig


class TestBuildAdminConfig:
    def test_carries_brokers_and_client_id(self):
        config = KafkaConfig(bootstrap_servers="b1:9092,b2:9092", client_id="ops")
        result = build_admin_config(config)
        assert result["bootstrap.servers"] == "b1:9092,b2:9092"
        assert result["client.id"] == "ops"
        assert result["socket.timeout.ms"] == 30000

    def test_no_auth_keys_for_plaintext(self):
        result = build_admin_config(KafkaConfig())
        assert "security.protocol" not in result
        assert "sasl.mechanism" not in result

    def test_merges_auth_settings(self):
        config = KafkaConfig(
            auth_mechanism=KafkaAuthMechanism.SASL_PLAIN,
            security_protocol="SASL_SSL",
            sasl_username="user",
            sasl_password=SecretStr("pass"),
        )
        result = build_admin_config(config)
        assert result["security.protocol"] == "SASL_SSL"
        assert result["sasl.password"] == "pass"


class TestBuildKafkaAuthConfig:
    def test_none_mechanism_returns_empty(self):
        assert build_kafka_auth_config(KafkaConfig()) == {}

    def test_sasl_plain(self):
        config = KafkaConfig(
            auth_mechanism=KafkaAuthMechanism.SASL_PLAIN,
            security_protocol="SASL_SSL",
            sasl_username="user",
            sasl_password=SecretStr("pass"),
        )
        result = build_kafka_auth_config(config)
        assert result["sasl.mechanism"] == "PLAIN"
        assert result["sasl.username"] == "user"
        assert result["sasl.password"] == "pass"

    def test_sasl_scram_256(self):
        config = KafkaConfig(
            auth_mechanism=KafkaAuthMechanism.SASL_SCRAM_256,
            security_protocol="SASL_SSL",
            sasl_username="user",
            sasl_password=SecretStr("pass"),
        )
        assert build_kafka_auth_config(config)["sasl.mechanism"] == "SCRAM-SHA-256"

    def test_sasl_scram_512(self):
        config = KafkaConfig(
            auth_mechanism=KafkaAuthMechanism.SASL_SCRAM_512,
            security_protocol="SASL_SSL",
            sasl_username="user",
            sasl_password=SecretStr("pass"),
        )
        assert build_kafka_auth_config(config)["sasl.mechanism"] == "SCRAM-SHA-512"

    def test_ssl_locations_included(self):
        config = KafkaConfig(
            auth_mechanism=KafkaAuthMechanism.SASL_PLAIN,
            security_protocol="SASL_SSL",
            sasl_username="user",
            sasl_password=SecretStr("pass"),
            ssl_ca_location="/etc/ca.pem",
            ssl_certificate_location="/etc/cert.pem",
            ssl_key_location="/etc/key.pem",
        )
        result = build_kafka_auth_config(config)
        assert result["ssl.ca.location"] == "/etc/ca.pem"
        assert result["ssl.certificate.location"] == "/etc/cert.pem"
        assert result["ssl.key.location"] == "/etc/key.pem"

    def test_mutual_tls_without_sasl(self):
        config = KafkaConfig(
            security_protocol="SSL",
            ssl_ca_location="/etc/ca.pem",
            ssl_certificate_location="/etc/cert.pem",
            ssl_key_location="/etc/key.pem",
        )
        result = build_kafka_auth_config(config)
        assert result == {
            "security.protocol": "SSL",
            "ssl.ca.location": "/etc/ca.pem",
            "ssl.certificate.location": "/etc/cert.pem",
            "ssl.key.location": "/etc/key.pem",
        }

    def test_plaintext_protocol_is_case_insensitive(self):
        config = KafkaConfig(security_protocol="plaintext")
        assert build_kafka_auth_config(config) == {}
