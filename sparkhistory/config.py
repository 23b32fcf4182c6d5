"""Server and history configuration, loadable from a TOML file."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_MAX_PORT = 65535


@dataclass
class ServerConfig:
    """Where the HTTP server listens."""

    host: str
    port: int
    max_applications: int


@dataclass
class KerberosConfig:
    """Kerberos authentication settings for HDFS."""

    principal: str
    keytab_path: str | None = None
    krb5_config_path: str | None = None
    realm: str | None = None


@dataclass
class HdfsConfig:
    """Connection settings for an HDFS namenode."""

    namenode_url: str
    connection_timeout_ms: int | None = None
    read_timeout_ms: int | None = None
    kerberos: KerberosConfig | None = None


@dataclass
class S3Config:
    """Connection settings for an S3 or S3-compatible bucket."""

    bucket_name: str
    region: str | None = None
    endpoint_url: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None
    connection_timeout_ms: int | None = None
    read_timeout_ms: int | None = None


@dataclass
class HistoryConfig:
    """Where event logs are read from and how they are kept."""

    log_directory: str
    max_applications: int
    update_interval_seconds: int
    max_apps_per_request: int
    compression_enabled: bool
    database_directory: str | None = None
    hdfs: HdfsConfig | None = None
    s3: S3Config | None = None


def _default_server() -> ServerConfig:
    return ServerConfig(host="0.0.0.0", port=18080, max_applications=1000)


def _default_history() -> HistoryConfig:
    return HistoryConfig(
        log_directory="./test-data/spark-events",
        max_applications=1000,
        update_interval_seconds=10,
        max_apps_per_request=100,
        compression_enabled=True,
        database_directory="./data",
    )


@dataclass
class Settings:
    """Complete configuration; built with no arguments it holds the defaults."""

    server: ServerConfig = field(default_factory=_default_server)
    history: HistoryConfig = field(default_factory=_default_history)


_MISSING = object()


def _value(data: Mapping[str, Any], key: str, kind: type, section: str, *, required: bool) -> Any:
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if required:
            raise ValueError(f"missing field `{key}` in [{section}]")
        return None
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"field `{key}` in [{section}] must be an integer")
        if value < 0:
            raise ValueError(f"field `{key}` in [{section}] must not be negative")
    elif not isinstance(value, kind):
        raise ValueError(f"field `{key}` in [{section}] must be of type {kind.__name__}")
    return value


def _table(data: Mapping[str, Any], key: str, section: str, *, required: bool) -> Mapping[str, Any] | None:
    value = data.get(key)
    if value is None:
        if required:
            raise ValueError(f"missing table `{key}` in {section}")
        return None
    if not isinstance(value, Mapping):
        raise ValueError(f"`{key}` in {section} must be a table")
    return value


def _server_from(data: Mapping[str, Any]) -> ServerConfig:
    port = _value(data, "port", int, "server", required=True)
    if port > _MAX_PORT:
        raise ValueError(f"field `port` in [server] must be at most {_MAX_PORT}")
    return ServerConfig(
        host=_value(data, "host", str, "server", required=True),
        port=port,
        max_applications=_value(data, "max_applications", int, "server", required=True),
    )


def _kerberos_from(data: Mapping[str, Any]) -> KerberosConfig:
    section = "history.hdfs.kerberos"
    return KerberosConfig(
        principal=_value(data, "principal", str, section, required=True),
        keytab_path=_value(data, "keytab_path", str, section, required=False),
        krb5_config_path=_value(data, "krb5_config_path", str, section, required=False),
        realm=_value(data, "realm", str, section, required=False),
    )


def _hdfs_from(data: Mapping[str, Any]) -> HdfsConfig:
    section = "history.hdfs"
    kerberos = _table(data, "kerberos", section, required=False)
    return HdfsConfig(
        namenode_url=_value(data, "namenode_url", str, section, required=True),
        connection_timeout_ms=_value(data, "connection_timeout_ms", int, section, required=False),
        read_timeout_ms=_value(data, "read_timeout_ms", int, section, required=False),
        kerberos=_kerberos_from(kerberos) if kerberos is not None else None,
    )


def _s3_from(data: Mapping[str, Any]) -> S3Config:
    section = "history.s3"
    optional_strings = ("region", "endpoint_url", "access_key_id", "secret_access_key", "session_token")
    optional_ints = ("connection_timeout_ms", "read_timeout_ms")
    return S3Config(
        bucket_name=_value(data, "bucket_name", str, section, required=True),
        **{key: _value(data, key, str, section, required=False) for key in optional_strings},
        **{key: _value(data, key, int, section, required=False) for key in optional_ints},
    )


def _history_from(data: Mapping[str, Any]) -> HistoryConfig:
    section = "history"
    hdfs = _table(data, "hdfs", section, required=False)
    s3 = _table(data, "s3", section, required=False)
    return HistoryConfig(
        log_directory=_value(data, "log_directory", str, section, required=True),
        max_applications=_value(data, "max_applications", int, section, required=True),
        update_interval_seconds=_value(data, "update_interval_seconds", int, section, required=True),
        max_apps_per_request=_value(data, "max_apps_per_request", int, section, required=True),
        compression_enabled=_value(data, "compression_enabled", bool, section, required=True),
        database_directory=_value(data, "database_directory", str, section, required=False),
        hdfs=_hdfs_from(hdfs) if hdfs is not None else None,
        s3=_s3_from(s3) if s3 is not None else None,
    )


def settings_from_dict(data: Mapping[str, Any]) -> Settings:
    """Build settings from a parsed mapping; raise ValueError on missing or mistyped fields."""
    if not isinstance(data, Mapping):
        raise ValueError("configuration must be a table")
    server = _table(data, "server", "configuration", required=True)
    history = _table(data, "history", "configuration", required=True)
    return Settings(server=_server_from(server), history=_history_from(history))


def load_settings(config_path: str | Path) -> Settings:
    """Read settings from a TOML file, or return the defaults if it does not exist."""
    path = Path(config_path)
    if not path.exists():
        logger.warning("Config file not found: %s. Using defaults.", config_path)
        return Settings()
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    return settings_from_dict(data)