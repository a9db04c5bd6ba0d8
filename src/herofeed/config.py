"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Self

from dotenv import load_dotenv

from herofeed.pipeline.formatting import resolve_timezone

NETWORKS = ("localnet", "devnet", "testnet", "mainnet")
DEFAULT_RPC_URLS = {
    "localnet": "http://127.0.0.1:9000",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "mainnet": "https://fullnode.mainnet.sui.io:443",
}


def normalize_network(value: str | None, default: str = "testnet") -> str:
    """Normalize network selector values."""
    if value is None or not value.strip():
        return default
    candidate = value.strip().lower()
    aliases = {"local": "localnet", "dev": "devnet", "test": "testnet", "main": "mainnet"}
    return aliases.get(candidate, candidate)


def parse_positive_float(value: str | None, default: float, *, field_name: str) -> float:
    """Parse a positive number from an env string."""
    if value is None or not value.strip():
        return default
    parsed = float(value.strip())
    if parsed <= 0:
        raise ValueError(f"{field_name} must be positive")
    return parsed


def network_package_ids(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect `<NETWORK>_PACKAGE_ID` variables for every known network."""
    resolved: dict[str, str] = {}
    for network in NETWORKS:
        value = str(environ.get(f"{network.upper()}_PACKAGE_ID", "")).strip()
        if value:
            resolved[network] = value
    return resolved


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    network: str = "testnet"
    package_id: str = ""
    package_ids_by_network: dict[str, str] = field(default_factory=dict)
    rpc_url: str = ""
    data_source: str = "rpc"
    fixture_path: str = ""
    display_timezone: str = "UTC"
    request_timeout_seconds: float = 20.0
    max_retries: int = 3
    log_level: str = "INFO"
    report_path: str = ""

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        raw = cls(
            network=normalize_network(os.getenv("NETWORK")),
            package_id=str(os.getenv("PACKAGE_ID", "")).strip(),
            package_ids_by_network=network_package_ids(os.environ),
            rpc_url=str(os.getenv("SUI_RPC_URL", "")).strip(),
            data_source=str(os.getenv("DATA_SOURCE", "rpc")).strip().lower(),
            fixture_path=str(os.getenv("FIXTURE_PATH", "")).strip(),
            display_timezone=str(os.getenv("DISPLAY_TIMEZONE", "UTC")).strip(),
            request_timeout_seconds=parse_positive_float(
                os.getenv("REQUEST_TIMEOUT_SECONDS"),
                20.0,
                field_name="request_timeout_seconds",
            ),
            max_retries=int(os.getenv("MAX_RETRIES", "3")),
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
            report_path=str(os.getenv("REPORT_PATH", "")).strip(),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        overrides = dict(kwargs)
        network_override = overrides.get("network")
        if isinstance(network_override, str):
            overrides["network"] = normalize_network(network_override, default=self.network)
        updated = replace(self, **overrides)
        return updated.validate()

    def effective_package_id(self) -> str:
        """Resolve the deployment id, preferring an explicit PACKAGE_ID."""
        if self.package_id:
            return self.package_id
        return self.package_ids_by_network.get(self.network, "")

    def effective_rpc_url(self) -> str:
        """Resolve the RPC endpoint, defaulting to the network's full node."""
        return self.rpc_url or DEFAULT_RPC_URLS[self.network]

    def validate(self) -> Self:
        """Validate settings fields."""
        if self.network not in NETWORKS:
            raise ValueError(f"network must be one of {', '.join(NETWORKS)}")
        if self.data_source not in {"rpc", "fixture"}:
            raise ValueError("data_source must be one of rpc, fixture")
        if self.data_source == "fixture" and not self.fixture_path:
            raise ValueError("fixture_path is required when data_source is fixture")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        if self.max_retries <= 0:
            raise ValueError("max_retries must be positive")
        resolve_timezone(self.display_timezone)
        return self
