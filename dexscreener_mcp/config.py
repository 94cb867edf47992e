"""Configuration loader for the DexScreener gateway.

Supports YAML format with environment variable interpolation.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .rate_limit_policy import RateLimitManager, RateLimitQuota
from .upstream import BASE_URL


def _default_pools() -> Dict[str, Dict[str, float]]:
    return {
        name: {"requests_per_window": quota.requests_per_window, "window_seconds": quota.window_seconds}
        for name, quota in RateLimitManager.DEFAULT_QUOTAS.items()
    }


@dataclass
class UpstreamConfig:
    """DexScreener API settings."""
    base_url: str = BASE_URL
    timeout: float = 10


@dataclass
class RateLimitConfig:
    """Quota pools keyed by name."""
    pools: Dict[str, Dict[str, float]] = field(default_factory=_default_pools)

    def quotas(self) -> Dict[str, RateLimitQuota]:
        """Build validated quotas; raises ValueError on bad pool settings."""
        quotas = {}
        for name, settings in self.pools.items():
            try:
                limit = settings["requests_per_window"]
                if isinstance(limit, bool) or not (isinstance(limit, int) or (isinstance(limit, float) and limit.is_integer())):
                    raise ValueError(f"Invalid rate-limit pool '{name}': requests_per_window must be an integer, got {limit!r}")
                quotas[name] = RateLimitQuota(
                    requests_per_window=int(limit),
                    window_seconds=float(settings["window_seconds"]),
                )
            except (KeyError, TypeError) as e:
                raise ValueError(f"Invalid rate-limit pool '{name}': {e}")
        return quotas


@dataclass
class LoggingConfig:
    """Log sink settings."""
    log_file: Optional[str] = "dexscreener.log"
    level: str = "INFO"
    enable_console: bool = True


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""
    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> "GatewayConfig":
        """Load configuration from YAML file with env var interpolation.

        Pools listed in the file are merged over the default pools.

        Example YAML:
            upstream:
              timeout: 5
            rate_limit:
              pools:
                pair_data:
                  requests_per_window: 100
                  window_seconds: 60
            logging:
              log_file: "${LOG_DIR}/dexscreener.log"
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with config_file.open("r") as f:
            raw = f.read()

        # Interpolate environment variables: ${VAR_NAME}
        for key, value in os.environ.items():
            raw = raw.replace(f"${{{key}}}", value)

        data = yaml.safe_load(raw) or {}

        # Pool settings override the defaults key by key
        pools = _default_pools()
        for name, settings in ((data.get("rate_limit") or {}).get("pools") or {}).items():
            pools.setdefault(name, {}).update(settings or {})
        config = cls(
            upstream=UpstreamConfig(**(data.get("upstream") or {})),
            rate_limit=RateLimitConfig(pools=pools),
            logging=LoggingConfig(**(data.get("logging") or {})),
        )
        config.quotas()
        return config

    def quotas(self) -> Dict[str, RateLimitQuota]:
        return self.rate_limit.quotas()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "upstream": {
                "base_url": self.upstream.base_url,
                "timeout": self.upstream.timeout,
            },
            "rate_limit": {
                "pools": {name: dict(settings) for name, settings in self.rate_limit.pools.items()},
            },
            "logging": {
                "log_file": self.logging.log_file,
                "level": self.logging.level,
                "enable_console": self.logging.enable_console,
            },
        }

    def to_yaml(self, output_path: str) -> None:
        """Save configuration to YAML file."""
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with output_file.open("w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
