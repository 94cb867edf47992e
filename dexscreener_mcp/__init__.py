"""
DexScreener market-data gateway.

Read-only access to the DexScreener API as named operations:
- Token profiles, boosted tokens and paid orders
- Trading-pair lookup by chain/pair address, by token address, and search
- Sliding-window quota pools per endpoint group (token metadata, pair data)
- A single classified error type for every failure
- Structured logging via loguru
- Configuration-driven (YAML)

Core Modules:
    rate_limit_policy: Sliding-window quota pools
    upstream: Rate-limited aiohttp client and response classification
    operations: Static operation table and catalogue
    dispatcher: Operation name + arguments -> upstream call
    errors: Classified error taxonomy
    models: Payload and argument records
    service: Typed facade owning session, pools and dispatcher
    config: Configuration loading and validation

Example:
    >>> from dexscreener_mcp.config import GatewayConfig
    >>> from dexscreener_mcp.service import DexScreenerService
    >>>
    >>> async with DexScreenerService.from_config(GatewayConfig()) as dex:
    ...     pairs = await dex.invoke("search_pairs", {"query": "SOL"})
"""

__version__ = "0.1.0"
__all__ = [
    "rate_limit_policy",
    "upstream",
    "operations",
    "dispatcher",
    "errors",
    "models",
    "service",
    "config",
]
