"""Typed facade over the dispatcher.

    >>> async with DexScreenerService.from_config(GatewayConfig()) as dex:
    ...     result = await dex.search_pairs("SOL")
    ...     [p.pair_address for p in result.pairs or []]
"""
from typing import Any, Dict, List, Mapping, Optional

from .config import GatewayConfig
from .dispatcher import OperationDispatcher
from .models import DexResponse, TokenBoost, TokenOrder, TokenProfile
from .rate_limit_policy import RateLimitManager
from .upstream import UpstreamClient


class DexScreenerService:
    """Own the upstream session, its quota pools and the dispatcher."""

    def __init__(self, client: UpstreamClient, rate_limits: Optional[RateLimitManager] = None):
        self.client = client
        self.dispatcher = OperationDispatcher(client, rate_limits or RateLimitManager())

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "DexScreenerService":
        client = UpstreamClient(base_url=config.upstream.base_url, timeout=config.upstream.timeout)
        return cls(client, RateLimitManager(config.quotas()))

    async def __aenter__(self):
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.__aexit__(exc_type, exc_val, exc_tb)

    def list_operations(self) -> List[Dict[str, Any]]:
        return self.dispatcher.list_operations()

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.dispatcher.invoke(name, arguments)

    async def get_latest_token_profiles(self) -> List[TokenProfile]:
        return await self.invoke("get_latest_token_profiles")

    async def get_latest_boosted_tokens(self) -> List[TokenBoost]:
        return await self.invoke("get_latest_boosted_tokens")

    async def get_top_boosted_tokens(self) -> List[TokenBoost]:
        return await self.invoke("get_top_boosted_tokens")

    async def get_token_orders(self, chain_id: str, token_address: str) -> List[TokenOrder]:
        return await self.invoke("get_token_orders", {"chainId": chain_id, "tokenAddress": token_address})

    async def get_pairs_by_chain_and_address(self, chain_id: str, pair_id: str) -> DexResponse:
        return await self.invoke("get_pairs_by_chain_and_address", {"chainId": chain_id, "pairId": pair_id})

    async def get_pairs_by_token_addresses(self, token_addresses: str) -> DexResponse:
        """``token_addresses`` is a comma-separated list (the API accepts up to 30)."""
        return await self.invoke("get_pairs_by_token_addresses", {"tokenAddresses": token_addresses})

    async def search_pairs(self, query: str) -> DexResponse:
        return await self.invoke("search_pairs", {"query": query})
