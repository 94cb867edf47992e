"""Shared fixtures: a local aiohttp stand-in for the DexScreener API."""
import asyncio

import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from dexscreener_mcp.upstream import UpstreamClient

SOL_ADDRESS = "So11111111111111111111111111111111111111112"

PROFILE = {
    "url": "https://dexscreener.com/solana/abc",
    "chainId": "solana",
    "tokenAddress": SOL_ADDRESS,
    "icon": "https://cdn.example/icon.png",
    "description": "Wrapped SOL",
    "links": [{"type": "twitter", "label": "Twitter", "url": "https://x.com/solana"}],
}

BOOST = dict(PROFILE, amount=100, totalAmount=500)

ORDER = {
    "type": "tokenProfile",
    "status": "approved",
    "paymentTimestamp": 1700000000000,
}


def make_pair(pair_address, symbol="SOL"):
    return {
        "chainId": "solana",
        "dexId": "raydium",
        "url": f"https://dexscreener.com/solana/{pair_address}",
        "pairAddress": pair_address,
        "labels": ["CLMM"],
        "baseToken": {"address": SOL_ADDRESS, "name": "Wrapped SOL", "symbol": symbol},
        "quoteToken": {"address": "EPjFWdd5", "name": "USD Coin", "symbol": "USDC"},
        "priceNative": "1.0",
        "priceUsd": "150.12",
        "liquidity": {"usd": 1000000.5, "base": 3000, "quote": 500000},
        "fdv": 90000000000,
        "marketCap": 70000000000,
        "pairCreatedAt": 1690000000000,
        "txns": {"h24": {"buys": 10, "sells": 4}},
    }


class FakeDexScreener:
    """Serve canned DexScreener responses and record every request target."""

    def __init__(self):
        self.requests = []
        self.base_url = None

        @web.middleware
        async def record(request, handler):
            self.requests.append(request.path_qs)
            return await handler(request)

        self.app = web.Application(middlewares=[record])
        self.app.router.add_get("/token-profiles/latest/v1", self.profiles)
        self.app.router.add_get("/token-boosts/latest/v1", self.boosts)
        self.app.router.add_get("/token-boosts/top/v1", self.boosts)
        self.app.router.add_get("/orders/v1/{chainId}/{tokenAddress}", self.orders)
        self.app.router.add_get("/latest/dex/pairs/{chainId}/{pairId}", self.pairs)
        self.app.router.add_get("/latest/dex/tokens/{tokenAddresses}", self.tokens)
        self.app.router.add_get("/latest/dex/search", self.search)
        self.app.router.add_get("/errors/message", self.error_with_message)
        self.app.router.add_get("/errors/no-message", self.error_without_message)
        self.app.router.add_get("/errors/plain", self.error_plain)
        self.app.router.add_get("/broken", self.broken)
        self.app.router.add_get("/slow", self.slow)

    async def profiles(self, request):
        return web.json_response([PROFILE])

    async def boosts(self, request):
        return web.json_response([BOOST])

    async def orders(self, request):
        order = dict(ORDER, chainId=request.match_info["chainId"], tokenAddress=request.match_info["tokenAddress"])
        return web.json_response([order])

    async def pairs(self, request):
        if request.match_info["chainId"] == "invalid":
            return web.json_response({"message": "Invalid chain id"}, status=400)
        pair = make_pair(request.match_info["pairId"])
        return web.json_response({"schemaVersion": "1.0.0", "pairs": [pair], "pair": pair})

    async def tokens(self, request):
        pairs = [make_pair(f"pair-{i}") for i, _ in enumerate(request.match_info["tokenAddresses"].split(","))]
        return web.json_response({"schemaVersion": "1.0.0", "pairs": pairs})

    async def search(self, request):
        query = request.query.get("q", "")
        pairs = [make_pair("pair-b", symbol=query), make_pair("pair-a", symbol=query), make_pair("pair-c", symbol=query)]
        return web.json_response({"schemaVersion": "1.0.0", "pairs": pairs})

    async def error_with_message(self, request):
        return web.json_response({"message": "Token not found"}, status=404)

    async def error_without_message(self, request):
        return web.json_response({"error": True}, status=400)

    async def error_plain(self, request):
        return web.Response(status=500, text="<html>oops</html>", content_type="text/html")

    async def broken(self, request):
        return web.Response(status=200, text="definitely not json")

    async def slow(self, request):
        await asyncio.sleep(0.5)
        return web.json_response([])


@pytest_asyncio.fixture
async def fake_upstream():
    fake = FakeDexScreener()
    server = TestServer(fake.app)
    await server.start_server()
    fake.base_url = str(server.make_url("/")).rstrip("/")
    try:
        yield fake
    finally:
        await server.close()


@pytest_asyncio.fixture
async def upstream_client(fake_upstream):
    async with UpstreamClient(base_url=fake_upstream.base_url, timeout=2) as client:
        yield client
