"""Demo: search pairs and look up the top boosted tokens.

Shows:
1. Structured logging
2. Loading configuration (config.yaml if present, defaults otherwise)
3. Typed calls through the service facade
4. Handling classified errors
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from dexscreener_mcp.config import GatewayConfig
from dexscreener_mcp.errors import DexScreenerError
from dexscreener_mcp.logging_setup import logger, setup_logging
from dexscreener_mcp.service import DexScreenerService


async def main(query: str = "SOL"):
    setup_logging(log_file="dexscreener.log", level="INFO", enable_console=True)
    logger.info("=== DexScreener Demo ===")

    config_file = Path(__file__).parent.parent / "config.yaml"
    if config_file.exists():
        config = GatewayConfig.from_yaml(str(config_file))
        logger.info(f"Loaded config from {config_file}")
    else:
        config = GatewayConfig()
        logger.info("Using default configuration")

    async with DexScreenerService.from_config(config) as dex:
        try:
            result = await dex.search_pairs(query)
        except DexScreenerError as e:
            logger.error(f"Search failed: {e}")
            return

        pairs = result.pairs or []
        logger.info(f"Search '{query}' returned {len(pairs)} pairs")
        for pair in pairs[:5]:
            logger.info(
                f"  {pair.chain_id}/{pair.dex_id} {pair.base_token.symbol}/{pair.quote_token.symbol} "
                f"price_usd={pair.price_usd}"
            )

        try:
            boosts = await dex.get_top_boosted_tokens()
        except DexScreenerError as e:
            logger.error(f"Boost lookup failed: {e}")
            return
        for boost in boosts[:5]:
            logger.info(f"  boosted {boost.chain_id}:{boost.token_address} total={boost.total_amount}")

    logger.info("=== Demo Complete ===")


if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:2]))
