#!/usr/bin/env python
"""DexScreener query CLI: list operations or invoke one and print its payload.

Usage:
    python scripts/dex_query.py list
    python scripts/dex_query.py call search_pairs query=SOL
    python scripts/dex_query.py --config gateway.yaml call get_token_orders chainId=solana tokenAddress=<addr>
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dexscreener_mcp.config import GatewayConfig
from dexscreener_mcp.errors import DexScreenerError
from dexscreener_mcp.logging_setup import setup_logging
from dexscreener_mcp.models import to_jsonable
from dexscreener_mcp.service import DexScreenerService


def parse_arguments(pairs):
    """Turn ``key=value`` tokens into an argument mapping."""
    arguments = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got: {pair}")
        arguments[key] = value
    return arguments


def list_operations(service):
    print("Available operations:")
    for op in service.list_operations():
        required = ", ".join(op["inputSchema"]["required"]) or "-"
        print(f"  {op['name']:<34} {op['description']} (required: {required})")


async def call_operation(service, name, arguments):
    async with service:
        payload = await service.invoke(name, arguments)
    print(json.dumps(to_jsonable(payload), indent=2))


def main():
    parser = argparse.ArgumentParser(description="Query the DexScreener API")
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--log-level", default="WARNING", help="Log level for stderr output")
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("list")
    call_p = sub.add_parser("call")
    call_p.add_argument("name", help="Operation name (see 'list')")
    call_p.add_argument("arguments", nargs="*", help="Operation arguments as key=value")

    args = parser.parse_args()
    if not args.cmd:
        parser.print_help()
        return 2

    config = GatewayConfig.from_yaml(args.config) if args.config else GatewayConfig()
    setup_logging(log_file=None, level=args.log_level, enable_console=True)
    service = DexScreenerService.from_config(config)

    if args.cmd == "list":
        list_operations(service)
        return 0

    try:
        arguments = parse_arguments(args.arguments)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    try:
        asyncio.run(call_operation(service, args.name, arguments))
    except DexScreenerError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
