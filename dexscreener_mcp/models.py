"""Payload and argument records for the DexScreener API.

Payload models mirror the upstream JSON (camelCase on the wire, snake_case
attributes) and keep any field the provider adds later. Argument records
describe what each operation accepts and reject anything else.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


_ANY = TypeAdapter(Any)


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class _Arguments(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True)


class Link(_Payload):
    type: Optional[str] = None
    label: Optional[str] = None
    url: str


class TokenProfile(_Payload):
    url: str
    chain_id: str
    token_address: str
    icon: Optional[str] = None
    header: Optional[str] = None
    description: Optional[str] = None
    links: Optional[List[Link]] = None


class TokenBoost(TokenProfile):
    amount: Optional[float] = None
    total_amount: Optional[float] = None


class TokenOrder(_Payload):
    # type: tokenProfile | communityTakeover | tokenAd | trendingBarAd
    type: str
    # status: processing | cancelled | on-hold | approved | rejected
    status: str
    payment_timestamp: int
    chain_id: Optional[str] = None
    token_address: Optional[str] = None


class Token(_Payload):
    address: str
    name: Optional[str] = None
    symbol: Optional[str] = None


class Liquidity(_Payload):
    usd: Optional[float] = None
    base: Optional[float] = None
    quote: Optional[float] = None


class Website(_Payload):
    url: str


class Social(_Payload):
    platform: Optional[str] = None
    handle: Optional[str] = None


class PairInfo(_Payload):
    image_url: Optional[str] = None
    websites: Optional[List[Website]] = None
    socials: Optional[List[Social]] = None


class Boosts(_Payload):
    active: int = 0


class Pair(_Payload):
    chain_id: str
    dex_id: str
    url: Optional[str] = None
    pair_address: str
    labels: Optional[List[str]] = None
    base_token: Token
    quote_token: Token
    price_native: Optional[str] = None
    price_usd: Optional[str] = None
    liquidity: Optional[Liquidity] = None
    fdv: Optional[float] = None
    market_cap: Optional[float] = None
    pair_created_at: Optional[int] = None
    info: Optional[PairInfo] = None
    boosts: Optional[Boosts] = None


class DexResponse(_Payload):
    """Pair lookup result; ``pairs`` keeps the provider's ordering."""
    schema_version: Optional[str] = None
    pairs: Optional[List[Pair]] = None
    pair: Optional[Pair] = None


class NoParams(_Arguments):
    pass


class OrderParams(_Arguments):
    chain_id: str = Field(description='Chain ID (e.g., "solana")')
    token_address: str = Field(description="Token address")


class PairParams(_Arguments):
    chain_id: str = Field(description='Chain ID (e.g., "solana")')
    pair_id: str = Field(description="Pair address")


class TokenParams(_Arguments):
    token_addresses: str = Field(description="Comma-separated token addresses")


class SearchParams(_Arguments):
    query: str = Field(description="Search query")


def to_jsonable(payload: Any) -> Any:
    """Convert a decoded payload back into camelCase JSON-compatible data."""
    return _ANY.dump_python(payload, mode="json", by_alias=True, exclude_none=True)
