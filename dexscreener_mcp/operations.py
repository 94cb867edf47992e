"""Static operation table.

Each entry binds one operation name to an upstream path template, the quota
pool it draws from, the argument record it accepts and the payload shape it
returns. Adding an operation means adding one entry here.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple, Type

from pydantic import BaseModel

from .models import (
    DexResponse,
    NoParams,
    OrderParams,
    PairParams,
    SearchParams,
    TokenBoost,
    TokenOrder,
    TokenParams,
    TokenProfile,
)
from .rate_limit_policy import PAIR_DATA_POOL, TOKEN_METADATA_POOL


@dataclass(frozen=True)
class OperationDescriptor:
    """Immutable description of one callable operation."""
    name: str
    description: str
    path_template: str
    pool: str
    params: Type[BaseModel] = NoParams
    query: Tuple[Tuple[str, str], ...] = ()  # (query key, argument name)
    response_type: Any = None

    @property
    def required_arguments(self) -> Tuple[str, ...]:
        return tuple(
            info.alias or field_name
            for field_name, info in self.params.model_fields.items()
            if info.is_required()
        )

    def resolve(self, arguments: BaseModel) -> Tuple[Dict[str, str], List[Tuple[str, str]]]:
        """Split validated arguments into path parameters and ordered query parameters."""
        values = arguments.model_dump(by_alias=True)
        query = [(key, values.pop(arg)) for key, arg in self.query]
        return values, query

    def input_schema(self) -> Dict[str, Any]:
        properties = {
            info.alias or field_name: {"type": "string", "description": info.description}
            for field_name, info in self.params.model_fields.items()
        }
        return {"type": "object", "properties": properties, "required": list(self.required_arguments)}


def _table(*descriptors: OperationDescriptor) -> Mapping[str, OperationDescriptor]:
    return {d.name: d for d in descriptors}


OPERATIONS: Mapping[str, OperationDescriptor] = _table(
    OperationDescriptor(
        name="get_latest_token_profiles",
        description="Get the latest token profiles",
        path_template="/token-profiles/latest/v1",
        pool=TOKEN_METADATA_POOL,
        response_type=List[TokenProfile],
    ),
    OperationDescriptor(
        name="get_latest_boosted_tokens",
        description="Get the latest boosted tokens",
        path_template="/token-boosts/latest/v1",
        pool=TOKEN_METADATA_POOL,
        response_type=List[TokenBoost],
    ),
    OperationDescriptor(
        name="get_top_boosted_tokens",
        description="Get tokens with most active boosts",
        path_template="/token-boosts/top/v1",
        pool=TOKEN_METADATA_POOL,
        response_type=List[TokenBoost],
    ),
    OperationDescriptor(
        name="get_token_orders",
        description="Check orders paid for a specific token",
        path_template="/orders/v1/{chainId}/{tokenAddress}",
        pool=TOKEN_METADATA_POOL,
        params=OrderParams,
        response_type=List[TokenOrder],
    ),
    OperationDescriptor(
        name="get_pairs_by_chain_and_address",
        description="Get one or multiple pairs by chain and pair address",
        path_template="/latest/dex/pairs/{chainId}/{pairId}",
        pool=PAIR_DATA_POOL,
        params=PairParams,
        response_type=DexResponse,
    ),
    OperationDescriptor(
        name="get_pairs_by_token_addresses",
        description="Get one or multiple pairs by token address (max 30)",
        path_template="/latest/dex/tokens/{tokenAddresses}",
        pool=PAIR_DATA_POOL,
        params=TokenParams,
        response_type=DexResponse,
    ),
    OperationDescriptor(
        name="search_pairs",
        description="Search for pairs matching query",
        path_template="/latest/dex/search",
        pool=PAIR_DATA_POOL,
        params=SearchParams,
        query=(("q", "query"),),
        response_type=DexResponse,
    ),
)


def list_operations(operations: Mapping[str, OperationDescriptor] = OPERATIONS) -> List[Dict[str, Any]]:
    """Catalogue advertised to callers: name, description and input schema."""
    return [
        {"name": op.name, "description": op.description, "inputSchema": op.input_schema()}
        for op in operations.values()
    ]
