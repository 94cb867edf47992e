import asyncio
import json
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlencode

import aiohttp
from pydantic import TypeAdapter, ValidationError

from .errors import DexScreenerError
from .logging_setup import logger
from .rate_limit_policy import QuotaPool

BASE_URL = "https://api.dexscreener.com"
DEFAULT_ERROR_MESSAGE = "API request failed"


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


@dataclass(frozen=True)
class UpstreamRequest:
    """Resolved path and ordered query parameters for a single call."""
    path: str
    query: Tuple[Tuple[str, str], ...] = ()

    @property
    def target(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query)}"


def _error_message(reason: Optional[str], body: bytes) -> str:
    """Pick the human message for a non-success response."""
    try:
        data = json.loads(body)
    except ValueError:
        return reason or DEFAULT_ERROR_MESSAGE
    if data is None:
        return reason or DEFAULT_ERROR_MESSAGE
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return DEFAULT_ERROR_MESSAGE


def classify_response(status: int, reason: Optional[str], body: bytes, response_type: Any = None) -> Any:
    """Turn a received HTTP response into a decoded payload or a classified error."""
    if not (200 <= status < 300):
        raise DexScreenerError.upstream(status, _error_message(reason, body))
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DexScreenerError.decode(f"Invalid JSON in response body: {e}")
    if response_type is None:
        return data
    try:
        return _adapter(response_type).validate_python(data)
    except ValidationError as e:
        raise DexScreenerError.decode(f"Unexpected response shape: {e}")


class UpstreamClient:
    """Async DexScreener client: one GET per call, gated by a quota pool.

    No retries and no caching: a failed attempt surfaces as exactly one
    ``DexScreenerError``.

    Usage:
        async with UpstreamClient() as client:
            data = await client.call("/latest/dex/search", {}, [("q", "SOL")], pool)
    """

    def __init__(self, *, base_url: str = BASE_URL, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    @staticmethod
    def build_request(
        path_template: str,
        path_params: Optional[Mapping[str, str]] = None,
        query_params: Optional[Sequence[Tuple[str, str]]] = None,
    ) -> UpstreamRequest:
        """Substitute ``{name}`` placeholders and keep query parameters in order.

        Values are inserted as given; callers supply well-formed identifiers.
        """
        path = path_template.format(**(path_params or {}))
        if not path.startswith("/"):
            path = f"/{path}"
        return UpstreamRequest(path=path, query=tuple(query_params or ()))

    async def call(
        self,
        path_template: str,
        path_params: Optional[Mapping[str, str]],
        query_params: Optional[Sequence[Tuple[str, str]]],
        pool: QuotaPool,
        response_type: Any = None,
    ) -> Any:
        """Issue a rate-limited GET and return the decoded payload."""
        if not self.session:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        request = self.build_request(path_template, path_params, query_params)
        url = f"{self.base_url}{request.path}"

        await pool.admit()
        logger.debug(f"GET {request.target} | pool={pool.name}")

        try:
            async with self.session.get(url, params=list(request.query) or None) as resp:
                body = await resp.read()
                status, reason = resp.status, resp.reason
        except asyncio.TimeoutError:
            logger.warning(f"Request timeout | path={request.path} timeout={self.timeout}s")
            raise DexScreenerError.network(f"Request timeout after {self.timeout}s")
        except aiohttp.ClientError as e:
            logger.warning(f"Request failed | path={request.path} error={e!r}")
            raise DexScreenerError.network(f"Request failed: {e}")

        try:
            return classify_response(status, reason, body, response_type)
        except DexScreenerError as e:
            logger.warning(f"Upstream call failed | path={request.path} {e}")
            raise
