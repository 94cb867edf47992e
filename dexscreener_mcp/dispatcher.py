"""Operation dispatcher: route a named operation to one rate-limited upstream call."""
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError

from .errors import DexScreenerError
from .logging_setup import logger
from .operations import OPERATIONS, OperationDescriptor, list_operations
from .rate_limit_policy import RateLimitManager
from .upstream import UpstreamClient


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "arguments"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


class OperationDispatcher:
    """Map ``(name, arguments)`` onto exactly one upstream call through one pool.

    The dispatcher holds no per-call state; the quota pools in ``rate_limits``
    are the only state shared between concurrent invocations. Payloads are
    returned exactly as the upstream client produced them.
    """

    def __init__(
        self,
        client: UpstreamClient,
        rate_limits: Optional[RateLimitManager] = None,
        operations: Mapping[str, OperationDescriptor] = OPERATIONS,
    ):
        self.client = client
        self.rate_limits = rate_limits or RateLimitManager()
        self.operations = operations

        unbound = sorted({op.pool for op in operations.values() if op.pool not in self.rate_limits})
        if unbound:
            raise ValueError(f"Operations reference undefined rate-limit pools: {', '.join(unbound)}")

    def list_operations(self) -> List[Dict[str, Any]]:
        return list_operations(self.operations)

    def validate(self, name: str, arguments: Optional[Mapping[str, Any]]) -> Tuple[OperationDescriptor, BaseModel]:
        """Look up the operation and check the argument bag against its record."""
        descriptor = self.operations.get(name)
        if descriptor is None:
            raise DexScreenerError.unknown_operation(name)

        arguments = dict(arguments or {})
        missing = [arg for arg in descriptor.required_arguments if arguments.get(arg) is None]
        if missing:
            raise DexScreenerError.missing_arguments(name, missing)

        try:
            params = descriptor.params.model_validate(arguments)
        except ValidationError as e:
            raise DexScreenerError.invalid_arguments(f"{name}: {_describe_validation_error(e)}")
        return descriptor, params

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Run one operation and return its decoded payload."""
        try:
            descriptor, params = self.validate(name, arguments)
        except DexScreenerError as e:
            logger.warning(f"Rejected invocation | {e}")
            raise

        path_params, query_params = descriptor.resolve(params)
        logger.debug(f"Invoking {name} | pool={descriptor.pool}")
        return await self.client.call(
            descriptor.path_template,
            path_params,
            query_params,
            self.rate_limits.pool(descriptor.pool),
            response_type=descriptor.response_type,
        )
