"""
GraphQL Data Service Client

HTTP client executing named GraphQL operations against the Hasura-style
data service that stores notifications and templates.
"""

import httpx
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ..operations import GraphQLOperation
from ..protocols import TransportError

if TYPE_CHECKING:
    from core.config import GraphQLConfig

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Client for the GraphQL data service"""

    def __init__(
        self,
        url: str,
        admin_secret: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
        enable_retry: bool = False,
        max_retries: int = 3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize GraphQL client

        Args:
            url: GraphQL endpoint, e.g. http://localhost:8080/v1/graphql
            admin_secret: Sent as X-Hasura-Admin-Secret when set
            headers: Extra headers sent with every request
            timeout: Request timeout in seconds
            enable_retry: Retry requests that fail at the network level
            max_retries: Attempts when retry is enabled
            transport: Custom httpx transport (for testing)
        """
        self.url = url
        self.enable_retry = enable_retry
        self.max_retries = max_retries

        self.client = httpx.AsyncClient(
            timeout=timeout,
            headers=self._build_default_headers(admin_secret, headers),
            transport=transport,
        )

        logger.info(f"GraphQLClient initialized with url: {self.url}")

    @classmethod
    def from_config(cls, config: "GraphQLConfig") -> "GraphQLClient":
        return cls(
            url=config.url,
            admin_secret=config.admin_secret,
            headers=config.headers,
            timeout=config.timeout,
            enable_retry=config.retry_enabled,
            max_retries=config.max_retries,
        )

    @staticmethod
    def _build_default_headers(
        admin_secret: Optional[str],
        headers: Optional[Dict[str, str]],
    ) -> Dict[str, str]:
        default_headers = {
            "Content-Type": "application/json",
            "X-Service-Name": "notification_service",
        }
        if admin_secret:
            default_headers["X-Hasura-Admin-Secret"] = admin_secret
        default_headers.update(headers or {})
        return default_headers

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        if not self.enable_retry:
            return await self.client.post(self.url, json=payload)

        @retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True
        )
        async def _retry_wrapper():
            return await self.client.post(self.url, json=payload)

        return await _retry_wrapper()

    async def execute(
        self,
        operation: GraphQLOperation,
        variables: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Execute a named query or mutation

        Args:
            operation: GraphQL document with its name and kind
            variables: Operation variables, JSON-serializable

        Returns:
            The `data` object of the response

        Raises:
            TransportError: Network failure, non-2xx status, undecodable body
                or GraphQL errors
        """
        payload = {
            "query": operation.document,
            "variables": variables,
            "operationName": operation.name,
        }

        try:
            response = await self._post(payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{operation.name} failed: HTTP {e.response.status_code}")
            raise TransportError(
                f"HTTP {e.response.status_code}",
                operation=operation.name,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{operation.name} failed: {e}")
            raise TransportError(str(e) or type(e).__name__, operation=operation.name) from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                "response body is not JSON",
                operation=operation.name,
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                f"response body is a JSON {type(body).__name__}, expected an object",
                operation=operation.name,
                status_code=response.status_code,
            )

        errors = body.get("errors")
        if errors:
            message = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            logger.error(f"{operation.name} returned GraphQL errors: {message}")
            raise TransportError(message, operation=operation.name, errors=errors)

        data = body.get("data")
        if data is None:
            raise TransportError("response has no data", operation=operation.name)
        return data
