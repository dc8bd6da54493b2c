"""
chains/providers.py - JSON-RPC gateway to a single node endpoint.

Provides:
- One round trip per call, no caching, no retry
- Bounded request timeout
- Total decoding of the response envelope
- Latency tracking
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx

from core.constants import (
    DEFAULT_RPC_TIMEOUT_SECONDS,
    JSONRPC_VERSION,
    METHOD_BLOCK_NUMBER,
    METHOD_GET_BLOCK_BY_NUMBER,
    ErrorCode,
)
from core.exceptions import DecodeError, RPCError, TransportError
from core.logging import get_logger
from core.math import hex_to_int, int_to_hex

logger = get_logger("txwatch.rpc")


@dataclass
class RPCStats:
    """Statistics for the RPC endpoint."""
    url: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_latency_ms: int = 0
    last_error: str | None = None
    last_success_ts: int | None = None

    @property
    def avg_latency_ms(self) -> int:
        if self.successful_requests == 0:
            return 0
        return self.total_latency_ms // self.successful_requests

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successful_requests / self.total_requests

    def record_failure(self, error: Exception) -> None:
        self.failed_requests += 1
        self.last_error = str(error)


class RPCProvider:
    """
    JSON-RPC client for one node.

    The httpx client is created lazily and owned by the provider; pass
    `transport` to substitute the network (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        rpc_url: str,
        timeout_seconds: float = DEFAULT_RPC_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.rpc_url = rpc_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._request_id = 0
        self.stats = RPCStats(url=rpc_url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                limits=httpx.Limits(max_connections=10),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def call(self, method: str, params: list | None = None) -> Any:
        """
        Make a single JSON-RPC call.

        Args:
            method: RPC method name
            params: Method parameters

        Returns:
            The envelope's "result" member (may be None)

        Raises:
            TransportError: Request failed, timed out, or body is not JSON
            DecodeError: Envelope is not a JSON object
            RPCError: Envelope carries a non-null "error"
        """
        client = await self._get_client()
        payload = {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "params": params or [],
            "id": self._next_request_id(),
        }
        details = {"url": self.rpc_url, "method": method}

        self.stats.total_requests += 1
        start_ms = int(time.time() * 1000)

        try:
            resp = await client.post(self.rpc_url, json=payload)
            envelope = resp.json()
        except httpx.TimeoutException as e:
            latency_ms = int(time.time() * 1000) - start_ms
            error = TransportError(
                f"RPC timeout after {latency_ms}ms",
                details=details,
                code=ErrorCode.INFRA_RPC_TIMEOUT,
            )
            self.stats.record_failure(error)
            raise error from e
        except httpx.HTTPError as e:
            error = TransportError(f"RPC request failed: {e}", details=details)
            self.stats.record_failure(error)
            raise error from e
        except ValueError as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            error = TransportError(f"RPC response is not JSON: {e}", details=details)
            self.stats.record_failure(error)
            raise error from e

        latency_ms = int(time.time() * 1000) - start_ms

        if not isinstance(envelope, dict):
            error = DecodeError(
                "RPC response is not a JSON object",
                details=details,
                code=ErrorCode.DECODE_INVALID_ENVELOPE,
            )
            self.stats.record_failure(error)
            raise error

        if envelope.get("error") is not None:
            rpc_error = envelope["error"]
            error = RPCError(
                f"RPC error: {rpc_error}",
                details={**details, "rpc_error": rpc_error},
            )
            self.stats.record_failure(error)
            raise error

        self.stats.successful_requests += 1
        self.stats.total_latency_ms += latency_ms
        self.stats.last_success_ts = int(time.time() * 1000)

        logger.debug(
            f"RPC {method} ok",
            extra={"context": {"method": method, "latency_ms": latency_ms}},
        )
        return envelope.get("result")

    async def get_block_number(self) -> int:
        """
        Get latest block number.

        Raises:
            DecodeError: If the result is missing or not a hex quantity
        """
        result = await self.call(METHOD_BLOCK_NUMBER)
        return hex_to_int(result, field=METHOD_BLOCK_NUMBER)

    async def get_block_by_number(
        self,
        block_number: int,
        full_transactions: bool = True,
    ) -> dict:
        """
        Fetch a block by height.

        Args:
            block_number: Block height
            full_transactions: Request transaction objects rather than hashes

        Returns:
            The raw block object

        Raises:
            DecodeError: If the result is missing or not an object
        """
        result = await self.call(
            METHOD_GET_BLOCK_BY_NUMBER,
            [int_to_hex(block_number), full_transactions],
        )
        if result is None:
            raise DecodeError(
                f"Block {block_number} not returned by node",
                details={"block_number": block_number},
            )
        if not isinstance(result, dict):
            raise DecodeError(
                f"Block {block_number} is not an object: {type(result).__name__}",
                details={"block_number": block_number},
                code=ErrorCode.DECODE_INVALID_ENVELOPE,
            )
        return result

    def get_stats_summary(self) -> dict:
        """Get statistics summary for the endpoint."""
        return {
            "url": self.stats.url,
            "total_requests": self.stats.total_requests,
            "success_rate": round(self.stats.success_rate, 3),
            "avg_latency_ms": self.stats.avg_latency_ms,
            "last_error": self.stats.last_error,
            "last_success_ts": self.stats.last_success_ts,
        }
