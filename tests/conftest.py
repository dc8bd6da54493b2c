"""
Pytest configuration and fixtures for txwatch tests.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from chains.providers import RPCProvider  # noqa: E402

RPC_URL = "http://node.test"
ADDRESS_A = "0x" + "a" * 40
ADDRESS_B = "0x" + "b" * 40
ADDRESS_C = "0x" + "c" * 40


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


class FakeNode:
    """
    In-memory JSON-RPC node behind httpx.MockTransport.

    `responses` maps a method name to the envelope returned for it, or to
    an exception raised instead of answering.
    """

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.requests: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)
        answer = self.responses.get(payload["method"])
        if isinstance(answer, Exception):
            raise answer
        if answer is None:
            answer = {"jsonrpc": "2.0", "id": payload["id"], "error": {"code": -32601, "message": "method not found"}}
        if isinstance(answer, (str, bytes)):
            return httpx.Response(200, content=answer)
        return httpx.Response(200, json=answer)

    def methods(self) -> list[str]:
        return [r["method"] for r in self.requests]

    def provider(self) -> RPCProvider:
        return RPCProvider(RPC_URL, transport=httpx.MockTransport(self.handler))


def result(value):
    """Successful JSON-RPC envelope."""
    return {"jsonrpc": "2.0", "id": 1, "result": value}


def make_tx(from_address, to_address, tx_hash, value="0x0"):
    tx = {"from": from_address, "value": value, "hash": tx_hash, "blockNumber": "0x10"}
    if to_address is not None:
        tx["to"] = to_address
    return tx


@pytest.fixture
def sample_block():
    return {
        "number": "0x10",
        "transactions": [
            make_tx(ADDRESS_A, ADDRESS_B, "0x01", value="0xde0b6b3a7640000"),
            make_tx(ADDRESS_B, ADDRESS_C, "0x02"),
            make_tx(ADDRESS_C, ADDRESS_B, "0x03"),
        ],
    }


@pytest.fixture
def fake_node(sample_block):
    return FakeNode({
        "eth_blockNumber": result("0x10"),
        "eth_getBlockByNumber": result(sample_block),
    })
