"""Test helpers shared across ens-mcp test modules."""

import json

import httpx
from eth_abi import encode


class SleepRecorder:
    """Async stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def rpc_response(request: httpx.Request, result=None, *, error=None, status_code=200):
    """Build a JSON-RPC response echoing the request id."""
    body = json.loads(request.content)
    payload = {"jsonrpc": "2.0", "id": body.get("id")}
    if error is not None:
        payload["error"] = error
    else:
        payload["result"] = result
    return httpx.Response(status_code, json=payload)


def abi_result(types, values) -> str:
    """ABI-encode return values the way a node returns them from eth_call."""
    return "0x" + encode(list(types), list(values)).hex()
