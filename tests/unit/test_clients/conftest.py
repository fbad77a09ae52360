"""Fixtures for ENS client tests: an in-memory contract stub."""

import pytest
from eth_abi import decode

from ens_mcp.core.errors import ContractRevertError
from tests.helpers import abi_result


class ContractStub:
    """Answers ``eth_call`` by (contract address, view function).

    Handlers receive the decoded call arguments and return a tuple of output
    values, ``None`` for an empty ``0x`` result, or raise.
    """

    def __init__(self):
        self._handlers = {}
        self.calls = []

    def on(self, address, fn, handler):
        self._handlers[(address.lower(), fn.selector)] = (fn, handler)
        return self

    def revert(self, address, fn):
        def handler(*args):
            raise ContractRevertError("execution reverted")

        return self.on(address, fn, handler)

    async def request(self, method, params):
        assert method == "eth_call"
        call, block = params
        assert block == "latest"
        data = bytes.fromhex(call["data"][2:])
        key = (call["to"].lower(), data[:4])
        self.calls.append(key)
        if key not in self._handlers:
            return "0x"
        fn, handler = self._handlers[key]
        args = decode(list(fn.inputs), data[4:])
        result = handler(*args)
        if result is None:
            return "0x"
        return abi_result(fn.outputs, result)


@pytest.fixture
def stub():
    return ContractStub()
