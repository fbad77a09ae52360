"""Tests for the ENS subgraph client."""

import json

import httpx
import pytest

from ens_mcp.core.clients.names import namehash
from ens_mcp.core.clients.subgraph import (
    LEGACY_SUBGRAPH_URL,
    SubgraphClient,
    resolve_subgraph_url,
)
from ens_mcp.core.errors import ErrorKind, HttpStatusError, SubgraphError

URL = "https://subgraph.example/ens"


def make_client(handler, fake_sleep):
    return SubgraphClient(URL, http_transport=httpx.MockTransport(handler), sleep_func=fake_sleep)


class TestResolveSubgraphUrl:
    """Tests for resolve_subgraph_url()."""

    def test_explicit_url_wins(self):
        assert resolve_subgraph_url(" https://x.example ", "key") == "https://x.example"

    def test_gateway_with_api_key(self):
        url = resolve_subgraph_url(None, "abc123")
        assert url.startswith("https://gateway.thegraph.com/api/abc123/subgraphs/id/")

    def test_legacy_default(self):
        assert resolve_subgraph_url(None, None) == LEGACY_SUBGRAPH_URL


class TestGetSubnames:
    """Tests for SubgraphClient.get_subnames()."""

    @pytest.mark.asyncio
    async def test_parses_subdomains(self, fake_sleep):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={
                    "data": {
                        "domain": {
                            "subdomains": [
                                {
                                    "name": "pay.vitalik.eth",
                                    "labelName": "pay",
                                    "owner": {"id": "0xaaa"},
                                    "wrappedOwner": None,
                                },
                                {
                                    "name": "w.vitalik.eth",
                                    "labelName": "w",
                                    "owner": {"id": "0xd4416b13d2b3a9abae7acd5d6c2bbdbe25686401"},
                                    "wrappedOwner": {"id": "0xbbb"},
                                },
                            ]
                        }
                    }
                },
            )

        subnames = await make_client(handler, fake_sleep).get_subnames("vitalik.eth")

        assert seen[0]["variables"]["id"] == "0x" + namehash("vitalik.eth").hex()
        assert [(s.name, s.effective_owner) for s in subnames] == [
            ("pay.vitalik.eth", "0xaaa"),
            ("w.vitalik.eth", "0xbbb"),
        ]

    @pytest.mark.asyncio
    async def test_unknown_domain_has_no_subnames(self, fake_sleep):
        def handler(request):
            return httpx.Response(200, json={"data": {"domain": None}})

        assert await make_client(handler, fake_sleep).get_subnames("nobody.eth") == []


class TestGetNameHistory:
    """Tests for SubgraphClient.get_name_history()."""

    @pytest.mark.asyncio
    async def test_parses_event_sections(self, fake_sleep):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "data": {
                        "domain": {
                            "events": [
                                {
                                    "__typename": "Transfer",
                                    "blockNumber": 100,
                                    "transactionID": "0x01",
                                    "owner": {"id": "0xaaa"},
                                }
                            ],
                            "registration": {
                                "events": [
                                    {
                                        "__typename": "NameRegistered",
                                        "blockNumber": 99,
                                        "transactionID": "0x02",
                                        "registrant": {"id": "0xaaa"},
                                        "expiryDate": "1700000000",
                                    }
                                ]
                            },
                            "resolver": None,
                        }
                    }
                },
            )

        history = await make_client(handler, fake_sleep).get_name_history("vitalik.eth")

        assert history.domain_events[0].type == "Transfer"
        assert history.domain_events[0].owner.id == "0xaaa"
        assert history.registration_events[0].expiry_date == 1_700_000_000
        assert history.resolver_events == []

    @pytest.mark.asyncio
    async def test_unknown_domain_returns_none(self, fake_sleep):
        def handler(request):
            return httpx.Response(200, json={"data": {"domain": None}})

        assert await make_client(handler, fake_sleep).get_name_history("nobody.eth") is None


class TestSubgraphFailures:
    """Tests for GraphQL and HTTP failures."""

    @pytest.mark.asyncio
    async def test_graphql_errors_not_retried(self, fake_sleep):
        calls = []

        def handler(request):
            calls.append(1)
            return httpx.Response(200, json={"errors": [{"message": "indexer down"}]})

        with pytest.raises(SubgraphError, match="indexer down") as exc_info:
            await make_client(handler, fake_sleep).get_subnames("vitalik.eth")
        assert exc_info.value.kind is ErrorKind.ENS_PROTOCOL
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_errors_retried(self, fake_sleep):
        calls = []

        def handler(request):
            calls.append(1)
            return httpx.Response(502)

        with pytest.raises(HttpStatusError):
            await make_client(handler, fake_sleep).get_subnames("vitalik.eth")
        assert len(calls) == 4
        assert fake_sleep.delays == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, fake_sleep):
        def handler(request):
            return httpx.Response(
                200, json={"data": {"domain": {"subdomains": [{"owner": "not-an-object"}]}}}
            )

        with pytest.raises(SubgraphError, match="unexpected response shape"):
            await make_client(handler, fake_sleep).get_subnames("vitalik.eth")
