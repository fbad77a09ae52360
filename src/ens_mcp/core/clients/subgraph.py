"""ENS subgraph client (subnames and event history).

Subnames and name history are not readable from the contracts, so they come
from the ENS subgraph over GraphQL. Requests share the JSON-RPC endpoints'
``TransportPolicy`` and retry helper; there is a single subgraph URL, so
there is no fallback.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ens_mcp.core.clients.names import namehash
from ens_mcp.core.errors import HttpStatusError, SubgraphError, TransportError
from ens_mcp.core.providers.resilience import (
    SleepFunc,
    TransportPolicy,
    async_retry_with_backoff,
    classify_transport_error,
    is_retryable_status,
)
from ens_mcp.core.providers.shared import extract_error_message, parse_retry_after, redact_url

logger = logging.getLogger(__name__)

ENS_SUBGRAPH_ID = "5XqPmWe6gjyrJtFn9cLy237i4cWw2j9HcUJEXsP5qGtH"
GATEWAY_URL_TEMPLATE = "https://gateway.thegraph.com/api/{api_key}/subgraphs/id/" + ENS_SUBGRAPH_ID
LEGACY_SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"

SUBNAMES_QUERY = """
query getSubnames($id: String!, $first: Int!) {
  domain(id: $id) {
    subdomains(first: $first, orderBy: createdAt, orderDirection: desc) {
      name
      labelName
      owner { id }
      wrappedOwner { id }
    }
  }
}
"""

_EVENT_FIELDS = """
      __typename
      blockNumber
      transactionID
"""

HISTORY_QUERY = (
    """
query getNameHistory($id: String!) {
  domain(id: $id) {
    events {"""
    + _EVENT_FIELDS
    + """
      ... on Transfer { owner { id } }
      ... on NewOwner { owner { id } }
      ... on NewResolver { resolver { id } }
      ... on NewTTL { ttl }
      ... on WrappedTransfer { owner { id } }
      ... on NameWrapped { owner { id } expiryDate }
      ... on NameUnwrapped { owner { id } }
      ... on ExpiryExtended { expiryDate }
    }
    registration {
      events {"""
    + _EVENT_FIELDS
    + """
        ... on NameRegistered { registrant { id } expiryDate }
        ... on NameRenewed { expiryDate }
        ... on NameTransferred { newOwner { id } }
      }
    }
    resolver {
      events {"""
    + _EVENT_FIELDS
    + """
        ... on AddrChanged { addr { id } }
        ... on MulticoinAddrChanged { coinType multiaddr: addr }
        ... on NameChanged { name }
        ... on TextChanged { key value }
        ... on ContenthashChanged { hash }
        ... on VersionChanged { version }
      }
    }
  }
}
"""
)


def resolve_subgraph_url(url: Optional[str] = None, api_key: Optional[str] = None) -> str:
    """Pick the subgraph URL: explicit URL, then gateway (with key), then legacy."""
    if url and url.strip():
        return url.strip()
    if api_key and api_key.strip():
        return GATEWAY_URL_TEMPLATE.format(api_key=api_key.strip())
    return LEGACY_SUBGRAPH_URL


class _Account(BaseModel):
    id: str


class HistoryEvent(BaseModel):
    """One subgraph event; only the fields of its ``type`` are set."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = Field(alias="__typename")
    block_number: int = Field(alias="blockNumber")
    transaction_id: str = Field(alias="transactionID")
    owner: Optional[_Account] = None
    new_owner: Optional[_Account] = Field(default=None, alias="newOwner")
    registrant: Optional[_Account] = None
    resolver: Optional[_Account] = None
    addr: Optional[_Account] = None
    multiaddr: Optional[str] = None
    coin_type: Optional[str] = Field(default=None, alias="coinType")
    expiry_date: Optional[int] = Field(default=None, alias="expiryDate")
    ttl: Optional[int] = None
    name: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None
    hash: Optional[str] = None
    version: Optional[int] = None


class NameHistory(BaseModel):
    domain_events: list[HistoryEvent] = Field(default_factory=list)
    registration_events: list[HistoryEvent] = Field(default_factory=list)
    resolver_events: list[HistoryEvent] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.domain_events or self.registration_events or self.resolver_events)


class Subname(BaseModel):
    name: Optional[str] = None
    label_name: Optional[str] = Field(default=None, alias="labelName")
    owner: Optional[_Account] = None
    wrapped_owner: Optional[_Account] = Field(default=None, alias="wrappedOwner")

    @property
    def effective_owner(self) -> Optional[str]:
        account = self.wrapped_owner or self.owner
        return account.id if account else None


class _Events(BaseModel):
    events: list[HistoryEvent] = Field(default_factory=list)


class _HistoryDomain(BaseModel):
    events: list[HistoryEvent] = Field(default_factory=list)
    registration: Optional[_Events] = None
    resolver: Optional[_Events] = None


class _SubnamesDomain(BaseModel):
    subdomains: list[Subname] = Field(default_factory=list)


class SubgraphClient:
    """GraphQL client for the ENS subgraph."""

    def __init__(
        self,
        url: str,
        policy: Optional[TransportPolicy] = None,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep_func: Optional[SleepFunc] = None,
    ):
        self.url = url
        self.policy = policy or TransportPolicy()
        self._http_transport = http_transport
        self._sleep_func = sleep_func

    async def get_subnames(self, name: str, *, first: int = 100) -> list[Subname]:
        """Direct subdomains of *name*, newest first."""
        data = await self.query(SUBNAMES_QUERY, {"id": _domain_id(name), "first": first})
        domain = data.get("domain")
        if not domain:
            return []
        return _parse(_SubnamesDomain, domain).subdomains

    async def get_name_history(self, name: str) -> Optional[NameHistory]:
        """Domain, registration and resolver events of *name*.

        Returns:
            ``None`` when the subgraph does not know the name.
        """
        data = await self.query(HISTORY_QUERY, {"id": _domain_id(name)})
        domain = data.get("domain")
        if not domain:
            return None
        parsed = _parse(_HistoryDomain, domain)
        return NameHistory(
            domain_events=parsed.events,
            registration_events=parsed.registration.events if parsed.registration else [],
            resolver_events=parsed.resolver.events if parsed.resolver else [],
        )

    async def query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """POST a GraphQL query, retrying transient failures.

        Raises:
            SubgraphError: The response carried GraphQL errors or no data.
            TransportError: The subgraph was unreachable after retries.
        """
        return await async_retry_with_backoff(
            lambda: self._send(query, variables),
            classify=classify_transport_error,
            max_retries=self.policy.retry_count,
            base_delay=self.policy.retry_delay,
            max_delay=self.policy.max_delay,
            sleep_func=self._sleep_func,
            label=f"subgraph query via {redact_url(self.url)}",
        )

    async def _send(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        safe_url = redact_url(self.url)
        try:
            async with httpx.AsyncClient(
                timeout=self.policy.timeout,
                headers=self.policy.headers,
                transport=self._http_transport,
            ) as client:
                response = await client.post(
                    self.url, json={"query": query, "variables": variables}
                )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"HTTP request failed: timeout after {self.policy.timeout}s ({safe_url})",
                url=self.url,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"HTTP request failed: {type(e).__name__}: {e} ({safe_url})",
                url=self.url,
                original_error=e,
            ) from e

        if not response.is_success:
            status = response.status_code
            raise HttpStatusError(
                status,
                f"{extract_error_message(response)} ({safe_url})",
                url=self.url,
                retryable=is_retryable_status(status),
                retry_after=parse_retry_after(response) if status == 429 else None,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise SubgraphError("invalid JSON in response", original_error=e) from e

        if not isinstance(body, dict):
            raise SubgraphError("unexpected response payload")
        if body.get("errors"):
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in body["errors"]
            )
            raise SubgraphError(messages)
        data = body.get("data")
        if not isinstance(data, dict):
            raise SubgraphError("response has no data")
        return data


def _domain_id(name: str) -> str:
    return "0x" + namehash(name).hex()


def _parse(model: type[BaseModel], payload: Any) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise SubgraphError(
            f"unexpected response shape ({e.error_count()} validation errors)",
            original_error=e,
        ) from e
