"""ENS clients: contract reads, aggregated records, subgraph queries."""

from ens_mcp.core.clients.factory import (
    ClientContext,
    RotatableClientHandle,
    build_client_context,
    create_records_client,
)
from ens_mcp.core.clients.models import (
    AddressRecord,
    ExpiryRecord,
    NameRecords,
    OwnerRecord,
    PriceRecord,
    ReverseRecord,
)
from ens_mcp.core.clients.public import EnsPublicClient
from ens_mcp.core.clients.records import EnsRecordsClient
from ens_mcp.core.clients.subgraph import (
    HistoryEvent,
    NameHistory,
    SubgraphClient,
    Subname,
    resolve_subgraph_url,
)

__all__ = [
    "AddressRecord",
    "ClientContext",
    "EnsPublicClient",
    "EnsRecordsClient",
    "ExpiryRecord",
    "HistoryEvent",
    "NameHistory",
    "NameRecords",
    "OwnerRecord",
    "PriceRecord",
    "ReverseRecord",
    "RotatableClientHandle",
    "SubgraphClient",
    "Subname",
    "build_client_context",
    "create_records_client",
    "resolve_subgraph_url",
]
