"""Unified error hierarchy for ens-mcp.

All custom exception classes are defined in domain-specific modules within
this package. This __init__.py re-exports everything for convenient access.

Usage:
    from ens_mcp.core.errors import AllProvidersFailedError, classify_error
"""

# --- Base ---
from ens_mcp.core.errors.base import EnsMcpError, ErrorKind

# --- Classification ---
from ens_mcp.core.errors.classification import (
    classify_error,
    format_error_message,
    infer_error_kind,
)

# --- ENS domain errors ---
from ens_mcp.core.errors.ens import (
    InvalidNameError,
    SubgraphError,
    UnsupportedNameError,
)

# --- Transport errors ---
from ens_mcp.core.errors.transport import (
    AllProvidersFailedError,
    ContractRevertError,
    HttpStatusError,
    ProviderExhaustedError,
    RpcResponseError,
    TransportError,
)

__all__ = [
    # Base
    "EnsMcpError",
    "ErrorKind",
    # Classification
    "classify_error",
    "format_error_message",
    "infer_error_kind",
    # ENS domain errors
    "InvalidNameError",
    "SubgraphError",
    "UnsupportedNameError",
    # Transport errors
    "TransportError",
    "HttpStatusError",
    "RpcResponseError",
    "ContractRevertError",
    "AllProvidersFailedError",
    "ProviderExhaustedError",
]
