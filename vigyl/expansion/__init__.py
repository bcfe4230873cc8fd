"""Prospect expansion: generator client, explored ledger and orchestrator."""

from .generator import (
    GenerationRequest,
    ProspectGenerator,
    GatewayGenerator,
    GeneratorError,
    AuthenticationError,
    RateLimitError,
    MalformedResponseError,
)
from .ledger import ExploredLedger
from .orchestrator import ExpansionOrchestrator, ExpansionError

__all__ = [
    "GenerationRequest",
    "ProspectGenerator",
    "GatewayGenerator",
    "GeneratorError",
    "AuthenticationError",
    "RateLimitError",
    "MalformedResponseError",
    "ExploredLedger",
    "ExpansionOrchestrator",
    "ExpansionError",
]
