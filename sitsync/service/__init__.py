"""Compliance service clients."""

from sitsync.service.base import ComplianceService, RemoteDictionary
from sitsync.service.http_client import HttpComplianceClient
from sitsync.service.inmemory import InMemoryComplianceService

__all__ = [
    "ComplianceService",
    "HttpComplianceClient",
    "InMemoryComplianceService",
    "RemoteDictionary",
]
