"""
rediscache — Connection Module

Discovery and credential collaborators plus the resolvers RedisCache uses
to obtain connection and credential parameters on open().
"""

from .interface import CredentialStoreInterface, DiscoveryInterface
from .memory import MemoryCredentialStore, MemoryDiscovery
from .resolvers import (
    CREDENTIAL_STORE_DESCRIPTOR,
    DISCOVERY_DESCRIPTOR,
    ConnectionResolver,
    CredentialResolver,
)

__all__ = [
    "DiscoveryInterface",
    "CredentialStoreInterface",
    "MemoryDiscovery",
    "MemoryCredentialStore",
    "ConnectionResolver",
    "CredentialResolver",
    "DISCOVERY_DESCRIPTOR",
    "CREDENTIAL_STORE_DESCRIPTOR",
]
