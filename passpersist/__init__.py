"""pass_persist agent package: serve an OID sub-tree to snmpd over stdin/stdout."""

from passpersist.agent import PassPersistAgent, TerminationReason
from passpersist.errors import (
    PassPersistError,
    SnmpTypeError,
    UnconfiguredOperationError,
)
from passpersist.lookup import HookLookup, ProviderLookup, TripleLookup, build_lookup
from passpersist.oid import SnmpOid
from passpersist.provider_registry import register_provider
from passpersist.triple import Computed, Literal, SnmpTriple, SnmpType
from passpersist.triple_set import SnmpTripleSet

__all__ = [
    "PassPersistAgent",
    "TerminationReason",
    "PassPersistError",
    "SnmpTypeError",
    "UnconfiguredOperationError",
    "TripleLookup",
    "HookLookup",
    "ProviderLookup",
    "build_lookup",
    "SnmpOid",
    "SnmpTriple",
    "SnmpType",
    "Literal",
    "Computed",
    "SnmpTripleSet",
    "register_provider",
]
