"""
Lookup capability used by the agent to answer GET, GETNEXT and DUMP.

Two implementations back the same interface: ProviderLookup rebuilds a fresh
SnmpTripleSet from the provider on every request, HookLookup calls targeted
get/getnext hooks and falls back to another lookup for the operations it has
no hook for.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from passpersist.errors import UnconfiguredOperationError
from passpersist.oid import SnmpOid
from passpersist.triple import SnmpTriple
from passpersist.triple_set import SnmpTripleSet
from passpersist.types import LookupHook, Provider

logger = logging.getLogger(__name__)


class TripleLookup(ABC):
    @abstractmethod
    def get(self, oid: SnmpOid) -> Optional[SnmpTriple]: ...

    @abstractmethod
    def getnext(self, oid: SnmpOid) -> Optional[SnmpTriple]: ...

    @abstractmethod
    def dump(self) -> List[SnmpTriple]: ...


class UnconfiguredLookup(TripleLookup):
    """Lookup with no data source; every request is a configuration fault."""

    def get(self, oid: SnmpOid) -> Optional[SnmpTriple]:
        raise UnconfiguredOperationError("get")

    def getnext(self, oid: SnmpOid) -> Optional[SnmpTriple]:
        raise UnconfiguredOperationError("getnext")

    def dump(self) -> List[SnmpTriple]:
        raise UnconfiguredOperationError("dump")


class ProviderLookup(TripleLookup):
    """Answers every request from a freshly populated and indexed triple set."""

    def __init__(self, provider: Provider) -> None:
        self.provider = provider

    def prepare(self) -> SnmpTripleSet:
        triple_set = SnmpTripleSet()
        self.provider(triple_set)
        triple_set.make_index()
        logger.debug(f"Provider populated {len(triple_set)} triples")
        return triple_set

    def get(self, oid: SnmpOid) -> Optional[SnmpTriple]:
        return self.prepare().get(oid)

    def getnext(self, oid: SnmpOid) -> Optional[SnmpTriple]:
        return self.prepare().getnext(oid)

    def dump(self) -> List[SnmpTriple]:
        return self.prepare().ordered()


class HookLookup(TripleLookup):
    """Answers GET/GETNEXT through hooks, delegating the rest to ``fallback``."""

    def __init__(
        self,
        get: Optional[LookupHook] = None,
        getnext: Optional[LookupHook] = None,
        fallback: Optional[TripleLookup] = None,
    ) -> None:
        self.get_hook = get
        self.getnext_hook = getnext
        self.fallback = fallback or UnconfiguredLookup()

    def get(self, oid: SnmpOid) -> Optional[SnmpTriple]:
        if self.get_hook is not None:
            return self.get_hook(oid)
        return self.fallback.get(oid)

    def getnext(self, oid: SnmpOid) -> Optional[SnmpTriple]:
        if self.getnext_hook is not None:
            return self.getnext_hook(oid)
        return self.fallback.getnext(oid)

    def dump(self) -> List[SnmpTriple]:
        return self.fallback.dump()


def build_lookup(
    provider: Optional[Provider] = None,
    get: Optional[LookupHook] = None,
    getnext: Optional[LookupHook] = None,
) -> TripleLookup:
    """Select the lookup implementation for the given provider and hooks."""
    base: TripleLookup = ProviderLookup(provider) if provider is not None else UnconfiguredLookup()
    if get is None and getnext is None:
        return base
    return HookLookup(get=get, getnext=getnext, fallback=base)
