"""
SnmpTripleSet: an indexed, sorted set of SnmpTriple objects for one OID sub-tree.

A provider pushes triples in any order, then make_index() sorts them and
builds the exact-match index. After that the set is read-only.
"""

from __future__ import annotations

import bisect
import logging
from typing import Any, Dict, Iterator, List, Optional, Union

from passpersist.errors import StoreFinalizedError, StoreNotFinalizedError
from passpersist.oid import OidLike, coerce_oid
from passpersist.triple import SnmpTriple, SnmpType

logger = logging.getLogger(__name__)


class SnmpTripleSet:
    def __init__(self) -> None:
        self._triples: List[SnmpTriple] = []
        self._index: Optional[Dict[str, SnmpTriple]] = None
        # Canonical keys of the sorted triples, parallel to _triples
        self._keys: List[str] = []

    @property
    def finalized(self) -> bool:
        return self._index is not None

    def push(self, triple: SnmpTriple) -> None:
        """Append a triple. Duplicates are not checked."""
        if self.finalized:
            raise StoreFinalizedError("Cannot push into a finalized triple set")
        self._triples.append(triple)

    def add(self, oid: OidLike, type: Union[SnmpType, str], value: Any) -> SnmpTriple:
        """Build a triple and push it. Returns the new triple."""
        triple = SnmpTriple(oid, type, value)
        self.push(triple)
        return triple

    def make_index(self) -> None:
        """Sort the triples by OID and build the exact-match index.

        When several triples share the same OID text the index keeps the last
        one pushed.
        """
        if self.finalized:
            raise StoreFinalizedError("Triple set is already finalized")
        # list.sort is stable, so ties on the canonical key keep push order
        self._triples.sort(key=lambda t: t.oid.cmpstr)
        self._keys = [t.oid.cmpstr for t in self._triples]
        index: Dict[str, SnmpTriple] = {}
        for triple in self._triples:
            index[triple.oid.oidstr] = triple
        self._index = index
        logger.debug(f"Indexed {len(self._triples)} triples")

    finalize = make_index

    def _require_index(self) -> Dict[str, SnmpTriple]:
        if self._index is None:
            raise StoreNotFinalizedError("Triple set must be finalized before querying")
        return self._index

    def get(self, oid: OidLike) -> Optional[SnmpTriple]:
        """Exact lookup by the OID's original text."""
        return self._require_index().get(coerce_oid(oid).oidstr)

    def getnext(self, oid: OidLike) -> Optional[SnmpTriple]:
        """Return the first triple whose OID sorts strictly after ``oid``."""
        self._require_index()
        pos = bisect.bisect_right(self._keys, coerce_oid(oid).cmpstr)
        if pos < len(self._triples):
            return self._triples[pos]
        return None

    @property
    def triples(self) -> List[SnmpTriple]:
        return self._triples

    def ordered(self) -> List[SnmpTriple]:
        """The finalized triples in ascending OID order."""
        self._require_index()
        return list(self._triples)

    def __len__(self) -> int:
        return len(self._triples)

    def __iter__(self) -> Iterator[SnmpTriple]:
        return iter(self._triples)
