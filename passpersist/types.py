"""
Shared type aliases for the pass_persist agent.

Providers and lookup hooks are supplied by the embedding application; these
aliases describe their call signatures.
"""

from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from passpersist.oid import SnmpOid
    from passpersist.triple import SnmpTriple
    from passpersist.triple_set import SnmpTripleSet

# Populates an empty triple set with the current values of the sub-tree
Provider = Callable[["SnmpTripleSet"], None]

# Targeted GET / GETNEXT answer without re-enumerating the whole sub-tree
LookupHook = Callable[["SnmpOid"], Optional["SnmpTriple"]]
