"""Sortable numeric OIDs for the pass_persist agent.

An OID keeps the text it was parsed from and a canonical sort key built by
rendering every component as a fixed-width hexadecimal field. Comparing the
canonical keys as strings gives numeric, component-by-component ordering, so
``1.3.6.2 < 1.3.6.10`` holds without converting to tuples on every compare.

Equality and hashing use the original text, not the canonical key: ``01.3``
and ``1.3`` sort as equal but are different dictionary keys.
"""

from __future__ import annotations

from typing import Tuple, Union

OID_SEPARATOR = "."

# Components must stay below 2**32 for the canonical ordering to hold.
COMPONENT_WIDTH = 8


def _canonical_component(component: str) -> str:
    try:
        return "%0*X" % (COMPONENT_WIDTH, int(component))
    except ValueError:
        # Non-numeric tokens are kept so parsing never fails; their order is undefined.
        return component.upper()


def oid_str_to_tuple(oid_str: str) -> Tuple[int, ...]:
    """Convert OID string to tuple of integers.

    Empty components (leading, trailing or doubled dots) are dropped.

    Examples:
        >>> oid_str_to_tuple(".1.3.6.1.2.1.1.1.0")
        (1, 3, 6, 1, 2, 1, 1, 1, 0)
        >>> oid_str_to_tuple("")
        ()
    """
    return tuple(int(x) for x in oid_str.strip().split(OID_SEPARATOR) if x)


def oid_tuple_to_str(oid_tuple: Tuple[int, ...]) -> str:
    """Convert OID tuple to dot-separated string."""
    return OID_SEPARATOR.join(str(x) for x in oid_tuple)


class SnmpOid:
    """A dotted numeric OID that sorts numerically and compares by its text."""

    __slots__ = ("oidstr", "cmpstr")

    def __init__(self, oidstr: str) -> None:
        self.oidstr = oidstr
        self.cmpstr = OID_SEPARATOR.join(
            _canonical_component(x) for x in oidstr.split(OID_SEPARATOR) if x != ""
        )

    @classmethod
    def parse(cls, text: str) -> "SnmpOid":
        return cls(text)

    @property
    def canonical(self) -> str:
        return self.cmpstr

    @property
    def components(self) -> Tuple[int, ...]:
        """Numeric components; raises ValueError for non-numeric tokens."""
        return oid_str_to_tuple(self.oidstr)

    def compare(self, other: "SnmpOid") -> int:
        """Return -1, 0 or 1 comparing canonical forms."""
        if self.cmpstr < other.cmpstr:
            return -1
        if self.cmpstr > other.cmpstr:
            return 1
        return 0

    # Ordering is defined on the canonical key and equality on the text, so the
    # comparison operators are spelled out instead of derived with total_ordering.
    def __lt__(self, other: "SnmpOid") -> bool:
        if not isinstance(other, SnmpOid):
            return NotImplemented
        return self.cmpstr < other.cmpstr

    def __le__(self, other: "SnmpOid") -> bool:
        if not isinstance(other, SnmpOid):
            return NotImplemented
        return self.cmpstr <= other.cmpstr

    def __gt__(self, other: "SnmpOid") -> bool:
        if not isinstance(other, SnmpOid):
            return NotImplemented
        return self.cmpstr > other.cmpstr

    def __ge__(self, other: "SnmpOid") -> bool:
        if not isinstance(other, SnmpOid):
            return NotImplemented
        return self.cmpstr >= other.cmpstr

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SnmpOid):
            return NotImplemented
        return self.oidstr == other.oidstr

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, SnmpOid):
            return NotImplemented
        return self.oidstr != other.oidstr

    def __hash__(self) -> int:
        return hash(self.oidstr)

    def __str__(self) -> str:
        return self.oidstr

    def __repr__(self) -> str:
        return f"SnmpOid({self.oidstr!r})"


OidLike = Union[SnmpOid, str]


def coerce_oid(oid: OidLike) -> SnmpOid:
    """Return ``oid`` unchanged if it is already an SnmpOid, else parse it."""
    if isinstance(oid, SnmpOid):
        return oid
    if isinstance(oid, str):
        return SnmpOid(oid)
    raise TypeError(f"OID must be SnmpOid or string, got {type(oid)}")


def compare(a: SnmpOid, b: SnmpOid) -> int:
    return a.compare(b)
