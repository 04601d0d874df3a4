"""
SnmpTriple: one (OID, SNMP type, value) leaf served by the agent.

The value is either a literal or a zero-argument callable. Callables are
invoked on every read, so two reads of the same triple can return different
results (counters, uptimes, sensor reads).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from pysnmp.proto import rfc1902

from passpersist.errors import SnmpTypeError
from passpersist.oid import OidLike, SnmpOid, coerce_oid


class SnmpType(str, Enum):
    """SNMP type tags understood by snmpd's pass_persist parser."""

    STRING = "string"
    INTEGER = "integer"
    UNSIGNED = "unsigned"
    OBJECTID = "objectid"
    TIMETICKS = "timeticks"
    IPADDRESS = "ipaddress"
    COUNTER = "counter"
    GAUGE = "gauge"

    @classmethod
    def from_tag(cls, tag: Union["SnmpType", str]) -> "SnmpType":
        if isinstance(tag, SnmpType):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise SnmpTypeError(tag) from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Literal:
    value: Any

    def resolve(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Computed:
    producer: Callable[[], Any]

    def resolve(self) -> Any:
        return self.producer()


Value = Union[Literal, Computed]


def as_value(value: Any) -> Value:
    """Wrap a raw literal or zero-argument callable in the matching Value variant."""
    if isinstance(value, (Literal, Computed)):
        return value
    if callable(value):
        return Computed(value)
    return Literal(value)


def render_value(snmp_type: SnmpType, value: Any) -> str:
    """Render a resolved value as the text snmpd expects on the value line.

    Raw IPv4 octets and OID sequences are rendered through pysnmp's rfc1902
    types; everything else goes through ``str()``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(int(value))
    if snmp_type is SnmpType.IPADDRESS and isinstance(value, (bytes, bytearray)):
        return str(rfc1902.IpAddress(bytes(value)).prettyPrint())
    if snmp_type is SnmpType.OBJECTID and _is_oid_sequence(value):
        return str(rfc1902.ObjectName(tuple(value)).prettyPrint())
    return str(value)


def _is_oid_sequence(value: Any) -> bool:
    return isinstance(value, (tuple, list)) and all(
        isinstance(x, int) and not isinstance(x, bool) for x in value
    )


class SnmpTriple:
    """A (SnmpOid, SNMP type, value) record, sortable on its OID."""

    __slots__ = ("oid", "type", "_value")

    def __init__(self, oid: OidLike, type: Union[SnmpType, str], value: Any) -> None:
        self.type = SnmpType.from_tag(type)
        self.oid: SnmpOid = coerce_oid(oid)
        self._value: Value = as_value(value)

    @property
    def value(self) -> Any:
        return self._value.resolve()

    @property
    def is_computed(self) -> bool:
        return isinstance(self._value, Computed)

    def compare(self, other: "SnmpTriple") -> int:
        return self.oid.compare(other.oid)

    def __lt__(self, other: "SnmpTriple") -> bool:
        if not isinstance(other, SnmpTriple):
            return NotImplemented
        return self.oid < other.oid

    def lines(self) -> list[str]:
        """Return the three wire lines: OID, type tag, rendered value."""
        return [str(self.oid), self.type.value, render_value(self.type, self.value)]

    def __str__(self) -> str:
        return f"{self.oid} = {self.type.value}: {render_value(self.type, self.value)}"

    def __repr__(self) -> str:
        return f"SnmpTriple({self.oid.oidstr!r}, {self.type.value!r}, {self._value!r})"

