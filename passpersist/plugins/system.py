"""Host values under the NET-SNMP playpen sub-tree."""

import itertools
import os
import socket
import time

from passpersist.provider_registry import register_provider
from passpersist.triple_set import SnmpTripleSet

BASE_OID = ".1.3.6.1.4.1.8072.9999.1"

# NET-SNMP-TC::linux
AGENT_OBJECT_ID = (1, 3, 6, 1, 4, 1, 8072, 3, 2, 10)

_clock = time.monotonic
_started = _clock()
_populations = itertools.count(1)


def _uptime_ticks() -> int:
    """Agent uptime in hundredths of a second."""
    return int((_clock() - _started) * 100)


def _load_average(index: int) -> int:
    # Gauge32 carries no fraction; export load * 100
    return int(os.getloadavg()[index] * 100)


@register_provider("system")
def system(triples: SnmpTripleSet) -> None:
    triples.add(f"{BASE_OID}.1.0", "string", socket.gethostname())
    triples.add(f"{BASE_OID}.2.0", "timeticks", _uptime_ticks)
    triples.add(f"{BASE_OID}.3.0", "objectid", AGENT_OBJECT_ID)
    triples.add(f"{BASE_OID}.4.0", "counter", next(_populations))
    if hasattr(os, "getloadavg"):
        for index in range(3):
            triples.add(
                f"{BASE_OID}.5.{index + 1}",
                "gauge",
                lambda index=index: _load_average(index),
            )
