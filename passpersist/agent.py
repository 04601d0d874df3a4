"""
PassPersistAgent: the agent end of snmpd's pass_persist protocol.

snmpd writes a command line, followed by operand lines for GET, GETNEXT and
SET, and reads back a framed reply. The agent is read-only: every SET is
answered with ``not-writable``.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import IO, Callable, Dict, Iterable, Optional

from passpersist.channel import LineChannel
from passpersist.errors import IdleTimeout
from passpersist.lookup import TripleLookup, build_lookup
from passpersist.oid import SnmpOid
from passpersist.triple import SnmpTriple
from passpersist.types import LookupHook, Provider

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 60.0

DUMP_TERMINATOR = "."


class TerminationReason(str, Enum):
    EOF = "eof"
    IDLE_TIMEOUT = "idle-timeout"
    EXIT = "exit"


class _Stop(Exception):
    """Internal signal to leave the command loop."""

    def __init__(self, reason: TerminationReason) -> None:
        super().__init__(reason.value)
        self.reason = reason


class PassPersistAgent:
    def __init__(
        self,
        prepare_responses: Optional[Provider] = None,
        *,
        get: Optional[LookupHook] = None,
        getnext: Optional[LookupHook] = None,
        lookup: Optional[TripleLookup] = None,
        in_fh: Optional[IO[str]] = None,
        out_fh: Optional[IO[str]] = None,
        idle_timeout: Optional[float] = DEFAULT_IDLE_TIMEOUT,
    ) -> None:
        if lookup is not None and (prepare_responses or get or getnext):
            raise ValueError("Pass either a lookup or a provider/hooks, not both")
        self.lookup = lookup or build_lookup(prepare_responses, get=get, getnext=getnext)
        self.channel = LineChannel(
            in_fh if in_fh is not None else sys.stdin,
            out_fh if out_fh is not None else sys.stdout,
            idle_timeout,
        )
        self.idle_timeout = idle_timeout
        self._handlers: Dict[str, Callable[[], None]] = {
            "PING": self.do_ping,
            "GET": self.do_get,
            "GETNEXT": self.do_getnext,
            "SET": self.do_set,
            "EXIT": self.do_exit,
            "QUIT": self.do_exit,
            # Not used by snmpd; handy when talking to the agent by hand
            "DUMP": self.do_dump,
        }

    def put_lines(self, lines: Iterable[object]) -> None:
        self.channel.write_lines(lines)

    def put_triple(self, triple: Optional[SnmpTriple]) -> None:
        if triple is None:
            self.put_lines(["NONE"])
        else:
            self.put_lines(triple.lines())

    def _operand(self) -> str:
        line = self.channel.read_line()
        if line is None:
            raise _Stop(TerminationReason.EOF)
        return line

    def do_ping(self) -> None:
        self.put_lines(["PONG"])

    def do_get(self) -> None:
        oid = SnmpOid(self._operand())
        self.put_triple(self.lookup.get(oid))

    def do_getnext(self) -> None:
        oid = SnmpOid(self._operand())
        self.put_triple(self.lookup.getnext(oid))

    def do_set(self) -> None:
        # OID line, then "<type> <value>" line; both discarded
        self._operand()
        self._operand()
        self.put_lines(["not-writable"])

    def do_exit(self) -> None:
        self.put_lines(["BYE"])
        raise _Stop(TerminationReason.EXIT)

    def do_dump(self) -> None:
        lines: list[str] = []
        for triple in self.lookup.dump():
            lines.extend(triple.lines())
        lines.append(DUMP_TERMINATOR)
        self.put_lines(lines)

    def handle(self, command: str) -> None:
        """Dispatch one command line. Unknown verbs get ``unknown-command``."""
        handler = self._handlers.get(command.upper())
        if handler is None:
            self.put_lines(["unknown-command"])
            return
        handler()

    def run(self) -> TerminationReason:
        """Serve commands until EXIT/QUIT, end of input or the idle timeout."""
        logger.info(f"pass_persist agent started (idle timeout {self.idle_timeout}s)")
        try:
            while True:
                command = self.channel.read_line()
                if command is None:
                    reason = TerminationReason.EOF
                    break
                self.handle(command)
        except _Stop as stop:
            reason = stop.reason
        except IdleTimeout:
            reason = TerminationReason.IDLE_TIMEOUT
            logger.info(f"No request for {self.idle_timeout}s, exiting")
        logger.info(f"pass_persist agent stopped: {reason.value}")
        return reason

    def dump(self) -> None:
        self.do_dump()
