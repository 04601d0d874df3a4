"""
Error taxonomy for the pass_persist agent.

Data-model errors (bad type tags, store misuse) surface to the embedding
application. Protocol-level conditions never raise out of the agent loop:
they are answered with wire tokens or end the loop quietly.
"""


class PassPersistError(Exception):
    """Base class for all pass_persist agent exceptions."""


class SnmpTypeError(PassPersistError, ValueError):
    """Raised when a triple is built with a type tag outside the supported set."""

    def __init__(self, type_tag: object) -> None:
        super().__init__(f"Bad SNMP type '{type_tag}'")
        self.type_tag = type_tag


class UnconfiguredOperationError(PassPersistError):
    """Raised when a request arrives with neither a hook nor a provider to answer it."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Can't {operation}: no data source configured")
        self.operation = operation


class StoreNotFinalizedError(PassPersistError, RuntimeError):
    """Raised when a triple set is queried before make_index()/finalize()."""


class StoreFinalizedError(PassPersistError, RuntimeError):
    """Raised when a triple is pushed into an already finalized triple set."""


class IdleTimeout(PassPersistError):
    """Raised by the line channel when no input arrives within the idle window."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"No input for {timeout} seconds")
        self.timeout = timeout
