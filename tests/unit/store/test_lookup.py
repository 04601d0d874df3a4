"""Tests for the lookup implementations behind the agent."""

from typing import Any, Callable, List

import pytest

from passpersist.errors import UnconfiguredOperationError
from passpersist.lookup import (
    HookLookup,
    ProviderLookup,
    UnconfiguredLookup,
    build_lookup,
)
from passpersist.oid import SnmpOid
from passpersist.triple import SnmpTriple
from passpersist.triple_set import SnmpTripleSet


def test_provider_lookup_rebuilds_for_every_request(
    sample_provider: Callable[[SnmpTripleSet], None]
) -> None:
    calls: List[SnmpTripleSet] = []

    def provider(triples: SnmpTripleSet) -> None:
        calls.append(triples)
        sample_provider(triples)

    lookup = ProviderLookup(provider)
    hit = lookup.get(SnmpOid("1.3.1"))
    nxt = lookup.getnext(SnmpOid("1.3.1"))
    dumped = lookup.dump()

    assert hit is not None and hit.value == "first"
    assert nxt is not None and str(nxt.oid) == "1.3.2"
    assert [str(t.oid) for t in dumped] == ["1.3.1", "1.3.2", "1.3.5"]
    assert len(calls) == 3
    assert len({id(c) for c in calls}) == 3


def test_provider_errors_propagate() -> None:
    def provider(triples: SnmpTripleSet) -> None:
        triples.add("1.3", "bogus", 1)

    with pytest.raises(ValueError):
        ProviderLookup(provider).get(SnmpOid("1.3"))


def test_hook_lookup_prefers_hooks(mocker: Any) -> None:
    triple = SnmpTriple("1.3.9", "integer", 9)
    get_hook = mocker.MagicMock(return_value=triple)
    fallback = mocker.MagicMock()

    lookup = HookLookup(get=get_hook, fallback=fallback)
    oid = SnmpOid("1.3.9")

    assert lookup.get(oid) is triple
    get_hook.assert_called_once_with(oid)
    fallback.get.assert_not_called()

    lookup.getnext(oid)
    fallback.getnext.assert_called_once_with(oid)

    lookup.dump()
    fallback.dump.assert_called_once_with()


def test_hook_lookup_without_fallback_is_unconfigured() -> None:
    lookup = HookLookup(getnext=lambda oid: None)
    assert lookup.getnext(SnmpOid("1.3")) is None
    with pytest.raises(UnconfiguredOperationError) as excinfo:
        lookup.get(SnmpOid("1.3"))
    assert excinfo.value.operation == "get"
    with pytest.raises(UnconfiguredOperationError):
        lookup.dump()


@pytest.mark.parametrize("method", ["get", "getnext"])
def test_unconfigured_lookup_raises(method: str) -> None:
    with pytest.raises(UnconfiguredOperationError, match=f"Can't {method}"):
        getattr(UnconfiguredLookup(), method)(SnmpOid("1.3"))


def test_build_lookup_selection(sample_provider: Callable[[SnmpTripleSet], None]) -> None:
    assert isinstance(build_lookup(), UnconfiguredLookup)
    assert isinstance(build_lookup(sample_provider), ProviderLookup)

    hooked = build_lookup(sample_provider, get=lambda oid: None)
    assert isinstance(hooked, HookLookup)
    assert isinstance(hooked.fallback, ProviderLookup)
    assert hooked.get(SnmpOid("1.3.1")) is None
    nxt = hooked.getnext(SnmpOid("1.3.1"))
    assert nxt is not None and str(nxt.oid) == "1.3.2"
