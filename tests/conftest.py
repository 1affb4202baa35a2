# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading
import time
from typing import List, Optional

import pytest

from turntable.core.errors import CatalogUnavailable
from turntable.runtime.catalog import CatalogItem


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


class FakeCatalog:
    """
    In-memory catalog provider. Records how many items were handed out and
    can be told to go unavailable, fail, or stall.
    """

    def __init__(self, items: List[CatalogItem], available: bool = True, delay: float = 0.0):
        self.items = list(items)
        self.available = available
        self.delay = delay
        self.error: Optional[Exception] = None
        self.calls = 0
        self._index = 0
        self._lock = threading.Lock()

    def is_available(self) -> bool:
        return self.available

    def get_random_item(self) -> CatalogItem:
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if not self.available:
            raise CatalogUnavailable("Catalog not available")
        # round-robin keeps tests deterministic
        item = self.items[self._index % len(self.items)]
        self._index += 1
        return item


@pytest.fixture
def catalog_items():
    """Two distinct catalog entries."""
    return [
        CatalogItem(id="first", title="First Track", author="First Author", url="http://example.com/first.mid"),
        CatalogItem(id="second", title="Second Track", author="Second Author", url="http://example.com/second.mid"),
    ]


@pytest.fixture
def catalog(catalog_items):
    return FakeCatalog(catalog_items)


@pytest.fixture
def machine(catalog):
    """A machine in its initial state (S1) backed by the fake catalog."""
    from turntable.core.state_machine import TurntableMachine

    return TurntableMachine(catalog, catalog_timeout=1.0)


@pytest.fixture
def machine_factory(catalog):
    """Returns a factory that builds a machine already driven to a given state."""
    from turntable.core.actions import Action
    from turntable.core.state_machine import TurntableMachine
    from turntable.core.states import StateId

    paths = {
        StateId.S1: [],
        StateId.S2: [Action.POWER_ON, Action.PUT_ITEM, Action.POWER_OFF],
        StateId.S3: [Action.POWER_ON],
        StateId.S4: [Action.POWER_ON, Action.PUT_ITEM],
        StateId.S5: [Action.POWER_ON, Action.PUT_ITEM, Action.PLAY],
    }

    def _factory(state_id=StateId.S1, hooks=None, cat=None):
        m = TurntableMachine(cat or catalog, hooks=hooks, catalog_timeout=1.0)
        for action in paths[state_id]:
            m.execute(action)
        assert m.state_id == state_id
        return m

    return _factory


@pytest.fixture
def fake_catalog_cls():
    """The FakeCatalog class, for tests that need a differently configured provider."""
    return FakeCatalog
