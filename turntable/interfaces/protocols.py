# turntable/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from turntable.core.projection import LoadedItem
    from turntable.core.transitions import Transition
    from turntable.runtime.catalog import CatalogItem


@runtime_checkable
class CatalogProvider(Protocol):
    """
    Source of playable items for put-item/change-item.

    Methods:
        is_available(): True when the provider can currently hand out items.
        get_random_item(): Returns one item chosen at random.

    Error Handling:
    - get_random_item() is only defined while is_available() is True. Callers
      must check availability first; implementations raise CatalogUnavailable
      otherwise.
    """

    def is_available(self) -> bool:
        ...

    def get_random_item(self) -> "CatalogItem":
        ...


@runtime_checkable
class TransitionHook(Protocol):
    """
    Observer notified by the machine. Both methods are optional; the hook
    manager only calls the ones a hook defines.

    Runtime Invariants:
    - on_transition is called after the new state is committed.
    - on_error is called for rejected actions, with the state unchanged.
    """

    def on_transition(self, transition: "Transition", item: Optional["LoadedItem"]) -> None:
        ...

    def on_error(self, action: Optional[str], error: Exception) -> None:
        ...
