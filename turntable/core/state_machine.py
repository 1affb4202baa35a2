# turntable/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Optional, Union

from turntable.core.actions import REJECTION_MESSAGES, Action
from turntable.core.errors import CatalogUnavailable, InvalidTransition
from turntable.core.hooks import HookManager
from turntable.core.projection import LoadedItem, ResourceProjector, ResourceSnapshot
from turntable.core.states import FSM_STATES, INITIAL_STATE, FsmState, MediaState, StateId
from turntable.core.transitions import DEFAULT_TRANSITIONS, Transition, TransitionTable
from turntable.core.validations import Validator
from turntable.interfaces.protocols import CatalogProvider, TransitionHook
from turntable.runtime.concurrency import CallTimeout, call_with_timeout, get_lock, with_lock

if TYPE_CHECKING:
    from turntable.runtime.catalog import CatalogItem

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_TIMEOUT = 2.0

# A side effect receives the current item and returns the item to keep.
_SideEffect = Callable[["TurntableMachine", Optional[LoadedItem]], Optional[LoadedItem]]


def _keep_item(machine: "TurntableMachine", item: Optional[LoadedItem]) -> Optional[LoadedItem]:
    return item


def _fetch_item(machine: "TurntableMachine", item: Optional[LoadedItem]) -> Optional[LoadedItem]:
    return machine._fetch_from_catalog()


def _clear_item(machine: "TurntableMachine", item: Optional[LoadedItem]) -> Optional[LoadedItem]:
    return None


_SIDE_EFFECTS: Dict[Action, _SideEffect] = {
    Action.POWER_ON: _keep_item,
    Action.POWER_OFF: _keep_item,
    Action.PLAY: _keep_item,
    Action.STOP: _keep_item,
    Action.PUT_ITEM: _fetch_item,
    Action.CHANGE_ITEM: _fetch_item,
    Action.REMOVE_ITEM: _clear_item,
}


class TurntableMachine:
    """
    Table-driven finite state machine for the turntable.

    The machine owns the current state and loaded item. ``execute`` is a
    critical section: lookup, side effect and commit all happen under one
    lock, so concurrent callers observe either the state before or the state
    after an action, never anything in between.

    The new state is committed only once the side effect has succeeded. A
    catalog failure therefore leaves both the state and the item exactly as
    they were.
    """

    def __init__(
        self,
        catalog: CatalogProvider,
        table: TransitionTable = DEFAULT_TRANSITIONS,
        states: Mapping[StateId, FsmState] = FSM_STATES,
        initial_state: StateId = INITIAL_STATE,
        validator: Optional[Validator] = None,
        hooks: Optional[List[TransitionHook]] = None,
        catalog_timeout: Optional[float] = DEFAULT_CATALOG_TIMEOUT,
    ) -> None:
        """
        :param catalog: Provider of items for put-item/change-item.
        :param table: The transition table; validated before use.
        :param states: Declared states keyed by identifier.
        :param initial_state: The state the machine begins in.
        :param validator: Optional validator for structure checks.
        :param hooks: Optional list of objects implementing on_transition/on_error.
        :param catalog_timeout: Seconds to wait for the catalog; None waits forever.
        """
        self._validator = validator or Validator()
        self._validator.validate_states(states)
        self._validator.validate_table(table, states, initial_state)

        self._catalog = catalog
        self._table = table
        self._states = states
        self._projector = ResourceProjector(table, states)
        self._hooks = HookManager(hooks)
        self._catalog_timeout = catalog_timeout
        # one worker: a stuck catalog holds at most one thread per machine
        self._catalog_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="turntable-catalog")
        self._lock = get_lock()

        self._state_id = initial_state
        self._item: Optional[LoadedItem] = None

    @property
    def state_id(self) -> StateId:
        """Identifier of the current state."""
        return self._state_id

    @property
    def state(self) -> FsmState:
        """The current state with its axis values."""
        return self._states[self._state_id]

    @property
    def loaded_item(self) -> Optional[LoadedItem]:
        return self._item

    @property
    def table(self) -> TransitionTable:
        return self._table

    @property
    def hooks(self) -> HookManager:
        return self._hooks

    def snapshot(self) -> ResourceSnapshot:
        """Project the current state, consistent with any in-flight action."""
        with with_lock(self._lock):
            return self._projector.project(self._state_id, self._item)

    def execute(self, action: Union[Action, str]) -> ResourceSnapshot:
        """
        Perform ``action`` if the transition table allows it from the current
        state.

        :param action: An Action or its string value.
        :return: The snapshot after the transition.
        :raises InvalidTransition: If the action is unknown or not legal now.
        :raises CatalogUnavailable: If an item was needed and none could be fetched.
        """
        with with_lock(self._lock):
            try:
                resolved = self._coerce(action)
                transition = self._lookup(resolved)
                item = _SIDE_EFFECTS[resolved](self, self._item)
            except (InvalidTransition, CatalogUnavailable) as e:
                self._hooks.execute_on_error(getattr(action, "value", action), e)
                raise

            self._commit(transition, item)
            self._hooks.execute_on_transition(transition, item)
            return self._projector.project(self._state_id, self._item)

    def power_on(self) -> ResourceSnapshot:
        return self.execute(Action.POWER_ON)

    def power_off(self) -> ResourceSnapshot:
        return self.execute(Action.POWER_OFF)

    def load_item(self) -> ResourceSnapshot:
        """
        Put an item on an empty turntable, or change the loaded one. The
        choice is made while holding the lock so it matches the state the
        action is executed against.
        """
        with with_lock(self._lock):
            if self.state.media == MediaState.EMPTY:
                return self.execute(Action.PUT_ITEM)
            return self.execute(Action.CHANGE_ITEM)

    def remove_item(self) -> ResourceSnapshot:
        return self.execute(Action.REMOVE_ITEM)

    def play(self) -> ResourceSnapshot:
        return self.execute(Action.PLAY)

    def stop(self) -> ResourceSnapshot:
        return self.execute(Action.STOP)

    def _coerce(self, action: Union[Action, str]) -> Action:
        try:
            return Action(action)
        except ValueError:
            raise InvalidTransition(str(action), f"Unknown action: {action}") from None

    def _lookup(self, action: Action) -> Transition:
        transition = self._table.find(self._state_id, action)
        if transition is None:
            raise InvalidTransition(action.value, REJECTION_MESSAGES[action])
        return transition

    def _commit(self, transition: Transition, item: Optional[LoadedItem]) -> None:
        self._state_id = transition.target
        self._item = item
        logger.debug("Committed %s", transition)

    def _lookup_catalog_item(self) -> "CatalogItem":
        if not self._catalog.is_available():
            message = getattr(self._catalog, "load_error", None) or "Catalog not available"
            raise CatalogUnavailable(message)
        return self._catalog.get_random_item()

    def _fetch_from_catalog(self) -> LoadedItem:
        try:
            catalog_item = call_with_timeout(
                self._lookup_catalog_item, self._catalog_timeout, self._catalog_executor
            )
        except CatalogUnavailable as e:
            logger.error("Catalog unavailable: %s", e.message)
            raise
        except CallTimeout as e:
            logger.error("Catalog lookup timed out after %ss", e.timeout)
            raise CatalogUnavailable(f"Catalog did not respond within {e.timeout} seconds") from e
        except Exception as e:
            logger.exception("Catalog lookup failed")
            raise CatalogUnavailable(f"Catalog lookup failed: {e}") from e

        if catalog_item is None:
            logger.error("Catalog returned no item")
            raise CatalogUnavailable("Catalog returned no item")
        try:
            return LoadedItem.from_catalog_item(catalog_item)
        except AttributeError as e:
            logger.error("Catalog returned a malformed item: %r", catalog_item)
            raise CatalogUnavailable(f"Catalog returned a malformed item: {e}") from e
