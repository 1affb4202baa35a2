# turntable/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from turntable.core.projection import LoadedItem
    from turntable.core.transitions import Transition
    from turntable.interfaces.protocols import TransitionHook

logger = logging.getLogger(__name__)


class HookManager:
    """
    Manages the registration and execution of hooks that observe the
    machine (on_transition, on_error). Users can attach logging, monitoring,
    or custom side effects without altering core logic.

    Hooks run after the machine has settled, so a failing hook is logged and
    the next hook still runs; it cannot undo a committed transition.
    """

    def __init__(self, hooks: Optional[List["TransitionHook"]] = None) -> None:
        self._hooks: List["TransitionHook"] = list(hooks or [])

    @property
    def hooks(self) -> List["TransitionHook"]:
        return list(self._hooks)

    def register_hook(self, hook: "TransitionHook") -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing TransitionHook methods.
        """
        self._hooks.append(hook)

    def execute_on_transition(self, transition: "Transition", item: Optional["LoadedItem"]) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_transition"):
                try:
                    hook.on_transition(transition, item)
                except Exception:
                    logger.exception("Hook %r failed in on_transition for %s", hook, transition)

    def execute_on_error(self, action: Optional[str], error: Exception) -> None:
        for hook in self._hooks:
            if hasattr(hook, "on_error"):
                try:
                    hook.on_error(action, error)
                except Exception:
                    logger.exception("Hook %r failed in on_error for %s", hook, action)


class LoggingHook:
    """Logs every accepted transition and every rejected action."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logging.getLogger("turntable.transitions")

    def on_transition(self, transition: "Transition", item: Optional["LoadedItem"]) -> None:
        if item is not None:
            self._log.info("%s (item=%s)", transition, item.id)
        else:
            self._log.info("%s", transition)

    def on_error(self, action: Optional[str], error: Exception) -> None:
        self._log.warning("Rejected %s: %s", action, error)
