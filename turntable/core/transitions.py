# turntable/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from turntable.core.actions import Action
from turntable.core.states import StateId


@dataclass(frozen=True)
class Transition:
    """
    A legal move of the turntable: performing ``action`` while in ``source``
    puts the machine in ``target``.
    """

    source: StateId
    action: Action
    target: StateId

    def __str__(self) -> str:
        return f"{self.source.value} --{self.action.value}--> {self.target.value}"


class TransitionTable:
    """
    Immutable, ordered collection of transitions. This is the single source
    of truth for which actions are legal from which state; both the machine
    and the projector consult it.

    Lookups are linear scans in declaration order. The table is small, and
    the order is observable through the links a snapshot exposes.
    """

    def __init__(self, transitions: Iterable[Transition]) -> None:
        """
        :param transitions: Transitions in the order they should be offered.
        """
        self._transitions: Tuple[Transition, ...] = tuple(transitions)

    def find(self, source: StateId, action: Action) -> Optional[Transition]:
        """
        Return the transition for ``action`` from ``source``, or None if the
        action is not legal there.

        :param source: The state the machine is currently in.
        :param action: The requested action.
        """
        for transition in self._transitions:
            if transition.source == source and transition.action == action:
                return transition
        return None

    def from_state(self, source: StateId) -> List[Transition]:
        """Return every transition leaving ``source``, in table order."""
        return [t for t in self._transitions if t.source == source]

    def states(self) -> Set[StateId]:
        """Return every state referenced as a source or target."""
        referenced = set()
        for t in self._transitions:
            referenced.add(t.source)
            referenced.add(t.target)
        return referenced

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def __len__(self) -> int:
        return len(self._transitions)

    def __repr__(self) -> str:
        return f"TransitionTable({len(self)} transitions)"


DEFAULT_TRANSITIONS = TransitionTable(
    [
        # power-on keeps whatever is loaded
        Transition(StateId.S1, Action.POWER_ON, StateId.S3),
        Transition(StateId.S2, Action.POWER_ON, StateId.S4),
        # power-off requires STOPPED
        Transition(StateId.S3, Action.POWER_OFF, StateId.S1),
        Transition(StateId.S4, Action.POWER_OFF, StateId.S2),
        # item handling requires ON and STOPPED
        Transition(StateId.S3, Action.PUT_ITEM, StateId.S4),
        Transition(StateId.S4, Action.CHANGE_ITEM, StateId.S4),
        Transition(StateId.S4, Action.REMOVE_ITEM, StateId.S3),
        # playback
        Transition(StateId.S4, Action.PLAY, StateId.S5),
        Transition(StateId.S5, Action.STOP, StateId.S4),
    ]
)
