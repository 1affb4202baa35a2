# turntable/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Dict, Mapping, Set, Tuple

from turntable.core.actions import Action
from turntable.core.errors import ValidationError
from turntable.core.states import FsmState, MediaState, PlaybackState, PowerState, StateId
from turntable.core.transitions import TransitionTable


class Validator:
    """
    Performs construction-time validation of the state space and the
    transition table, ensuring the machine can never be driven into an
    undeclared or ambiguous situation.
    """

    def __init__(self) -> None:
        self._rules = _DefaultValidationRules

    def validate_states(self, states: Mapping[StateId, FsmState]) -> None:
        """
        Check that each declared state is distinct and physically possible.

        :param states: Declared states keyed by identifier.
        :raises ValidationError: If validation fails.
        """
        self._rules.validate_states(states)

    def validate_table(
        self,
        table: TransitionTable,
        states: Mapping[StateId, FsmState],
        initial: StateId,
    ) -> None:
        """
        Check the table for determinism, closure and reachability.

        :param table: The transition table to validate.
        :param states: Declared states keyed by identifier.
        :param initial: The state the machine starts in.
        :raises ValidationError: If validation fails.
        """
        self._rules.validate_determinism(table)
        self._rules.validate_closure(table, states)
        self._rules.validate_reachability(table, states, initial)


class _DefaultValidationRules:
    """
    Built-in rules. Each raises ValidationError describing the first
    problem found.
    """

    @staticmethod
    def validate_states(states: Mapping[StateId, FsmState]) -> None:
        seen: Dict[Tuple, StateId] = {}
        for state_id, state in states.items():
            if state.id != state_id:
                raise ValidationError(f"State {state.id.value} is registered under {state_id.value}.")
            if state.playback == PlaybackState.PLAYING and (
                state.power == PowerState.OFF or state.media == MediaState.EMPTY
            ):
                raise ValidationError(f"State {state_id.value} ({state.label}) cannot be playing.")
            if state.axes in seen:
                raise ValidationError(
                    f"States {seen[state.axes].value} and {state_id.value} share the axes {state.label}."
                )
            seen[state.axes] = state_id

    @staticmethod
    def validate_determinism(table: TransitionTable) -> None:
        seen: Set[Tuple[StateId, Action]] = set()
        for t in table:
            key = (t.source, t.action)
            if key in seen:
                raise ValidationError(
                    f"Duplicate transition for action {t.action.value} from state {t.source.value}."
                )
            seen.add(key)

    @staticmethod
    def validate_closure(table: TransitionTable, states: Mapping[StateId, FsmState]) -> None:
        for t in table:
            for state_id in (t.source, t.target):
                if state_id not in states:
                    raise ValidationError(f"Transition {t} references undeclared state {state_id.value}.")

    @staticmethod
    def validate_reachability(
        table: TransitionTable, states: Mapping[StateId, FsmState], initial: StateId
    ) -> None:
        if initial not in states:
            raise ValidationError(f"Initial state {initial.value} is not declared.")

        reachable = {initial}
        frontier = [initial]
        while frontier:
            current = frontier.pop()
            for t in table.from_state(current):
                if t.target not in reachable:
                    reachable.add(t.target)
                    frontier.append(t.target)

        unreachable = set(states) - reachable
        if unreachable:
            names = sorted(s.value for s in unreachable)
            raise ValidationError(f"States {names} are not reachable from initial state {initial.value}.")
