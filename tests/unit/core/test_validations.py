# tests/unit/core/test_validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import pytest

from turntable.core.actions import Action
from turntable.core.errors import TurntableError, ValidationError
from turntable.core.state_machine import TurntableMachine
from turntable.core.states import FSM_STATES, FsmState, MediaState, PlaybackState, PowerState, StateId
from turntable.core.transitions import DEFAULT_TRANSITIONS, Transition, TransitionTable
from turntable.core.validations import Validator


@pytest.fixture
def validator():
    return Validator()


def test_default_definitions_pass(validator):
    validator.validate_states(FSM_STATES)
    validator.validate_table(DEFAULT_TRANSITIONS, FSM_STATES, StateId.S1)


def test_duplicate_source_action_rejected(validator):
    table = TransitionTable(
        list(DEFAULT_TRANSITIONS) + [Transition(StateId.S1, Action.POWER_ON, StateId.S4)]
    )
    with pytest.raises(ValidationError, match="Duplicate transition for action power-on from state S1"):
        validator.validate_table(table, FSM_STATES, StateId.S1)


def test_undeclared_state_rejected(validator):
    states = {k: v for k, v in FSM_STATES.items() if k != StateId.S5}
    with pytest.raises(ValidationError, match="undeclared state S5"):
        validator.validate_table(DEFAULT_TRANSITIONS, states, StateId.S1)


def test_unreachable_state_rejected(validator):
    # without S1 -> S3 nothing is reachable from S1
    table = TransitionTable([t for t in DEFAULT_TRANSITIONS if t.source != StateId.S1])
    with pytest.raises(ValidationError, match="not reachable from initial state S1"):
        validator.validate_table(table, FSM_STATES, StateId.S1)


def test_undeclared_initial_state_rejected(validator):
    states = {k: v for k, v in FSM_STATES.items() if k != StateId.S1}
    table = TransitionTable([t for t in DEFAULT_TRANSITIONS if StateId.S1 not in (t.source, t.target)])
    with pytest.raises(ValidationError, match="Initial state S1 is not declared"):
        validator.validate_table(table, states, StateId.S1)


def test_playing_while_off_rejected(validator):
    states = dict(FSM_STATES)
    states[StateId.S2] = FsmState(StateId.S2, PowerState.OFF, MediaState.LOADED, PlaybackState.PLAYING)
    with pytest.raises(ValidationError, match="cannot be playing"):
        validator.validate_states(states)


def test_duplicate_axes_rejected(validator):
    states = dict(FSM_STATES)
    states[StateId.S2] = FsmState(StateId.S2, PowerState.OFF, MediaState.EMPTY, PlaybackState.STOPPED)
    with pytest.raises(ValidationError, match="share the axes"):
        validator.validate_states(states)


def test_mismatched_registration_rejected(validator):
    states = dict(FSM_STATES)
    states[StateId.S2] = FSM_STATES[StateId.S4]
    with pytest.raises(ValidationError, match="registered under S2"):
        validator.validate_states(states)


def test_machine_refuses_invalid_table(catalog):
    table = TransitionTable(list(DEFAULT_TRANSITIONS) + [Transition(StateId.S4, Action.PLAY, StateId.S3)])
    with pytest.raises(ValidationError):
        TurntableMachine(catalog, table=table)


def test_validation_error_is_turntable_error():
    err = ValidationError("bad")
    assert isinstance(err, TurntableError)
    assert err.code == "INVALID_DEFINITION"
