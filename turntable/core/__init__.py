"""
Core package: state space, transition table, machine and projector.
"""

from .actions import ACTION_LINKS, SELF_LINK, Action, ActionLink
from .errors import CatalogUnavailable, InvalidTransition, TurntableError, ValidationError
from .projection import LoadedItem, ResourceProjector, ResourceSnapshot
from .state_machine import TurntableMachine
from .states import FSM_STATES, INITIAL_STATE, FsmState, MediaState, PlaybackState, PowerState, StateId
from .transitions import DEFAULT_TRANSITIONS, Transition, TransitionTable
from .validations import Validator

__all__ = [
    # States
    "FSM_STATES",
    "INITIAL_STATE",
    "FsmState",
    "MediaState",
    "PlaybackState",
    "PowerState",
    "StateId",
    # Actions and links
    "ACTION_LINKS",
    "SELF_LINK",
    "Action",
    "ActionLink",
    # Transitions
    "DEFAULT_TRANSITIONS",
    "Transition",
    "TransitionTable",
    "Validator",
    # Machine
    "TurntableMachine",
    "LoadedItem",
    "ResourceProjector",
    "ResourceSnapshot",
    # Errors
    "TurntableError",
    "InvalidTransition",
    "CatalogUnavailable",
    "ValidationError",
]
