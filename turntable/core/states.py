# turntable/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
State space of the turntable.

A state is the combination of three independent axes. Only the five
combinations listed in ``FSM_STATES`` are declared; everything else
(powered-off playback, playing without an item) is unrepresentable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class PowerState(str, Enum):
    OFF = "OFF"
    ON = "ON"


class MediaState(str, Enum):
    EMPTY = "EMPTY"
    LOADED = "LOADED"


class PlaybackState(str, Enum):
    STOPPED = "STOPPED"
    PLAYING = "PLAYING"


class StateId(str, Enum):
    """Identifiers of the declared states."""

    S1 = "S1"  # OFF / EMPTY / STOPPED
    S2 = "S2"  # OFF / LOADED / STOPPED
    S3 = "S3"  # ON / EMPTY / STOPPED
    S4 = "S4"  # ON / LOADED / STOPPED
    S5 = "S5"  # ON / LOADED / PLAYING


@dataclass(frozen=True)
class FsmState:
    """
    A declared state: its identifier plus the value of each axis. The loaded
    item is deliberately absent; it travels next to the state, not inside it.
    """

    id: StateId
    power: PowerState
    media: MediaState
    playback: PlaybackState

    @property
    def axes(self) -> tuple:
        return (self.power, self.media, self.playback)

    @property
    def label(self) -> str:
        """Human-readable ``POWER / MEDIA / PLAYBACK`` label."""
        return " / ".join(axis.value for axis in self.axes)


FSM_STATES: Mapping[StateId, FsmState] = MappingProxyType(
    {
        StateId.S1: FsmState(StateId.S1, PowerState.OFF, MediaState.EMPTY, PlaybackState.STOPPED),
        StateId.S2: FsmState(StateId.S2, PowerState.OFF, MediaState.LOADED, PlaybackState.STOPPED),
        StateId.S3: FsmState(StateId.S3, PowerState.ON, MediaState.EMPTY, PlaybackState.STOPPED),
        StateId.S4: FsmState(StateId.S4, PowerState.ON, MediaState.LOADED, PlaybackState.STOPPED),
        StateId.S5: FsmState(StateId.S5, PowerState.ON, MediaState.LOADED, PlaybackState.PLAYING),
    }
)

INITIAL_STATE = StateId.S1
