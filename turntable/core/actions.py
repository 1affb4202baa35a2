# turntable/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping

RESOURCE_PATH = "/resource"


class Action(str, Enum):
    """
    The closed set of actions a client can ask the turntable to perform.
    Legality of each action is decided solely by the transition table.
    """

    POWER_ON = "power-on"
    POWER_OFF = "power-off"
    PUT_ITEM = "put-item"
    CHANGE_ITEM = "change-item"
    REMOVE_ITEM = "remove-item"
    PLAY = "play"
    STOP = "stop"


@dataclass(frozen=True)
class ActionLink:
    """How a client invokes an action: the target path and HTTP method."""

    href: str
    method: str

    def to_dict(self) -> Dict[str, str]:
        return {"href": self.href, "method": self.method}


SELF_LINK = ActionLink(RESOURCE_PATH, "GET")

ACTION_LINKS: Mapping[Action, ActionLink] = MappingProxyType(
    {
        Action.POWER_ON: ActionLink(f"{RESOURCE_PATH}/power/on", "POST"),
        Action.POWER_OFF: ActionLink(f"{RESOURCE_PATH}/power/off", "POST"),
        Action.PUT_ITEM: ActionLink(f"{RESOURCE_PATH}/item", "PUT"),
        Action.CHANGE_ITEM: ActionLink(f"{RESOURCE_PATH}/item", "PUT"),
        Action.REMOVE_ITEM: ActionLink(f"{RESOURCE_PATH}/item", "DELETE"),
        Action.PLAY: ActionLink(f"{RESOURCE_PATH}/play", "POST"),
        Action.STOP: ActionLink(f"{RESOURCE_PATH}/stop", "POST"),
    }
)

# Static per-action rejection messages.
REJECTION_MESSAGES: Mapping[Action, str] = MappingProxyType(
    {
        Action.POWER_ON: "Cannot power on: turntable is already ON",
        Action.POWER_OFF: "Cannot power off: turntable is OFF or an item is playing",
        Action.PUT_ITEM: "Cannot put item: turntable is OFF, an item is playing, or an item is already loaded",
        Action.CHANGE_ITEM: "Cannot change item: turntable is OFF, an item is playing, or no item is loaded",
        Action.REMOVE_ITEM: "Cannot remove item: turntable is OFF, an item is playing, or no item is loaded",
        Action.PLAY: "Cannot play: turntable is OFF, no item is loaded, or already playing",
        Action.STOP: "Cannot stop: nothing is playing",
    }
)
