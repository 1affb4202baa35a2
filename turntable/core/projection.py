# turntable/core/projection.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from turntable.core.actions import ACTION_LINKS, SELF_LINK, Action, ActionLink
from turntable.core.states import FSM_STATES, FsmState, MediaState, PlaybackState, PowerState, StateId
from turntable.core.transitions import TransitionTable

if TYPE_CHECKING:
    from turntable.runtime.catalog import CatalogItem


@dataclass(frozen=True)
class LoadedItem:
    """The item currently on the turntable."""

    id: str
    title: str
    author: str
    url: str

    @classmethod
    def from_catalog_item(cls, item: "CatalogItem") -> "LoadedItem":
        return cls(id=item.id, title=item.title, author=item.author, url=item.url)

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "title": self.title, "author": self.author, "url": self.url}


@dataclass(frozen=True)
class ResourceSnapshot:
    """
    Client-facing view of the turntable: the three axes, the loaded item and
    the links for every action that is legal right now.
    """

    power: PowerState
    media: MediaState
    playback: PlaybackState
    item: Optional[LoadedItem]
    links: Dict[str, ActionLink] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "power": self.power.value,
            "media": self.media.value,
            "playback": self.playback.value,
            "item": self.item.to_dict() if self.item else None,
            "links": {name: link.to_dict() for name, link in self.links.items()},
        }


class ResourceProjector:
    """
    Builds snapshots from a state identifier. Links are derived from the
    same TransitionTable the machine executes against, so what is offered
    and what is accepted cannot drift apart.
    """

    def __init__(
        self,
        table: TransitionTable,
        states: Mapping[StateId, FsmState] = FSM_STATES,
        action_links: Mapping[Action, ActionLink] = ACTION_LINKS,
        self_link: ActionLink = SELF_LINK,
    ) -> None:
        self._table = table
        self._states = states
        self._action_links = action_links
        self._self_link = self_link

    def links(self, state_id: StateId) -> Dict[str, ActionLink]:
        """
        Return ``self`` followed by one link per legal action, in table order.
        """
        links = {"self": self._self_link}
        for t in self._table.from_state(state_id):
            links[t.action.value] = self._action_links[t.action]
        return links

    def project(self, state_id: StateId, item: Optional[LoadedItem] = None) -> ResourceSnapshot:
        state = self._states[state_id]
        return ResourceSnapshot(
            power=state.power,
            media=state.media,
            playback=state.playback,
            item=item,
            links=self.links(state_id),
        )
