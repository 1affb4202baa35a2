# turntable/api/models.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Response schemas for the HTTP surface."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel

from turntable.core.states import MediaState, PlaybackState, PowerState


class LinkModel(BaseModel):
    href: str
    method: str


class ItemModel(BaseModel):
    id: str
    title: str
    author: str
    url: str


class ResourceModel(BaseModel):
    power: PowerState
    media: MediaState
    playback: PlaybackState
    item: Optional[ItemModel] = None
    links: Dict[str, LinkModel]


class EntryPointModel(BaseModel):
    links: Dict[str, LinkModel]


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorModel(BaseModel):
    error: ErrorBody
