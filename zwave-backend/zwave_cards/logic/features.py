"""Card configuration models and feature flag lookup."""

from __future__ import annotations

from enum import StrEnum
from typing import Iterable, Protocol

from pydantic import BaseModel, Field

from zwave_cards.logic.node_categorizer import NodeFilterFlags


class Feature(StrEnum):
    COMPACT = "compact"
    HIDE_DEAD = "hide_dead"
    HIDE_LIVE = "hide_live"
    HIDE_ASLEEP = "hide_asleep"


class _HasFeatures(Protocol):
    features: Iterable[str] | None


def has_feature(config: _HasFeatures | None, feature: str) -> bool:
    """Return ``True`` when ``feature`` is listed in ``config.features``."""

    if config is None:
        return False
    return feature in (config.features or ())


class NodeStatesCardConfig(BaseModel):
    title: str | None = None
    columns: int | None = Field(default=None, ge=1)
    features: list[Feature] = Field(default_factory=list)

    class Config:
        extra = "ignore"

    def filter_flags(self) -> NodeFilterFlags:
        return NodeFilterFlags(
            hide_dead=has_feature(self, Feature.HIDE_DEAD),
            hide_live=has_feature(self, Feature.HIDE_LIVE),
            hide_asleep=has_feature(self, Feature.HIDE_ASLEEP),
        )
