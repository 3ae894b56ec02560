"""API routes exposing the derived card state."""

from __future__ import annotations

from dataclasses import asdict, replace
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field

from zwave_cards.core.config import Settings, get_settings
from zwave_cards.core.validation import SnapshotValidationError
from zwave_cards.logic.controller import rssi_quality
from zwave_cards.logic.features import Feature, NodeStatesCardConfig, has_feature
from zwave_cards.logic.layout import LayoutMode, fold_for_layout, select_layout
from zwave_cards.logic.models import HealthPartitions, NodeRecord
from zwave_cards.logic.node_categorizer import NodeFilterFlags
from zwave_cards.logic.profiles import GENERIC_PROFILE, ProfileRegistry
from zwave_cards.logic.snapshot import coerce_snapshot
from zwave_cards.services.card_state import CardStore
from zwave_cards.services.device_search import DeviceSearch

router = APIRouter()


class SnapshotRequest(BaseModel):
    snapshot: dict[str, Any] = Field(default_factory=dict)


class BundleRequest(SnapshotRequest):
    card_type: str | None = Field(default=None, description="Registered profile to use")
    domains: list[str] | None = None
    suffixes: list[str] | None = None
    width: float | None = Field(default=None, ge=0)
    features: list[Feature] = Field(default_factory=list)


class NodesRequest(SnapshotRequest):
    config: NodeStatesCardConfig = Field(default_factory=NodeStatesCardConfig)
    hide_dead: bool = False
    hide_live: bool = False
    hide_asleep: bool = False

    def filter_flags(self) -> NodeFilterFlags:
        flags = self.config.filter_flags()
        return NodeFilterFlags(
            hide_dead=self.hide_dead or flags.hide_dead,
            hide_live=self.hide_live or flags.hide_live,
            hide_asleep=self.hide_asleep or flags.hide_asleep,
        )


class ControllerRequest(SnapshotRequest):
    device_id: str | None = None


class SearchRequest(SnapshotRequest):
    query: str = Field(..., min_length=1)
    model: str | None = None
    area: str | None = None
    limit: int | None = Field(default=None, ge=1)


class WidthRequest(BaseModel):
    width: float = Field(..., ge=0)
    flush: bool = False


def get_registry(request: Request) -> ProfileRegistry:
    registry: ProfileRegistry | None = getattr(request.app.state, "registry", None)
    if registry is None:
        raise RuntimeError("Profile registry has not been initialised")
    return registry


def get_cards(request: Request) -> CardStore:
    cards: CardStore | None = getattr(request.app.state, "cards", None)
    if cards is None:
        raise RuntimeError("Card store has not been initialised")
    return cards


def _node_dict(record: NodeRecord) -> dict[str, Any]:
    return asdict(record)


def _partitions_dict(partitions: HealthPartitions) -> dict[str, Any]:
    return {
        "dead": [_node_dict(record) for record in partitions.dead],
        "live": [_node_dict(record) for record in partitions.live],
        "asleep": [_node_dict(record) for record in partitions.asleep],
        "total": len(partitions),
    }


@router.get("/profiles")
async def list_profiles(registry: ProfileRegistry = Depends(get_registry)) -> list[dict]:
    return [asdict(profile) for profile in registry]


@router.post("/devices/{device_id}/bundle")
async def device_bundle(
    device_id: str,
    payload: BundleRequest,
    registry: ProfileRegistry = Depends(get_registry),
    cards: CardStore = Depends(get_cards),
    settings: Settings = Depends(get_settings),
) -> dict:
    profile = GENERIC_PROFILE
    if payload.card_type:
        profile = registry.get(payload.card_type)
        if profile is None:
            raise HTTPException(status_code=404, detail=f"Unknown card type {payload.card_type}")
    if payload.domains is not None:
        profile = replace(profile, entity_domains=tuple(payload.domains))
    if payload.suffixes is not None:
        profile = replace(profile, suffixes=tuple(payload.suffixes))

    state = cards.device(profile, device_id)
    try:
        bundle = state.recompute(payload.snapshot)
    except SnapshotValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not bundle.found:
        raise HTTPException(status_code=404, detail=f"Device {device_id} not found")

    result: dict[str, Any] = {
        "bundle": asdict(bundle),
        "icon": profile.icon,
        "changed": state.changed,
        "revision": state.revision,
    }
    layout: LayoutMode | None = None
    if has_feature(payload, Feature.COMPACT):
        layout = LayoutMode.COMPACT
    elif payload.width is not None:
        layout = select_layout(payload.width, settings.compact_breakpoint_px)
    if layout is not None:
        result["layout"] = layout.value
        result["sensors"] = [asdict(value) for value in fold_for_layout(bundle, layout)]
    return result


@router.post("/nodes")
async def node_states(payload: NodesRequest, cards: CardStore = Depends(get_cards)) -> dict:
    state = cards.nodes(payload.filter_flags())
    try:
        partitions = state.recompute(payload.snapshot)
    except SnapshotValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    result = _partitions_dict(partitions)
    result["changed"] = state.changed
    result["revision"] = state.revision
    return result


@router.post("/controller")
async def controller_info(payload: ControllerRequest, cards: CardStore = Depends(get_cards)) -> dict:
    state = cards.controller(payload.device_id)
    try:
        summary = state.recompute(payload.snapshot)
    except SnapshotValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    result = asdict(summary)
    result["rssi_quality"] = [rssi_quality(value.state) for value in summary.rssi]
    result["changed"] = state.changed
    result["revision"] = state.revision
    return result


@router.post("/devices/search")
async def search_devices(
    payload: SearchRequest,
    settings: Settings = Depends(get_settings),
) -> list[dict]:
    search = DeviceSearch(min_score=settings.search_min_score)
    try:
        snapshot = coerce_snapshot(payload.snapshot)
    except SnapshotValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    matches = search.search(
        snapshot,
        payload.query,
        limit=payload.limit or settings.search_limit,
        model=payload.model,
        area=payload.area,
    )
    return [{"device": asdict(match.device), "score": match.score} for match in matches]


@router.get("/layout")
async def layout(
    width: float = Query(..., ge=0),
    settings: Settings = Depends(get_settings),
) -> dict:
    return {"layout": select_layout(width, settings.compact_breakpoint_px).value}


@router.post("/cards/{card_id}/width")
async def card_width(
    card_id: str,
    payload: WidthRequest,
    cards: CardStore = Depends(get_cards),
) -> dict:
    """Feed a width measurement into the card's debounced layout."""

    debouncer = cards.layout(card_id)
    debouncer.notify(payload.width)
    if payload.flush:
        debouncer.flush()
    current = debouncer.layout
    return {"layout": current.value if current else None, "pending": debouncer.pending}
