"""Weight journal and favorite meal endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from diet_planner.api.views import render_weights
from diet_planner.domain.tracking import WeightEntry  # noqa: TC001

if TYPE_CHECKING:
    from diet_planner.containers import AppContainer

router = APIRouter(tags=["tracking"])


@router.get("/weights")
async def list_weights(request: Request) -> dict[str, object]:
    """Return the weight history in date order."""
    container: AppContainer = request.app.state.container
    history = container.weight_history_service.list_entries()
    return {"weight_history": render_weights(history)}


@router.post("/weights")
async def add_weight(entry: WeightEntry, request: Request) -> dict[str, object]:
    """Record a weigh-in, replacing any entry on the same date."""
    container: AppContainer = request.app.state.container
    history = container.weight_history_service.add_entry(entry)
    return {"weight_history": render_weights(history)}


@router.delete("/weights/{day}")
async def delete_weight(day: date, request: Request) -> dict[str, object]:
    """Delete the weigh-in for a date."""
    container: AppContainer = request.app.state.container
    history = container.weight_history_service.delete_entry(day)
    return {"weight_history": render_weights(history)}


@router.get("/favorites")
async def list_favorites(request: Request) -> dict[str, object]:
    """Return all favorite meal ids."""
    container: AppContainer = request.app.state.container
    return {"favorite_ids": container.favorites_service.list_ids()}


@router.post("/favorites/{meal_id}/toggle")
async def toggle_favorite(meal_id: str, request: Request) -> dict[str, object]:
    """Flip the favorite flag of a meal."""
    container: AppContainer = request.app.state.container
    favorite = container.favorites_service.toggle(meal_id)
    return {"meal_id": meal_id, "favorite": favorite}
