"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder

from nutrition_insights.api.schemas import (
    FoodEntryCreate,
    HealthProfileCreate,
    HealthProfileUpdate,
)
from nutrition_insights.app_logging import configure_logging
from nutrition_insights.containers import AppContainer

# Columns that may be cleared by sending an explicit null.
_NULLABLE_PROFILE_FIELDS = frozenset({"smoking_frequency"})


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/health-profile")
    async def create_profile(
        payload: HealthProfileCreate, request: Request
    ) -> dict[str, object]:
        """Create a health profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.create_profile(payload.model_dump())
        return jsonable_encoder(profile)

    @app.get("/api/health-profile/{profile_id}")
    async def get_profile(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return a health profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(profile_id)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Health profile not found",
            )
        return jsonable_encoder(profile)

    @app.put("/api/health-profile/{profile_id}")
    async def update_profile(
        profile_id: UUID, payload: HealthProfileUpdate, request: Request
    ) -> dict[str, object]:
        """Apply a partial update to a health profile."""
        state_container: AppContainer = request.app.state.container
        changes = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_PROFILE_FIELDS
        }
        profile = state_container.profile_service.update_profile(profile_id, changes)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Health profile not found",
            )
        return jsonable_encoder(profile)

    @app.get("/api/food/search")
    async def search_foods(
        request: Request, q: str | None = None, limit: int = 10
    ) -> dict[str, object]:
        """Search the nutrition provider for foods."""
        if not q or not q.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Search query required",
            )
        state_container: AppContainer = request.app.state.container
        try:
            foods = await state_container.nutrition_service.search(q, limit=limit)
        except Exception as exc:
            logger.exception("Food search failed", extra={"query": q})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Food search service unavailable",
            ) from exc
        return {"foods": jsonable_encoder(foods)}

    @app.get("/api/food/nutrition/{fdc_id}")
    async def food_nutrition(fdc_id: int, request: Request) -> dict[str, object]:
        """Return nutrition per 100 g for a provider food."""
        state_container: AppContainer = request.app.state.container
        try:
            food = await state_container.nutrition_service.get_nutrition(fdc_id)
        except Exception as exc:
            logger.exception("Nutrition lookup failed", extra={"fdc_id": fdc_id})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Nutrition data unavailable",
            ) from exc
        return jsonable_encoder(food, exclude_none=True)

    @app.get("/api/food-entries/{profile_id}")
    async def list_entries(
        profile_id: UUID,
        request: Request,
        entry_date: date | None = Query(default=None, alias="date"),
    ) -> list[dict[str, object]]:
        """Return food entries for a profile, optionally for one day."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.entry_service.list_entries(profile_id, entry_date)
        return jsonable_encoder(entries, exclude_none=True)

    @app.post("/api/food-entries")
    async def create_entry(
        payload: FoodEntryCreate, request: Request
    ) -> dict[str, object]:
        """Log a food entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.entry_service.create_entry(payload.model_dump())
        return jsonable_encoder(entry, exclude_none=True)

    @app.delete("/api/food-entries/{entry_id}")
    async def delete_entry(entry_id: UUID, request: Request) -> dict[str, bool]:
        """Delete a food entry."""
        state_container: AppContainer = request.app.state.container
        if not state_container.entry_service.delete_entry(entry_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Food entry not found",
            )
        return {"success": True}

    @app.get("/api/insights/{profile_id}/{day}")
    async def insights(
        profile_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        """Regenerate and return the insight for a profile and day."""
        state_container: AppContainer = request.app.state.container
        insight = state_container.insight_service.generate(profile_id, day)
        if insight is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Health profile not found",
            )
        return jsonable_encoder(insight)

    return app
