"""Nutrition provider service backed by USDA FoodData Central."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_insights.adapters.fdc_client import FdcClient
from nutrition_insights.domain.entries import NutritionData
from nutrition_insights.domain.foods import FoodNutrition, FoodSummary
from nutrition_insights.services.cache import Cache
from nutrition_insights.services.formatting import to_number

_logger = logging.getLogger(__name__)

_MACRO_NAMES = {
    "protein": "protein",
    "carbohydrate, by difference": "carbs",
    "total lipid (fat)": "fat",
    "fiber, total dietary": "fiber",
    "sodium, na": "sodium",
}

_Rules = tuple[tuple[tuple[str, ...], str], ...]

# Checked in order; the first matching rule wins.
_VITAMIN_RULES: _Rules = (
    (("vitamin c",), "vitamin_c"),
    (("vitamin a", "rae"), "vitamin_a"),
    (("vitamin e",), "vitamin_e"),
    (("vitamin k",), "vitamin_k"),
    (("thiamin",), "vitamin_b1"),
    (("riboflavin",), "vitamin_b2"),
    (("niacin",), "vitamin_b3"),
    (("vitamin b-6",), "vitamin_b6"),
    (("folate", "total"), "folate"),
    (("vitamin b-12",), "vitamin_b12"),
)
_MINERAL_RULES: _Rules = (
    (("calcium",), "calcium"),
    (("iron",), "iron"),
    (("magnesium",), "magnesium"),
    (("phosphorus",), "phosphorus"),
    (("potassium",), "potassium"),
    (("zinc",), "zinc"),
    (("copper",), "copper"),
    (("manganese",), "manganese"),
    (("selenium",), "selenium"),
)


@dataclass
class NutritionService:
    """Service for nutrition lookups with caching."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 10) -> list[FoodSummary]:
        """Search FDC foods with caching."""
        cache_key = f"fdc:search:{query.strip().lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_parse_summary(food) for food in payload.get("foods", [])][:limit]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Nutrition search FDC: query=%s results=%s", query, len(foods))
        return foods

    async def get_nutrition(self, fdc_id: int) -> FoodNutrition:
        """Retrieve a food's nutrition from FDC."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodNutrition):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        result = FoodNutrition(
            summary=_parse_summary(payload),
            nutrition=extract_nutrition(payload.get("foodNutrients") or []),
        )
        self.cache.set(cache_key, result, ttl_seconds=self.food_ttl_seconds)
        if self.debug:
            _logger.info("Nutrition food FDC: fdc_id=%s", fdc_id)
        return result

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if self.debug:
                    _logger.warning(
                        "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        _status_code_from_exception(exc),
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def extract_nutrition(food_nutrients: list[dict[str, object]]) -> NutritionData:
    """Map FDC nutrient rows to nutrition data, keeping named micronutrients."""
    macros = {
        "calories": 0.0,
        "protein": 0.0,
        "carbs": 0.0,
        "fat": 0.0,
        "fiber": 0.0,
        "sugar": 0.0,
        "sodium": 0.0,
    }
    vitamins: dict[str, float] = {}
    minerals: dict[str, float] = {}
    for nutrient in food_nutrients:
        name, unit, amount = _nutrient_fields(nutrient)
        if not name:
            continue
        if "energy" in name:
            if unit in {"", "kcal"}:
                macros["calories"] = amount
        elif name in _MACRO_NAMES:
            macros[_MACRO_NAMES[name]] = amount
        elif "sugars, total" in name:
            macros["sugar"] = amount
        else:
            vitamin_key = _match_rule(name, _VITAMIN_RULES)
            mineral_key = _match_rule(name, _MINERAL_RULES)
            if vitamin_key:
                vitamins[vitamin_key] = amount
            elif mineral_key:
                minerals[mineral_key] = amount

    return NutritionData(
        **macros,
        vitamins=vitamins or None,
        minerals=minerals or None,
    )


def _nutrient_fields(nutrient: dict[str, object]) -> tuple[str, str, float]:
    """Read name, unit and amount from either FDC nutrient row shape."""
    info = nutrient.get("nutrient")
    if isinstance(info, dict):
        name = info.get("name")
        unit = info.get("unitName")
    else:
        name = nutrient.get("nutrientName")
        unit = nutrient.get("unitName")
    amount = nutrient.get("amount", nutrient.get("value"))
    return (
        str(name or "").strip().lower(),
        str(unit or "").strip().lower(),
        to_number(amount),
    )


def _match_rule(name: str, rules: _Rules) -> str | None:
    for keywords, key in rules:
        if all(keyword in name for keyword in keywords):
            return key
    return None


def _parse_summary(food: dict[str, object]) -> FoodSummary:
    return FoodSummary(
        fdc_id=int(food.get("fdcId", 0)),
        name=str(food.get("description", "")),
        brand=food.get("brandName") or food.get("brandOwner"),
        data_type=food.get("dataType"),
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
