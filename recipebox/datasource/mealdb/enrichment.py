"""
MealEnricher - Upgrades summary-shaped meal records to complete ones.

Filter and list endpoints omit instructions and ingredients. Before such
records reach a caller, each incomplete one is replaced by its full record,
taken from the "meal:<id>" cache entry or fetched with a single-record
lookup. A failed lookup keeps the incomplete record; it never fails or
shrinks the batch.
"""

import asyncio
from typing import Awaitable, Callable

from loguru import logger

from recipebox.datasource.mealdb.models import Meal
from recipebox.services.cache import CacheManager


def meal_cache_key(meal_id: str) -> str:
    return f"meal:{meal_id}"


class MealEnricher:
    """
    Completeness reconciler for batches of meals.

    Args:
        cache: Shared cache; only "meal:<id>" entries are read here
        lookup: Single-record lookup (cached, deduplicated and queued)
    """

    def __init__(
        self,
        cache: CacheManager,
        lookup: Callable[[str], Awaitable[Meal | None]],
    ):
        self._cache = cache
        self._lookup = lookup

    @staticmethod
    def needs_enrichment(meals: list[Meal]) -> bool:
        return any(not meal.is_complete for meal in meals)

    async def enrich(self, meals: list[Meal]) -> list[Meal]:
        """
        Return the batch with every incomplete record upgraded where possible.

        Input order is preserved. When every record is already complete the
        batch is returned as is, without any lookup.
        """
        if not self.needs_enrichment(meals):
            return meals

        incomplete = sum(1 for meal in meals if not meal.is_complete)
        logger.debug(f"Enriching {incomplete} of {len(meals)} meals")

        return list(await asyncio.gather(*(self._resolve(meal) for meal in meals)))

    async def _resolve(self, meal: Meal) -> Meal:
        if meal.is_complete:
            return meal

        cached = self._cache.get(meal_cache_key(meal.id))
        if cached is not None:
            return cached

        try:
            full_meal = await self._lookup(meal.id)
        except Exception as e:
            logger.warning(f"Failed to enrich meal {meal.id}: {e}")
            return meal

        return full_meal or meal
