"""
TheMealDB data source - the public client for recipe data.

API Documentation: https://www.themealdb.com/api.php
Free tier: test key "1", no published rate limit (throttled to ~5 req/s here)

Every list-shaped operation follows the same path:
cache check -> deduplicated, queue-backed fetch -> completeness enrichment
-> cache write -> return.
"""

import asyncio
import random
import time
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from recipebox.datasource.base import BaseDataSource
from recipebox.datasource.mealdb.enrichment import MealEnricher, meal_cache_key
from recipebox.datasource.mealdb.fallbacks import (
    get_fallback_areas,
    get_fallback_categories,
    get_fallback_ingredients,
    get_fallback_meals,
)
from recipebox.datasource.mealdb.images import (
    ImageSize,
    ingredient_thumbnail_url,
    meal_thumbnail_url,
    normalize_ingredient_name,
)
from recipebox.datasource.mealdb.models import (
    Area,
    Category,
    ConnectionCheck,
    Ingredient,
    IngredientDetails,
    IngredientMeasure,
    Meal,
    extract_ingredient_list,
)
from recipebox.services.cache import CacheManager
from recipebox.services.client import ServiceClient
from recipebox.services.deduplicator import RequestDeduplicator
from recipebox.services.errors import InvalidResponseError
from recipebox.settings import Settings, global_settings

M = TypeVar("M", bound=BaseModel)

# Meals shown by fetch() (the default feed)
DEFAULT_FEED_SIZE = 6


def normalize_query(query: str) -> str:
    """Collapse whitespace and lowercase, so equivalent queries share a cache key."""
    return " ".join(query.split()).lower()


class MealDBSource(BaseDataSource[Meal]):
    """
    TheMealDB API data source.

    Owns the cache, the request deduplicator and (through its ServiceClient)
    the rate-limited dispatch queue. One instance should be shared by all
    callers so they benefit from the same cache and in-flight requests.
    """

    SERVICE_ID = "mealdb"

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        cache_clock: Callable[[], datetime] = datetime.now,
        dedup_clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or global_settings
        super().__init__(
            ServiceClient(
                service_id=self.SERVICE_ID,
                base_url=self.settings.mealdb_base_url,
                timeout=self.settings.request_timeout,
                max_retries=self.settings.max_retries,
                backoff_base=self.settings.retry_backoff_base,
                rate_limit_delay=self.settings.rate_limit_delay,
                rate_limit_default_wait=self.settings.rate_limit_default_wait,
                max_rate_limit_waits=self.settings.max_rate_limit_waits,
                http_client=http_client,
                sleep=sleep,
                debug=self.settings.debug,
            )
        )
        self._sleep = sleep

        self.ttl_reference = timedelta(seconds=self.settings.cache_ttl_reference)
        self.ttl_meal = timedelta(seconds=self.settings.cache_ttl_meal)
        self.ttl_search = timedelta(seconds=self.settings.cache_ttl_search)

        self.cache = CacheManager(
            default_ttl=self.ttl_search,
            clock=cache_clock,
            debug=self.settings.debug,
        )
        self.deduplicator = RequestDeduplicator(
            window=self.settings.dedup_window,
            clock=dedup_clock,
            debug=self.settings.debug,
        )
        self.enricher = MealEnricher(self.cache, self.lookup_by_id)

    @property
    def service_id(self) -> str:
        return self.SERVICE_ID

    async def fetch(self) -> list[Meal]:
        """Default feed: a handful of random meals."""
        return await self.random_batch(DEFAULT_FEED_SIZE)

    # Internal plumbing

    async def _get_meals(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[Meal]:
        """Fetch a meal list; a null "meals" field is an empty result."""
        data = await self.client.get_json(path, params=params)
        return self._parse_items(data, "meals", Meal)

    def _parse_items(
        self, data: dict[str, Any], field: str, model: type[M]
    ) -> list[M]:
        """Validate `data[field]` as a list of models; null means no results."""
        items = data.get(field)
        if items is None:
            return []
        if not isinstance(items, list):
            raise InvalidResponseError(
                f"Expected '{field}' to be a list or null, got {type(items).__name__}",
                service_id=self.SERVICE_ID,
            )
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            raise InvalidResponseError(
                f"Malformed '{field}' entry from service '{self.SERVICE_ID}': {e}",
                service_id=self.SERVICE_ID,
            ) from e

    async def _cached_meal_list(
        self, cache_key: str, path: str, params: dict[str, Any]
    ) -> list[Meal]:
        cached = self.cache.get(cache_key)
        if cached is not None:
            return list(cached)

        async def load() -> list[Meal]:
            meals = await self.enricher.enrich(await self._get_meals(path, params))
            self.cache.set(cache_key, meals, self.ttl_search)
            return meals

        return list(await self.deduplicator.dedupe(cache_key, load))

    async def _reference_list(
        self,
        cache_key: str,
        path: str,
        params: dict[str, Any] | None,
        field: str,
        model: type[M],
        fallback: Callable[[], list[M]],
    ) -> list[M]:
        cached = self.cache.get(cache_key)
        if cached is not None:
            return list(cached)

        async def load() -> list[M]:
            data = await self.client.get_json(path, params=params)
            items = self._parse_items(data, field, model)
            self.cache.set(cache_key, items, self.ttl_reference)
            return items

        try:
            return list(await self.deduplicator.dedupe(cache_key, load))
        except Exception as e:
            # Fallback data is not cached so the next call retries upstream
            logger.warning(f"Failed to fetch {cache_key}, using fallback data: {e}")
            return fallback()

    # Search

    async def search(self, query: str) -> list[Meal]:
        """
        Search meals by name.

        Case and whitespace differences map to the same cache entry.
        """
        normalized = normalize_query(query)
        return await self._cached_meal_list(
            f"search:{normalized}", "/search.php", {"s": normalized}
        )

    async def search_by_letter(self, letter: str) -> list[Meal]:
        """Browse meals by first letter. Not cached."""
        letter = letter.strip()
        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Expected a single letter, got {letter!r}")

        meals = await self._get_meals("/search.php", {"f": letter.lower()})
        return await self.enricher.enrich(meals)

    # Single meals

    async def lookup_by_id(self, meal_id: str) -> Meal | None:
        """
        Get the full record of one meal, or None if the id is unknown.

        Concurrent lookups of the same id share one request.
        """
        meal_id = str(meal_id).strip()
        cache_key = meal_cache_key(meal_id)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        async def load() -> Meal | None:
            meals = await self._get_meals("/lookup.php", {"i": meal_id})
            meal = meals[0] if meals else None
            if meal is not None:
                self.cache.set(cache_key, meal, self.ttl_meal)
            return meal

        return await self.deduplicator.dedupe(f"lookup:{meal_id}", load)

    async def random(self) -> Meal | None:
        """
        Get one random meal.

        Never raises: when the upstream cannot be reached a meal from the
        fallback dataset is returned instead.
        """
        try:
            meals = await self._get_meals("/random.php")
        except Exception as e:
            logger.warning(f"Random meal unavailable, using fallback data: {e}")
            return random.choice(get_fallback_meals())

        return meals[0] if meals else None

    async def random_batch(self, count: int) -> list[Meal]:
        """
        Draw `count` random meals in small batches with a pause in between.

        Draws are independent, so the result may contain the same meal twice.
        """
        batch_size = max(1, self.settings.random_batch_size)
        results: list[Meal | None] = []

        for start in range(0, max(0, count), batch_size):
            size = min(batch_size, count - start)
            results.extend(await asyncio.gather(*(self.random() for _ in range(size))))
            if start + batch_size < count:
                await self._sleep(self.settings.random_batch_pause)

        return [meal for meal in results if meal is not None]

    # Reference data

    async def categories(self) -> list[Category]:
        return await self._reference_list(
            "categories",
            "/categories.php",
            None,
            "categories",
            Category,
            get_fallback_categories,
        )

    async def areas(self) -> list[Area]:
        return await self._reference_list(
            "areas", "/list.php", {"a": "list"}, "meals", Area, get_fallback_areas
        )

    async def ingredients(self) -> list[Ingredient]:
        return await self._reference_list(
            "ingredients",
            "/list.php",
            {"i": "list"},
            "meals",
            Ingredient,
            get_fallback_ingredients,
        )

    # Filters

    async def filter_by_category(self, category: str) -> list[Meal]:
        category = category.strip()
        return await self._cached_meal_list(
            f"filter:category:{category.lower()}", "/filter.php", {"c": category}
        )

    async def filter_by_area(self, area: str) -> list[Meal]:
        area = area.strip()
        return await self._cached_meal_list(
            f"filter:area:{area.lower()}", "/filter.php", {"a": area}
        )

    async def filter_by_ingredient(self, ingredient: str) -> list[Meal]:
        formatted = normalize_ingredient_name(ingredient)
        return await self._cached_meal_list(
            f"filter:ingredient:{formatted}", "/filter.php", {"i": formatted}
        )

    async def filter_by_any_of_ingredients(self, ingredients: list[str]) -> list[Meal]:
        """
        Meals containing at least one of the given ingredients.

        The cache key is built from the sorted, de-duplicated ingredient names,
        so argument order never creates a separate entry. Meals found through
        several ingredients appear once (first occurrence wins).
        """
        names = sorted(
            {normalize_ingredient_name(name) for name in ingredients if name.strip()}
        )
        if not names:
            return []

        cache_key = f"filter:ingredients:{','.join(names)}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return list(cached)

        async def load() -> list[Meal]:
            per_ingredient = await asyncio.gather(
                *(self.filter_by_ingredient(name) for name in names)
            )
            merged: dict[str, Meal] = {}
            for meals in per_ingredient:
                for meal in meals:
                    merged.setdefault(meal.id, meal)

            unique_meals = list(merged.values())
            self.cache.set(cache_key, unique_meals, self.ttl_search)
            return unique_meals

        return list(await self.deduplicator.dedupe(cache_key, load))

    async def find_candidates_for_available_ingredients(
        self, available: list[str]
    ) -> list[Meal]:
        """
        Meals that use ANY of the available ingredients.

        This is "recipes containing at least one of your ingredients", not
        "recipes you can fully make"; no further filtering is applied.
        """
        return await self.filter_by_any_of_ingredients(available)

    # Pure helpers

    def ingredient_thumbnail_url(self, ingredient: str, size: ImageSize = "medium") -> str:
        return ingredient_thumbnail_url(
            ingredient, size, base_url=self.settings.mealdb_image_base_url
        )

    @staticmethod
    def meal_thumbnail_url(meal: Meal, size: ImageSize = "medium") -> str:
        return meal_thumbnail_url(meal, size)

    @staticmethod
    def extract_ingredient_list(meal: Meal) -> list[IngredientMeasure]:
        return extract_ingredient_list(meal)

    def ingredient_details(self, ingredient: str) -> IngredientDetails:
        return IngredientDetails(
            name=ingredient,
            thumbnail=self.ingredient_thumbnail_url(ingredient),
            description=f"Fresh {ingredient.lower()}",
        )

    # Maintenance and health

    async def check_connection(self) -> ConnectionCheck:
        """Probe the API with a random-meal request. Never raises."""
        logger.info("Testing MealDB API connection...")
        try:
            meals = await self._get_meals("/random.php")
        except Exception as e:
            logger.error(f"MealDB API test failed: {e}")
            return ConnectionCheck(success=False, error=str(e))

        logger.info("MealDB API test successful")
        return ConnectionCheck(success=True, meal=meals[0] if meals else None)

    def clean_expired_cache(self) -> int:
        return self.cache.cleanup_expired()

    def get_health_status(self) -> dict[str, Any]:
        """Get cache, deduplicator and queue statistics."""
        return {
            "service_id": self.SERVICE_ID,
            "cache": self.cache.get_stats().to_dict(),
            "deduplicator": self.deduplicator.get_stats().to_dict(),
            "queue": self.client.queue.get_stats().to_dict(),
        }

    async def close(self) -> None:
        await self.deduplicator.cancel_all()
        await self.client.close()
        logger.debug("MealDBSource closed")

    async def __aenter__(self) -> "MealDBSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


# Global source instance
_global_source: MealDBSource | None = None


def get_mealdb_source() -> MealDBSource:
    """Get the shared MealDB source instance."""
    global _global_source
    if _global_source is None:
        _global_source = MealDBSource()
    return _global_source


async def close_mealdb_source() -> None:
    """Close the shared MealDB source."""
    global _global_source
    if _global_source:
        await _global_source.close()
        _global_source = None
