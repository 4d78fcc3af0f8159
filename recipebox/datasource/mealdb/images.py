"""
Image URL helpers. Pure string construction, no I/O.
"""

import re
from typing import Literal

from recipebox.datasource.mealdb.models import Meal

ImageSize = Literal["small", "medium", "large"]

DEFAULT_IMAGE_BASE_URL = "https://www.themealdb.com/images"


def normalize_ingredient_name(name: str) -> str:
    """Lowercase and replace whitespace runs with underscores, as the API expects."""
    return re.sub(r"\s+", "_", name.strip().lower())


def ingredient_thumbnail_url(
    name: str,
    size: ImageSize = "medium",
    base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> str:
    return f"{base_url.rstrip('/')}/ingredients/{normalize_ingredient_name(name)}-{size}.png"


def meal_thumbnail_url(meal: Meal, size: ImageSize = "medium") -> str:
    # Upstream serves a single thumbnail per meal; size is accepted for symmetry
    return meal.thumbnail or ""
