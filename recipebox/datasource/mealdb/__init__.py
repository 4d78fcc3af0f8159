"""
TheMealDB data source: models, fallback data and the public client.
"""

from recipebox.datasource.mealdb.enrichment import MealEnricher
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
from recipebox.datasource.mealdb.source import (
    MealDBSource,
    close_mealdb_source,
    get_mealdb_source,
)

__all__ = [
    "Area",
    "Category",
    "ConnectionCheck",
    "Ingredient",
    "IngredientDetails",
    "IngredientMeasure",
    "Meal",
    "MealDBSource",
    "MealEnricher",
    "close_mealdb_source",
    "extract_ingredient_list",
    "get_mealdb_source",
]
