from recipebox.datasource.mealdb.fallbacks import (
    get_fallback_areas,
    get_fallback_categories,
    get_fallback_ingredients,
    get_fallback_meals,
)
from recipebox.datasource.mealdb.images import (
    ingredient_thumbnail_url,
    meal_thumbnail_url,
    normalize_ingredient_name,
)
from recipebox.datasource.mealdb.models import Meal, extract_ingredient_list


def test_extract_ingredient_list_skips_empty_slots_in_order():
    meal = Meal.model_validate(
        {
            "idMeal": "1",
            "strMeal": "Seasoning",
            "strIngredient1": "Salt",
            "strMeasure1": "1 tsp",
            "strIngredient2": "",
            "strMeasure2": "",
            "strIngredient3": "Pepper",
        }
    )

    pairs = [(item.ingredient, item.measure) for item in extract_ingredient_list(meal)]

    assert pairs == [("Salt", "1 tsp"), ("Pepper", "")]


def test_extract_ingredient_list_trims_and_handles_nulls():
    meal = Meal.model_validate(
        {
            "idMeal": "2",
            "strMeal": "Toast",
            "strIngredient1": "  Bread ",
            "strMeasure1": None,
            "strIngredient2": "   ",
            "strMeasure2": "2 tbsp",
            "strIngredient20": "Butter",
            "strMeasure20": " 1 knob ",
        }
    )

    pairs = [(item.ingredient, item.measure) for item in extract_ingredient_list(meal)]

    assert pairs == [("Bread", ""), ("Butter", "1 knob")]


def test_completeness_requires_non_blank_instructions():
    assert not Meal(id="1", name="a").is_complete
    assert not Meal(id="1", name="a", instructions="   \n").is_complete
    assert Meal(id="1", name="a", instructions="Boil.").is_complete


def test_tag_list_splits_comma_separated_tags():
    meal = Meal(id="1", name="a", tags="Pasta, Italian,,Comfort Food")
    assert meal.tag_list == ["Pasta", "Italian", "Comfort Food"]
    assert Meal(id="1", name="a").tag_list == []


def test_ingredient_thumbnail_url_uses_underscored_name():
    assert normalize_ingredient_name("  Olive   Oil ") == "olive_oil"
    assert (
        ingredient_thumbnail_url("Olive Oil", "small")
        == "https://www.themealdb.com/images/ingredients/olive_oil-small.png"
    )


def test_meal_thumbnail_url_passes_upstream_url_through():
    meal = Meal(id="1", name="a", thumbnail="https://img.test/a.jpg")
    assert meal_thumbnail_url(meal, "large") == "https://img.test/a.jpg"
    assert meal_thumbnail_url(Meal(id="2", name="b")) == ""


def test_fallback_data_is_complete_and_non_empty():
    meals = get_fallback_meals()
    assert meals and all(meal.is_complete for meal in meals)
    assert all(extract_ingredient_list(meal) for meal in meals)
    assert get_fallback_categories()
    assert get_fallback_areas()
    assert get_fallback_ingredients()
