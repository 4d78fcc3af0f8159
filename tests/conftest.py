"""
Shared pytest fixtures for recipebox tests.

The upstream API is replaced by FakeMealDB, an httpx.MockTransport handler
that serves a small in-memory dataset and records every request.
"""

import httpx
import pytest
import pytest_asyncio

from recipebox.datasource.mealdb.images import normalize_ingredient_name
from recipebox.datasource.mealdb.source import MealDBSource
from recipebox.settings import Settings


def full_meal(meal_id, name, category, area, ingredients):
    meal = {
        "idMeal": meal_id,
        "strMeal": name,
        "strCategory": category,
        "strArea": area,
        "strInstructions": f"Cook the {name.lower()}.",
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
        "strTags": None,
    }
    for index in range(1, 21):
        meal[f"strIngredient{index}"] = ""
        meal[f"strMeasure{index}"] = ""
    for index, (ingredient, measure) in enumerate(ingredients, start=1):
        meal[f"strIngredient{index}"] = ingredient
        meal[f"strMeasure{index}"] = measure
    return meal


def summary(meal):
    return {
        "idMeal": meal["idMeal"],
        "strMeal": meal["strMeal"],
        "strMealThumb": meal["strMealThumb"],
    }


MEALS = [
    full_meal(
        "52772",
        "Teriyaki Chicken Casserole",
        "Chicken",
        "Japanese",
        [("Soy Sauce", "3/4 cup"), ("Brown Sugar", "1/2 cup"), ("Chicken", "2 lbs")],
    ),
    full_meal(
        "52795",
        "Chicken Handi",
        "Chicken",
        "Indian",
        [("Chicken", "1.2 kg"), ("Onion", "5 thinly sliced"), ("Milk", "1/2 cup")],
    ),
    full_meal(
        "52940",
        "Brown Stew Chicken",
        "Chicken",
        "Jamaican",
        [("Chicken", "1 whole"), ("Tomato", "1 chopped")],
    ),
    full_meal(
        "53060",
        "Burek",
        "Side",
        "Croatian",
        [("Filo Pastry", "1 Packet"), ("Minced Beef", "150g"), ("Egg", "1")],
    ),
    full_meal(
        "52874",
        "Beef and Mustard Pie",
        "Beef",
        "British",
        [("Beef", "1kg"), ("Milk", "2 tbs"), ("Egg", "2")],
    ),
]


class FakeMealDB:
    """In-memory stand-in for TheMealDB, usable as a MockTransport handler."""

    def __init__(self, meals=None):
        meals = MEALS if meals is None else meals
        self.meals = {meal["idMeal"]: meal for meal in meals}
        self.requests: list[httpx.Request] = []
        self.failing_lookups: set[str] = set()
        self.down = False

    def count(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path.endswith(path))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("Connection refused", request=request)

        path = request.url.path.rsplit("/", 1)[-1]
        params = request.url.params
        meals = list(self.meals.values())

        if path == "search.php" and "s" in params:
            query = params["s"].lower()
            return self._meals([m for m in meals if query in m["strMeal"].lower()])

        if path == "search.php" and "f" in params:
            letter = params["f"].lower()
            return self._meals(
                [summary(m) for m in meals if m["strMeal"].lower().startswith(letter)]
            )

        if path == "lookup.php":
            meal_id = params["i"]
            if meal_id in self.failing_lookups:
                return httpx.Response(500, text="lookup exploded")
            meal = self.meals.get(meal_id)
            return self._meals([meal] if meal else [])

        if path == "random.php":
            return self._meals(meals[:1])

        if path == "categories.php":
            names = sorted({m["strCategory"] for m in meals})
            return httpx.Response(
                200, json={"categories": [{"strCategory": name} for name in names]}
            )

        if path == "list.php" and params.get("a") == "list":
            names = sorted({m["strArea"] for m in meals})
            return self._meals([{"strArea": name} for name in names])

        if path == "list.php" and params.get("i") == "list":
            names = sorted({i for m in meals for i in _ingredients(m)})
            return self._meals([{"strIngredient": name} for name in names])

        if path == "filter.php":
            if "c" in params:
                found = [m for m in meals if m["strCategory"].lower() == params["c"].lower()]
            elif "a" in params:
                found = [m for m in meals if m["strArea"].lower() == params["a"].lower()]
            else:
                wanted = params["i"]
                found = [
                    m
                    for m in meals
                    if wanted in {normalize_ingredient_name(i) for i in _ingredients(m)}
                ]
            return self._meals([summary(m) for m in found])

        return httpx.Response(404, text="not found")

    @staticmethod
    def _meals(meals):
        return httpx.Response(200, json={"meals": meals or None})


def _ingredients(meal):
    return [
        meal[f"strIngredient{index}"]
        for index in range(1, 21)
        if meal.get(f"strIngredient{index}")
    ]


class SleepRecorder:
    """Drop-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def make_settings(**overrides) -> Settings:
    values = {
        "rate_limit_delay": 0.0,
        "request_timeout": 1.0,
        "retry_backoff_base": 1.0,
        "rate_limit_default_wait": 10.0,
        "random_batch_pause": 0.2,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def fake_api():
    return FakeMealDB()


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest_asyncio.fixture
async def source(fake_api, sleeper):
    mealdb = MealDBSource(
        settings=make_settings(),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(fake_api)),
        sleep=sleeper,
    )
    yield mealdb
    await mealdb.close()
