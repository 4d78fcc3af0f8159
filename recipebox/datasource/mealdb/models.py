"""
TheMealDB record types using Pydantic models.

Field aliases match the upstream JSON keys so payloads validate directly.
"""

from pydantic import BaseModel, ConfigDict, Field

INGREDIENT_SLOTS = 20


class Meal(BaseModel):
    """
    A recipe record.

    Summary-shaped endpoints (filter, some list calls) return only id, name
    and thumbnail; lookup and search return the full record. The twenty
    strIngredientN / strMeasureN slots are kept as extra fields.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(alias="idMeal")
    name: str = Field(alias="strMeal")
    category: str | None = Field(default=None, alias="strCategory")
    area: str | None = Field(default=None, alias="strArea")
    instructions: str | None = Field(default=None, alias="strInstructions")
    thumbnail: str | None = Field(default=None, alias="strMealThumb")
    tags: str | None = Field(default=None, alias="strTags")
    youtube: str | None = Field(default=None, alias="strYoutube")
    source: str | None = Field(default=None, alias="strSource")

    @property
    def is_complete(self) -> bool:
        """A record is complete when it carries non-blank instructions."""
        return bool(self.instructions and self.instructions.strip())

    @property
    def tag_list(self) -> list[str]:
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    def ingredient_slot(self, index: int) -> tuple[str | None, str | None]:
        """Raw (ingredient, measure) values of slot 1..20."""
        extra = self.model_extra or {}
        return extra.get(f"strIngredient{index}"), extra.get(f"strMeasure{index}")


class Category(BaseModel):
    """Meal category from /categories.php."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, alias="idCategory")
    name: str = Field(alias="strCategory")
    thumbnail: str | None = Field(default=None, alias="strCategoryThumb")
    description: str | None = Field(default=None, alias="strCategoryDescription")


class Area(BaseModel):
    """Cuisine / area tag from /list.php?a=list."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="strArea")


class Ingredient(BaseModel):
    """Ingredient from /list.php?i=list."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, alias="idIngredient")
    name: str = Field(alias="strIngredient")
    description: str | None = Field(default=None, alias="strDescription")
    type: str | None = Field(default=None, alias="strType")


class IngredientMeasure(BaseModel):
    """One populated ingredient slot of a meal."""

    ingredient: str
    measure: str


class IngredientDetails(BaseModel):
    """Display details for an ingredient name."""

    name: str
    thumbnail: str
    description: str | None = None


class ConnectionCheck(BaseModel):
    """Outcome of a connectivity probe against the upstream API."""

    success: bool
    error: str | None = None
    meal: Meal | None = None


def extract_ingredient_list(meal: Meal) -> list[IngredientMeasure]:
    """
    Collect the populated ingredient slots of a meal in slot order.

    Slots with a blank ingredient are skipped; a missing measure becomes "".
    """
    ingredients = []
    for index in range(1, INGREDIENT_SLOTS + 1):
        ingredient, measure = meal.ingredient_slot(index)
        if ingredient and ingredient.strip():
            ingredients.append(
                IngredientMeasure(
                    ingredient=ingredient.strip(),
                    measure=(measure or "").strip(),
                )
            )
    return ingredients
