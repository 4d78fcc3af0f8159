"""
recipebox entry point.

Usage:
    python main.py              # a few random meals
    python main.py chicken      # search by name
"""

import asyncio
import sys

from loguru import logger

from recipebox.datasource.mealdb import close_mealdb_source, get_mealdb_source


async def main(query: str | None = None) -> None:
    """Run one lookup against TheMealDB and log the results."""
    logger.info("Starting recipebox...")
    source = get_mealdb_source()

    try:
        if query:
            logger.info(f"Searching meals for '{query}'...")
            meals = await source.search(query)
        else:
            logger.info("Fetching random meals...")
            meals = await source.fetch()

        for meal in meals:
            ingredients = source.extract_ingredient_list(meal)
            logger.info(
                f"{meal.id} {meal.name} [{meal.category or '-'} / {meal.area or '-'}] "
                f"{len(ingredients)} ingredients"
            )
        logger.info(f"{len(meals)} meals")

    except Exception as e:
        logger.error(f"Request failed: {e}")
    finally:
        logger.debug(f"Health: {source.get_health_status()}")
        await close_mealdb_source()
        logger.info("recipebox stopped")


if __name__ == "__main__":
    asyncio.run(main(" ".join(sys.argv[1:]) or None))
