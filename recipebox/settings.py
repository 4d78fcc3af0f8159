import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Upstream API
    mealdb_base_url: str = Field(
        default="https://www.themealdb.com/api/json/v1/1", alias="MEALDB_BASE_URL"
    )
    mealdb_image_base_url: str = Field(
        default="https://www.themealdb.com/images", alias="MEALDB_IMAGE_BASE_URL"
    )

    # Dispatch queue and retries (seconds)
    rate_limit_delay: float = Field(default=0.2, alias="MEALDB_RATE_LIMIT_DELAY")
    request_timeout: float = Field(default=10.0, alias="MEALDB_REQUEST_TIMEOUT")
    max_retries: int = Field(default=3, alias="MEALDB_MAX_RETRIES")
    retry_backoff_base: float = Field(default=1.0, alias="MEALDB_RETRY_BACKOFF_BASE")
    rate_limit_default_wait: float = Field(default=10.0, alias="MEALDB_RATE_LIMIT_WAIT")
    max_rate_limit_waits: int = Field(default=10, alias="MEALDB_MAX_RATE_LIMIT_WAITS")

    # Deduplication window (seconds)
    dedup_window: float = Field(default=5.0, alias="MEALDB_DEDUP_WINDOW")

    # Cache TTL classes (seconds)
    cache_ttl_reference: float = Field(
        default=24 * 60 * 60, alias="MEALDB_CACHE_TTL_REFERENCE"
    )
    cache_ttl_meal: float = Field(default=5 * 60, alias="MEALDB_CACHE_TTL_MEAL")
    cache_ttl_search: float = Field(default=2 * 60, alias="MEALDB_CACHE_TTL_SEARCH")

    # Random draws
    random_batch_size: int = Field(default=3, alias="MEALDB_RANDOM_BATCH_SIZE")
    random_batch_pause: float = Field(default=0.2, alias="MEALDB_RANDOM_BATCH_PAUSE")

    debug: bool = Field(default=False, alias="MEALDB_DEBUG")


global_settings = Settings.model_validate(dict(os.environ))
