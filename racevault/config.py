from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "RaceVault"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/racevault"

    # Elevated credential for content-cache imports and schema creation.
    # Unset means the importer shares database_url.
    admin_database_url: str | None = None

    cors_origins: list[str] = ["*"]

    # Bearer token accepted by the admin endpoints.
    # Empty means no token is accepted (admin routes always answer 403).
    admin_api_token: str = ""


settings = Settings()


# =============================================================================
# CONTENT CACHE IMPORT
# =============================================================================

# Special Edition Turbo drivers carry a collection sub-name with this suffix
TURBO_SUB_NAME_SUFFIX = "SUBTITLE_2"

# Rarity values
SPECIAL_EDITION_RARITY = 5
SE_TURBO_RARITY = 6

# Drivers at or above this rarity get their series from min GP tier
SERIES_REMAP_MIN_RARITY = 4

# Season numbers accepted by the season filter
MIN_SEASON_NUMBER = 0
MAX_SEASON_NUMBER = 12

# Boost names are exported as BOOST_NAME_<SUFFIX>
BOOST_NAME_PREFIX = "BOOST_NAME_"

# Boost duration is not part of the export; every boost lasts this long
BOOST_DURATION_SECONDS = 30


# =============================================================================
# CATALOG PAGINATION
# =============================================================================

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
