from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "cardsift"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./cardsift.db"

    scryfall_search_url: str = "https://api.scryfall.com/cards/search"
    user_agent: str = "cardsift/1.0"
    request_timeout_seconds: float = 30.0

    # Scryfall asks clients to wait 50-100ms between requests
    request_delay_seconds: float = 0.05

    sync_query: str = "is:commander game:paper legal:commander"
    sync_order: str = "released"


settings = Settings()
