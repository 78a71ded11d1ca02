from pydantic_settings import BaseSettings, SettingsConfigDict

# Shipped in place of a real key; treated as "no credential configured".
PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY_HERE"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "chefai"

    # AI
    gemini_api_key: str = PLACEHOLDER_API_KEY
    gemini_text_model: str = "gemini-2.5-flash"

    # Recipe lookup API
    recipe_api_url: str = "https://www.themealdb.com/api/json/v1/1"
    recipe_api_timeout: float = 10.0

    # CORS
    cors_origins: list[str] = [
        "http://localhost:8081",
        "http://127.0.0.1:8081",
        "http://localhost:19006",
        "http://localhost",
        "http://127.0.0.1",
    ]


settings = Settings()
