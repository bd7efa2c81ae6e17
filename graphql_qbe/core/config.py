
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "GraphQL QBE API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (SQLite for local dev, any async SQLAlchemy URL otherwise)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./graphql_qbe.db",
        alias="DATABASE_URL",
    )
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")

    # Paging
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(
        default=200, alias="MAX_PAGE_SIZE",
    )  # Upper bound for both REST `limit` and GraphQL `page.limit`

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
