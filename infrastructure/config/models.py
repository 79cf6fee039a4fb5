"""Configuration models (Pydantic classes)."""

from urllib.parse import quote

from pydantic import BaseModel, Field

from domain.catalog.projection import ProjectionPolicy
from domain.errors import ConfigError
from infrastructure.constants import DEFAULT_CATALOG_URL, DEFAULT_TABLE


class DbAuthConfig(BaseModel):
    """Database credentials and location."""

    user: str = ""
    password: str = ""
    host: str = ""
    port: int = 0
    database: str = ""


class DbConfig(BaseModel):
    """Database connection settings."""

    auth: DbAuthConfig = Field(default_factory=DbAuthConfig)
    connect_timeout_s: int = Field(default=15, ge=1)


class CatalogConfig(BaseModel):
    """Where the language catalog comes from and where it is loaded."""

    url: str = Field(default=DEFAULT_CATALOG_URL, description="Remote path to Linguist languages.yml.")
    table: str = Field(default=DEFAULT_TABLE, description="Target table for the bulk copy.")
    compat: ProjectionPolicy = Field(
        default_factory=ProjectionPolicy,
        description="Switches reproducing how older loads populated the table.",
    )


class AppConfig(BaseModel):
    """
    Application configuration.
    - Loaded from config.yaml, then overridden from the environment
    - Passed explicitly to whatever needs it; there is no global instance
    """

    db: DbConfig = Field(default_factory=DbConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)

    def database_url(self) -> str:
        """
        Build the postgres:// URL from the auth block.

        Raises:
            ConfigError: Naming the first missing required field
        """
        auth = self.db.auth
        if not auth.host:
            raise ConfigError("db host is required")
        if auth.port == 0:
            raise ConfigError("db port is required")
        if not auth.user:
            raise ConfigError("db user is required")
        if not auth.password:
            raise ConfigError("db password is required")
        if not auth.database:
            raise ConfigError("db database is required")
        user = quote(auth.user, safe="")
        password = quote(auth.password, safe="")
        database = quote(auth.database, safe="")
        return f"postgres://{user}:{password}@{auth.host}:{auth.port}/{database}"
