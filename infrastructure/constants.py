from pathlib import Path

# Repo-root conventional files (overrideable from the CLI)
CONFIG_DIR = Path("configs")
CONFIG_FILE = CONFIG_DIR / "config.yaml"
ENV_FILE = Path(".env")

DEFAULT_CATALOG_URL = "https://raw.githubusercontent.com/github/linguist/master/lib/linguist/languages.yml"
DEFAULT_TABLE = "languages"
DEFAULT_TIMEOUT_MS = 60_000

# Environment variable -> dotted config path
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "SEER_DB_USER": ("db", "auth", "user"),
    "SEER_DB_PASSWORD": ("db", "auth", "password"),
    "SEER_DB_HOST": ("db", "auth", "host"),
    "SEER_DB_PORT": ("db", "auth", "port"),
    "SEER_DB_DATABASE": ("db", "auth", "database"),
    "SEER_CATALOG_URL": ("catalog", "url"),
}
