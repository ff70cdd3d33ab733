"""
Application Settings - Load from YAML configs + .env secrets

Design Philosophy:
- Service configs (API endpoints, window sizes, TTLs) → YAML files (versioned in git)
- Environment switches and secrets (cache backend, Redis password) → .env file (gitignored)

Uses Pydantic for validation and type safety
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.utils.config import load_yaml_safe

CONFIG_DIR = Path(__file__).parent / "providers"


class Settings(BaseSettings):
    """
    Application settings

    Architecture:
    - Price API + timeseries configs → config/providers/prices.yaml
    - Cache TTLs + Redis location → config/providers/cache.yaml
    - Secrets → .env (gitignored)

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.PRICE_API_BASE_URL)  # From prices.yaml
        print(settings.CACHE_BACKEND)  # From .env
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Load YAML configs from files (cached at class level)
        if not hasattr(Settings, "_yaml_loaded"):
            Settings._prices_config = load_yaml_safe(str(CONFIG_DIR / "prices.yaml"))
            Settings._cache_config = load_yaml_safe(str(CONFIG_DIR / "cache.yaml"))
            Settings._yaml_loaded = True

    # ============================================
    # ENVIRONMENT (.env only)
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # ============================================
    # CACHE BACKEND (.env only)
    # ============================================
    CACHE_BACKEND: str = Field(default="memory", description="Cache backend: memory, redis")

    # ============================================
    # PRICE API - OSRS Wiki (from YAML)
    # ============================================
    @property
    def PRICE_API_BASE_URL(self) -> str:
        """Wiki prices API root from prices.yaml"""
        return (
            self._prices_config.get("osrs_wiki", {})
            .get("base_url", "https://prices.runescape.wiki/api/v1/osrs")
            .rstrip("/")
        )

    @property
    def PRICE_API_USER_AGENT(self) -> str:
        """User-Agent sent with every Wiki API request"""
        return self._prices_config.get("osrs_wiki", {}).get(
            "user_agent", "osrs-price-history"
        )

    @property
    def PRICE_API_TIMEOUT_SECONDS(self) -> float:
        """Total request timeout for Wiki API calls"""
        return self._prices_config.get("osrs_wiki", {}).get("timeout_seconds", 10)

    # ============================================
    # TIMESERIES (from YAML)
    # ============================================
    @property
    def TIMESERIES_WINDOW_SIZE(self) -> int:
        """Number of buckets in a dense series"""
        return self._prices_config.get("timeseries", {}).get("window_size", 365)

    @property
    def TIMESERIES_MAX_GAP_RATIO(self) -> float:
        """Share of synthesized buckets above which a warning is logged"""
        return self._prices_config.get("timeseries", {}).get("max_gap_ratio", 0.5)

    # ============================================
    # MARKET INDICES (from YAML)
    # ============================================
    @property
    def ITEM_CATEGORIES(self) -> dict[str, dict]:
        """Category name → {"description": str, "ids": [item ids]}"""
        return self._prices_config.get("item_categories", {})

    # ============================================
    # CACHE TTLs (from YAML)
    # ============================================
    @property
    def CACHE_TTL_TIMESERIES_SECONDS(self) -> int:
        """TTL for raw timeseries responses"""
        return self._cache_config.get("ttl", {}).get("timeseries", 60)

    @property
    def CACHE_TTL_LATEST_SECONDS(self) -> int:
        """TTL for latest-price responses"""
        return self._cache_config.get("ttl", {}).get("latest", 1)

    @property
    def CACHE_TTL_MAPPING_SECONDS(self) -> int:
        """TTL for item metadata"""
        return self._cache_config.get("ttl", {}).get("mapping", 3600)

    @property
    def CACHE_TTL_INDICES_SECONDS(self) -> int:
        """TTL for computed category indices"""
        return self._cache_config.get("ttl", {}).get("indices", 1)

    @property
    def CACHE_PURGE_INTERVAL_SECONDS(self) -> float:
        """Minimum time between expired-key sweeps of the in-memory cache"""
        return self._cache_config.get("memory", {}).get("purge_interval_seconds", 120)

    # ============================================
    # REDIS (from YAML + .env)
    # ============================================
    @property
    def REDIS_HOST(self) -> str:
        """Redis host from cache.yaml"""
        return self._cache_config.get("redis", {}).get("host", "redis")

    @property
    def REDIS_PORT(self) -> int:
        """Redis port from cache.yaml"""
        return self._cache_config.get("redis", {}).get("port", 6379)

    @property
    def REDIS_DB(self) -> int:
        """Redis database from cache.yaml"""
        return self._cache_config.get("redis", {}).get("db", 0)

    @property
    def REDIS_KEY_PREFIX(self) -> str:
        """Namespace prepended to every Redis key"""
        return self._cache_config.get("redis", {}).get("key_prefix", "osrs_prices:")

    # Redis password from .env (optional secret)
    REDIS_PASSWORD: str | None = Field(default=None)

    @property
    def redis_url(self) -> str:
        """Redis connection URL"""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Example:
        >>> settings = get_settings()
        >>> print(settings.TIMESERIES_WINDOW_SIZE)
        365
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
