"""Domain models: articles, cache entries, user configuration"""
from .models import ArticleRecord, CacheEntry, UserConfig
from .config_store import ConfigStore

__all__ = ["ArticleRecord", "CacheEntry", "UserConfig", "ConfigStore"]
