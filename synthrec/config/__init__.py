from synthrec.config.settings import CacheSettings, LLMSettings, Settings, get_settings, settings

__all__ = ["CacheSettings", "LLMSettings", "Settings", "get_settings", "settings"]
