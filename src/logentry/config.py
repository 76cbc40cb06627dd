import os
from dataclasses import dataclass, field
from typing import Optional

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class EntryConfig:
    """Configuration for log entries and the logging integration"""

    root_path: str = field(default_factory=os.getcwd)
    missing_text: str = "undefined"
    log_level: str = "INFO"
    include_request_id: bool = True
    include_contexts: bool = True

    @staticmethod
    def _env_flag(key: str, default: bool) -> bool:
        """On/off switch from the environment, unset or blank keeps the default"""
        value = os.getenv(key, "").strip().lower()
        if not value:
            return default
        return value in _TRUE_VALUES

    @classmethod
    def from_env(cls) -> "EntryConfig":
        """Create configuration from environment variables"""
        return cls(
            root_path=os.getenv("LOGENTRY_ROOT_PATH") or os.getcwd(),
            missing_text=os.getenv("LOGENTRY_MISSING_TEXT", "undefined"),
            log_level=os.getenv("LOGENTRY_LEVEL", "INFO"),
            include_request_id=cls._env_flag("LOGENTRY_REQUEST_ID", True),
            include_contexts=cls._env_flag("LOGENTRY_CONTEXTS", True),
        )


_default_config: Optional[EntryConfig] = None


def get_default_config() -> EntryConfig:
    """Get the default configuration instance"""
    global _default_config
    if _default_config is None:
        _default_config = EntryConfig.from_env()
    return _default_config


def set_default_config(config: Optional[EntryConfig]) -> None:
    """Set the default configuration instance, None resets it"""
    global _default_config
    _default_config = config
