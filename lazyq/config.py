"""
runtime configuration for lazyq.
defaults can be overridden with LAZYQ_* environment variables or set_defaults().
"""

import os
from dataclasses import dataclass, field, fields, asdict
from typing import Any, ClassVar, Dict, Optional


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class LazyqConfig:
    """configuration shared by every pipeline in the process"""

    # bridge
    channel_capacity: int = field(default_factory=lambda: _env_int('LAZYQ_CHANNEL_CAPACITY', 1))  # <= 0 is unbounded
    daemon_producers: bool = field(default_factory=lambda: _env_bool('LAZYQ_DAEMON_PRODUCERS', True))
    producer_thread_name: str = field(default_factory=lambda: os.environ.get('LAZYQ_PRODUCER_THREAD_NAME', 'lazyq-producer'))

    # buffering operators log once when a set grows past this many elements (0 disables)
    buffer_warning_threshold: int = field(default_factory=lambda: _env_int('LAZYQ_BUFFER_WARNING_THRESHOLD', 1_000_000))

    _instance: ClassVar[Optional['LazyqConfig']] = None

    @classmethod
    def get_instance(cls) -> 'LazyqConfig':
        """get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """set configuration values on the shared instance. unknown keys raise."""
        instance = cls.get_instance()
        options = {f.name for f in fields(cls)}
        for key, value in kwargs.items():
            if key not in options:
                raise AttributeError(f"unknown lazyq config option: '{key}'")
            setattr(instance, key, value)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# global configuration instance
config = LazyqConfig.get_instance()
