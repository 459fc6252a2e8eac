"""ContextVar-based parse configuration for Jianwen.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The active config is read by :func:`jianwen.parse` when no explicit config
is passed, so framework code can set it once around a batch of parses.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from jianwen.config import ParseConfig, parse_config_context
    from jianwen import parse

    files = {"intro.jw": "# Intro"}
    config = ParseConfig(
        expand_include=True,
        load_file=lambda path, stack: files.get(path),
    )
    with parse_config_context(config):
        result = parse("[@](intro.jw)")

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TypeAlias

from jianwen.errors import ConfigError

# Loader contract: (target path, stack of in-flight include targets) -> text or None
FileLoader: TypeAlias = Callable[[str, tuple[str, ...]], str | None]

DEFAULT_INCLUDE_MAX_DEPTH = 16


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        expand_include: Replace ``[@](path)`` and ``[@=name]`` blocks with
            the content they reference
        include_max_depth: Maximum number of nested file includes
        load_file: Synchronous loader for file-mode includes. Receives the
            target path and the stack of active include targets (ending with
            the target itself) and returns the text, or None when missing.

    Raises:
        ConfigError: If include_max_depth is negative or not an int, or
            load_file is not callable.

    """

    expand_include: bool = False
    include_max_depth: int = DEFAULT_INCLUDE_MAX_DEPTH
    load_file: FileLoader | None = None

    def __post_init__(self) -> None:
        if isinstance(self.include_max_depth, bool) or not isinstance(
            self.include_max_depth, int
        ):
            raise ConfigError("include_max_depth", "must be an integer")
        if self.include_max_depth < 0:
            raise ConfigError("include_max_depth", "must not be negative")
        if self.load_file is not None and not callable(self.load_file):
            raise ConfigError("load_file", "must be callable")

    @classmethod
    def from_dict(cls, config_dict: dict) -> ParseConfig:
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ParseConfig attribute names.

        Returns:
            New ParseConfig instance with values from dict.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "expand_include": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.expand_include
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

# Thread-local configuration via ContextVar
_parse_config: ContextVar[ParseConfig] = ContextVar(
    "jianwen_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local).

    Returns:
        The active ParseConfig for this thread/context.

    """
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ParseConfig to use within the context.

    Yields:
        None

    Example:
        >>> with parse_config_context(ParseConfig(expand_include=True)):
        ...     result = parse("[tag=a]\\n# A\\n\\n[@=a]")
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_INCLUDE_MAX_DEPTH",
    "FileLoader",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
