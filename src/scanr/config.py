"""ContextVar-based scan configuration for scanr.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Scanner captures the active config when it is constructed: producer
threads start with an empty context, so they read the captured copy
rather than the ContextVar.

Usage:
    from scanr.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(canonical_octets=True)):
        items = scan("10.0.0.01")  # last octet rejected

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        strict_backup: Raise CursorError on a second backup() without an
            intervening next(). When False the cursor steps back by the
            stale width, as the unchecked reference cursor does.
        canonical_octets: Reject octets with a leading zero ("01", "007")
            in numeric addresses.
        daemon: Run producer threads as daemon threads.
        join_timeout: Seconds to wait for the producer thread when a
            scoped scanner exits. None waits forever.
        thread_name: Name given to producer threads.

    """

    strict_backup: bool = True
    canonical_octets: bool = False
    daemon: bool = True
    join_timeout: float | None = 5.0
    thread_name: str = "scanr-producer"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ScanConfig.from_dict({
            ...     "canonical_octets": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.canonical_octets
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (context-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Only affects scanners constructed afterwards in this context.
    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with scan_config_context(ScanConfig(strict_backup=False)):
        ...     scanner = Scanner(scan_tokens)
        >>> # Automatically reset to previous config

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
]
