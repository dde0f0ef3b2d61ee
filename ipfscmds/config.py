"""Configuration wrapper providing typed access and section filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

__all__ = ["BOOL_FALSE_STRINGS", "Configuration", "coerce_to_bool"]

ConfigValueType = float | bool | str | list | dict

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Args:
        value: The value to coerce
        default: Default value if value is None

    Returns:
        The boolean value

    Behavior:
        - None → default
        - Empty string → False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") → False
        - Any other non-empty string → True
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """Repository configuration with typed getters."""

    def __init__(self, *args: Any, logger: logging.Logger, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self.log = logger

    def section(self, name: str) -> Configuration:
        """Return the `name` table, empty if missing or not a table."""
        value = dict.get(self, name)
        if not isinstance(value, dict):
            if value is not None:
                self.log.warning("Ignoring configuration key %s: not a table", name)
            value = {}
        return Configuration(value, logger=self.log)

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean value, see `coerce_to_bool`."""
        return coerce_to_bool(self.get(name), default)

    def get_int(self, name: str, default: int = 0) -> int:
        """Get an integer value, `default` if missing or invalid."""
        value = self.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            self.log.warning("Invalid integer value for %s: %s", name, value)
            return default

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value."""
        value = self.get(name)
        if value is None:
            return default
        return str(value)
