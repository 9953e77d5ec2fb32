"""Indentation and formatting options passed to every engine entry point."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from mscl_engine.runtime.telemetry import env_flag, env_value

DEFAULT_INDENT_OFFSET = 4


@dataclass(frozen=True, slots=True)
class IndentConfig:
    """Immutable formatting options.

    ``indent_offset`` is the number of columns per nesting level.
    ``delete_trailing_whitespace`` strips trailing blanks from every
    formatted line, ``delete_trailing_blank_lines`` drops blank lines at the
    end of the buffer when the whole buffer is formatted.
    """

    indent_offset: int = DEFAULT_INDENT_OFFSET
    delete_trailing_whitespace: bool = False
    delete_trailing_blank_lines: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.indent_offset, bool) or not isinstance(
            self.indent_offset, int
        ):
            raise ValueError("indent_offset must be an integer")
        if self.indent_offset <= 0:
            raise ValueError("indent_offset must be positive")

    def with_overrides(self, **changes: object) -> "IndentConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, base: Optional["IndentConfig"] = None) -> "IndentConfig":
        """Apply ``MSCL_ENGINE_*`` overrides on top of ``base``."""

        config = base or cls()
        raw_offset = env_value("INDENT_OFFSET")
        offset = config.indent_offset
        if raw_offset is not None:
            try:
                offset = int(raw_offset)
            except ValueError as exc:
                raise ValueError(
                    f"MSCL_ENGINE_INDENT_OFFSET must be an integer, got {raw_offset!r}"
                ) from exc
        return cls(
            indent_offset=offset,
            delete_trailing_whitespace=env_flag(
                "DELETE_TRAILING_WHITESPACE", config.delete_trailing_whitespace
            ),
            delete_trailing_blank_lines=env_flag(
                "DELETE_TRAILING_BLANK_LINES", config.delete_trailing_blank_lines
            ),
        )


DEFAULT_CONFIG = IndentConfig()

__all__ = ["DEFAULT_CONFIG", "DEFAULT_INDENT_OFFSET", "IndentConfig"]
