"""
StyleSet - The active styles of a single text run.

Each style key is either a flag (value ``True``) or carries a string value,
e.g. ``colorHighlight="yellow"`` or ``fontSize="18px"``. Styles compose
orthogonally: setting one never affects another. Which keys are legal is
decided by the composed Schema, not by StyleSet itself.

Usage:
    styles = StyleSet(bold=True)
    styles = styles.with_style("colorHighlight", "yellow")
    "bold" in styles        # True
    styles["colorHighlight"]  # "yellow"
"""

from __future__ import annotations
from typing import Any, Iterator, Mapping

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


StyleValue = bool | str


class StyleSet(Mapping[str, StyleValue]):
    """
    Immutable mapping of style key -> value.

    A value of ``False`` (or ``None``) means the style is not set, so it is
    dropped on construction. Equal StyleSets hash equally, which lets the
    document merge adjacent text runs with identical styles.
    """

    __slots__ = ["_styles"]

    def __init__(self, styles: Mapping[str, Any] | None = None, **kwargs: Any):
        merged = dict(styles or {})
        merged.update(kwargs)
        self._styles: dict[str, StyleValue] = {}
        for key, value in merged.items():
            if value is None or value is False:
                continue
            if not isinstance(value, (bool, str)):
                raise TypeError(f"style {key!r} must be a bool or str, got {type(value).__name__}")
            self._styles[key] = value

    # -------------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------------

    def __getitem__(self, key: str) -> StyleValue:
        return self._styles[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StyleSet):
            return self._styles == other._styles
        if isinstance(other, Mapping):
            return self._styles == StyleSet(other)._styles
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._styles.items()))

    def __repr__(self) -> str:
        parts = [k if v is True else f"{k}={v!r}" for k, v in self._styles.items()]
        return f"StyleSet({', '.join(parts)})"

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    def with_style(self, key: str, value: StyleValue = True) -> StyleSet:
        """Return a copy with ``key`` set to ``value``."""
        return StyleSet(self._styles, **{key: value})

    def without(self, *keys: str) -> StyleSet:
        """Return a copy with the given keys removed."""
        return StyleSet({k: v for k, v in self._styles.items() if k not in keys})

    def to_dict(self) -> dict[str, StyleValue]:
        return dict(self._styles)

    # -------------------------------------------------------------------------
    # Pydantic integration
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls._serialize
            )
        )

    @staticmethod
    def _validate(v: Any) -> StyleSet:
        if isinstance(v, StyleSet):
            return v
        elif isinstance(v, Mapping):
            return StyleSet(v)
        elif v is None:
            return StyleSet()
        else:
            raise ValueError(f"Invalid style set: {v!r}")

    @staticmethod
    def _serialize(v: Any) -> dict[str, StyleValue]:
        if isinstance(v, StyleSet):
            return v.to_dict()
        raise ValueError(f"Invalid style set: {v!r}")
