"""
Parameter specs for data APIs.

A spec is either positional (one optional transformer per argument) or
named (one optional transformer per key). Transformers are validated
when the spec is built, not on every call.

A transformer is one of:
- None: pass the value through
- a str type tag (e.g. "string"): pass the value through
- a class with a ``from_value`` classmethod: build an instance from the value
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from storekit.errors import InvalidParamsError, InvalidParamSpecError


def validate_transformer(transformer: Any) -> None:
    """Raise InvalidParamSpecError unless transformer is usable."""
    if transformer is None or isinstance(transformer, str):
        return
    if isinstance(transformer, type):
        if not callable(getattr(transformer, "from_value", None)):
            raise InvalidParamSpecError(
                f"Invalid class param type {transformer.__name__}, missing from_value"
            )
        return
    raise InvalidParamSpecError(f"Invalid param type: {transformer!r}")


def apply_transformer(transformer: Any, value: Any) -> Any:
    """Transform one input value; None inputs are never transformed."""
    if transformer is None or isinstance(transformer, str) or value is None:
        return value
    return transformer.from_value(value)


@dataclass(frozen=True)
class Positional:
    """
    Positional parameter spec.

    Attributes:
        transformers: One transformer (or None) per argument position
    """

    transformers: Sequence[Any] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "transformers", tuple(self.transformers))
        for transformer in self.transformers:
            validate_transformer(transformer)

    def __len__(self) -> int:
        return len(self.transformers)

    def parse(self, raw: Any) -> list:
        """Apply transformers to a list of arguments; extra positions pass through."""
        if raw is None:
            return []
        if not isinstance(raw, (list, tuple)):
            raise InvalidParamsError("Expected a list of positional params")

        return [
            apply_transformer(
                self.transformers[index] if index < len(self.transformers) else None,
                value,
            )
            for index, value in enumerate(raw)
        ]


@dataclass(frozen=True)
class Named:
    """
    Named parameter spec.

    Attributes:
        transformers: Transformer (or None) per parameter name
    """

    transformers: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "transformers", dict(self.transformers))
        for transformer in self.transformers.values():
            validate_transformer(transformer)

    def parse(self, raw: Any) -> dict:
        """Apply transformers to a dict of arguments; unknown keys pass through."""
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise InvalidParamsError("Expected an object of named params")

        return {
            key: apply_transformer(self.transformers.get(key), value)
            for key, value in raw.items()
        }


ParamSpec = Union[Positional, Named]


def to_param_spec(params: Any) -> ParamSpec | None:
    """
    Build a ParamSpec from a list (positional) or dict (named).

    Existing specs and None are returned unchanged.
    """
    if params is None or isinstance(params, (Positional, Named)):
        return params
    if isinstance(params, Mapping):
        return Named(params)
    if isinstance(params, (list, tuple)):
        return Positional(params)
    raise InvalidParamSpecError(f"Invalid params config: {params!r}")
