"""Serialization helpers shared by algorithm configs."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Any, Dict, Mapping, Tuple, Type, TypeVar

from nsga3lab.foundation.exceptions import ConfigurationError, MissingConfigError

ConfigT = TypeVar("ConfigT", bound="_SerializableConfig")

# Fields stored as (method, params) pairs; JSON turns them into lists.
_OPERATOR_FIELDS = ("crossover", "mutation")


class _SerializableConfig:
    """Mixin giving frozen config dataclasses a dict/JSON form and back."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls: Type[ConfigT], data: Mapping[str, Any]) -> ConfigT:
        """Rebuild (and re-validate) a config from ``to_dict``/``to_json`` output."""
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}.",
                suggestion=f"Valid keys: {', '.join(sorted(known))}",
            )
        kwargs = dict(data)
        for name in _OPERATOR_FIELDS:
            if name in kwargs and kwargs[name] is not None:
                method, params = kwargs[name]
                kwargs[name] = (str(method), dict(params or {}))
        _require_fields(kwargs, ("pop_size", "max_generations"), cls.__name__.replace("ConfigData", ""))
        return cls(**kwargs)

    @classmethod
    def from_json(cls: Type[ConfigT], text: str) -> ConfigT:
        return cls.from_dict(json.loads(text))


def _require_fields(cfg: Mapping[str, Any], required: Tuple[str, ...], name: str) -> None:
    """Raise MissingConfigError for the first required field not in ``cfg``."""
    for field_name in required:
        if field_name not in cfg:
            raise MissingConfigError(field_name, f"{name}Config")
