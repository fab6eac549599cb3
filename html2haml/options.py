"""Conversion options and configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError


OPTION_ALIASES = {"templating_tags": "erb", "strict_xml": "xhtml"}


class ConversionOptions(BaseModel):
    """Switches that control how a document is converted."""

    erb: bool = Field(
        False,
        alias="templating_tags",
        description="Convert ERB <%= %> and <% %> tags into Haml = and - lines.",
    )
    xhtml: bool = Field(
        False,
        alias="strict_xml",
        description="Parse the input strictly as XML instead of lenient HTML.",
    )

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @property
    def templating_tags(self) -> bool:
        return self.erb

    @property
    def strict_xml(self) -> bool:
        return self.xhtml

    @classmethod
    def coerce(
        cls, value: Union["ConversionOptions", Mapping[str, Any], None]
    ) -> "ConversionOptions":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))


def load_options(path: Union[str, Path]) -> ConversionOptions:
    """Read options from a YAML mapping; an empty file yields the defaults."""
    config_path = Path(path)
    data: Optional[Any] = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if data is None:
        return ConversionOptions()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping of options.")
    return ConversionOptions.model_validate(data)


__all__ = ["OPTION_ALIASES", "ConversionOptions", "load_options"]
