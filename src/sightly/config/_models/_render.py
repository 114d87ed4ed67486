"""Render configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class RenderConfig(BaseModel):
    """Render configuration section.

    Attributes:
        strict_extensions: If True, calling a runtime extension that is not
            registered raises ExtensionNotFoundError. If False the call logs a
            warning and evaluates to None.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    strict_extensions: bool = True
