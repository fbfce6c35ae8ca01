from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.layout.track_packing import LayoutConfig

DEFAULT_CONFIG_PATH = Path("config/layout.yaml")

OutputFormat = Literal["table", "json"]


class LayoutSettings(BaseModel):
    title: str = "Circuit Layout"
    base_column: int = Field(default=1, ge=0)
    base_row: int = Field(default=0, ge=0)
    append_trailing_wire: bool = True
    output_format: OutputFormat = "table"

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_output_format(cls, value: object) -> str:
        return str(value).strip().lower() if value else "table"

    def to_layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            base_column=self.base_column,
            base_row=self.base_row,
            append_trailing_wire=self.append_trailing_wire,
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="QCL_", env_nested_delimiter="__")

    layout: LayoutSettings = LayoutSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("QCL_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
