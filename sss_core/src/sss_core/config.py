"""Configuration loading utilities for sss-core."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .field import DEFAULT_MODULUS, PrimeField
from .paths import runtime_config_dir


class FieldConfig(BaseModel):
    modulus: int = Field(default=DEFAULT_MODULUS, description="Prime modulus of the share field")
    chunk_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Characters per chunk; defaults to the largest size the modulus allows",
    )

    @field_validator("modulus")
    @classmethod
    def _validate_modulus(cls, value: int) -> int:
        if value < 257:
            raise ValueError("modulus must be at least 257")
        return value

    @model_validator(mode="after")
    def _validate_chunk_size(self) -> "FieldConfig":
        limit = self.build_field().max_chunk_length()
        if self.chunk_size is not None and self.chunk_size > limit:
            raise ValueError(f"chunk_size {self.chunk_size} exceeds {limit} for this modulus")
        return self

    def build_field(self) -> PrimeField:
        return PrimeField(self.modulus)


class ConcurrencyConfig(BaseModel):
    executor: Literal["thread", "process"] = Field(default="thread", description="Worker pool kind")
    max_workers: Optional[int] = Field(default=None, ge=1)


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class AppConfig(BaseModel):
    field: FieldConfig = Field(default_factory=FieldConfig)
    concurrency: ConcurrencyConfig = Field(default_factory=ConcurrencyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".sss" / "config.yaml"
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is not None and not path.is_file():
        raise ValueError(f"Configuration file not found: {path}")
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                try:
                    data = yaml.safe_load(handle) or {}
                except yaml.YAMLError as exc:
                    raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)


__all__ = [
    "AppConfig",
    "ConcurrencyConfig",
    "DEFAULT_CONFIG",
    "FieldConfig",
    "LoggingConfig",
    "config_search_paths",
    "dump_default_config",
    "load_config",
]
