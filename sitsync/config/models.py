"""Configuration models for sitsync."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sitsync.rulepack.placeholders import DEFAULT_PLACEHOLDERS

NEWLINES: dict[str, str] = {"lf": "\n", "crlf": "\r\n"}


class ServiceConfig(BaseModel):
    """Compliance service gateway connection."""

    base_url: str = Field(default="", description="Base URL of the compliance REST gateway.")
    token: str = Field(default="", description="Bearer token sent with every request.")
    timeout_seconds: float = Field(default=60.0, gt=0.0)
    dictionary_update: bool = Field(
        default=True,
        description="Whether the service updates dictionaries in place.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        return value.strip().rstrip("/")


class PathsConfig(BaseModel):
    """Repository layout, relative to the repository root."""

    keywords_dir: str = Field(default="keywords")
    keyword_suffix: str = Field(default=".txt")
    rule_pack: str = Field(default="rulepack.xml")


class DictionariesConfig(BaseModel):
    """Keyword dictionary defaults."""

    descriptions: dict[str, str] = Field(default_factory=dict)
    default_description: str = Field(default="Keyword dictionary {name}")
    encoding: str = Field(default="utf-16-le")
    newline: Literal["lf", "crlf"] = Field(default="crlf")

    def describe(self, name: str) -> str:
        """Return the description for one dictionary name."""
        if name in self.descriptions:
            return self.descriptions[name]
        return self.default_description.format(name=name)


class RulePackConfig(BaseModel):
    """Rule-pack document handling."""

    reference_attribute: str = Field(default="idRef", min_length=1)
    placeholders: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_PLACEHOLDERS))
    encoding: str = Field(default="utf-8")
    newline: Literal["lf", "crlf"] = Field(default="lf")

    @field_validator("placeholders")
    @classmethod
    def _reject_blank_tokens(cls, value: dict[str, str]) -> dict[str, str]:
        for token, name in value.items():
            if not token.strip() or not name.strip():
                raise ValueError("placeholder tokens and dictionary names must be non-empty")
        return value


class PublishConfig(BaseModel):
    """Rule-pack publishing options."""

    auto_fallback: bool = Field(
        default=True,
        description="Retry an update that reports 'not found' as an import.",
    )


class SitSyncConfig(BaseSettings):
    """Root configuration model for sitsync."""

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    dictionaries: DictionariesConfig = Field(default_factory=DictionariesConfig)
    rule_pack: RulePackConfig = Field(default_factory=RulePackConfig)
    publish: PublishConfig = Field(default_factory=PublishConfig)

    model_config = SettingsConfigDict(
        env_prefix="SITSYNC_",
        env_nested_delimiter="__",
        extra="ignore",
    )
