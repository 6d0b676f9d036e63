from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator, model_validator


class ConnectionSettings(BaseModel):
    """Validated configuration of one IRC connection.

    Attributes:
        uris: Server URIs in preference order; the last one is authoritative.
        settings: Flat key/value settings (nickname, password, upgrade, ...).
    """

    uris: list[str] = Field(min_length=1)
    settings: dict[str, str | bool | int | float] = Field(default_factory=dict)

    @field_validator("uris")
    @classmethod
    def validate_uris(cls, v: list[str]) -> list[str]:
        """Strip whitespace and require a scheme and host on every URI."""
        validated = []
        for raw in v:
            uri = raw.strip()
            parts = urlsplit(uri)
            if not parts.scheme or not parts.hostname:
                raise ValueError(f"URI must have a scheme and a host: {raw!r}")
            validated.append(uri)
        return validated

    @field_validator("settings", mode="before")
    @classmethod
    def validate_settings(cls, v: object) -> object:
        """Drop null values so they behave like missing keys."""
        if isinstance(v, dict):
            return {k: val for k, val in v.items() if val is not None}
        return v

    @model_validator(mode="after")
    def validate_nickname(self) -> ConnectionSettings:
        """Require a nickname; identity, hostname and realname have defaults."""
        nickname = self.settings.get("nickname")
        if not isinstance(nickname, str) or not nickname.strip():
            raise ValueError("settings.nickname must be a non-empty string")
        return self
