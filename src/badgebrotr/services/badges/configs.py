"""Badge service configuration models.

Loaded from YAML by
[AppConfig.from_yaml()][badgebrotr.services.badges.configs.AppConfig.from_yaml]:

```yaml
relays:
  relays:
    - wss://relay.damus.io
    - wss://nos.lol
  connect_timeout: 10.0
  keys_env: PRIVATE_KEY
badges:
  query_timeout: 3.0
  detect_conflicts: true
  metrics:
    enabled: false
```

See Also:
    [BadgeQueries][badgebrotr.services.badges.queries.BadgeQueries],
    [BadgeActions][badgebrotr.services.badges.actions.BadgeActions],
    [ProfileBadgesEditor][badgebrotr.services.badges.editor.ProfileBadgesEditor]:
        Consumers of [BadgesConfig][badgebrotr.services.badges.configs.BadgesConfig].
    [RelayClient][badgebrotr.utils.protocol.RelayClient]: Built from
        [RelayClientConfig][badgebrotr.services.badges.configs.RelayClientConfig].
"""

from __future__ import annotations

from pathlib import Path
from typing import Self
from urllib.parse import urlparse

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from badgebrotr.core.exceptions import ConfigurationError
from badgebrotr.core.metrics import MetricsConfig
from badgebrotr.core.yaml import load_yaml
from badgebrotr.utils.keys import ENV_PRIVATE_KEY


# =============================================================================
# Service configuration
# =============================================================================


class BadgesConfig(BaseModel):
    """Timeouts, query limits and safety switches for the badge services.

    Attributes:
        query_timeout: Seconds each relay query may take before it is
            abandoned with an empty result.
        publish_timeout: Seconds each publish may take before it fails.
        definitions_limit: ``limit`` of the badge directory query.
        awards_limit: ``limit`` of the awards-to-user query.
        issuer_limit: ``limit`` of the per-issuer definitions query.
        detect_conflicts: Re-read the profile badges list before every
            publish and refuse to overwrite a newer one.
        metrics: Prometheus metrics settings.
    """

    query_timeout: float = Field(default=3.0, ge=0.1, le=10.0)
    publish_timeout: float = Field(default=10.0, ge=1.0, le=60.0)
    definitions_limit: int = Field(default=100, ge=1, le=5000)
    awards_limit: int = Field(default=100, ge=1, le=5000)
    issuer_limit: int = Field(default=100, ge=1, le=5000)
    detect_conflicts: bool = False
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)


class RelayClientConfig(BaseModel):
    """Relay connection settings.

    Attributes:
        relays: WebSocket relay URLs used for both queries and publishing.
        connect_timeout: Seconds to wait for relay connections.
        fetch_timeout: Seconds each relay fetch may wait for answers.
        keys_env: Environment variable holding the signing key. Read only
            by commands that publish.
    """

    relays: list[str] = Field(min_length=1)
    connect_timeout: float = Field(default=10.0, ge=1.0, le=120.0)
    fetch_timeout: float = Field(default=3.0, ge=0.1, le=60.0)
    keys_env: str = Field(default=ENV_PRIVATE_KEY, min_length=1)

    @field_validator("relays")
    @classmethod
    def validate_relay_urls(cls, v: list[str]) -> list[str]:
        """Validate that all relay URLs are WebSocket URLs with a host."""
        for url in v:
            parsed = urlparse(url)
            if parsed.scheme not in ("ws", "wss") or not parsed.hostname:
                raise ValueError(f"Invalid relay URL '{url}': expected ws:// or wss://")
        return list(dict.fromkeys(v))


class AppConfig(BaseModel):
    """Top-level configuration file layout."""

    relays: RelayClientConfig
    badges: BadgesConfig = Field(default_factory=BadgesConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Self:
        """Load and validate a YAML configuration file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the YAML is malformed or fails validation.
        """
        data = load_yaml(config_path)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"invalid configuration in {config_path}: {e}") from e


# =============================================================================
# Publishing parameters
# =============================================================================


class BadgeDefinitionParams(BaseModel):
    """User-supplied fields of a new badge definition.

    Attributes:
        slug: Definition identifier (``d`` tag): 3 to 64 characters of
            ``a-z``, ``0-9``, ``_`` and ``-``.
        name: Display name, 2 to 64 characters.
        description: Optional description, at most 280 characters.
        image: Optional image URL; ``image_width``/``image_height`` are
            written only when both are given.
        thumb: Optional thumbnail URL; same dimension rule as ``image``.
    """

    slug: str = Field(min_length=3, max_length=64, pattern=r"^[a-z0-9_-]+$")
    name: str = Field(min_length=2, max_length=64)
    description: str | None = Field(default=None, max_length=280)
    image: str | None = None
    image_width: int | None = Field(default=None, ge=1)
    image_height: int | None = Field(default=None, ge=1)
    thumb: str | None = None
    thumb_width: int | None = Field(default=None, ge=1)
    thumb_height: int | None = Field(default=None, ge=1)

    @field_validator("name", "description", "image", "thumb", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        """Strip surrounding whitespace; blank optional values become ``None``."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode="after")
    def validate_dimensions(self) -> Self:
        """Reject dimensions given without the image they describe."""
        if self.image is None and (self.image_width or self.image_height):
            raise ValueError("image dimensions require an image URL")
        if self.thumb is None and (self.thumb_width or self.thumb_height):
            raise ValueError("thumb dimensions require a thumb URL")
        return self
