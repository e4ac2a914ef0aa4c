"""Configuration loaded from SANDPATH_* environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "SANDPATH_"

# Default name prefix for sandbox directories under the temp root
DEFAULT_SANDBOX_PREFIX = "sandpath_"


class SandpathSettings(BaseSettings):
    """Settings for gateways built by create_gateway().

    Each field reads the matching SANDPATH_* variable, e.g.
    SANDPATH_AUTO_EXPAND_TILDE. Unset or empty variables keep their
    defaults; values that cannot be parsed raise pydantic.ValidationError.
    Keyword arguments take precedence over the environment.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, frozen=True)

    auto_expand_tilde: bool = False
    sandbox_prefix: str = Field(default=DEFAULT_SANDBOX_PREFIX, min_length=1)
    temp_root: str | None = None
