"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bulkctl.toml only contains
overrides.  No config file is needed at all for the reference behavior.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from bulkctl.domain.types import TickGranularity


class PipelineConfig(BaseModel):
    """[pipeline] section."""

    model_config = {"frozen": True}

    open_token: str = Field(default="{", min_length=1)
    close_token: str = Field(default="}", min_length=1)
    skip_blank: bool = False

    @model_validator(mode="after")
    def _tokens_differ(self) -> PipelineConfig:
        if self.open_token == self.close_token:
            msg = "open_token and close_token must differ"
            raise ValueError(msg)
        return self


class LogFileConfig(BaseModel):
    """[log_file] section.

    ``directory`` of None means the current working directory at run time.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    directory: Path | None = None
    prefix: str = "bulk"
    suffix: str = ".log"
    granularity: TickGranularity = TickGranularity.SECONDS
