"""Client configuration resolved from arguments or the environment."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from awswrap.core.constants import (
    ENV_AWS_DEFAULT_REGION,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_MAX_WORKERS,
)
from awswrap.core.errors import ConfigurationError


class AWSSettings(BaseModel):
    """Settings shared by every wrapper client."""

    model_config = ConfigDict(frozen=True)

    region_name: StrictStr | None = Field(None, description="AWS region, e.g. eu-west-1")
    endpoint_url: StrictStr | None = Field(
        None,
        description="Override endpoint (LocalStack, moto server)",
    )
    max_workers: StrictInt | None = Field(
        None,
        ge=1,
        description="Size of the client-owned executor; None uses the loop default",
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AWSSettings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If AWSWRAP_MAX_WORKERS is not a positive integer
        """
        env = os.environ if environ is None else environ

        raw_workers = env.get(ENV_MAX_WORKERS)
        max_workers: int | None = None
        if raw_workers:
            try:
                max_workers = int(raw_workers)
            except ValueError as exc:
                raise ConfigurationError(
                    message=f"{ENV_MAX_WORKERS} must be an integer",
                    details={"value": raw_workers},
                ) from exc
            if max_workers < 1:
                raise ConfigurationError(
                    message=f"{ENV_MAX_WORKERS} must be at least 1",
                    details={"value": raw_workers},
                )

        return cls(
            region_name=env.get(ENV_AWS_REGION) or env.get(ENV_AWS_DEFAULT_REGION),
            endpoint_url=env.get(ENV_AWS_ENDPOINT_URL) or None,
            max_workers=max_workers,
        )
