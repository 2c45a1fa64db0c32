import os
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel

from ._utils.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    ENV_LOG_TRANSPORT,
    ENV_STRICT_DECODING,
    ENV_TIMEOUT,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Defaults applied to every request builder."""

    timeout: Union[float, None] = DEFAULT_TIMEOUT_SECONDS
    strict_decoding: bool = True
    log_transport: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Config":
        """Read defaults from ``HTTPBUILDER_*`` environment variables.

        When ``dotenv_path`` is given the file is loaded first; variables that
        are already set in the environment win.
        """
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)

        values: dict[str, object] = {}

        timeout = os.getenv(ENV_TIMEOUT)
        if timeout:
            values["timeout"] = None if timeout.lower() == "none" else float(timeout)

        strict = os.getenv(ENV_STRICT_DECODING)
        if strict:
            values["strict_decoding"] = strict.lower() in _TRUE_VALUES

        log_transport = os.getenv(ENV_LOG_TRANSPORT)
        if log_transport:
            values["log_transport"] = log_transport.lower() in _TRUE_VALUES

        return cls(**values)
