"""Client configuration.

The Configuration model holds everything an APIClient needs to reach a
server: the base URL, the User-Agent string, headers added to every call and
the optional round-trip timeout. It is read on every call, so settings changed
after the client is built take effect on the next call. Do not change it while
calls are in flight.
"""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rosetta_client import __version__


DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_USER_AGENT = f"rosetta-client-python/{__version__}"


class Configuration(BaseModel):
    """Settings shared by every call made through one client.

    Attributes:
        base_url: Root URL of the API server.
        user_agent: Value of the User-Agent header.
        default_headers: Extra headers sent with every call.
        network_round_trip_timeout: Upper bound in seconds on a single call's
            wall-clock time. 0 means no bound beyond the caller's context.
    """

    model_config = ConfigDict(validate_assignment=True)

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    default_headers: dict[str, str] = Field(default_factory=dict)
    network_round_trip_timeout: float = Field(default=0.0, ge=0.0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def add_default_header(self, name: str, value: str) -> None:
        """Set a header sent with every call, replacing any previous value."""
        self.default_headers[name] = value

    def headers(self) -> dict[str, str]:
        """Return the headers for one call: User-Agent plus the defaults."""
        return {"User-Agent": self.user_agent, **self.default_headers}

    @classmethod
    def from_env(cls, prefix: str = "ROSETTA_") -> "Configuration":
        """Build a configuration from environment variables.

        Reads ``<prefix>BASE_URL``, ``<prefix>USER_AGENT`` and
        ``<prefix>ROUND_TRIP_TIMEOUT`` (seconds). Unset variables keep their
        defaults.
        """
        values: dict[str, object] = {}
        base_url = os.environ.get(f"{prefix}BASE_URL")
        if base_url:
            values["base_url"] = base_url
        user_agent = os.environ.get(f"{prefix}USER_AGENT")
        if user_agent:
            values["user_agent"] = user_agent
        timeout = os.environ.get(f"{prefix}ROUND_TRIP_TIMEOUT")
        if timeout:
            values["network_round_trip_timeout"] = float(timeout)
        return cls(**values)
