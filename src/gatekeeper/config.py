"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

from gatekeeper.errors.exceptions import ConfigurationError


class Settings(BaseSettings):
    # GitHub
    token: str = ""
    api_url: str = "https://api.github.com"
    request_timeout_seconds: float = 10.0

    # Ref being gated
    owner: str = ""
    repo: str = ""
    ref: str = ""
    self_job_name: str = ""

    # Polling
    interval_seconds: float = 5.0
    timeout_seconds: float = 600.0

    # Logging
    log_level: str = "info"
    json_logs: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GATEKEEPER_",
    }


def split_repository(full_name: str) -> tuple[str, str]:
    """Split ``owner/name`` (the GITHUB_REPOSITORY format) into its parts."""
    owner, sep, name = full_name.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ConfigurationError(
            f"repository must be in owner/name form, got {full_name!r}",
            {"repository": full_name},
        )
    return owner, name
