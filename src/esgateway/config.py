"""
esgateway Config: Environment-Driven Settings
=============================================

Centralized configuration using Pydantic Settings. Field names match the
environment variables they are read from; CLI flags override them in
``esgateway serve``.

    ELASTICSEARCH_URL=http://es1:9200,http://es2:9200 esgateway serve
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ELASTICSEARCH_URL = "http://localhost:9200"


def parse_hosts(value: Optional[str]) -> List[str]:
    """Split a comma-separated host list, falling back to the local default."""
    if not value:
        return [DEFAULT_ELASTICSEARCH_URL]
    hosts = [h.strip() for h in value.split(",") if h.strip()]
    return hosts or [DEFAULT_ELASTICSEARCH_URL]


class Settings(BaseSettings):
    """
    Gateway settings.

    Usage:
        settings = Settings()
        print(settings.hosts, settings.gateway_port)
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    # Elasticsearch
    elasticsearch_url: str = DEFAULT_ELASTICSEARCH_URL
    elasticsearch_api_key: Optional[SecretStr] = None
    elasticsearch_username: Optional[str] = None
    elasticsearch_password: SecretStr = Field(default=SecretStr(""))
    elasticsearch_verify_certs: bool = True
    elasticsearch_request_timeout: Optional[float] = Field(default=None, gt=0)

    # HTTP server
    gateway_host: str = "0.0.0.0"
    gateway_port: int = Field(default=8080, ge=0, le=65535)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @property
    def hosts(self) -> List[str]:
        return parse_hosts(self.elasticsearch_url)

    def override(self, **changes: Any) -> "Settings":
        """Return a validated copy with every non-None value in ``changes`` applied."""
        updates = {k: v for k, v in changes.items() if v is not None}
        if not updates:
            return self
        return self.__class__(**{**self.model_dump(), **updates})

    def client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the Elasticsearch client constructor."""
        conn_kwargs: Dict[str, Any] = {
            "hosts": self.hosts,
            "verify_certs": self.elasticsearch_verify_certs
        }

        if self.elasticsearch_api_key:
            conn_kwargs["api_key"] = self.elasticsearch_api_key.get_secret_value()
        elif self.elasticsearch_username:
            conn_kwargs["basic_auth"] = (
                self.elasticsearch_username,
                self.elasticsearch_password.get_secret_value()
            )

        if self.elasticsearch_request_timeout is not None:
            conn_kwargs["request_timeout"] = self.elasticsearch_request_timeout

        return conn_kwargs
