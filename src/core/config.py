"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets adapters (probes, provisioner) read config consistently; nothing
  writes back to `os.environ`.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import RetryConfig


class AppSettings(BaseSettings):
    """Central settings for the orchestrator.

    Every value has a local-development default, so an empty environment
    still produces a usable configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="STACKREADY_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    probe_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Per-probe timeout (seconds).",
    )

    # Emulator (LocalStack) and the credentials handed to the provisioner.
    localstack_url: str = Field(
        default="http://localhost:4566",
        description="Base URL of the cloud-service emulator.",
    )
    aws_access_key_id: str = Field(default="test", description="Placeholder access key for the emulator.")
    aws_secret_access_key: str = Field(default="test", description="Placeholder secret key for the emulator.")
    aws_region: str = Field(default="ap-northeast-1", description="Target region.")

    # Database (PostgreSQL inside a container).
    postgres_container: str = Field(default="signature-postgres")
    postgres_admin_user: str = Field(default="postgres")
    postgres_user: str = Field(default="dev_user")
    postgres_db: str = Field(default="signature_dev")

    # Cache (Redis inside a container).
    redis_container: str = Field(default="signature-redis")

    # Plain HTTP services; only reachability is checked.
    web_url: str = Field(default="http://localhost:3000", description="Next.js dev server.")
    lambda_url: str = Field(default="http://localhost:3001", description="Lambda/SAM local API.")
    prisma_studio_url: str = Field(default="http://localhost:5555")
    pgadmin_url: str = Field(default="http://localhost:8080")

    # Pollers.
    postgres_max_attempts: int = Field(default=30, ge=1, le=10_000)
    postgres_wait_interval_ms: int = Field(default=2000, ge=0)
    localstack_max_attempts: int = Field(default=20, ge=1, le=10_000)
    localstack_wait_interval_ms: int = Field(default=2000, ge=0)

    # Resources provisioned by `bootstrap`.
    dev_bucket_name: str = Field(default="signature-dev-bucket")
    test_bucket_name: str = Field(default="signature-test-bucket")
    kms_key_description: str = Field(default="Local development signing key")
    sns_topic_name: str = Field(default="signature-notifications")

    def postgres_retry(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.postgres_max_attempts,
            wait_interval_ms=self.postgres_wait_interval_ms,
        )

    def localstack_retry(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.localstack_max_attempts,
            wait_interval_ms=self.localstack_wait_interval_ms,
        )

    @property
    def localstack_health_url(self) -> str:
        return self.localstack_url.rstrip("/") + "/_localstack/health"
