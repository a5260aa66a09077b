"""Declared probe sets, readiness stages and resources for the local stack.

This module lives in `core/` because:
- it centralizes *what* the stack consists of (names, URLs, containers,
  resources) while adapters only know *how* to probe or provision;
- the three CLI modes share one source of truth.

Everything is derived from `AppSettings`; nothing here touches the network.
"""

from __future__ import annotations

from adapters.probes import CommandProbe, EmulatorHealthProbe, HttpProbe
from core.config import AppSettings
from core.domain.models import ProbeSpec, ResourceSpec, VerificationSpec

POSTGRES = "PostgreSQL"
REDIS = "Redis"
LOCALSTACK = "LocalStack"
NEXTJS = "Next.js"
LAMBDA = "Lambda/SAM"
PRISMA_STUDIO = "Prisma Studio"
PGADMIN = "PgAdmin"

# Suggested fixes, shown when the named service is unhealthy.
REMEDIATION_HINTS: dict[str, str] = {
    POSTGRES: "Database services: npm run docker:db",
    REDIS: "Database services: npm run docker:db",
    LOCALSTACK: "LocalStack: npm run docker:services",
    NEXTJS: "Next.js: npm run dev:web",
    LAMBDA: "Lambda: npm run dev:lambda",
    PRISMA_STUDIO: "Prisma Studio: npm run dev:studio",
}


def _docker_exec(container: str, *argv: str) -> list[str]:
    return ["docker", "exec", container, *argv]


def health_check_probes(settings: AppSettings) -> list[ProbeSpec]:
    timeout = settings.probe_timeout_seconds
    return [
        ProbeSpec(
            name=POSTGRES,
            check=CommandProbe(
                _docker_exec(
                    settings.postgres_container,
                    "pg_isready",
                    "-U",
                    settings.postgres_user,
                    "-d",
                    settings.postgres_db,
                ),
                timeout_seconds=timeout,
            ),
        ),
        ProbeSpec(
            name=REDIS,
            check=CommandProbe(
                _docker_exec(settings.redis_container, "redis-cli", "ping"),
                expected_output="PONG",
                failure_message="Redis ping failed",
                timeout_seconds=timeout,
            ),
        ),
        ProbeSpec(
            name=LOCALSTACK,
            target_url=settings.localstack_url,
            check=EmulatorHealthProbe(settings.localstack_health_url, timeout_seconds=timeout),
        ),
        ProbeSpec(name=NEXTJS, target_url=settings.web_url, check=HttpProbe(settings.web_url, timeout_seconds=timeout)),
        ProbeSpec(
            name=LAMBDA,
            target_url=settings.lambda_url,
            check=HttpProbe(settings.lambda_url, timeout_seconds=timeout),
        ),
        ProbeSpec(
            name=PRISMA_STUDIO,
            target_url=settings.prisma_studio_url,
            check=HttpProbe(settings.prisma_studio_url, timeout_seconds=timeout),
        ),
        ProbeSpec(
            name=PGADMIN,
            target_url=settings.pgadmin_url,
            check=HttpProbe(settings.pgadmin_url, timeout_seconds=timeout),
        ),
    ]


def postgres_stages(settings: AppSettings) -> list[ProbeSpec]:
    """Server accepts connections, then the application role can query."""

    timeout = settings.probe_timeout_seconds
    return [
        ProbeSpec(
            name="Admin",
            check=CommandProbe(
                _docker_exec(settings.postgres_container, "pg_isready", "-U", settings.postgres_admin_user),
                timeout_seconds=timeout,
            ),
        ),
        ProbeSpec(
            name="Dev user",
            check=CommandProbe(
                _docker_exec(
                    settings.postgres_container,
                    "psql",
                    "-U",
                    settings.postgres_user,
                    "-d",
                    settings.postgres_db,
                    "-c",
                    "SELECT 1;",
                ),
                timeout_seconds=timeout,
            ),
        ),
    ]


def localstack_stages(settings: AppSettings) -> list[ProbeSpec]:
    """The health endpoint answers 200; individual services are not required."""

    return [
        ProbeSpec(
            name="Health endpoint",
            target_url=settings.localstack_health_url,
            check=EmulatorHealthProbe(
                settings.localstack_health_url,
                timeout_seconds=settings.probe_timeout_seconds,
                require_all_services=False,
            ),
        )
    ]


def bootstrap_resources(settings: AppSettings) -> list[ResourceSpec]:
    bucket_params: dict[str, object] = {}
    # us-east-1 rejects an explicit location constraint.
    if settings.aws_region != "us-east-1":
        bucket_params["CreateBucketConfiguration"] = {"LocationConstraint": settings.aws_region}

    return [
        ResourceSpec(
            name="S3 Dev Bucket",
            description="Creating development S3 bucket",
            service="s3",
            operation="create_bucket",
            params={"Bucket": settings.dev_bucket_name, **bucket_params},
        ),
        ResourceSpec(
            name="S3 Test Bucket",
            description="Creating test S3 bucket",
            service="s3",
            operation="create_bucket",
            params={"Bucket": settings.test_bucket_name, **bucket_params},
        ),
        ResourceSpec(
            name="KMS Key",
            description="Creating KMS encryption key",
            service="kms",
            operation="create_key",
            params={"Description": settings.kms_key_description},
        ),
        ResourceSpec(
            name="SNS Topic",
            description="Creating SNS notification topic",
            service="sns",
            operation="create_topic",
            params={"Name": settings.sns_topic_name},
        ),
    ]


def bootstrap_verifications() -> list[VerificationSpec]:
    return [
        VerificationSpec(
            name="S3 buckets",
            service="s3",
            operation="list_buckets",
            result_key="Buckets",
            item_key="Name",
        ),
        VerificationSpec(name="KMS keys", service="kms", operation="list_keys", result_key="Keys", item_key="KeyId"),
        VerificationSpec(
            name="SNS topics",
            service="sns",
            operation="list_topics",
            result_key="Topics",
            item_key="TopicArn",
        ),
    ]
