from rich.console import Console

from cli.ui_components import print_bootstrap_result, print_report
from core.catalog import REMEDIATION_HINTS
from core.domain.models import BootstrapResult, HealthStatus, ResourceOutcome, RunReport, ServiceStatus
from core.services.report import exit_code_for, remediation_hints


def _report(**statuses):
    return RunReport(
        statuses=[
            ServiceStatus(name=name, status=HealthStatus.HEALTHY if ok else HealthStatus.UNHEALTHY)
            for name, ok in statuses.items()
        ]
    )


def test_all_healthy_and_exit_code():
    assert exit_code_for(RunReport()) == 0
    assert exit_code_for(_report(a=True, b=True)) == 0
    assert exit_code_for(_report(a=True, b=False)) == 1


def test_unknown_is_not_healthy():
    report = RunReport(statuses=[ServiceStatus(name="x", status=HealthStatus.UNKNOWN)])

    assert not report.all_healthy
    assert report.unhealthy_names == ["x"]


def test_shared_hint_is_listed_once():
    report = RunReport(
        statuses=[
            ServiceStatus(name="PostgreSQL", status=HealthStatus.UNHEALTHY),
            ServiceStatus(name="Redis", status=HealthStatus.UNHEALTHY),
            ServiceStatus(name="Next.js", status=HealthStatus.UNHEALTHY),
            ServiceStatus(name="PgAdmin", status=HealthStatus.UNHEALTHY),
        ]
    )

    assert remediation_hints(report, REMEDIATION_HINTS) == [
        "Database services: npm run docker:db",
        "Next.js: npm run dev:web",
    ]


def test_report_rendering_for_partial_health():
    console = Console(record=True, width=120)
    report = RunReport(
        statuses=[
            ServiceStatus(name="PostgreSQL", status=HealthStatus.HEALTHY),
            ServiceStatus(
                name="Redis",
                status=HealthStatus.UNHEALTHY,
                message="ping failed",
            ),
            ServiceStatus(name="Next.js", status=HealthStatus.HEALTHY, message="HTTP 200", url="http://localhost:3000"),
        ]
    )

    print_report(console, report, REMEDIATION_HINTS)
    text = console.export_text()

    assert "✅ PostgreSQL" in text
    assert "❌ Redis" in text
    assert "└─ ping failed" in text
    assert "✅ Next.js (http://localhost:3000)" in text
    assert "Health Summary: 2/3 services healthy" in text
    assert "Some services need attention" in text
    assert "Database services: npm run docker:db" in text


def test_report_rendering_when_all_healthy():
    console = Console(record=True, width=120)

    print_report(console, _report(a=True), REMEDIATION_HINTS)

    text = console.export_text()
    assert "1/1 services healthy" in text
    assert "All systems operational!" in text
    assert "To start missing services" not in text


def test_bootstrap_rendering_mentions_failures():
    console = Console(record=True, width=120)
    result = BootstrapResult(
        outcomes=[
            ResourceOutcome(name="S3 Dev Bucket", succeeded=True),
            ResourceOutcome(name="KMS Key", succeeded=False, message="boom"),
        ],
        verified={"S3 buckets": ["signature-dev-bucket"]},
    )

    print_bootstrap_result(console, result)

    text = console.export_text()
    assert "S3 buckets: signature-dev-bucket" in text
    assert "Setup completed with 1 failure(s): KMS Key" in text
