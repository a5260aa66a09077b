import logging

import pytest

from core.domain.errors import PollerExhausted, ProbeFailure
from core.domain.models import HealthStatus, ProbeSpec, RetryConfig
from core.services.poller import BoundedRetryPoller, PollerState


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


def _poller(stages, *, max_attempts=3, wait_interval_ms=0, sleep=None):
    return BoundedRetryPoller(
        target="PostgreSQL",
        stages=stages,
        retry=RetryConfig(max_attempts=max_attempts, wait_interval_ms=wait_interval_ms),
        stage_timeout_seconds=1.0,
        sleep=sleep or RecordingSleep(),
    )


@pytest.mark.asyncio
async def test_always_failing_stage_exhausts_after_exactly_max_attempts(caplog, scripted_probe):
    caplog.set_level(logging.INFO, logger="core.services.poller")
    probe = scripted_probe([ProbeFailure("refused")])
    sleep = RecordingSleep()
    poller = _poller([ProbeSpec(name="Admin", check=probe)], max_attempts=3, sleep=sleep)

    with pytest.raises(PollerExhausted) as excinfo:
        await poller.wait()

    assert probe.calls == 3
    assert poller.attempts == 3
    assert poller.state is PollerState.EXHAUSTED
    assert len(sleep.calls) == 2
    progress = [r.getMessage() for r in caplog.records if "/3)" in r.getMessage()]
    assert progress == [
        "Waiting for PostgreSQL... (1/3)",
        "Waiting for PostgreSQL... (2/3)",
        "Waiting for PostgreSQL... (3/3)",
    ]
    assert excinfo.value.attempts == 3
    assert excinfo.value.stages[0].message == "refused"


@pytest.mark.asyncio
async def test_ready_requires_all_stages_in_the_same_attempt(scripted_probe):
    admin = scripted_probe([True, ProbeFailure("down"), True])
    dev_user = scripted_probe([ProbeFailure("role missing"), True])
    poller = _poller(
        [ProbeSpec(name="Admin", check=admin), ProbeSpec(name="Dev user", check=dev_user)],
        max_attempts=5,
    )

    outcome = await poller.wait()

    # attempt 1: admin ok, dev user fails; attempt 2: admin fails, dev user skipped;
    # attempt 3: both pass.
    assert outcome.attempts == 3
    assert poller.state is PollerState.READY
    assert admin.calls == 3
    assert dev_user.calls == 2
    assert all(s.status is HealthStatus.HEALTHY for s in outcome.stages)


@pytest.mark.asyncio
async def test_progress_distinguishes_partial_readiness(caplog, scripted_probe):
    caplog.set_level(logging.INFO, logger="core.services.poller")
    poller = _poller(
        [
            ProbeSpec(name="Admin", check=scripted_probe([True])),
            ProbeSpec(name="Dev user", check=scripted_probe([ProbeFailure("no role"), True])),
        ]
    )

    await poller.wait()

    messages = [r.getMessage() for r in caplog.records]
    assert "Admin OK, waiting for Dev user... (1/3)" in messages
    assert "PostgreSQL is ready! (attempt 2/3)" in messages


@pytest.mark.asyncio
async def test_exhaustion_reports_last_per_stage_status(scripted_probe):
    poller = _poller(
        [
            ProbeSpec(name="Admin", check=scripted_probe([ProbeFailure("refused")])),
            ProbeSpec(name="Dev user", check=scripted_probe([True])),
        ],
        max_attempts=2,
    )

    with pytest.raises(PollerExhausted) as excinfo:
        await poller.wait()

    admin, dev_user = excinfo.value.stages
    assert admin.status is HealthStatus.UNHEALTHY
    assert dev_user.status is HealthStatus.UNKNOWN
    assert "Status: {Admin: FAILED, Dev user: UNKNOWN}" in str(excinfo.value)


@pytest.mark.asyncio
async def test_sleeps_configured_interval_between_attempts(scripted_probe):
    sleep = RecordingSleep()
    poller = _poller(
        [ProbeSpec(name="Admin", check=scripted_probe([ProbeFailure("x"), ProbeFailure("x"), True]))],
        max_attempts=5,
        wait_interval_ms=250,
        sleep=sleep,
    )

    await poller.wait()

    assert sleep.calls == [0.25, 0.25]


@pytest.mark.asyncio
async def test_first_attempt_success_does_not_sleep(scripted_probe):
    sleep = RecordingSleep()
    poller = _poller([ProbeSpec(name="Admin", check=scripted_probe([True]))], sleep=sleep)

    outcome = await poller.wait()

    assert outcome.attempts == 1
    assert sleep.calls == []


def test_requires_at_least_one_stage():
    with pytest.raises(ValueError):
        _poller([])
