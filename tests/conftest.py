import asyncio
import os

import pytest


@pytest.fixture(autouse=True)
def env_isolation(monkeypatch, tmp_path):
    """Drop STACKREADY_* variables and any project .env from the test's view."""
    for key in list(os.environ):
        if key.upper().startswith("STACKREADY_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


class StubProbe:
    """Probe double: returns `detail`, or raises `error`, after `delay` seconds."""

    def __init__(self, *, detail=None, error=None, delay=0.0):
        self.detail = detail
        self.error = error
        self.delay = delay
        self.calls = 0

    async def check(self):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.detail


class ScriptedProbe:
    """Probe double that replays a list of outcomes (True = pass, Exception = fail)."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def check(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return None


class FakeProvisioner:
    """Records calls; fails for any (service, operation, params) matched by `fail_when`."""

    def __init__(self, *, fail_when=None, responses=None):
        self.calls = []
        self.fail_when = fail_when or (lambda service, operation, params: False)
        self.responses = responses or {}

    async def execute(self, service, operation, params):
        self.calls.append((service, operation, params))
        if self.fail_when(service, operation, params):
            raise RuntimeError(f"{operation} rejected")
        response = self.responses.get((service, operation), {})
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def stub_probe():
    return StubProbe


@pytest.fixture
def scripted_probe():
    return ScriptedProbe


@pytest.fixture
def fake_provisioner():
    return FakeProvisioner
