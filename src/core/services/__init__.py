"""Service layer: probe engine, poller, bootstrapper and report helpers."""
