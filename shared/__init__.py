"""
Shared utilities for live_attr.

This package aggregates the cross-cutting building blocks consumed by
the cache engine:

- config: Configuration via pydantic-settings
- logging: Structured logging with structlog
- metrics: Prometheus cache counters
- errors: Canonical error types and responses
- test_helpers: In-memory Redis double and metrics stub for tests

Do not import from live_attr into shared/.
"""
