"""
Pytest fixtures for the ManifestTools test suite.

Fixtures are organized by subsystem:
- http_mocking: per-test mocked sites backed by ``httpx.MockTransport``
"""
