import pytest


@pytest.fixture(autouse=True)
def _in_memory_sink(monkeypatch, sink):
    """Route broadcasts from the API views to the recording sink."""
    monkeypatch.setattr("modules.orders.views.RedisNotificationSink", lambda: sink)
    return sink
