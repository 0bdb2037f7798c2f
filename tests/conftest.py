import pytest

from factories import entry, snapshot


@pytest.fixture
def clear_snapshot():
    """Clear now, 70 then 82 then 65 over the next three hours"""
    return snapshot(hourly=[entry(0, 70.0), entry(1, 82.0), entry(2, 65.0)])
