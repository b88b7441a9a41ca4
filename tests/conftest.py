import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from underbar.utils import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def people():
    return [
        {"name": "moe", "age": 40},
        {"name": "larry", "age": 50},
        {"name": "curly", "age": 60},
        {"name": "shemp", "age": 40},
    ]


@pytest.fixture
def sample_mapping():
    return {"a": 1, "b": 2, "c": 3}


@pytest.fixture
def call_log():
    """Callable that records every call it receives"""
    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, *args, **kwargs):
            self.calls.append((args, kwargs))
            return len(self.calls)

    return Recorder()
