import pytest

from app import create_app
from stack_workspace import StackWorkspace


@pytest.fixture
def workspace():
    return StackWorkspace(max_stacks=5, undo_limit=10)


@pytest.fixture
def app(monkeypatch):
    # 実行環境の STACKLAB_* に影響されないようにする
    for key in ("STACKLAB_MAX_STACKS", "STACKLAB_UNDO_LIMIT", "STACKLAB_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    app = create_app({"TESTING": True, "MAX_STACKS": 3, "LOG_LEVEL": "WARNING"})
    return app


@pytest.fixture
def client(app):
    return app.test_client()
