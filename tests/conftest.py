"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database.db import build_engine
from services.result_store import ResultStore


@pytest.fixture
def store():
    """Fresh store on its own in-memory database"""
    engine = build_engine("sqlite://")
    store = ResultStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    store.init_schema()
    yield store
    engine.dispose()


@pytest.fixture
def client(store):
    """Test client whose app is bound to the fresh store"""
    from main import app

    previous = app.state.result_store
    app.state.result_store = store
    yield TestClient(app)
    app.state.result_store = previous


@pytest.fixture
def make_record():
    """Build a StudentResultCreate with consistent derived fields"""
    from services import grade_calculator

    def _make(name="Asha", roll="R001", marks=(40, 40, 40, 40, 40), timestamp=1700000000000):
        keys = [key for key, _ in grade_calculator.SUBJECTS]
        form = {"student_name": name, "roll_number": roll, **dict(zip(keys, marks))}
        return grade_calculator.make_record(form, timestamp)

    return _make
