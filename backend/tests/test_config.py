import pytest
from pydantic import ValidationError

from flyerpuzzle.config import Settings


def test_defaults():
    s = Settings()
    assert s.SOLVER_MAX_DEPTH == 6
    assert s.step_delay_seconds == 0.5
    assert not s.is_production


@pytest.mark.parametrize("field,value", [
    ("SOLVER_MAX_DEPTH", 0),
    ("SOLVER_MAX_DEPTH", 11),
    ("GENERATOR_MAX_ATTEMPTS", 0),
    ("STEP_DURATION_MS", -5),
])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_cors_origins_list():
    s = Settings(CORS_ORIGINS="http://a.test, http://b.test")
    assert s.cors_origins_list == ["http://a.test", "http://b.test"]
