import pytest
from pydantic import ValidationError

from tryout.core.config import Settings


def test_cors_origins_accept_comma_separated_and_json():
    s = Settings(BACKEND_CORS_ORIGINS="http://a.test, http://b.test")
    assert s.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]

    s = Settings(BACKEND_CORS_ORIGINS='["http://c.test"]')
    assert s.BACKEND_CORS_ORIGINS == ["http://c.test"]


def test_essay_strategy_is_validated():
    assert Settings(ESSAY_GRADING_STRATEGY="Pattern").ESSAY_GRADING_STRATEGY == "pattern"
    with pytest.raises(ValidationError):
        Settings(ESSAY_GRADING_STRATEGY="fuzzy")
