from models.requests import TextAnalyzeRequest
from models.schemas.analysis_config import AnalysisConfig


def test_defaults():
    config = AnalysisConfig.from_raw(None)
    assert (config.tone, config.language, config.style, config.audience) == (
        "balanced", "english", "serious", "other",
    )
    assert config.coerced_fields == []


def test_valid_values_normalized():
    config = AnalysisConfig.from_raw({"tone": " Brutal ", "language": "HINGLISH", "audience": "female"})
    assert config.tone == "brutal"
    assert config.language == "hinglish"
    assert config.audience == "female"
    assert config.coerced_fields == []


def test_invalid_values_coerced():
    config = AnalysisConfig.from_raw({"tone": "savage", "style": 42, "language": None})
    assert config.tone == "balanced"
    assert config.style == "serious"
    assert config.language == "english"
    assert config.coerced_fields == ["tone", "style"]


def test_unknown_keys_ignored():
    config = AnalysisConfig.from_raw({"mood": "angry"})
    assert config == AnalysisConfig()


def test_text_request_config_values():
    body = TextAnalyzeRequest(resume_text="resume", tone="mild")
    assert body.config_values() == {
        "tone": "mild", "language": None, "style": None, "audience": None,
    }
