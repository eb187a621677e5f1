import pytest

from leadscout.catalog import SERVICE_IDS, SERVICE_OFFERS, get_offer, pitch_label
from leadscout.config import Settings
from leadscout.errors import ConfigurationError, GenerationError, LeadScoutError
from leadscout.models import GenerationResult, Lead


def test_lead_key_ignores_case():
    a = Lead(name="Rise Bakery", address="1 Call Lane", type="bakery")
    b = Lead(name="RISE BAKERY", address="1 call lane", type="bakery")
    assert a.key == b.key == "rise bakery-1 call lane"


def test_generation_result_unwrap():
    assert GenerationResult(value="ok").unwrap() == "ok"

    failed = GenerationResult(error=RuntimeError("timeout"))
    assert not failed.ok
    with pytest.raises(GenerationError, match="timeout"):
        failed.unwrap()


def test_catalog_ids_and_labels():
    assert SERVICE_IDS == ("check", "fix", "build", "care")
    assert get_offer("build").price == "£399"
    assert all(len(offer.features) == 5 for offer in SERVICE_OFFERS)
    assert pitch_label("care") == "Reputation Management"
    assert pitch_label("unknown") == "Website Audit"
    with pytest.raises(KeyError):
        get_offer("seo")


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(ConfigurationError, LeadScoutError)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("OPENAI_API_KEY", "o-key")
    monkeypatch.delenv("GROK_API_KEY", raising=False)
    monkeypatch.setenv("PITCH_MODEL", "openai")

    settings = Settings.from_env()
    assert settings.gemini_key == "g-key"
    assert settings.openai_key == "o-key"
    assert settings.grok_key == ""
    assert settings.pitch_model == "openai"

    assert Settings.from_env(pitch_model="grok").pitch_model == "grok"
