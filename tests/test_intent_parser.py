import pytest

from errors import ExtractionError, GeminiError
from intent_parser import IntentParser, add_location_qualifier, resolve_mode


@pytest.mark.parametrize("location, expected", [
    ("Ikeja", "Ikeja, Lagos, Nigeria"),
    ("victoria island", "victoria island, Lagos, Nigeria"),
    ("Lekki, Lagos", "Lekki, Lagos, Nigeria"),
    ("Lekki Phase 1, Lagos, Nigeria", "Lekki Phase 1, Lagos, Nigeria"),
    ("Ibadan, Nigeria", "Ibadan, Nigeria"),
    # Non-Nigerian places are qualified as well
    ("Paris", "Paris, Nigeria"),
])
def test_add_location_qualifier(location, expected):
    assert add_location_qualifier(location) == expected


def test_resolve_mode_defaults_to_car():
    assert resolve_mode(None) == "car"
    assert resolve_mode("") == "car"
    assert resolve_mode("walking") == "car"
    assert resolve_mode(" Bus ") == "bus"


def test_parse_prompt_qualifies_locations(mock_agent):
    mock_agent.generate_json.return_value = {"origin": "Ikeja", "destination": "Yaba", "mode": "bike"}

    intent = IntentParser(mock_agent).parse_prompt("ride my bike from Ikeja to Yaba")

    assert intent.origin == "Ikeja, Lagos, Nigeria"
    assert intent.destination == "Yaba, Lagos, Nigeria"
    assert intent.mode == "bike"
    assert intent.mode_config.mode == "driving"
    assert intent.mode_config.avoid == ["highways"]
    prompt = mock_agent.generate_json.call_args[0][0]
    assert 'Query: "ride my bike from Ikeja to Yaba"' in prompt


def test_parse_prompt_transit_modes(mock_agent):
    mock_agent.generate_json.return_value = {"origin": "Oshodi", "destination": "Ikorodu", "mode": "train"}

    intent = IntentParser(mock_agent).parse_prompt("train from Oshodi to Ikorodu")

    assert intent.mode_config.mode == "transit"
    assert intent.mode_config.transit_mode == ["train"]


def test_parse_prompt_without_mode_uses_car(mock_agent):
    mock_agent.generate_json.return_value = {"origin": "Ikoyi", "destination": "Apapa"}

    intent = IntentParser(mock_agent).parse_prompt("Ikoyi to Apapa")

    assert intent.mode == "car"
    assert intent.mode_config.avoid is None


@pytest.mark.parametrize("payload", [
    {"origin": "Ikeja"},
    {"origin": "", "destination": "Yaba"},
    {"origin": "Ikeja", "destination": "   "},
    ["Ikeja", "Yaba"],
])
def test_parse_prompt_rejects_incomplete_locations(mock_agent, payload):
    mock_agent.generate_json.return_value = payload

    with pytest.raises(ExtractionError) as exc_info:
        IntentParser(mock_agent).parse_prompt("somewhere")

    assert "Failed to extract locations and mode" in str(exc_info.value)


def test_parse_prompt_wraps_model_errors(mock_agent):
    mock_agent.generate_json.side_effect = GeminiError("Invalid JSON from Gemini model")

    with pytest.raises(ExtractionError) as exc_info:
        IntentParser(mock_agent).parse_prompt("Ikeja to Yaba")

    assert "Invalid JSON from Gemini model" in str(exc_info.value)
