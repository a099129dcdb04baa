import logging
from typing import Dict
from pydantic import ValidationError as SchemaError
from errors import ExtractionError, GeminiError
from gemini_agent import GeminiAgent
from models import ExtractedIntent, ModeConfig, RawIntent

logger = logging.getLogger(__name__)

LAGOS_AREAS = [
    "Ikeja", "Victoria Island", "Lekki", "Ajah", "Ikoyi", "Surulere",
    "Yaba", "Apapa", "Oshodi", "Mushin", "Maryland", "Ojota", "Ogudu",
    "Gbagada", "Magodo", "Ojodu", "Berger", "Agege", "Ikorodu", "Epe",
]

# Travel mode -> googlemaps directions parameters
MODE_MAPPING: Dict[str, ModeConfig] = {
    "bike": ModeConfig(mode="driving", avoid=["highways"]),
    "car": ModeConfig(mode="driving"),
    "bus": ModeConfig(mode="transit", transit_mode=["bus"]),
    "train": ModeConfig(mode="transit", transit_mode=["train"]),
}
DEFAULT_MODE = "car"

EXTRACTION_PROMPT = """
Extract the origin, destination, and transportation mode from this query.
For Nigerian locations, add "Lagos, Nigeria" if it's a Lagos location without full specification.

Return ONLY a valid JSON object with "origin", "destination", and "mode" keys.

For mode, detect these keywords and map them as follows:
- "bike" or "motorcycle" -> set mode to "bike"
- "car" or "drive" -> set mode to "car"
- "bus" -> set mode to "bus"
- "train" -> set mode to "train"
If no mode is mentioned, default to "car".

Examples:
- "Ikeja" -> "Ikeja, Lagos, Nigeria"
- "Victoria Island" -> "Victoria Island, Lagos, Nigeria"
- "Lekki" -> "Lekki, Lagos, Nigeria"

DO NOT include any markdown formatting, backticks, or additional text.
Example format: {{"origin": "Victoria Island, Lagos, Nigeria", "destination": "Ikeja, Lagos, Nigeria", "mode": "car"}}

Query: "{query}"
"""


def add_location_qualifier(location: str) -> str:
    """
    Append ", Lagos, Nigeria" to bare Lagos districts and ", Nigeria" to
    anything else that lacks it. Non-Nigerian places get ", Nigeria" too.
    """
    lowered = location.lower()
    if "lagos" not in lowered and any(area.lower() in lowered for area in LAGOS_AREAS):
        return f"{location}, Lagos, Nigeria"
    if "nigeria" not in lowered:
        return f"{location}, Nigeria"
    return location


def resolve_mode(mode: str) -> str:
    mode = (mode or "").strip().lower()
    return mode if mode in MODE_MAPPING else DEFAULT_MODE


class IntentParser:
    def __init__(self, agent: GeminiAgent):
        self.agent = agent

    def parse_prompt(self, query: str) -> ExtractedIntent:
        """Turn a free-text travel query into origin, destination and mode."""
        try:
            raw_response = self.agent.generate_json(EXTRACTION_PROMPT.format(query=query))
            if not isinstance(raw_response, dict):
                raise ExtractionError("Failed to extract valid locations from query")
            raw = RawIntent(**raw_response)
        except (GeminiError, SchemaError, ExtractionError) as e:
            logger.error(f"Error extracting locations and mode: {e}")
            raise ExtractionError(f"Failed to extract locations and mode: {e}") from e

        mode = resolve_mode(raw.mode)
        intent = ExtractedIntent(
            origin=add_location_qualifier(raw.origin),
            destination=add_location_qualifier(raw.destination),
            mode=mode,
            mode_config=MODE_MAPPING[mode],
        )
        logger.info(f"Extracted intent: {intent.origin} -> {intent.destination} ({intent.mode})")
        return intent
