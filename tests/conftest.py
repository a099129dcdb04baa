"""
Pytest fixtures shared by the RouteGPT tests.
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Project modules live at the repository root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gemini_agent import GeminiAgent  # noqa: E402
from intent_parser import MODE_MAPPING  # noqa: E402
from models import ExtractedIntent  # noqa: E402


@pytest.fixture
def mock_agent():
    """A GeminiAgent stand-in; tests set generate/generate_json behaviour."""
    agent = MagicMock(spec=GeminiAgent)
    agent.generate.return_value = "Head north on Awolowo Road."
    return agent


@pytest.fixture
def sample_intent():
    return ExtractedIntent(
        origin="Ikeja, Lagos, Nigeria",
        destination="Victoria Island, Lagos, Nigeria",
        mode="car",
        mode_config=MODE_MAPPING["car"],
    )


@pytest.fixture
def directions_payload():
    """Routes list as googlemaps.Client.directions returns it."""
    return [
        {
            "summary": "Third Mainland Bridge",
            "warnings": ["Tolls on this route"],
            "overview_polyline": {"points": "abc"},
            "legs": [
                {
                    "distance": {"text": "18.4 km", "value": 18400},
                    "duration": {"text": "35 mins", "value": 2100},
                    "duration_in_traffic": {"text": "52 mins", "value": 3120},
                    "start_address": "Ikeja, Lagos, Nigeria",
                    "steps": [
                        {
                            "html_instructions": "Head <b>south</b> on Obafemi Awolowo Way",
                            "distance": {"text": "1.2 km", "value": 1200},
                            "duration": {"text": "4 mins", "value": 240},
                            "travel_mode": "DRIVING",
                        },
                        {
                            "html_instructions": "Merge onto <b>Third Mainland Bridge</b>",
                            "distance": {"text": "11.8 km", "value": 11800},
                            "duration": {"text": "15 mins", "value": 900},
                            "maneuver": "merge",
                            "travel_mode": "DRIVING",
                        },
                    ],
                }
            ],
        },
        {
            "summary": "Ikorodu Rd",
            "legs": [
                {
                    "distance": {"text": "21.0 km", "value": 21000},
                    "duration": {"text": "40 mins", "value": 2400},
                    "steps": [],
                }
            ],
        },
    ]


@pytest.fixture
def mock_gmaps(directions_payload):
    client = MagicMock()
    client.directions.return_value = directions_payload
    return client
