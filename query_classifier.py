import logging
from gemini_agent import GeminiAgent
from models import QueryCategory

logger = logging.getLogger(__name__)

CLASSIFICATION_PROMPT = """
Classify this query into ONE of these categories:
1. "directions" - asking for route directions
2. "traffic_check" - asking about current traffic conditions
3. "duration_check" - asking about travel time
4. "route_status" - asking about road conditions or closures

Return ONLY the category as a single word, no additional text.

Example queries and their classifications:
- "How do I get to Lagos from Ibadan?" -> "directions"
- "Is there traffic on Third Mainland Bridge?" -> "traffic_check"
- "How long will it take to reach Ikeja from VI?" -> "duration_check"
- "Which roads should I avoid in Lekki right now?" -> "route_status"

Query: "{query}"
"""


class QueryClassifier:
    """Best-effort query labelling; never raises, falls back to DIRECTIONS."""

    def __init__(self, agent: GeminiAgent):
        self.agent = agent

    def classify(self, query: str) -> QueryCategory:
        try:
            label = self.agent.generate(CLASSIFICATION_PROMPT.format(query=query)).strip().lower()
        except Exception as e:
            logger.error(f"Error classifying query, defaulting to directions: {e}")
            return QueryCategory.DIRECTIONS

        category = QueryCategory.from_label(label)
        if category.value != label.strip("\"'`.").strip():
            logger.warning(f"Unrecognized query category '{label}', using {category.value}")
        logger.info(f"Query classified as: {category.value}")
        return category
