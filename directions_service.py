import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
from cache import ResponseCache, normalize_key
from config import Settings
from directions_agent import DirectionsAgent
from errors import ValidationError
from formatters import ResponseFormatter
from gemini_agent import GeminiAgent
from intent_parser import IntentParser
from models import CacheEntry, DirectionsResponse
from query_classifier import QueryClassifier

logger = logging.getLogger(__name__)


class DirectionsService:
    """
    Request pipeline for a natural-language directions query:
    cache -> (extract intent || classify) -> fetch route -> format -> cache.
    """

    def __init__(
        self,
        parser: IntentParser,
        classifier: QueryClassifier,
        directions: DirectionsAgent,
        formatter: ResponseFormatter,
        cache: Optional[ResponseCache] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.parser = parser
        self.classifier = classifier
        self.directions = directions
        self.formatter = formatter
        self.cache = cache if cache is not None else ResponseCache()
        self.executor = executor or ThreadPoolExecutor(max_workers=8, thread_name_prefix="directions")

    @classmethod
    def from_settings(cls, settings: Settings) -> "DirectionsService":
        agent = GeminiAgent(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.gemini_timeout,
        )
        return cls(
            parser=IntentParser(agent),
            classifier=QueryClassifier(agent),
            directions=DirectionsAgent(api_key=settings.google_maps_api_key, timeout=settings.maps_timeout),
            formatter=ResponseFormatter(agent),
            cache=ResponseCache(ttl=settings.cache_ttl, maxsize=settings.cache_maxsize),
        )

    def get_directions(self, query) -> DirectionsResponse:
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Query is required")

        cache_key = normalize_key(query)
        cached = self.cache.get(cache_key)
        if cached:
            logger.info(f"Cache hit for query: {cache_key}")
            return DirectionsResponse(response=cached.response, query_type=cached.query_type)

        # Extraction and classification are independent model calls
        intent_future = self.executor.submit(self.parser.parse_prompt, query)
        category_future = self.executor.submit(self.classifier.classify, query)
        intent = intent_future.result()
        category = category_future.result()
        logger.info(f"Query type: {category.value}")

        route_data = self.directions.get_route_data(intent)
        formatted = self.formatter.format_response(category, route_data, intent)

        entry = CacheEntry(response=formatted, query_type=category.value)
        self.cache.set(cache_key, entry)
        return DirectionsResponse(response=entry.response, query_type=entry.query_type)

    def shutdown(self) -> None:
        self.executor.shutdown(wait=False)
