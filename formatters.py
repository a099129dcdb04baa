# formatters.py

import json
import logging
from typing import Callable, Dict, Optional
from errors import FormattingError, GeminiError
from gemini_agent import GeminiAgent
from models import ExtractedIntent, QueryCategory, RouteData

logger = logging.getLogger(__name__)

DIRECTIONS_GENERATION_CONFIG = {"temperature": 0.7, "topP": 0.8, "topK": 40}


def distance_context(meters: Optional[int]) -> str:
    """Coarse distance label used to pick the tone of the reply."""
    kilometers = (meters or 0) / 1000
    if kilometers < 3:
        return "nearby"
    if kilometers < 10:
        return "short"
    if kilometers < 30:
        return "medium"
    return "long"


def traffic_status(normal_duration: Optional[int], traffic_duration: Optional[int]) -> str:
    """Bucket the slowdown of the traffic-aware duration over the nominal one."""
    if not normal_duration or not traffic_duration:
        return "Unknown"

    percentage_increase = (traffic_duration - normal_duration) * 100 / normal_duration
    if percentage_increase <= 10:
        return "Light traffic"
    if percentage_increase <= 30:
        return "Moderate traffic"
    if percentage_increase <= 50:
        return "Heavy traffic"
    return "Severe traffic"


def _route_signals(route_data: RouteData):
    leg = route_data.first_leg
    distance = leg.distance if leg else None
    status = route_data.traffic_info.routes[0].traffic_status if route_data.traffic_info.routes else "Unknown"
    return distance, distance_context(distance.value if distance else None), status


def _dump(route_data: RouteData) -> str:
    return json.dumps(route_data.model_dump(exclude_none=True))


class ResponseFormatter:
    """Turns route data into a conversational reply, one prompt per query category."""

    def __init__(self, agent: GeminiAgent):
        self.agent = agent
        self._variants: Dict[QueryCategory, Callable[[RouteData, ExtractedIntent], str]] = {
            QueryCategory.DIRECTIONS: self.format_directions,
            QueryCategory.TRAFFIC_CHECK: self.format_traffic_check,
            QueryCategory.DURATION_CHECK: self.format_duration_check,
            QueryCategory.ROUTE_STATUS: self.format_route_status,
        }

    def format_response(self, category: QueryCategory, route_data: RouteData, intent: ExtractedIntent) -> str:
        formatter = self._variants.get(category, self.format_directions)
        logger.info(f"Formatting response with {formatter.__name__}")
        return formatter(route_data, intent)

    def _generate(self, prompt: str, generation_config: Optional[dict] = None) -> str:
        try:
            return self.agent.generate(prompt, generation_config)
        except GeminiError as e:
            logger.error(f"Error formatting response: {e}")
            raise FormattingError(f"Failed to format directions: {e}") from e

    def format_directions(self, route_data: RouteData, intent: ExtractedIntent) -> str:
        route = route_data.routes[0]
        leg = route_data.first_leg
        steps = [step.instructions for step in leg.steps] if leg else []
        distance = leg.distance.text if leg and leg.distance else "unknown"
        duration = (leg.duration_in_traffic or leg.duration) if leg else None

        prompt = f"""
Create step-by-step directions from {intent.origin} to {intent.destination}:
Route: {route.summary or "best available route"}
Origin: {steps[0] if steps else intent.origin}
Steps: {json.dumps(steps)}
Distance: {distance}
Duration: {duration.text if duration else "unknown"}
Mode of transport: {route_data.mode}
Current time: {route_data.current_time}

Format: numbered steps, include distance and time at end.
Keep it brief and clear.
"""
        return self._generate(prompt, DIRECTIONS_GENERATION_CONFIG)

    def format_traffic_check(self, route_data: RouteData, intent: ExtractedIntent) -> str:
        distance, context, status = _route_signals(route_data)

        prompt = f"""
Create a friendly traffic report for the route from {intent.origin} to {intent.destination}.
The distance is {distance.text if distance else "unknown"} ({context} distance).
Current traffic on the main route: {status}.

Adjust your response based on the distance:
- Nearby: Focus on immediate street conditions
- Short: Focus on current traffic flow
- Medium: Include alternative routes and traffic patterns
- Long: Include major highways, rest stops, and broad traffic patterns

Include relevant information for the distance:
1. Current conditions
2. Delays or congestion
3. Areas to avoid
4. Alternatives if relevant

Use this data: {_dump(route_data)}
Keep it casual and helpful, matching the advice to the journey length.
"""
        return self._generate(prompt)

    def format_duration_check(self, route_data: RouteData, intent: ExtractedIntent) -> str:
        distance, context, status = _route_signals(route_data)

        prompt = f"""
Create a friendly, conversational time estimate from {intent.origin} to {intent.destination}.
The distance is {distance.text if distance else "unknown"} ({context} distance).
Current traffic on the main route: {status}.

Make it sound like a human conversation, adjusting language based on distance:
- For nearby (< 3km): Focus on minutes, mention walking if relevant
- For short trips (< 10km): Keep it simple, focus on current conditions
- For medium trips (< 30km): Include traffic patterns and alternative routes
- For long trips: Include breaks, rest stops, and broader traffic patterns

Include:
1. Time estimate based on distance context
2. Current conditions
3. Best and worst scenarios
4. Relevant advice for the distance

Use this data: {_dump(route_data)}
Keep it natural and friendly, matching the tone to the distance context.
"""
        return self._generate(prompt)

    def format_route_status(self, route_data: RouteData, intent: ExtractedIntent) -> str:
        # Summary-level projection, no steps
        overview = {
            "routes": [
                {"summary": route.summary, "warnings": route.warnings}
                for route in route_data.routes
            ],
            "traffic_info": route_data.traffic_info.model_dump(),
            "mode": route_data.mode,
            "current_time": route_data.current_time,
        }

        prompt = f"""
Create a friendly, conversational route status update between {intent.origin} and {intent.destination}.

Make it sound like local advice from someone who just drove that route.
Include:
1. Road conditions
2. Any construction or closures
3. Traffic hotspots
4. Suggested alternatives

Use this data: {json.dumps(overview)}
Keep it natural and helpful, like you're sharing local knowledge with a friend.
"""
        return self._generate(prompt)
