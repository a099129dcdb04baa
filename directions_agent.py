import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
import googlemaps
from googlemaps.exceptions import ApiError, HTTPError, Timeout, TransportError
from errors import RouteFetchError
from formatters import traffic_status
from models import (
    ExtractedIntent, Leg, RouteData, RouteSummary, RouteTraffic, Step,
    TextValue, TrafficInfo,
)

logger = logging.getLogger(__name__)


def _text_value(raw: Optional[Dict[str, Any]]) -> Optional[TextValue]:
    if not raw:
        return None
    return TextValue(text=raw.get("text"), value=raw.get("value"))


class SingleAttemptClient(googlemaps.Client):
    """googlemaps client that raises instead of retrying 5xx or rate-limited responses."""

    def _request(self, url, params, first_request_time=None, retry_counter=0, *args, **kwargs):
        if retry_counter > 0:
            raise TransportError(RuntimeError("Google Maps returned a retriable error; not retried"))
        return super()._request(url, params, first_request_time, retry_counter, *args, **kwargs)


class DirectionsAgent:
    """
    Fetches traffic-aware driving/transit routes between two places and
    reduces the Directions API payload to what the formatters read.
    """
    def __init__(self, api_key: str = None, client: googlemaps.Client = None, timeout: float = None):
        if client is None:
            if not api_key:
                raise ValueError("Google Maps API key is required")
            client = SingleAttemptClient(key=api_key, timeout=timeout, retry_over_query_limit=False)
        self.client = client

    def get_route_data(self, intent: ExtractedIntent) -> RouteData:
        config = intent.mode_config
        params: Dict[str, Any] = {
            "origin": intent.origin,
            "destination": intent.destination,
            "mode": config.mode,
            "departure_time": "now",
            "alternatives": True,
            "traffic_model": "best_guess",
        }
        if config.avoid:
            params["avoid"] = "|".join(config.avoid)
        if config.transit_mode:
            params["transit_mode"] = config.transit_mode

        try:
            routes = self.client.directions(**params)
        except ApiError as e:
            logger.error(f"Google Maps API error for {intent.origin} -> {intent.destination}: {e.status}")
            raise RouteFetchError(e.status, e.message) from e
        except (Timeout, HTTPError, TransportError) as e:
            logger.error(f"Google Maps request failed: {e}")
            raise RouteFetchError("UNKNOWN_ERROR", str(e)) from e

        if not routes:
            logger.warning(f"No routes between {intent.origin} and {intent.destination}")
            raise RouteFetchError("ZERO_RESULTS")

        route_data = self._reshape(routes, intent)
        logger.info(f"Fetched {len(route_data.routes)} route(s) ({intent.mode})")
        return route_data

    def _reshape(self, routes: List[Dict[str, Any]], intent: ExtractedIntent) -> RouteData:
        summaries = []
        traffic = []
        for route in routes:
            legs = [
                Leg(
                    distance=_text_value(leg.get("distance")),
                    duration=_text_value(leg.get("duration")),
                    duration_in_traffic=_text_value(leg.get("duration_in_traffic")),
                    steps=[
                        Step(
                            instructions=step.get("html_instructions"),
                            distance=_text_value(step.get("distance")),
                            duration=_text_value(step.get("duration")),
                            maneuver=step.get("maneuver"),
                        )
                        for step in leg.get("steps", [])
                    ],
                )
                for leg in route.get("legs", [])
            ]
            warnings = route.get("warnings") or []
            summaries.append(RouteSummary(summary=route.get("summary"), legs=legs, warnings=warnings))

            first = legs[0] if legs else Leg()
            traffic.append(RouteTraffic(
                normal_duration=first.duration.text if first.duration else None,
                traffic_duration=first.duration_in_traffic.text if first.duration_in_traffic else None,
                traffic_status=traffic_status(
                    first.duration.value if first.duration else None,
                    first.duration_in_traffic.value if first.duration_in_traffic else None,
                ),
                warnings=warnings,
            ))

        return RouteData(
            routes=summaries,
            mode=intent.mode,
            current_time=datetime.now().strftime("%I:%M:%S %p"),
            traffic_info=TrafficInfo(routes=traffic),
        )
