from flask import Flask, request, jsonify
from flask_cors import CORS
import logging
import os
import traceback
from config import load_settings
from directions_service import DirectionsService
from errors import DirectionsError, RouteFetchError, ValidationError

# Set up logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": "*"}}, methods=["GET", "POST", "OPTIONS"])


def get_directions_service() -> DirectionsService:
    """Build the pipeline on first use so importing the app needs no secrets."""
    service = app.config.get("DIRECTIONS_SERVICE")
    if service is None:
        service = DirectionsService.from_settings(load_settings())
        app.config["DIRECTIONS_SERVICE"] = service
    return service


@app.route('/api/directions', methods=['POST'])
@app.route('/directions', methods=['POST'])
def get_directions():
    try:
        data = request.get_json(silent=True) or {}
        query = data.get("query") if isinstance(data, dict) else None
        logger.info(f"Received directions request: {query!r}")

        result = get_directions_service().get_directions(query)
        return jsonify(result.model_dump())

    except ValidationError as e:
        logger.error(f"Invalid request: {e}")
        return jsonify({"error": str(e)}), e.http_status

    except RouteFetchError as e:
        logger.error(f"Route lookup failed: {e}")
        if e.not_found:
            return jsonify({
                "error": "Route not found",
                "details": str(e),
            }), e.http_status
        return jsonify({"error": "Error processing request", "details": str(e)}), e.http_status

    except DirectionsError as e:
        logger.error(f"Error in get_directions: {e}")
        return jsonify({"error": "Error processing request", "details": str(e)}), e.http_status

    except Exception as e:
        logger.error(f"Error in get_directions: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({"error": "Error processing request", "details": str(e)}), 500


@app.route('/health', methods=['GET'])
def health_check():
    """Simple health check endpoint"""
    return jsonify({"status": "ok"}), 200


if __name__ == '__main__':
    settings = load_settings()
    if not settings.self_hosted:
        logger.info("APP_ENV is production; serve main:app from a WSGI server instead")
    else:
        logging.getLogger().setLevel(settings.log_level.upper())
        app.config["DIRECTIONS_SERVICE"] = DirectionsService.from_settings(settings)
        logger.info(f"Starting RouteGPT API on port {settings.port}...")
        app.run(debug=False, host='0.0.0.0', port=settings.port)
