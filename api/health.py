"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json

from src.utils.map_config import MapConfig

SERVICE_NAME = "listing-map-engine"


def health_payload() -> dict:
    """Liveness plus the map settings this deployment runs with."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "map": {
            "debounceSeconds": MapConfig.VIEWPORT_DEBOUNCE_SECONDS,
            "expansionFactor": MapConfig.VIEWPORT_EXPANSION_FACTOR,
            "clusteringDisableSpan": MapConfig.CLUSTERING_DISABLE_SPAN,
            "clusteringEnableSpan": MapConfig.CLUSTERING_ENABLE_SPAN,
        }
    }


class handler(BaseHTTPRequestHandler):
    """Health check handler for the serverless deployment."""

    def _send_headers(self, body: bytes) -> None:
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()

    def do_GET(self):
        body = json.dumps(health_payload()).encode('utf-8')
        self._send_headers(body)
        self.wfile.write(body)

    def do_HEAD(self):
        """Headers only, with the length GET would send."""
        self._send_headers(json.dumps(health_payload()).encode('utf-8'))
