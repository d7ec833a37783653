from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.security import verify_device_token
from ..core.exceptions import (
    AuthenticationError,
    CardNotRegistered,
    DeadlineExceeded,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..container import Container
from .schemas import PunchRequest

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type, x-device-token",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def register(app: Flask, container: Container) -> None:
    @app.after_request
    def add_cors_headers(response):
        # Readers have no browser origin; every response is open to any origin.
        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.route("/healthz", methods=["GET"], endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"})

    @app.route("/api/punch", methods=["POST", "OPTIONS"], endpoint="process_punch")
    @app.route("/functions/v1/process-punch", methods=["POST", "OPTIONS"], endpoint="process_punch_legacy")
    def process_punch():
        """Ingest one card scan from a reader."""
        if request.method == "OPTIONS":
            return app.response_class(status=204)

        payload = request.get_json(silent=True)
        logger.info("Received punch from %s: %s", request.remote_addr, payload)

        try:
            if not verify_device_token(container.device_secret, request.headers.get("X-Device-Token")):
                raise AuthenticationError("Invalid device token")
            punch = PunchRequest.from_payload(payload, tz=container.school_tz)
            result = container.punch_service.process(punch)
            return jsonify(result.to_response()), 200
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthenticationError as e:
            logger.warning("Rejected punch from %s: %s", request.remote_addr, e)
            return jsonify({"error": str(e)}), 401
        except CardNotRegistered as e:
            logger.info("Card not found: %s", e.card_number)
            return jsonify({"error": str(e), "card_number": e.card_number}), 404
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except DeadlineExceeded as e:
            logger.error("Punch deadline exceeded: %s", e)
            return jsonify({"error": str(e)}), 503
        except StoreError as e:
            logger.error("Error processing punch: %s", e, exc_info=True)
            return jsonify({"error": str(e)}), 500
