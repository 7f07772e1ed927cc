"""
Flask REST API for Mindful Chat Service.

Routes:
- POST /api/query   {query, sessionId} -> {answer, sessionId, messageCount, ...}
- GET  /api/health
"""
import atexit
import logging
import uuid
from typing import Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError as RequestBodyError

from .app import MindfulChatApp
from .config_loader import load_config_from_env
from .exceptions import ConfigurationError, MissingCredentialError, UpstreamError
from .schemas import QueryRequest
from .security import ValidationError

logger = logging.getLogger(__name__)

CORS_ALLOWED_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
    "x-api-key",
]

CHAT_APP_KEY = "mindful_chat_app"


def _initialize_from_env() -> Optional[MindfulChatApp]:
    """Build and start the chat app from environment variables."""
    try:
        config = load_config_from_env()
        chat_app = MindfulChatApp(config)
        chat_app.initialize()
        atexit.register(chat_app.shutdown)
        logger.info("Chat app initialized successfully from environment variables")
        return chat_app
    except (ConfigurationError, ValueError) as e:
        logger.error(f"Failed to initialize chat app: {str(e)}", exc_info=True)
        return None


def create_app(chat_app: Optional[MindfulChatApp] = None) -> Flask:
    """
    Create the Flask application.
    
    :param chat_app: An initialized MindfulChatApp; built from the
        environment when omitted
    :return: Flask app
    """
    app = Flask(__name__)
    CORS(
        app,
        supports_credentials=True,
        methods=["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )
    
    if chat_app is None:
        chat_app = _initialize_from_env()
    app.extensions[CHAT_APP_KEY] = chat_app
    
    app.register_error_handler(405, _method_not_allowed)
    app.add_url_rule("/api/query", view_func=query, methods=["POST"])
    app.add_url_rule("/api/health", view_func=health, methods=["GET"])
    
    return app


def _get_chat_app() -> Optional[MindfulChatApp]:
    chat_app = current_app.extensions.get(CHAT_APP_KEY)
    if chat_app is None or not chat_app.is_initialized:
        return None
    return chat_app


def _method_not_allowed(error):
    return jsonify({"error": "Method not allowed"}), 405


def query():
    """Chat endpoint."""
    chat_app = _get_chat_app()
    if chat_app is None:
        return jsonify({"error": "Service not initialized. Please check configuration."}), 500
    
    try:
        body = QueryRequest.model_validate(request.get_json(silent=True) or {})
    except RequestBodyError as e:
        logger.warning(f"Malformed request body: {e.error_count()} error(s)")
        return jsonify({"error": "Invalid request body"}), 400
    
    session_id = body.session_id or str(uuid.uuid4())
    
    try:
        response = chat_app.chat(body.query, session_id=session_id)
    except ValidationError as e:
        logger.warning(f"Input validation failed: {str(e)}")
        return jsonify({"error": str(e)}), 400
    except MissingCredentialError:
        return jsonify({"error": "API key not configured"}), 500
    except UpstreamError as e:
        return jsonify({"error": "Failed to process request", "message": str(e)}), 500
    except Exception as e:
        logger.error(f"Query endpoint error: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to process request", "message": str(e)}), 500
    
    logger.info(
        f"Chat response - Session: {response.session_id}, "
        f"Messages: {response.message_count}, Latency: {response.latency_ms}ms"
    )
    
    result = dict(response.upstream)
    result.update({
        "answer": response.answer,
        "sessionId": response.session_id,
        "messageCount": response.message_count,
    })
    return jsonify(result)


def health():
    chat_app = _get_chat_app()
    if chat_app is None:
        return jsonify({"status": "unavailable", "active_sessions": 0}), 503
    return jsonify({"status": "ok", "active_sessions": chat_app.active_sessions()})
