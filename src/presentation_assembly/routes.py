"""Flask blueprint exposing presentation assembly over HTTP and MCP."""

from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Blueprint, current_app, g, jsonify, request
from google.auth.exceptions import GoogleAuthError

from .config import Settings
from .errors import AssemblyError, ValidationError
from .slides_api import build_credentials
from .store import DocumentStore, GoogleSlidesStore
from .tools import TOOLS, call_tool, create_from_content

logger = logging.getLogger(__name__)

SERVICE_NAME = "google-slides-mcp"
SERVER_VERSION = "0.1.0"
MCP_PROTOCOL_VERSION = "2024-11-05"

# JSON-RPC 2.0 error codes
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602

slides_bp = Blueprint("slides", __name__)


def _settings() -> Settings:
    return current_app.config.get("SETTINGS") or Settings()


def _credentials():
    creds = current_app.config.get("GOOGLE_CREDENTIALS")
    if creds is None:
        creds = build_credentials(_settings())
        current_app.config["GOOGLE_CREDENTIALS"] = creds
    return creds


def _store() -> DocumentStore:
    """An injected store, else a Google store built for the current request.

    Discovery clients wrap an ``httplib2.Http`` that must not be shared
    between threads, so only the credentials outlive a request.
    """
    injected = current_app.config.get("DOCUMENT_STORE")
    if injected is not None:
        return injected
    if "document_store" not in g:
        g.document_store = GoogleSlidesStore.from_credentials(_credentials())
    return g.document_store


def _is_json_rpc(body: Any) -> bool:
    return isinstance(body, dict) and "method" in body


def _rpc_result(rpc_id, result: Any):
    return jsonify({"jsonrpc": "2.0", "id": rpc_id, "result": result})


def _rpc_error(rpc_id, code: int, message: str):
    return jsonify({"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}), 400


def _handle_mcp(body: Any):
    if not _is_json_rpc(body):
        return _rpc_error(None, INVALID_REQUEST, "Invalid Request: body must be JSON-RPC with method")

    rpc_id = body.get("id")
    method = body.get("method")
    params = body.get("params") or {}

    if method == "initialize":
        return _rpc_result(
            rpc_id,
            {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": SERVICE_NAME, "version": SERVER_VERSION},
            },
        )
    if method == "notifications/initialized":
        return "", 202
    if method == "tools/list":
        return _rpc_result(rpc_id, {"tools": TOOLS})
    if method == "tools/call":
        name = params.get("name") if isinstance(params, dict) else None
        if not name or not isinstance(name, str):
            return _rpc_error(rpc_id, INVALID_PARAMS, 'Invalid params: missing or invalid "name"')
        try:
            result = call_tool(_store(), name, params.get("arguments"), _settings().default_template_id)
        except Exception as exc:  # surfaced to the MCP client as a tool error
            logger.exception("MCP tools/call %s failed", name)
            return _rpc_result(rpc_id, {"content": [{"type": "text", "text": str(exc)}], "isError": True})
        return _rpc_result(rpc_id, {"content": result.content, "isError": result.is_error})

    return _rpc_error(rpc_id, METHOD_NOT_FOUND, f"Method not found: {method}")


@slides_bp.route("/slides", methods=["POST"])
def create_slides():
    """Body: {title, slides[], templatePresentationId?}; returns {presentationId, editUrl, title}."""
    payload = request.get_json(silent=True)
    try:
        store = _store()
    except (FileNotFoundError, GoogleAuthError) as exc:
        logger.error("POST /slides credentials error: %s", exc)
        return jsonify({"error": "Failed to create presentation", "message": str(exc)}), 500
    try:
        result = create_from_content(store, payload, _settings().default_template_id)
    except ValidationError as exc:
        return jsonify({"error": "Invalid request body", "details": exc.issues}), 400
    except AssemblyError as exc:
        logger.error("POST /slides error: %s", exc)
        return jsonify({"error": "Failed to create presentation", **exc.to_dict()}), 500
    return jsonify(result.to_dict())


@slides_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "service": SERVICE_NAME})


@slides_bp.route("/tools", methods=["GET"])
def list_tools():
    return jsonify({"tools": TOOLS})


@slides_bp.route("/tools", methods=["POST"])
def list_tools_post():
    body = request.get_json(silent=True)
    if isinstance(body, dict) and "method" in body and "id" in body:
        return _handle_mcp(body)
    return jsonify({"tools": TOOLS})


@slides_bp.route("/mcp", methods=["POST"])
def mcp():
    return _handle_mcp(request.get_json(silent=True))


@slides_bp.route("/mcp", methods=["GET"])
def mcp_get():
    return (
        jsonify(
            {
                "error": "Method Not Allowed",
                "message": "MCP endpoint accepts POST with JSON-RPC body (method: tools/list, tools/call, initialize).",
            }
        ),
        405,
    )


@slides_bp.route("/tools/call", methods=["POST"])
def tools_call():
    body = request.get_json(silent=True) or {}
    name: Optional[str] = body.get("name") if isinstance(body, dict) else None
    if not name or not isinstance(name, str):
        return jsonify({"success": False, "error": 'Missing or invalid "name" in request body.'}), 400
    try:
        result = call_tool(_store(), name, body.get("arguments"), _settings().default_template_id)
    except Exception as exc:  # reported to the caller as a 500
        logger.exception("POST /tools/call error")
        return jsonify({"success": False, "error": str(exc)}), 500
    if result.is_error:
        return jsonify({"success": False, "error": result.first_text, "errorCode": result.error_code}), 400
    return jsonify({"success": True, "content": result.first_text})


__all__ = ["slides_bp"]
