from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict, Mapping, Optional

from flask import Flask, current_app, jsonify, redirect, request, url_for
from werkzeug.exceptions import BadRequest, HTTPException

from app_config import load_config, log_level
from models import EmptyStackError
from stack_workspace import StackWorkspace, UnknownStackError, WorkspaceError

logger = logging.getLogger(__name__)


# -------------------------
# 共通
# -------------------------
def current_workspace() -> StackWorkspace:
    return current_app.extensions["stack_workspace"]


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("JSON オブジェクトを送信してください")
    return data


def require_fields(*fields: str):
    def wrapper(fn):
        @wraps(fn)
        def inner(*args, **kwargs):
            data = json_body()
            missing = [f for f in fields if f not in data]
            if missing:
                raise BadRequest(f"必須項目がありません: {', '.join(missing)}")
            return fn(data, *args, **kwargs)
        return inner
    return wrapper


def error_response(status: int, error: str, message: str):
    return jsonify({"error": error, "message": message}), status


def register_routes(app: Flask) -> None:
    # -------------------------
    # ルート
    # -------------------------
    @app.route("/", methods=["GET"])
    def root():
        return redirect(url_for("list_stacks"))

    @app.route("/stacks", methods=["GET"])
    def list_stacks():
        stacks = current_workspace().list_stacks()
        return jsonify({"stacks": stacks, "count": len(stacks)})

    @app.route("/stacks", methods=["POST"])
    @require_fields("name")
    def create_stack(data):
        items = data.get("items") or []
        if not isinstance(items, list):
            raise BadRequest("items は配列で指定してください")
        summary = current_workspace().create(
            name=str(data["name"]),
            semantics=data.get("semantics", "REFERENCE"),
            items=items,
        )
        return jsonify(summary), 201

    @app.route("/stacks/<name>", methods=["GET"])
    def get_stack(name):
        return jsonify(current_workspace().describe(name))

    @app.route("/stacks/<name>", methods=["DELETE"])
    def drop_stack(name):
        current_workspace().drop(name)
        return jsonify({"name": name, "dropped": True})

    # -------------------------
    # push / pop / peek
    # -------------------------
    @app.route("/stacks/<name>/push", methods=["POST"])
    @require_fields("value")
    def push(data, name):
        n = current_workspace().push(name, data["value"])
        return jsonify({"name": name, "length": n})

    @app.route("/stacks/<name>/pop", methods=["POST"])
    def pop(name):
        value, n = current_workspace().pop(name)
        return jsonify({"name": name, "value": value, "length": n})

    @app.route("/stacks/<name>/peek", methods=["GET"])
    def peek(name):
        return jsonify({"name": name, "value": current_workspace().peek(name)})

    # -------------------------
    # Undo
    # -------------------------
    @app.route("/undo", methods=["POST"])
    def undo():
        ok, msg = current_workspace().undo_last()
        return jsonify({"ok": ok, "message": msg}), (200 if ok else 409)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(EmptyStackError)
    def handle_empty(e):
        return error_response(409, "empty_stack", str(e))

    @app.errorhandler(UnknownStackError)
    def handle_unknown(e):
        return error_response(404, "unknown_stack", str(e))

    @app.errorhandler(WorkspaceError)
    def handle_workspace(e):
        return error_response(400, "invalid_request", str(e))

    @app.errorhandler(HTTPException)
    def handle_http(e):
        return error_response(e.code or 500, e.name.lower().replace(" ", "_"), e.description or "")


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    config = load_config(overrides)
    app.config.update(config)

    level = log_level(app.config["LOG_LEVEL"])
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)

    app.extensions["stack_workspace"] = StackWorkspace(
        max_stacks=app.config["MAX_STACKS"],
        undo_limit=app.config["UNDO_LIMIT"],
    )

    register_routes(app)
    register_error_handlers(app)
    logger.info(
        "stacklab ready (max_stacks=%s, undo_limit=%s)",
        app.config["MAX_STACKS"],
        app.config["UNDO_LIMIT"],
    )
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
