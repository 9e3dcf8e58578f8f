"""
src/api.py
──────────
HTTP endpoints mounted on the Dash Flask server.

  GET  /api/health  → store connectivity
  POST /api/logs    → append a field log {stationId, location, severity,
                      status, timestamp?, data}
"""
from __future__ import annotations

import logging
import sqlite3

from flask import Flask, jsonify, request

from src.data import store

logger = logging.getLogger(__name__)


def register(server: Flask) -> None:

    @server.get("/api/health")
    def health():
        return jsonify(
            {"status": "ok", "database": "connected" if store.is_connected() else "disconnected"}
        )

    @server.post("/api/logs")
    def create_log():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Expected a JSON object body"}), 400
        try:
            record = store.insert_log(payload)
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({"error": f"Invalid log record: {e}"}), 400
        except sqlite3.Error as e:
            logger.warning("Log insert failed: %s", e)
            return jsonify({"error": str(e)}), 500
        return jsonify(record), 201
