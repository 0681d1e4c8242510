"""HTTP entrypoint exposing the search and export pipeline."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Dict

from flask import Flask, Response, jsonify, request

from webless_explorer.core.config import get_settings
from webless_explorer.core.errors import ValidationError
from webless_explorer.etl.export import export_data
from webless_explorer.models import FullBusinessData
from webless_explorer.pipeline.search import DEFAULT_RADIUS, SearchPipeline, build_pipeline, validate_search_request

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)


_TRUE_VALUES = {"1", "true", "yes"}
_FALSE_VALUES = {"0", "false", "no", ""}


def _parse_flag(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"not a boolean: {value!r}")


@lru_cache(maxsize=1)
def _get_pipeline() -> SearchPipeline:
    # One pipeline per process so the result cache is shared across requests.
    return build_pipeline(get_settings())


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "api_key_configured": bool(settings.google_api_key),
                "cache": _get_pipeline().cache.describe(),
                "detail_workers": settings.detail_workers,
            }
        ),
        200,
    )


@app.post("/search")
def search() -> Any:
    """
    Run a business search.
    Required JSON fields: query
    Optional: radius (int, meters, default 5000), only_no_website (bool)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    try:
        query, radius = validate_search_request(payload.get("query"), payload.get("radius", DEFAULT_RADIUS))
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        only_no_website = _parse_flag(payload.get("only_no_website", False))
    except ValueError:
        return jsonify({"error": "only_no_website must be a boolean"}), 400

    response = _get_pipeline().run(query, radius, only_no_website)
    return jsonify({"data": response.to_dict()}), 200


@app.post("/export")
def export() -> Any:
    """
    Serialize a result set for download.
    Required JSON fields: records (list of business objects), format ("csv" or "excel")
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    raw_records = payload.get("records") or []
    if not isinstance(raw_records, list) or not all(isinstance(item, dict) for item in raw_records):
        return jsonify({"error": "records must be a list of objects"}), 400

    records = [FullBusinessData.from_dict(item) for item in raw_records]
    result = export_data(records, payload.get("format", "csv"))
    if not result.success:
        return jsonify({"error": result.error}), 400

    return Response(
        result.file_content,
        mimetype=result.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{result.file_name}"'},
    )


def main() -> None:
    env_port = os.getenv("PORT")
    port = int(env_port or get_settings().worker_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
