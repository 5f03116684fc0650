"""
Utility script to generate and write the OpenAPI schema for the Taskboard API.

This script imports the FastAPI application instance and serializes its OpenAPI
schema to interfaces/openapi.json so that API clients and documentation tools
can consume a stable schema without running the server.

Usage:
    taskboard-openapi [output_dir]
    python -m taskboard.generate_openapi [output_dir]
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .main import app, openapi_tags

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "interfaces"


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Ensure the OpenAPI schema carries the tag metadata declared in main,
    without overriding tags that are already defined.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(output_dir: str = DEFAULT_OUTPUT_DIR) -> str:
    """Write the OpenAPI schema to ``<output_dir>/openapi.json`` and return the written path."""
    schema = app.openapi()
    _ensure_tags(schema)

    os.makedirs(output_dir, exist_ok=True)
    out_path = os.path.join(output_dir, "openapi.json")
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to %s", out_path)
    return out_path


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    out_path = generate_openapi(args[0] if args else DEFAULT_OUTPUT_DIR)
    print(f"Wrote OpenAPI schema to: {out_path}")


if __name__ == "__main__":
    main()
