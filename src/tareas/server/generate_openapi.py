"""
Utility script to generate and write the OpenAPI schema of the development server.

API clients and documentation tools can consume the written file without
running the server.

Usage:
    python -m tareas.server.generate_openapi [output_path]

Default output path: interfaces/openapi.json under the current directory.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .main import create_app, openapi_tags

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("interfaces") / "openapi.json"


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Make sure every tag in openapi_tags is present in the schema without
    overriding existing definitions.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[Path] = None) -> Path:
    """Generate the OpenAPI schema file and return the written file path."""
    target = Path(out_path) if out_path is not None else DEFAULT_OUTPUT
    schema = create_app().openapi()
    _ensure_tags(schema)

    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to: %s", target)
    return target


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    generate_openapi(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
