"""Assemble a Google Slides deck from a JSON content file.

Usage:
  python scripts/create_deck.py deck.json
  python scripts/create_deck.py deck.json --template 1PAGmCAxZtO9gWk0eYAUpTICubU0EoCyOfGJuc1yi7FY

The JSON file holds {"title": ..., "slides": [{"title", "subtitle", "body", "bullets"}, ...]}.

Auth:
- GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET / GOOGLE_REFRESH_TOKEN in the environment or .env,
- or a Google OAuth client secret JSON at the repo root (client_secret_*.json).
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.presentation_assembly.config import load_settings  # noqa: E402
from src.presentation_assembly.errors import AssemblyError  # noqa: E402
from src.presentation_assembly.store import GoogleSlidesStore  # noqa: E402
from src.presentation_assembly.tools import create_from_content  # noqa: E402


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description="Create a presentation from structured slide content.")
    parser.add_argument("content", help="Path to the deck JSON file")
    parser.add_argument("--template", default=None, help="Template presentation ID to copy")
    parser.add_argument("--verbose", action="store_true", help="Log each assembly phase")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    payload = json.loads(Path(args.content).read_text(encoding="utf-8"))
    if args.template:
        payload["templatePresentationId"] = args.template

    settings = load_settings()
    store = GoogleSlidesStore.from_settings(settings)
    try:
        result = create_from_content(store, payload, settings.default_template_id)
    except AssemblyError as e:
        print("Assembly failed:", e, file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
