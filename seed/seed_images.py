#!/usr/bin/env python3
"""
Seed script to upload a directory of pictures through the upload endpoint.

Run:
    python seed/seed_images.py \
      --api-url https://<api-id>.execute-api.<region>.amazonaws.com/v1/pictures \
      --api-key <API-KEY>
"""

import argparse
import base64
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

from core.utils.constants import SUPPORTED_EXTENSIONS

logger = Logger(service="seed")

DEFAULT_IMAGES_DIR = Path(__file__).parent / "images"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed pictures via the Picture Storage API")

    parser.add_argument(
        "--api-url",
        required=True,
        help="Full URL of the upload endpoint",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="API key for x-api-key header (optional for local)",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=DEFAULT_IMAGES_DIR,
        help="Directory holding the pictures to upload",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of pictures to upload",
    )

    return parser.parse_args(argv)


def collect_pictures(images_dir: Path, limit: int | None = None) -> list[Path]:
    """Return supported picture files in ``images_dir`` sorted by name."""
    pictures = sorted(
        path
        for path in images_dir.iterdir()
        if path.is_file() and path.suffix.lower().lstrip(".") in SUPPORTED_EXTENSIONS
    )
    return pictures if limit is None else pictures[:limit]


def upload_picture(
    session: requests.Session,
    *,
    api_url: str,
    path: Path,
) -> requests.Response:
    payload: dict[str, Any] = {
        "file": base64.b64encode(path.read_bytes()).decode("utf-8"),
        "image_name": path.name,
    }
    return session.post(api_url, json=payload, timeout=30)


def seed_images(argv: list[str] | None = None) -> int:
    """Upload every picture and return the number of failures."""
    args = parse_args(argv)

    session = requests.Session()
    session.headers["Content-Type"] = "application/json"
    if args.api_key:
        session.headers["x-api-key"] = args.api_key

    pictures = collect_pictures(args.images_dir, args.limit)
    logger.info(
        "Starting seeding process",
        extra={"api_url": args.api_url, "count": len(pictures)},
    )

    failures = 0
    for path in pictures:
        try:
            response = upload_picture(session, api_url=args.api_url, path=path)
            response_json = cast(dict[str, Any], response.json())
        except requests.RequestException:
            logger.exception("Upload request failed", extra={"image": path.name})
            failures += 1
            continue

        if response.status_code == 201:
            logger.info(
                "Seeded picture",
                extra={
                    "image": path.name,
                    "destination": response_json.get("destination"),
                    "url": response_json.get("url"),
                },
            )
        else:
            failures += 1
            logger.error(
                "Failed to seed picture",
                extra={
                    "image": path.name,
                    "status": response.status_code,
                    "response": response_json,
                },
            )

    logger.info("Seeding completed", extra={"failures": failures})
    return failures


if __name__ == "__main__":
    sys.exit(1 if seed_images() else 0)
