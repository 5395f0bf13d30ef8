#!/usr/bin/env python3
"""
Seed script to upload local images through the gateway's upload endpoint.

Run:
    python seed/seed_images.py \
      --endpoint https://<api-id>.execute-api.<region>.amazonaws.com/prod \
      --username <UPLOAD_USERNAME> \
      --password <UPLOAD_PASSWORD> \
      path/to/a.jpg path/to/b.png
"""

import argparse
import mimetypes
from pathlib import Path
import sys

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed images via the Image Gateway API")

    parser.add_argument(
        "--endpoint",
        required=True,
        help="Base URL of the deployed API (e.g. LocalStack API Gateway stage URL)",
    )
    parser.add_argument("--username", required=True, help="Upload username")
    parser.add_argument("--password", required=True, help="Upload password")
    parser.add_argument(
        "--width",
        default=None,
        help="Optional width recorded in the generated key",
    )
    parser.add_argument(
        "--height",
        default=None,
        help="Optional height recorded in the generated key",
    )
    parser.add_argument("images", nargs="+", type=Path, help="Image files to upload")

    return parser.parse_args(argv)


def upload_image(
    endpoint: str,
    image_path: Path,
    *,
    auth: tuple[str, str],
    width: str | None = None,
    height: str | None = None,
) -> requests.Response:
    """Upload one file and return the raw HTTP response."""
    content_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"

    data: dict[str, str] = {}
    if width and height:
        data = {"width": width, "height": height}

    with open(image_path, "rb") as f:
        return requests.put(
            f"{endpoint.rstrip('/')}/upload",
            auth=auth,
            files={"image": (image_path.name, f, content_type)},
            data=data,
            timeout=30,
        )


def seed_images(argv: list[str] | None = None) -> list[str]:
    args = parse_args(argv)
    keys: list[str] = []

    logger.info("Starting seeding process", extra={"endpoint": args.endpoint})

    for image_path in args.images:
        if not image_path.exists():
            logger.warning("Image file not found", extra={"path": str(image_path)})
            continue

        response = upload_image(
            args.endpoint,
            image_path,
            auth=(args.username, args.password),
            width=args.width,
            height=args.height,
        )

        if response.status_code == 200:
            keys.append(response.text)
            logger.info("Seeded image", extra={"image": image_path.name, "key": response.text})
        else:
            logger.error(
                "Failed to seed image",
                extra={
                    "image": image_path.name,
                    "status": response.status_code,
                    "response": response.text,
                },
            )

    logger.info("Seeding completed", extra={"uploaded": len(keys)})

    for key in keys:
        print(key)

    return keys


if __name__ == "__main__":
    try:
        seed_images()
    except requests.RequestException as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)
