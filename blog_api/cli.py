"""Management commands.

Usage: ``blog-api posts:publish`` (or ``python -m blog_api.cli posts:publish``).
"""
import argparse
import asyncio
import logging
import sys

from blog_api.core.logging import configure_logging
from blog_api.services.publish_service import run_publish_job

logger = logging.getLogger("blog_api.cli")


def handle_publish(args: argparse.Namespace) -> int:
    try:
        count = asyncio.run(run_publish_job())
    except Exception:
        logger.exception("Posts publish failed")
        return 1
    print(f"Published {count} scheduled post(s).")
    logger.info("Posts published successfully")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blog-api", description="Blog API management commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    publish_parser = subparsers.add_parser("posts:publish", help="Publish scheduled posts whose time has arrived")
    publish_parser.set_defaults(handler=handle_publish)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
