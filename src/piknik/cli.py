"""
Command line front end.

    piknik-client copy < file      store stdin as the clipboard content
    piknik-client paste > file     write the clipboard content to stdout
    piknik-client move > file      same as paste, then delete it server-side
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .client import ClipboardClient
from .config import load_config
from .types import PiknikError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="piknik-client",
        description="Copy and paste through a piknik server.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="JSON configuration file (default: $PIKNIK_CONFIG or ~/.piknik.json)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("copy", help="store stdin on the server")
    sub.add_parser("paste", help="write the server content to stdout")
    sub.add_parser("move", help="write the server content to stdout and delete it")
    return parser


async def _run(client: ClipboardClient, command: str) -> None:
    if command == "copy":
        data = sys.stdin.buffer.read()
        await client.store(data)
        logger.info("Stored %d bytes", len(data))
        return

    data = await client.fetch(is_move=command == "move")
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        client = ClipboardClient(load_config(args.config))
        asyncio.run(_run(client, args.command))
    except PiknikError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"piknik: {e.kind}: {e.detail}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
