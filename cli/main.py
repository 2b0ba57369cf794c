"""CLI entry point."""

import os
import sys
from typing import List, Optional

from common.logging_config import setup_logging
from cli.client import FileServeClient, FileServeClientError
from cli.commands import execute_command
from cli.parser import ParseError, parse_command

USAGE = """usage: fileserve-cli [--debug] <command>

commands:
  put <path>               upload a file
  get <hash> [output]      download a file
  delete <hash>            delete a file"""


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for CLI."""
    args = list(sys.argv[1:] if argv is None else argv)

    log_level = 'DEBUG' if '--debug' in args else os.getenv('LOG_LEVEL', 'WARNING')
    logger = setup_logging('cli', log_level=log_level)

    if '--debug' in args:
        logger.info("Debug logging enabled")
        args.remove('--debug')

    try:
        cmd = parse_command(args)
    except ParseError as e:
        print(f"Error: {e}\n\n{USAGE}", file=sys.stderr)
        return 2

    client = FileServeClient()
    try:
        print(execute_command(cmd, client))
        return 0
    except (FileServeClientError, ConnectionError, OSError, ValueError) as e:
        logger.debug(f"Command failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
