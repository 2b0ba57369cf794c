"""Command parser for CLI input."""

from dataclasses import dataclass
from typing import Optional, Union

from common.content_hash import is_valid_hash


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


@dataclass
class PutCommand:
    """Upload a local file."""
    path: str


@dataclass
class GetCommand:
    """Download a file by hash, optionally into an output path."""
    file_hash: str
    output: Optional[str] = None


@dataclass
class DeleteCommand:
    """Delete a file by hash."""
    file_hash: str


CommandRequest = Union[PutCommand, GetCommand, DeleteCommand]


def parse_command(tokens: list[str]) -> CommandRequest:
    """Parse command-line arguments into a command object.

    Args:
        tokens: Arguments after the program name

    Returns:
        PutCommand, GetCommand or DeleteCommand

    Raises:
        ParseError: If command syntax is invalid
    """
    if not tokens:
        raise ParseError("Empty command")

    command_name, args = tokens[0], tokens[1:]

    if command_name == "put":
        if len(args) != 1:
            raise ParseError("put requires exactly one file path")
        return PutCommand(path=args[0])
    elif command_name == "get":
        if len(args) not in (1, 2):
            raise ParseError("get requires a hash and an optional output path")
        return GetCommand(file_hash=_parse_hash(args[0]), output=args[1] if len(args) == 2 else None)
    elif command_name == "delete":
        if len(args) != 1:
            raise ParseError("delete requires exactly one hash")
        return DeleteCommand(file_hash=_parse_hash(args[0]))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_hash(value: str) -> str:
    file_hash = value.strip().lower()
    if not is_valid_hash(file_hash):
        raise ParseError(f"Invalid hash: {value}")
    return file_hash
