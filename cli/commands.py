"""Command handler functions for CLI operations."""

from pathlib import Path

from common.content_hash import IncrementalContentHasher, verify_content_hash
from common.logging_config import get_logger
from cli.client import FileServeClient
from cli.parser import CommandRequest, DeleteCommand, GetCommand, PutCommand

logger = get_logger(__name__)

READ_PIECE_SIZE = 64 * 1024


def handle_put(cmd: PutCommand, client: FileServeClient) -> str:
    """
    Handle 'put' command.

    Hashes the file while reading it and checks the server computed the same hash.

    Returns:
        Success message with the assigned hash
    """
    path = Path(cmd.path)
    hasher = IncrementalContentHasher()
    pieces = []
    with open(path, 'rb') as f:
        for piece in iter(lambda: f.read(READ_PIECE_SIZE), b''):
            hasher.update(piece)
            pieces.append(piece)
    local_hash = hasher.finalize()

    metadata = client.upload(path.name, b''.join(pieces))

    if metadata.hash != local_hash:
        logger.warning(f"Server hash {metadata.hash} differs from local hash {local_hash}")
    if metadata.size != hasher.bytes_hashed:
        logger.warning(f"Server size {metadata.size} differs from local size {hasher.bytes_hashed}")

    return f"Stored {metadata.name} ({metadata.size} bytes) as {metadata.hash}"


def handle_get(cmd: GetCommand, client: FileServeClient) -> str:
    """
    Handle 'get' command.

    Returns:
        Message naming the written file
    """
    data = client.download(cmd.file_hash)

    if not verify_content_hash(data, cmd.file_hash):
        raise ValueError(f"Downloaded content does not match hash {cmd.file_hash}")

    output = Path(cmd.output or cmd.file_hash)
    output.write_bytes(data)
    return f"Wrote {len(data)} bytes to {output}"


def handle_delete(cmd: DeleteCommand, client: FileServeClient) -> str:
    """
    Handle 'delete' command.

    Returns:
        Success message
    """
    client.delete(cmd.file_hash)
    return f"Deleted {cmd.file_hash}"


def execute_command(cmd: CommandRequest, client: FileServeClient) -> str:
    """Dispatch a parsed command to its handler."""
    if isinstance(cmd, PutCommand):
        return handle_put(cmd, client)
    elif isinstance(cmd, GetCommand):
        return handle_get(cmd, client)
    return handle_delete(cmd, client)
