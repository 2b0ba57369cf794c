"""Tests for CLI parsing and command handlers."""

import httpx
import pytest

from cli import main as cli_main
from cli.client import FileServeClient
from cli.commands import execute_command, handle_delete, handle_get, handle_put
from cli.parser import DeleteCommand, GetCommand, ParseError, PutCommand, parse_command
from common.content_hash import compute_content_hash

HELLO_HASH = compute_content_hash(b'hello')


class TestParser:
    """Test command parsing."""

    def test_put(self):
        assert parse_command(['put', 'hello.txt']) == PutCommand(path='hello.txt')

    def test_get(self):
        assert parse_command(['get', HELLO_HASH]) == GetCommand(file_hash=HELLO_HASH)

    def test_get_with_output(self):
        cmd = parse_command(['get', HELLO_HASH, 'out.txt'])
        assert cmd == GetCommand(file_hash=HELLO_HASH, output='out.txt')

    def test_hash_is_normalized(self):
        cmd = parse_command(['delete', HELLO_HASH.upper()])
        assert cmd == DeleteCommand(file_hash=HELLO_HASH)

    @pytest.mark.parametrize('tokens', [
        [],
        ['put'],
        ['put', 'a', 'b'],
        ['get'],
        ['get', 'not-a-hash'],
        ['delete', HELLO_HASH, 'extra'],
        ['list'],
    ])
    def test_invalid(self, tokens):
        with pytest.raises(ParseError):
            parse_command(tokens)


@pytest.fixture
def mock_client():
    """FileServeClient answering from an in-process dict."""
    stored = {}

    def handler(request):
        path = request.url.path
        if path == '/files' and request.method == 'POST':
            stored[HELLO_HASH] = b'hello'
            return httpx.Response(200, json={
                'name': 'hello.txt', 'size': 5, 'hash': HELLO_HASH, 'contentType': 'text/plain'
            })
        file_hash = path.rsplit('/', 1)[-1]
        if file_hash not in stored:
            return httpx.Response(404, json={'detail': 'File not found', 'code': 'FILE_NOT_FOUND'})
        if request.method == 'GET':
            return httpx.Response(200, content=stored[file_hash])
        del stored[file_hash]
        return httpx.Response(204)

    client = FileServeClient(base_url='http://test', transport=httpx.MockTransport(handler), max_retries=0)
    yield client
    client.close()


def test_put_get_delete(mock_client, sample_file, tmp_path):
    message = handle_put(PutCommand(path=str(sample_file)), mock_client)
    assert HELLO_HASH in message

    output = tmp_path / 'downloaded.txt'
    message = handle_get(GetCommand(file_hash=HELLO_HASH, output=str(output)), mock_client)
    assert output.read_bytes() == b'hello'
    assert '5 bytes' in message

    assert handle_delete(DeleteCommand(file_hash=HELLO_HASH), mock_client) == f'Deleted {HELLO_HASH}'


def test_get_rejects_mismatched_content(tmp_path):
    def handler(request):
        return httpx.Response(200, content=b'not hello')

    client = FileServeClient(base_url='http://test', transport=httpx.MockTransport(handler))
    with pytest.raises(ValueError):
        handle_get(GetCommand(file_hash=HELLO_HASH, output=str(tmp_path / 'x')), client)


def test_execute_command_dispatches(mock_client, sample_file):
    assert 'Stored hello.txt' in execute_command(PutCommand(path=str(sample_file)), mock_client)


def test_main_reports_parse_errors(capsys):
    assert cli_main.main(['frobnicate']) == 2
    assert 'Unknown command' in capsys.readouterr().err


def test_main_runs_command(monkeypatch, mock_client, sample_file, capsys):
    monkeypatch.setattr(cli_main, 'FileServeClient', lambda: mock_client)

    assert cli_main.main(['put', str(sample_file)]) == 0
    assert HELLO_HASH in capsys.readouterr().out


def test_main_reports_server_errors(monkeypatch, mock_client, capsys):
    monkeypatch.setattr(cli_main, 'FileServeClient', lambda: mock_client)

    assert cli_main.main(['delete', HELLO_HASH]) == 1
    assert '404' in capsys.readouterr().err
