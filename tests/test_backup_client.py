import socket
import threading

import pytest

from stashlog.backup_client import send_backup
from stashlog.config import LogConfig


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_sends_message_to_server():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    server.settimeout(5)
    port = server.getsockname()[1]
    received = []

    def accept():
        conn, _ = server.accept()
        with conn:
            chunks = []
            while True:
                chunk = conn.recv(1024)
                if not chunk:
                    break
                chunks.append(chunk)
            received.append(b"".join(chunks))

    config = LogConfig(backup_addr="127.0.0.1", backup_port=port)
    thread = threading.Thread(target=accept)
    thread.start()
    try:
        send_backup("[ERROR] disk full\n", config)
        thread.join(5)
    finally:
        server.close()
    assert received == [b"[ERROR] disk full\n"]

    sleeps = []
    with pytest.raises(ConnectionError):
        send_backup("again", config, max_retry=1, sleep=sleeps.append)
    assert sleeps == []


def test_retries_with_doubling_delay_then_raises():
    sleeps = []
    config = LogConfig(backup_addr="127.0.0.1", backup_port=_free_port())
    with pytest.raises(ConnectionError):
        send_backup("msg", config, max_retry=3, sleep=sleeps.append)
    assert sleeps == [1, 2]


def test_single_attempt_does_not_sleep():
    sleeps = []
    config = LogConfig(backup_addr="127.0.0.1", backup_port=_free_port())
    with pytest.raises(ConnectionError):
        send_backup(b"msg", config, max_retry=1, sleep=sleeps.append)
    assert sleeps == []