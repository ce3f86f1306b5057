"""TCP server that receives log records and appends them to a backup file."""

from __future__ import annotations

import os
import socket
import sys
import threading
import traceback
from typing import Callable

BACKLOG = 32
RECV_SIZE = 1024
BACKUP_FILE = "./backup/logfile.log"


class BackupServer:
    """Accepts connections and passes each client's message to ``callback``.

    Every client is served on its own thread; one read of up to 1024 bytes
    is taken from it.
    """

    def __init__(
        self, port: int, callback: Callable[[str], None], host: str = "0.0.0.0"
    ) -> None:
        self._host = host
        self._port = port
        self._callback = callback
        self._sock: socket.socket | None = None
        self._closed = threading.Event()

    @property
    def port(self) -> int:
        """The port actually bound (useful when constructed with port 0)."""
        if self._sock is None:
            raise RuntimeError("server is not started")
        return self._sock.getsockname()[1]

    def start(self) -> None:
        """Create, bind and listen on the server socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.bind((self._host, self._port))
            sock.listen(BACKLOG)
        except OSError:
            sock.close()
            raise
        sock.settimeout(0.5)
        self._sock = sock
        self._closed.clear()
        print(f"Server is listening on ip:port: {self._host}:{self.port}")

    def serve_forever(self) -> None:
        """Accept clients until :meth:`close` is called."""
        if self._sock is None:
            raise RuntimeError("server is not started")
        while not self._closed.is_set():
            try:
                conn, address = self._sock.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                if self._closed.is_set():
                    break
                print(f"accept socket error: {exc}", file=sys.stderr)
                continue
            conn.settimeout(None)
            threading.Thread(
                target=self._serve_safely, args=(conn, address), daemon=True
            ).start()

    def _serve_safely(self, conn: socket.socket, address: tuple) -> None:
        try:
            self.serve_client(conn, address)
        except Exception:
            traceback.print_exc()

    def serve_client(self, conn: socket.socket, address: tuple) -> None:
        """Read one message from ``conn`` and hand it to the callback."""
        with conn:
            try:
                data = conn.recv(RECV_SIZE)
            except OSError as exc:
                print(f"read error from {address[0]}:{address[1]}: {exc}", file=sys.stderr)
                return
            if data:
                message = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
                self._callback(message)

    def close(self) -> None:
        """Stop serving and close the listening socket."""
        self._closed.set()
        if self._sock is not None:
            self._sock.close()

    def __enter__(self) -> "BackupServer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def append_backup(message: str, path: str | os.PathLike[str] = BACKUP_FILE) -> None:
    """Append ``message`` and a newline to the backup file."""
    with open(path, "a", encoding="utf-8", newline="") as file:
        file.write(message + "\n")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(f"usage error: {sys.argv[0]} port")
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print(f"usage error: {sys.argv[0]} port")
        return 1
    server = BackupServer(port, append_backup)
    server.start()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.close()
    return 0