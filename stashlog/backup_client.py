"""Sending log records to a remote backup server."""

from __future__ import annotations

import socket
import sys
import time
from typing import Callable

from .config import LogConfig, get_config


def send_backup(
    message: str | bytes,
    config: LogConfig | None = None,
    max_retry: int = 5,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Send ``message`` over TCP to the configured backup server.

    Connection attempts are retried with a delay doubling from one second.
    Raises ConnectionError when no attempt succeeds.
    """
    cfg = config if config is not None else get_config()
    payload = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    address = (cfg.backup_addr, cfg.backup_port)
    delay = 1
    last_error: OSError | None = None
    for attempt in range(1, max_retry + 1):
        try:
            conn = socket.create_connection(address)
        except OSError as exc:
            last_error = exc
            print(
                f"connect to {cfg.backup_addr}:{cfg.backup_port} failed ({exc}), "
                f"retry {attempt}/{max_retry} after {delay}s",
                file=sys.stderr,
            )
            if attempt < max_retry:
                sleep(delay)
                delay *= 2
            continue
        with conn:
            conn.sendall(payload)
        return
    raise ConnectionError(
        f"could not reach backup server {cfg.backup_addr}:{cfg.backup_port}"
    ) from last_error