# stashlog

An asynchronous logging library. Each record is formatted on the calling
thread and appended to an in-memory producer buffer; a background worker
swaps that buffer out and writes its contents to every sink of the logger.
Records at `ERROR` and `FATAL` level can also be sent to a backup server over
TCP before they are written locally.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

`stashlog.config.LogConfig` holds the settings of the logging core. It can be
read from a JSON file with `LogConfig.load(path)` or from text with
`LogConfig.from_json(text)`; keys that are missing keep their defaults.

```json
{
    "buffer_size": 4096,
    "threshold": 1048576,
    "linear_growth": 1048576,
    "flush_log": 0,
    "backup_addr": "127.0.0.1",
    "backup_port": 8080,
    "thread_count": 1
}
```

(these are the defaults)

- `buffer_size` – initial capacity of each worker buffer, in bytes.
- `threshold` – while a buffer's capacity is below this it doubles when more
  room is needed; from there on it grows by `linear_growth` bytes at a time.
- `flush_log` – for file sinks, `1` flushes after each write and `2` also
  syncs to disk; `0` leaves flushing to the file object. The console sink
  always flushes its stream and also syncs it when the value is `2`.
- `backup_addr` / `backup_port` – where severe records are sent.
- `thread_count` – the thread-pool size the demo uses.

`get_config()` returns the process-wide configuration: on first use it loads
`./config.conf` if that file exists and otherwise uses the defaults.
`set_config(config)` replaces it.

## Logging

```python
from stashlog.config import LogConfig
from stashlog.flush import FileFlush, RollingFileFlush
from stashlog.logger import LoggerBuilder
from stashlog.manager import LoggerManager, get_logger

config = LogConfig.load("config.conf")

builder = LoggerBuilder(config)
builder.with_name("asynclogger")
builder.add_flush(FileFlush, "./logfile/FileFlush.log")
builder.add_flush(RollingFileFlush, "./logfile/RollFile_log", 1024 * 1024)
LoggerManager.instance().add(builder.build())

log = get_logger("asynclogger")
log.info("service started on port %d", 8080)
log.warn("disk usage at %d%%", 91)
log.error("request failed: %s", "timeout")
log.close()
```

When the builder has a configuration, it is passed on to the sinks it
creates. The builder methods return the builder, so calls can be chained.
`build()` raises `ValueError` when no name was set; a builder without sinks
writes to standard output.

Messages take printf-style format strings (`debug`, `info`, `warn`, `error`,
`fatal`, or `log(level, fmt, *args)` with a `stashlog.levels.LogLevel`). Each
line looks like:

```
[14:03:07][140213][INFO][asynclogger][app.py:12]	service started on port 8080
```

that is time, thread id, level, logger name, caller's file and line, a tab and
the message. `close()` writes out what is pending, stops the worker and closes
the sinks; logging after that raises `RuntimeError`. An `AsyncLogger` is also a
context manager.

`stashlog.manager.LoggerManager.instance()` is the shared registry.
`add(logger)` keeps the first logger registered under a name, `get(name)` and
`get_logger(name)` return `None` for unknown names, and `default_logger()`
returns the logger called `default`, which always exists and writes to
standard output.

Two buffering policies are available through `AsyncType` in
`stashlog.worker`: `BLOCKING_BOUNDED` (the default), where a writer waits
until the buffer has room, and `NONBLOCKING_GROW`, where the buffer grows and
the writer never waits. Pass one to `LoggerBuilder.with_async_type`.

## Remote backup

A logger built with `LoggerBuilder(config, thread_pool)` sends every `ERROR`
and `FATAL` record through the given `stashlog.threadpool.ThreadPool` with
`stashlog.backup_client.send_backup`, and waits for the send to finish before
the record is written locally. Built without a thread pool, it does no remote
backup. `send_backup` tries to connect up to five times, sleeping 1, 2, 4 and
8 seconds between attempts, and raises `ConnectionError` if none succeeds; the
logger reports that failure on standard error and goes on.

`ThreadPool(threads)` runs callables on a fixed number of threads;
`submit(task, *args, **kwargs)` returns a `concurrent.futures.Future`, and
`shutdown()` (also called on leaving a `with` block) finishes queued tasks and
joins the threads.

## Sinks

`stashlog.flush` provides:

- `StdoutFlush` – writes to standard output, or to a text or binary stream
  given as `stream`.
- `FileFlush` – appends to one file, creating its directory first.
- `RollingFileFlush` – appends to files named
  `<basename><year><month><day><hour+1><min+1><sec+1>-<n>.log`, starting a new
  file once `max_size` bytes have been written to the current one.

`create_flush(flush_type, *args, **kwargs)` builds any `LogFlush` subclass.

## Backup server

```
stashlog-backup-server 8080
```

listens on all interfaces at the given port, serves each client on its own
thread, reads one message of at most 1024 bytes from it and appends it, with a
newline, to `./backup/logfile.log`. The `./backup` directory must already
exist. In code, `stashlog.backup_server.BackupServer(port, callback)` does the
same with any callback; `start()`, `serve_forever()` and `close()` control it.

## Demo

```
stashlog-demo
```

builds a logger named `asynclogger` with a file sink and a rolling-file sink
under `./logfile/`, using `get_config()` and a thread pool of `thread_count`
threads, and logs two rounds of records at every level. Its `ERROR` and
`FATAL` records go to the backup server, so start one first; otherwise each of
them waits through the retries described above.

## Storage helpers

`stashlog.storage_util` holds `FileUtil` (size, times, name, reading a byte
range or the whole file, writing, creating a directory, listing the files of
a directory), `url_decode` and the JSON helpers `serialize` and `unserialize`.
`stashlog.storage_config.StorageConfig` reads a storage server's JSON settings
(`server_port`, `server_ip`, `download_prefix`, `storage_info`,
`deep_storage_dir`, `low_storage_dir`, `bundle_format`) with
`StorageConfig.load(path)`, or from `Storage.conf` once per process with
`StorageConfig.instance()`.

## What it does not do

These are helpers only: the package has no storage server, no HTTP upload or
download service, and no compression of stored files. `bundle_format` is read
and kept but nothing in the package acts on it.