# syskit

A small toolkit of systems-programming building blocks for POSIX machines:

- **Thread pools**: a future-returning `ThreadPool` and a queue-driven
  `TaskPool` that runs `Task` objects (`syskit.threadpool`).
- **Reactor**: a `Reactor` dispatching readiness events to `Handler`
  callbacks through a `Poller` (`syskit.reactor`), and a `SwapCaseServer`
  built on it that answers every message with its letters' case swapped
  (`syskit.swapcase_server`).
- **Blocking servers**: the same swap-case service served one thread or one
  process per connection (`syskit.blocking_servers`), plus a line-based
  client (`syskit.echo_client`).
- **Files and disks**: file-system totals (`syskit.diskusage`) and a
  newest-first listing of every regular file under a directory
  (`syskit.filetree`).
- **JSON**: JSON Pointer lookup, JSON Patch application and diffing, and
  merge patches (`syskit.patching`); typed records loaded from and saved to
  JSON files (`syskit.records`).
- **Logging**: ready-made console, file and rolling-file loggers
  (`syskit.logsetup`).
- **ZeroMQ**: a request/reply hello-world pair (`syskit.hello`) and a
  DEALER echo server that reports its socket events, with a matching client
  (`syskit.monitor`).

## Installation

```
pip install .
```

Python 3.10 or newer is required. The ZeroMQ modules use `pyzmq`, which is
installed as a dependency.

## Using the library

### Swapping case

```python
from syskit.textcase import swap_case, swap_case_bytes

swap_case("1a2B3C4d")         # '1A2b3c4D'
swap_case_bytes(b"leacock")   # b'LEACOCK'
```

Only ASCII letters change; everything else is passed through unchanged.

### Thread pools

```python
from syskit.threadpool import ThreadPool

with ThreadPool(4) as pool:
    futures = [pool.submit(lambda i=i: i * i) for i in range(8)]
    print([f.result() for f in futures])
```

Submitting to a pool that has been shut down raises `PoolStoppedError`.
On shutdown, `ThreadPool` finishes the tasks already queued.

`TaskPool` is the simpler variant: wrap a callable and its arguments in a
`Task` and hand it to `add_task`; the workers run tasks as they arrive until
`shutdown` is called, after which tasks still queued are not run.

### JSON Pointer and Patch

```python
from syskit.patching import resolve_pointer, apply_patch, diff, merge_patch

doc = {"baz": ["one", "two", "three"], "foo": "bar"}
resolve_pointer(doc, "/baz/1")   # 'two'

patched = apply_patch(doc, [
    {"op": "replace", "path": "/baz", "value": "boo"},
    {"op": "add", "path": "/hello", "value": ["world"]},
    {"op": "remove", "path": "/foo"},
])
# {'baz': 'boo', 'hello': ['world']}

apply_patch(patched, diff(patched, doc)) == doc   # True

merge_patch({"a": "b", "c": {"d": "e", "f": "g"}},
            {"a": "z", "c": {"f": None}})
# {'a': 'z', 'c': {'d': 'e'}}
```

Bad pointers raise `PointerError`; operations that cannot be applied raise
`PatchError`. The input document is never modified.

### Records

`syskit.records` holds `Address`, `Student`, `SimpleSettings` and the
`Project` layout (`OutputInfo`, `TrackInfo`, `PieceInfo`). Use
`load_project` / `save_project` for project files and `load_simple` for
flat settings files. A track holds at most five pieces.

### Logging

```python
from syskit.logsetup import console_logger

log = console_logger("test")
log.info("Hello world")
```

`file_and_console_logger` additionally appends to a file using the detailed
pattern from `pattern_formatter`, and `rolling_file_logger` rotates its file
once it grows past a size limit.

### Reactor

`Reactor` owns a `Poller`. Register a `Handler` wrapping a socket, enable
read or write interest on it, give it callbacks, and call `run_once` or
`loop`; `stop` ends the loop. `SwapCaseServer` is a complete example.

## Commands

Every command below is installed with the package.

| Command | What it does |
| --- | --- |
| `syskit-swapcase-server` | Reactor-based swap-case TCP server (port 5555 by default) |
| `syskit-blocking-server` | Thread- or process-per-connection swap-case server (`--mode thread` or `--mode fork`) |
| `syskit-echo-client` | Sends standard-input lines to a server and prints replies |
| `syskit-threadpool` | Runs the thread-pool demonstration (`--demo futures` or `--demo tasks`) |
| `syskit-diskusage` | Prints total, free and available space of a file system |
| `syskit-filetree` | Lists files under a directory, newest first, and writes them to `filesinfo.txt` |
| `syskit-variadic` | Shows calls dispatched on their number of arguments |
| `syskit-inputwatch` | Echoes typed characters until `q` is entered |
| `syskit-logdemo` | Writes sample log records (`--demo console`, `file` or `rolling`) |
| `syskit-hello` | ZeroMQ request/reply hello-world (`server` or `client`) |
| `syskit-monitor` | ZeroMQ server that reports socket events (`server`), and its client (`client`) |

Start a server in one terminal and a client in another:

```
syskit-swapcase-server
syskit-echo-client
```

or, for ZeroMQ:

```
syskit-hello server
syskit-hello client
```

## What is not included

The package has no ZeroMQ publish/subscribe example and no general ZeroMQ
helper functions (string send/receive, message dumps, socket identities);
the ZeroMQ modules use `pyzmq` directly.

## Running the tests

```
pip install .[test]
pytest
```