# pollwatch

`pollwatch` watches files and directories for changes. It periodically
stats the watched paths, remembers their modification and status-change
times (in whole seconds), and works out what changed between two scans.
It needs nothing beyond the standard library.

## Installation

```
pip install pollwatch
```

## What it reports

Each change is delivered as an `Event` (from `pollwatch.events`) carrying
the path, the time of the scan and a tuple of `EventFlag` values. The
polling monitor produces these flags:

- `EventFlag.Created`: a path appeared since the previous scan.
- `EventFlag.Updated`: its modification time moved forward.
- `EventFlag.AttributeModified`: its status-change time moved forward.
- `EventFlag.Removed`: a path seen in the previous scan is gone.

`Event.mask` combines the flags into one bit mask and `Event.has(flag)`
checks for one. Names and flags convert both ways with
`event_flag_by_name` and `event_flag_name`; `flags_from_names` resolves
several names at once. An unknown name or value raises `FswError` with
`ErrorCode.UNKNOWN_VALUE`.

## Using a session

A `Session` (from `pollwatch.session`) holds the configuration of one
monitoring run: the paths, the callback, the latency, recursion, symlink
handling and filters. Configuration takes effect at the next `start()`,
which builds the monitor and blocks until `stop()` is called from another
thread.

```python
import threading
import time

from pollwatch.events import MonitorType
from pollwatch.library import init_library
from pollwatch.session import Session


def on_events(events, data):
    for event in events:
        print(event.path, [flag.name for flag in event.flags])


init_library()
session = Session(MonitorType.POLL)
session.add_path("some/directory")
session.set_callback(on_events, None)
session.set_recursive(True)
session.set_latency(1.0)

worker = threading.Thread(target=session.start)
worker.start()
time.sleep(5)
session.stop()
worker.join()
session.destroy()
```

A session can also be used as a context manager; leaving the `with`
block destroys it.

Failures raise `FswError` (from `pollwatch.errors`), whose `code` is an
`ErrorCode`: `CALLBACK_NOT_SET`, `PATHS_NOT_SET`, `INVALID_LATENCY`,
`MONITOR_ALREADY_RUNNING`, `SESSION_UNKNOWN` for a destroyed session, and
so on. Every session operation also records its status for the calling
thread, which `last_error()` from `pollwatch.library` returns.

## Using the monitor directly

`create_monitor(kind, paths, callback, context)` from `pollwatch.factory`
returns a monitor for a `MonitorType` or a type name. An unknown name
gives `None`; a type that is not available raises `FswError` with
`ErrorCode.UNKNOWN_MONITOR_TYPE`. `get_types()` lists the known names
(`["poll_monitor"]`) and `exists_type(name)` checks one.

`PollMonitor` (from `pollwatch.poll`) can be driven by hand:
`collect_initial_data()` takes the first snapshot and `collect_data()`
scans again and returns the list of changes since the previous scan.
`start()` runs the polling loop, waiting `latency` seconds (at least one)
between scans, and `stop()` ends it.

## Filters

- `MonitorFilter` matches paths with a regular expression. A path that
  matches an include filter is accepted, one that matches only exclude
  filters is rejected, and everything else is accepted. An invalid
  expression raises `FswError` with `ErrorCode.INVALID_REGEX`.
- `EventTypeFilter` keeps only the flags it names; events left with no
  flags are dropped.

## Diagnostics

`set_verbose(True)` from `pollwatch.logs` turns on the diagnostic
messages written while scanning. The same module offers `log`, `logf`,
`flog`, `flogf`, `log_perror`, `logf_perror` and `string_from_format`.

## Limitations

- Only the polling monitor exists. `MonitorType.SYSTEM_DEFAULT` and
  `MonitorType.POLL` create it; the other `MonitorType` values raise
  `FswError` with `ErrorCode.UNKNOWN_MONITOR_TYPE`.
- There is no command-line tool; the package is a library.
- The allow-overflow, directory-only and property settings are stored
  and handed to the monitor but do not change what the polling monitor
  reports, and the `extended` field of `MonitorFilter` is not used.