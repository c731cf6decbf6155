# fixkit

Building blocks for working with FIX (Financial Information eXchange)
messages and sessions. It is plain Python and uses no third-party
libraries.

## What is inside

- `fixkit.fieldvalues`: typed FIX field values that read from and write to
  their wire form. The classes are `FixBoolean` (`Y`/`N`), `FixBytes`,
  `FixString`, `FixDecimal` (written with a fixed `scale`), `FixFloat`
  (a leading `+` and exponents are rejected), `FixInt` and
  `FixUTCTimestamp` (with `TimestampPrecision` of `SECONDS`, `MILLIS`,
  `MICROS` or `NANOS`). The module also has the `atoi` and `parse_uint`
  helpers. A value that cannot be read raises `ValueError`.
- `fixkit.field_map`: `FieldMap`, a thread-safe collection of tagged
  fields. It has typed getters and setters (`get_string`, `get_int`,
  `get_bool`, `get_time`, `get_bytes`, `get_field`, `set_*`), `remove`,
  `clear`, `copy_into`, `sorted_tags` with a pluggable sort key, `write`
  (tag=value<SOH> encoding), and the `length` and `total` sums used for
  BodyLength and CheckSum. A missing tag raises `FieldMissingError`, and a
  value that cannot be parsed raises `IncorrectDataFormatError`. Both are
  subclasses of `FieldMapError`.
- `fixkit.timerange`: `TimeOfDay`, `parse_time_of_day`, `Weekday` and
  `TimeRange`, which cover daily and weekly session windows in any
  `tzinfo`. Ranges are built with `new_utc_time_range`,
  `new_time_range_in_location`, `new_utc_week_range` and
  `new_week_range_in_location`. `in_range` and `in_same_range` treat a
  missing range (`None`) as always matching.
- `fixkit.events`: the `Event` kinds and `EventTimer`, a one-shot timer
  that runs a task on a background thread. It fires once each time `reset`
  arms it, and `stop` can be called more than once. It is also a context
  manager.
- `fixkit.session_settings`: `SessionSettings`, a dataclass of per-session
  options.
- Logging:
  - `fixkit.log` holds `SessionID` and the `Log` and `LogFactory`
    interfaces.
  - `fixkit.screen_log` writes to standard output.
  - `fixkit.file_log` has `FileLog` and `FileLogFactory`, which append to
    `<prefix>.event.current.log` and `<prefix>.messages.current.log`, and
    the helpers `session_id_filename_prefix` and `open_or_create_file`.
  - `fixkit.sql_log` has `SqlLog` and `SqlLogFactory`, which write rows to
    the `messages_log` and `event_log` tables. It also has `sql_string` and
    `postgres_placeholder`.
  - `fixkit.composite_log` has `CompositeLog` and `CompositeLogFactory`,
    which fan each record out to several logs.

## Examples

Reading and writing field values:

```python
from fixkit.fieldvalues import FixInt, FixUTCTimestamp, TimestampPrecision

FixInt.read(b"15")                  # 15
FixInt(5).write()                   # b"5"

ts = FixUTCTimestamp.read(b"20160208-22:07:16.310")
ts.precision                        # TimestampPrecision.MILLIS
```

Building a field map:

```python
from fixkit.field_map import FieldMap, FieldMissingError

fields = FieldMap()
fields.set_string(1, "hello").set_int(2, 256)
fields.get_int(2)                   # 256
fields.get_string(2)                # "256"

try:
    fields.get_string(44)
except FieldMissingError:
    ...
```

Checking a session window:

```python
from datetime import datetime, timezone
from fixkit.timerange import TimeOfDay, Weekday, new_utc_week_range

week = new_utc_week_range(TimeOfDay(3, 0, 0), TimeOfDay(18, 0, 0),
                          Weekday.MONDAY, Weekday.THURSDAY)
week.is_in_range(datetime(2004, 7, 28, 2, 0, tzinfo=timezone.utc))  # True
```

Logging to several places at once:

```python
from fixkit.composite_log import CompositeLogFactory
from fixkit.file_log import FileLogFactory
from fixkit.screen_log import ScreenLogFactory

factory = CompositeLogFactory([ScreenLogFactory(), FileLogFactory("logs")])
log = factory.create()
log.on_eventf("session %s started", "A")
```

## What it does not do

- It has no session engine. There is no initiator, no acceptor, no network
  connection and no state machine for logon, heartbeat or resend. It has
  no command-line program.
- It does not parse whole FIX messages and has no data dictionary.
  `FieldMap` works on individual fields.
- It does not read settings files. You pass log directories and data
  source names to the factories directly.
- `SqlLogFactory` connects to SQLite on its own. For any other driver you
  must supply a `connector` callable. The log does not create its tables,
  so `messages_log` and `event_log` must already exist.
- It has no message store and no log that writes to MongoDB.

## Running the tests

```
pip install -e .[test]
pytest
```