# raidfive

A small RAID 5 controller that stripes fixed-size blocks across a set of
drive files. It keeps one parity block per stripe and rotates which drive
holds it. One drive may fail: reads of that drive's blocks are
reconstructed from parity, and writes keep parity consistent. A replaced
drive is rebuilt eagerly from the surviving drives.

## Install

```
pip install .
```

## Usage

Everything lives in `raidfive.controller`: the `RAID5Controller` class and
the `EventType` enum.

Each drive passed to `RAID5Controller` can be one of these:

- a path, which the controller opens (`"r+b"`) on `start()` and closes on
  `shutdown()`;
- a binary file object that is already open, which is used as it is and
  closed on `shutdown()`;
- `None`, meaning no drive: it reads as zeros and ignores writes.

A drive file must already exist. It should hold
`blocks_per_drive * block_size` bytes, all zero to begin with.

```python
from raidfive.controller import EventType, RAID5Controller

blocks_per_drive, block_size = 8, 4
paths = [f"drive_{i}.bin" for i in range(4)]
for path in paths:
    with open(path, "wb") as f:
        f.write(bytes(blocks_per_drive * block_size))

with RAID5Controller(paths, blocks_per_drive, block_size) as raid:
    raid.start(EventType.NORMAL, 0)
    raid.write_block(0, b"AAA0")
    assert raid.read_block(0) == b"AAA0"

    raid.start(EventType.FAILED, 2)   # degraded mode
    assert raid.failed_drive == 2
    assert raid.read_block(0) == b"AAA0"

    print(raid.capacity())            # (drives - 1) * blocks_per_drive
```

Leaving the `with` block calls `shutdown()`.

Events passed to `start(event_type, drive_id)`:

- `EventType.NORMAL`: all drives are healthy, and any failure mark is
  cleared.
- `EventType.FAILED`: marks `drive_id` as failed, and no I/O goes to it.
- `EventType.REPLACED`: `drive_id` has been swapped for a zeroed drive.
  Its contents are rebuilt from the others, and the array is healthy again.

A `drive_id` out of range is ignored for `FAILED` and `REPLACED`.

Errors:

- The constructor raises `ValueError` when there are fewer than two drives,
  the block size is not positive, or `blocks_per_drive` is negative.
- `write_block` raises `ValueError` when the data is not exactly
  `block_size` bytes long.
- `read_block` and `write_block` raise `IndexError` for a negative block id.

## What it does not do

This package is a library only. It has no command-line tool, and it does
not create or size drive files for you. It tracks at most one failed drive
at a time, and it keeps no state on disk beyond the blocks themselves.

## Tests

```
pip install .[test]
pytest
```