"""A RAID 5 controller that stripes blocks with rotating parity across drive files."""

from __future__ import annotations

import os
from enum import Enum, auto
from functools import reduce
from typing import BinaryIO, Optional, Sequence, Tuple, Union

DriveSpec = Union[str, bytes, "os.PathLike[str]", BinaryIO, None]


class EventType(Enum):
    """Events that the controller is started with."""

    NORMAL = auto()
    FAILED = auto()
    REPLACED = auto()


class RAID5Controller:
    """Presents an array of equally sized drives as one RAID 5 block device.

    Each drive is either a path, which the controller opens on ``start`` and
    closes on ``shutdown``, or an already opened binary file object, which the
    controller uses as given. A missing or closed drive reads as zeros and
    ignores writes.
    """

    def __init__(
        self,
        drives: Sequence[DriveSpec],
        blocks_per_drive: int,
        block_size: int = 4096,
    ) -> None:
        if len(drives) < 2:
            raise ValueError("a RAID 5 array needs at least two drives")
        if block_size <= 0:
            raise ValueError("block size must be positive")
        if blocks_per_drive < 0:
            raise ValueError("blocks per drive must not be negative")
        self.blocks_per_drive = blocks_per_drive
        self.block_size = block_size
        self.num_disks = len(drives)
        self._paths: list = []
        self._handles: list = []
        for drive in drives:
            if drive is None:
                self._paths.append(None)
                self._handles.append(None)
            elif isinstance(drive, (str, bytes, os.PathLike)):
                self._paths.append(drive)
                self._handles.append(None)
            else:
                self._paths.append(None)
                self._handles.append(drive)
        self._failed: Optional[int] = None

    @property
    def failed_drive(self) -> Optional[int]:
        """Index of the drive currently marked as failed, or None."""
        return self._failed

    def __enter__(self) -> "RAID5Controller":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _open_paths(self) -> None:
        for index, path in enumerate(self._paths):
            if path is None:
                continue
            handle = self._handles[index]
            if handle is None or handle.closed:
                self._handles[index] = open(path, "r+b")

    def _handle(self, drive: int) -> Optional[BinaryIO]:
        if not 0 <= drive < self.num_disks or drive == self._failed:
            return None
        handle = self._handles[drive]
        if handle is None or handle.closed:
            return None
        return handle

    def _read(self, drive: int, stripe: int) -> bytes:
        handle = self._handle(drive)
        if handle is None:
            return bytes(self.block_size)
        handle.seek(stripe * self.block_size)
        chunk = handle.read(self.block_size) or b""
        return chunk + bytes(self.block_size - len(chunk))

    def _write(self, drive: int, stripe: int, data: bytes) -> None:
        handle = self._handle(drive)
        if handle is None:
            return
        handle.seek(stripe * self.block_size)
        handle.write(data)
        handle.flush()

    def _xor(self, *blocks: bytes) -> bytes:
        value = reduce(
            lambda acc, block: acc ^ int.from_bytes(block, "big"), blocks, 0
        )
        return value.to_bytes(self.block_size, "big")

    def _locate(self, block_id: int) -> Tuple[int, int, int]:
        if block_id < 0:
            raise IndexError(f"block id {block_id} is negative")
        stripe, position = divmod(block_id, self.num_disks - 1)
        parity_disk = stripe % self.num_disks
        data_disk = position if position < parity_disk else position + 1
        return stripe, data_disk, parity_disk

    def _others(self, *excluded: Optional[int]) -> range:
        return (d for d in range(self.num_disks) if d not in excluded)

    def _rebuild(self, drive: int) -> None:
        for stripe in range(self.blocks_per_drive):
            parity_disk = stripe % self.num_disks
            if drive == parity_disk:
                blocks = [self._read(d, stripe) for d in self._others(parity_disk)]
            else:
                blocks = [self._read(parity_disk, stripe)]
                blocks += [
                    self._read(d, stripe) for d in self._others(parity_disk, drive)
                ]
            self._write(drive, stripe, self._xor(*blocks))

    def start(self, event_type: EventType, drive_id: int) -> None:
        """Bring the array up after a normal start, a drive failure or a replacement.

        A replaced drive is assumed to be zeroed; it is rebuilt from the others.
        """
        self._open_paths()
        if event_type is EventType.NORMAL:
            self._failed = None
            return
        if not 0 <= drive_id < self.num_disks:
            return
        if event_type is EventType.FAILED:
            self._failed = drive_id
        elif event_type is EventType.REPLACED:
            self._failed = None
            self._rebuild(drive_id)

    def shutdown(self) -> None:
        """Close every open drive."""
        for index, handle in enumerate(self._handles):
            if handle is not None and not handle.closed:
                handle.close()
            if self._paths[index] is not None:
                self._handles[index] = None

    def read_block(self, block_id: int) -> bytes:
        """Return the logical block, reconstructing it if its drive has failed."""
        stripe, data_disk, parity_disk = self._locate(block_id)
        if self._failed == data_disk:
            blocks = [self._read(parity_disk, stripe)]
            blocks += [
                self._read(d, stripe) for d in self._others(parity_disk, self._failed)
            ]
            return self._xor(*blocks)
        return self._read(data_disk, stripe)

    def write_block(self, block_id: int, data: bytes) -> None:
        """Write one logical block and keep the stripe's parity consistent."""
        data = bytes(data)
        if len(data) != self.block_size:
            raise ValueError(
                f"block must be {self.block_size} bytes, got {len(data)}"
            )
        stripe, data_disk, parity_disk = self._locate(block_id)

        if self._failed is None:
            blocks = [
                data if d == data_disk else self._read(d, stripe)
                for d in self._others(parity_disk)
            ]
            self._write(data_disk, stripe, data)
            self._write(parity_disk, stripe, self._xor(*blocks))
            return

        if self._failed == data_disk:
            blocks = [
                self._read(d, stripe) for d in self._others(parity_disk, self._failed)
            ]
            self._write(parity_disk, stripe, self._xor(data, *blocks))
            return

        if self._failed == parity_disk:
            self._write(data_disk, stripe, data)
            return

        old_data = self._read(data_disk, stripe)
        old_parity = self._read(parity_disk, stripe)
        self._write(data_disk, stripe, data)
        self._write(parity_disk, stripe, self._xor(old_parity, old_data, data))

    def capacity(self) -> int:
        """Number of logical blocks the array holds."""
        return (self.num_disks - 1) * self.blocks_per_drive