"""RAID 5 block controller with rotating parity over file-backed drives."""

__version__ = "0.1.0"
__all__ = ["controller"]