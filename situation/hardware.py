"""Naming of disk drive types and storage controllers."""

from __future__ import annotations

import enum
from typing import Optional


class DriveType(enum.Enum):
    """Kind of a disk drive."""

    UNKNOWN = 0
    HDD = 1
    FDD = 2
    ODD = 3
    SSD = 4


class StorageController(enum.Enum):
    """Kind of controller a disk is attached to."""

    UNKNOWN = 0
    IDE = 1
    SCSI = 2
    NVME = 3
    VIRTIO = 4
    MMC = 5


_DRIVE_NAMES = {
    DriveType.FDD: "floppy",
    DriveType.HDD: "hdd",
    DriveType.ODD: "optical",
    DriveType.SSD: "ssd",
}

_CONTROLLER_NAMES = {
    StorageController.IDE: "ide",  # Integrated Drive Electronics
    StorageController.MMC: "mmc",  # multi-media controller
    StorageController.NVME: "nvme",  # Non-volatile Memory Express
    StorageController.SCSI: "scsi",  # Small computer system interface
    StorageController.VIRTIO: "virtio",  # virtualized storage
}


def disk_type(drive_type: Optional[DriveType]) -> str:
    """Return the name of a drive type, "unknown" when it has none."""
    return _DRIVE_NAMES.get(drive_type, "unknown")


def controller_type(controller: Optional[StorageController]) -> str:
    """Return the name of a storage controller, "unknown" when it has none."""
    return _CONTROLLER_NAMES.get(controller, "unknown")