import pytest

from situation.hardware import DriveType, StorageController, controller_type, disk_type


@pytest.mark.parametrize(
    "drive, name",
    [
        (DriveType.FDD, "floppy"),
        (DriveType.HDD, "hdd"),
        (DriveType.ODD, "optical"),
        (DriveType.SSD, "ssd"),
        (DriveType.UNKNOWN, "unknown"),
        (None, "unknown"),
    ],
)
def test_disk_type(drive, name):
    assert disk_type(drive) == name


@pytest.mark.parametrize(
    "controller, name",
    [
        (StorageController.IDE, "ide"),
        (StorageController.MMC, "mmc"),
        (StorageController.NVME, "nvme"),
        (StorageController.SCSI, "scsi"),
        (StorageController.VIRTIO, "virtio"),
        (StorageController.UNKNOWN, "unknown"),
        (None, "unknown"),
    ],
)
def test_controller_type(controller, name):
    assert controller_type(controller) == name


def test_names_are_distinct():
    names = {disk_type(d) for d in DriveType}
    assert len(names) == len(DriveType)
    names = {controller_type(c) for c in StorageController}
    assert len(names) == len(StorageController)