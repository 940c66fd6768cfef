"""Read partitions of a disk image and write files into them"""
import struct
from contextlib import contextmanager

from pyfatfs.PyFatFS import PyFatFS

from qc_runner import exceptions

SECTOR_SIZE = 512
MBR_PARTITION_TABLE_OFFSET = 446
MBR_ENTRY_SIZE = 16
MBR_SIGNATURE = b'\x55\xaa'


def partition_offset(image_path, partition):
    """Returns byte offset of primary partition (1-4) on MBR image"""

    if not 1 <= partition <= 4:
        raise exceptions.ImageError(f"Only primary partitions are supported, got {partition}")

    with open(image_path, 'rb') as image:
        mbr = image.read(SECTOR_SIZE)

    if len(mbr) < SECTOR_SIZE or mbr[510:512] != MBR_SIGNATURE:
        raise exceptions.ImageError(f"{image_path} has no MBR partition table")

    entry_start = MBR_PARTITION_TABLE_OFFSET + (partition - 1) * MBR_ENTRY_SIZE
    entry = mbr[entry_start:entry_start + MBR_ENTRY_SIZE]
    partition_type = entry[4]
    first_lba, = struct.unpack('<I', entry[8:12])

    if partition_type == 0 or first_lba == 0:
        raise exceptions.ImageError(f"Partition {partition} of {image_path} is empty")

    return first_lba * SECTOR_SIZE


@contextmanager
def interact(image_path, partition):
    """Opens FAT filesystem of the partition for reading and writing"""

    filesystem = PyFatFS(str(image_path), offset=partition_offset(image_path, partition))
    try:
        yield filesystem
    finally:
        filesystem.close()


def write_file(image_path, partition, path, content):
    """Writes text file to partition, creating parent directories"""

    with interact(image_path, partition) as filesystem:
        parent = path.rsplit('/', 1)[0]
        if parent and not filesystem.exists(parent):
            filesystem.makedirs(parent)
        filesystem.writetext(path, content)
