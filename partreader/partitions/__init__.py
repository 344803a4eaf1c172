from typing import List
from partreader import logger
from partreader.errors import MultipleBootable
from partreader.partitions.MBR import MBR, MBRPartitionEntry, MBR_SIZE
from partreader.partitions.GPT import GPTHeader, GPTPartitionEntry, GPT_HEADER_SIZE, GPT_ENTRY_SIZE

GPT_HEADER_LBA = 1
DEFAULT_MAX_DEPTH = 128

class PartitionTable:
    """Result of one analysis run.

    entries holds the DOS style entries in discovery order: always the
    four primary slots first (unused ones as empty placeholders), then
    the logical partitions in EBR chain order. gpt_entries holds the used
    GPT entries in array order.
    """
    def __init__(self, device:str = None):
        self.device = device
        self.entries:List[MBRPartitionEntry] = []
        self.gpt_header:GPTHeader = None
        self.gpt_entries:List[GPTPartitionEntry] = []

    def __len__(self):
        return len(self.entries) + len(self.gpt_entries)

    def is_gpt(self):
        return any(pt.is_gpt() for pt in self.entries)

    def get_bootable(self):
        """Returns the 1-based index of the bootable DOS entry, 0 if none.

        Raises MultipleBootable (carrying the first index) when more than
        one entry is marked bootable.
        """
        index = 0
        for i, pt in enumerate(self.entries, 1):
            if pt.is_bootable() is False:
                continue
            if index != 0:
                raise MultipleBootable(self.device, index)
            index = i
        return index

    def report(self):
        res = []
        res.append('Total partitions: %d' % len(self))
        try:
            res.append('Bootable: %d' % self.get_bootable())
        except MultipleBootable as e:
            res.append('Bootable: %d (%s)' % (e.index, e))
        for i, pt in enumerate(self.entries, 1):
            res.append('%d %s' % (i, pt))
        if self.gpt_header is not None:
            res.append('GPT: %s' % self.gpt_header)
        for i, pt in enumerate(self.gpt_entries, 1):
            res.append('GPT %d %s' % (i, pt))
        return '\n'.join(res)

    def __str__(self):
        return self.report()


class PartitionFinder:
    def __init__(self, disk, max_depth:int = DEFAULT_MAX_DEPTH):
        self.disk = disk
        self.max_depth = max_depth
        self.table = PartitionTable(disk.name)
        self.__visited = set()

    def find_partitions(self):
        self.read_boot_record(0)
        if self.table.is_gpt():
            self.read_gpt()
        return self.table

    def read_boot_record(self, base:int, depth:int = 0):
        self.__visited.add(base)
        mbr = MBR.from_bytes(self.disk.read_record(base, MBR_SIZE))
        logger.debug('[PARTITION] Boot record at offset %d\n%s' % (base, mbr))

        for pt in mbr.partition_table:
            if pt.is_used() and not pt.is_extended():
                self.table.entries.append(pt)
            elif base == 0:
                # the primary table always reports four slots
                self.table.entries.append(MBRPartitionEntry.create_empty())

        for pt in mbr.partition_table:
            if pt.is_extended() is False:
                continue
            offset = base + pt.FirstLBA * self.disk.sector_size
            if offset in self.__visited:
                logger.warning('[PARTITION] %s: EBR at offset %d links back to offset %d, not following' % (self.disk.name, base, offset))
                continue
            if depth + 1 > self.max_depth:
                logger.warning('[PARTITION] %s: EBR chain deeper than %d, not following offset %d' % (self.disk.name, self.max_depth, offset))
                continue
            logger.debug('[PARTITION] Following extended partition to offset %d' % offset)
            self.read_boot_record(offset, depth + 1)

    def read_gpt(self):
        offset = GPT_HEADER_LBA * self.disk.sector_size
        header = GPTHeader.from_bytes(self.disk.read_record(offset, GPT_HEADER_SIZE))
        logger.debug('[PARTITION] GPT header %s' % header)
        if header.signature_valid is False:
            logger.debug('[PARTITION] GPT header signature mismatch: %s' % header.Signature.hex())

        entries = []
        for i in range(header.NumberOfPartitionEntries):
            offset = header.entry_offset(i, self.disk.sector_size)
            entry = GPTPartitionEntry.from_bytes(self.disk.read_record(offset, GPT_ENTRY_SIZE))
            logger.log(1, '[PARTITION] GPT entry %d at offset %d: %s' % (i, offset, entry))
            if entry.is_used() is False:
                continue
            entries.append(entry)

        self.table.gpt_header = header
        self.table.gpt_entries.extend(entries)


def analyze(path:str):
    """Reads the partition tables of a device or disk image.

    Raises a PartitionError subclass on the first failure, the device is
    closed on every path.
    """
    from partreader.disks import Disk

    with Disk.from_file(path) as disk:
        return disk.list_partitions()
