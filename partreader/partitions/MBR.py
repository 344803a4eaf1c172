import io
import enum

MBR_SIZE = 512
MBR_BOOTCODE_SIZE = 446

# https://en.wikipedia.org/wiki/Master_boot_record
class MBR:
    """Boot record layout, used both for the MBR at LBA 0 and for every
    extended boot record in the EBR chain."""
    def __init__(self):
        self.boot_code = None
        self.partition_table = []
        self.boot_signature = None

    @property
    def disk_signature(self):
        return int.from_bytes(self.boot_code[440:444], 'little')

    @staticmethod
    def from_bytes(data):
        return MBR.from_buffer(io.BytesIO(data))

    @staticmethod
    def from_buffer(buff):
        mbr = MBR()
        mbr.boot_code = buff.read(MBR_BOOTCODE_SIZE)
        for _ in range(4):
            mbr.partition_table.append(MBRPartitionEntry.from_buffer(buff))
        # not validated, some tools leave it zeroed on EBRs
        mbr.boot_signature = int.from_bytes(buff.read(2), 'little')
        return mbr

    def to_bytes(self):
        t = self.boot_code
        for pt in self.partition_table:
            t += pt.to_bytes()
        t += self.boot_signature.to_bytes(2, 'little')
        return t

    def __str__(self):
        res = []
        for pt in self.partition_table:
            res.append(str(pt))
        res.append('Signature: %04x' % self.boot_signature)
        return '\n'.join(res)


class CHS:
    """Cylinder/head/sector address in the BIOS 3 byte packing.

    sector holds the sector number in bits 5-0, bits 7-6 are bits 9-8
    of the cylinder. cyl holds bits 7-0 of the cylinder.
    """
    __slots__ = ('head', 'sector_raw', 'cyl_raw')

    def __init__(self, head:int = 0, sector_raw:int = 0, cyl_raw:int = 0):
        self.head = head
        self.sector_raw = sector_raw
        self.cyl_raw = cyl_raw

    @property
    def cylinder(self):
        return self.cyl_raw | ((self.sector_raw >> 6) << 8)

    @property
    def sector(self):
        return self.sector_raw & 0x3f

    def is_zero(self):
        return self.head == 0 and self.sector_raw == 0 and self.cyl_raw == 0

    @staticmethod
    def from_bytes(data):
        return CHS(data[0], data[1], data[2])

    def to_bytes(self):
        return bytes([self.head, self.sector_raw, self.cyl_raw])

    def __eq__(self, other):
        if not isinstance(other, CHS):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return 'CHS(%d, %d, %d)' % (self.head, self.sector_raw, self.cyl_raw)

    def __str__(self):
        return '%d/%d/%d' % (self.cylinder, self.head, self.sector)


class PartitionType(enum.IntEnum):
    EMPTY = 0x00

    DOS_EXTENDED = 0x05
    WIN98_EXTENDED = 0x0F
    LINUX_EXTENDED = 0x85

    LINUX_SWAP = 0x82
    LINUX_DATA = 0x83
    LINUX_LVM = 0x8E
    LINUX_RAID = 0xFD

    GPT_PROTECTIVE = 0xEE

EXTENDED_PARTITION_TYPES = (
    PartitionType.DOS_EXTENDED,
    PartitionType.WIN98_EXTENDED,
    PartitionType.LINUX_EXTENDED,
)

PARTITION_TYPE_NAMES = {
    PartitionType.EMPTY : 'Empty',
    PartitionType.DOS_EXTENDED : 'DOS Extended',
    PartitionType.WIN98_EXTENDED : 'Win98 Extended',
    PartitionType.LINUX_EXTENDED : 'Linux Extended',
    PartitionType.LINUX_SWAP : 'Linux Swap',
    PartitionType.LINUX_DATA : 'Linux Data',
    PartitionType.LINUX_LVM : 'Linux LVM',
    PartitionType.LINUX_RAID : 'Linux RAID',
    PartitionType.GPT_PROTECTIVE : 'GPT Protective',
}

def partition_type_name(ptype:int):
    if ptype in PARTITION_TYPE_NAMES:
        return PARTITION_TYPE_NAMES[ptype]
    return '%02x' % ptype


class PartitionStatus(enum.IntEnum):
    UNBOOTABLE = 0x00
    BOOTABLE = 0x80

def partition_status_name(status:int):
    if status == PartitionStatus.BOOTABLE:
        return 'Bootable'
    if status == PartitionStatus.UNBOOTABLE:
        return 'Unbootable'
    return 'Unexpected %02x' % status


class MBRPartitionEntry:
    """One 16 byte slot of a boot record.

    status and partition_type are kept as raw ints so that values outside
    the known enumerations survive decoding.
    """
    def __init__(self):
        self.status = 0
        self.start_chs = CHS()
        self.partition_type = 0
        self.end_chs = CHS()
        self.FirstLBA = 0
        self.size = 0

    @staticmethod
    def create_empty():
        return MBRPartitionEntry()

    @staticmethod
    def from_bytes(data):
        return MBRPartitionEntry.from_buffer(io.BytesIO(data))

    @staticmethod
    def from_buffer(buff):
        entry = MBRPartitionEntry()
        entry.status = buff.read(1)[0]
        entry.start_chs = CHS.from_bytes(buff.read(3))
        entry.partition_type = buff.read(1)[0]
        entry.end_chs = CHS.from_bytes(buff.read(3))
        entry.FirstLBA = int.from_bytes(buff.read(4), 'little', signed=False)
        entry.size = int.from_bytes(buff.read(4), 'little', signed=False)
        return entry

    def to_bytes(self):
        t = bytes([self.status])
        t += self.start_chs.to_bytes()
        t += bytes([self.partition_type])
        t += self.end_chs.to_bytes()
        t += self.FirstLBA.to_bytes(4, 'little', signed=False)
        t += self.size.to_bytes(4, 'little', signed=False)
        return t

    def is_used(self):
        return self.status != 0 \
            or not self.start_chs.is_zero() \
            or self.partition_type != PartitionType.EMPTY \
            or not self.end_chs.is_zero() \
            or self.FirstLBA != 0 \
            or self.size != 0

    def is_extended(self):
        return self.partition_type in EXTENDED_PARTITION_TYPES

    def is_bootable(self):
        return self.status == PartitionStatus.BOOTABLE

    def is_gpt(self):
        return self.partition_type == PartitionType.GPT_PROTECTIVE

    @property
    def PartitionTypeName(self):
        return partition_type_name(self.partition_type)

    def __eq__(self, other):
        if not isinstance(other, MBRPartitionEntry):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return 'MBRPartitionEntry(%s)' % self.to_bytes().hex()

    def __str__(self):
        if self.is_used() is False:
            return '(Empty)'
        return '%s %s %s %s %d %d' % (
            partition_status_name(self.status),
            self.start_chs,
            partition_type_name(self.partition_type),
            self.end_chs,
            self.FirstLBA,
            self.size
        )
