import io
import uuid

from partreader.utils import guid_from_bytes_le, sizeof_fmt

GPT_SIGNATURE = b'EFI PART'
GPT_HEADER_DEFINED_SIZE = 92
GPT_HEADER_SIZE = 184 # defined fields + 92 reserved bytes
GPT_ENTRY_SIZE = 128
GPT_NAME_SIZE = 72 # 36 UTF-16 code units

NULL_GUID = uuid.UUID('00000000-0000-0000-0000-000000000000')

# https://en.wikipedia.org/wiki/GUID_Partition_Table
class GPTHeader:
    def __init__(self):
        self.Signature = None
        self.MinorVersion = None
        self.MajorVersion = None
        self.HeaderSize = None
        self.HeaderCRC32 = None
        self.Reserved = None
        self.CurrentLBA = None
        self.BackupLBA = None
        self.FirstUsableLBA = None
        self.LastUsableLBA = None
        self.DiskGUID = None
        self.PartitionEntriesStart = None
        self.NumberOfPartitionEntries = None
        self.SizeOfPartitionEntry = None
        self.PartitionEntryArrayCRC32 = None
        self.Padding = None

    @property
    def signature_valid(self):
        return self.Signature == GPT_SIGNATURE

    @staticmethod
    def from_bytes(data):
        return GPTHeader.from_buffer(io.BytesIO(data))

    @staticmethod
    def from_buffer(buff):
        # signature, header size and both CRCs are decoded but not enforced
        gpt = GPTHeader()
        gpt.Signature = buff.read(8)
        gpt.MinorVersion = int.from_bytes(buff.read(2), 'little')
        gpt.MajorVersion = int.from_bytes(buff.read(2), 'little')
        gpt.HeaderSize = int.from_bytes(buff.read(4), 'little')
        gpt.HeaderCRC32 = int.from_bytes(buff.read(4), 'little')
        gpt.Reserved = int.from_bytes(buff.read(4), 'little')
        gpt.CurrentLBA = int.from_bytes(buff.read(8), 'little')
        gpt.BackupLBA = int.from_bytes(buff.read(8), 'little')
        gpt.FirstUsableLBA = int.from_bytes(buff.read(8), 'little')
        gpt.LastUsableLBA = int.from_bytes(buff.read(8), 'little')
        gpt.DiskGUID = guid_from_bytes_le(buff.read(16))
        gpt.PartitionEntriesStart = int.from_bytes(buff.read(8), 'little')
        gpt.NumberOfPartitionEntries = int.from_bytes(buff.read(4), 'little')
        gpt.SizeOfPartitionEntry = int.from_bytes(buff.read(4), 'little')
        gpt.PartitionEntryArrayCRC32 = int.from_bytes(buff.read(4), 'little')
        gpt.Padding = buff.read(GPT_HEADER_SIZE - GPT_HEADER_DEFINED_SIZE)
        return gpt

    def to_bytes(self):
        t = self.Signature
        t += self.MinorVersion.to_bytes(2, 'little')
        t += self.MajorVersion.to_bytes(2, 'little')
        t += self.HeaderSize.to_bytes(4, 'little')
        t += self.HeaderCRC32.to_bytes(4, 'little')
        t += self.Reserved.to_bytes(4, 'little')
        t += self.CurrentLBA.to_bytes(8, 'little')
        t += self.BackupLBA.to_bytes(8, 'little')
        t += self.FirstUsableLBA.to_bytes(8, 'little')
        t += self.LastUsableLBA.to_bytes(8, 'little')
        t += self.DiskGUID.bytes_le
        t += self.PartitionEntriesStart.to_bytes(8, 'little')
        t += self.NumberOfPartitionEntries.to_bytes(4, 'little')
        t += self.SizeOfPartitionEntry.to_bytes(4, 'little')
        t += self.PartitionEntryArrayCRC32.to_bytes(4, 'little')
        t += self.Padding
        return t

    def entry_offset(self, index:int, block_size:int):
        return self.PartitionEntriesStart * block_size + index * self.SizeOfPartitionEntry

    def __str__(self):
        return 'Signature %s Ver %d.%d HeaderSize %04x HeaderCRC %08x CurrentLBA %d BackupLBA %d FirstUsableLBA %d LastUsableLBA %d UUID %s PartitionArrayLBA %d PartitionCount %d PartitionEntrySize %d PartitionArrayCRC %08x' % (
            self.Signature.hex(),
            self.MajorVersion,
            self.MinorVersion,
            self.HeaderSize,
            self.HeaderCRC32,
            self.CurrentLBA,
            self.BackupLBA,
            self.FirstUsableLBA,
            self.LastUsableLBA,
            self.DiskGUID,
            self.PartitionEntriesStart,
            self.NumberOfPartitionEntries,
            self.SizeOfPartitionEntry,
            self.PartitionEntryArrayCRC32,
        )

class GPTPartitionEntry:
    def __init__(self):
        self.PartitionTypeGUID = None
        self.UniquePartitionGUID = None
        self.FirstLBA = None
        self.LastLBA = None
        self.Attributes = None
        self.PartitionName = None
        self.PartitionType = None

    @staticmethod
    def from_bytes(data):
        return GPTPartitionEntry.from_buffer(io.BytesIO(data))

    @staticmethod
    def from_buffer(buff):
        entry = GPTPartitionEntry()
        entry.PartitionTypeGUID = guid_from_bytes_le(buff.read(16))
        entry.UniquePartitionGUID = guid_from_bytes_le(buff.read(16))
        entry.FirstLBA = int.from_bytes(buff.read(8), 'little')
        entry.LastLBA = int.from_bytes(buff.read(8), 'little')
        entry.Attributes = int.from_bytes(buff.read(8), 'little')
        entry.PartitionName = buff.read(GPT_NAME_SIZE).decode('utf-16-le', errors='replace').strip('\x00')
        entry.PartitionType = gpt_type_name(entry.PartitionTypeGUID)
        return entry

    def is_used(self):
        return self.PartitionTypeGUID != NULL_GUID

    @property
    def sectors(self):
        return self.LastLBA - self.FirstLBA + 1

    def __str__(self):
        return '%s %s %d %d %016x %s (%s) %s' % (
            self.PartitionTypeGUID,
            self.UniquePartitionGUID,
            self.FirstLBA,
            self.LastLBA,
            self.Attributes,
            self.PartitionName,
            self.PartitionType,
            sizeof_fmt(self.sectors * 512),
        )

def gpt_type_name(guid:uuid.UUID):
    key = str(guid).upper()
    return WELL_KNOWN_GPT_GUIDS.get(key, key)

WELL_KNOWN_GPT_GUIDS = {
    '00000000-0000-0000-0000-000000000000' : 'Unused entry',
    '024DEE41-33E7-11D3-9D69-0008C781F39F' : 'MBR partition scheme',
    'C12A7328-F81F-11D2-BA4B-00A0C93EC93B' : 'EFI System partition',
    '21686148-6449-6E6F-744E-656564454649' : 'BIOS boot partition',
    'E3C9E316-0B5C-4DB8-817D-F92DF00215AE' : 'Microsoft Reserved Partition',
    'EBD0A0A2-B9E5-4433-87C0-68B6B72699C7' : 'Basic data partition',
    '5808C8AA-7E8F-42E0-85D2-E1E90434CFB3' : 'LDM metadata partition',
    'AF9B60A0-1431-4F62-BC68-3311714A69AD' : 'LDM data partition',
    'DE94BBA4-06D1-4D40-A16A-BFD50179D6AC' : 'Windows Recovery Environment',
    'E75CAF8F-F680-4CEE-AFA3-B001E56EFC2D' : 'Storage Spaces partition',
    '0FC63DAF-8483-4772-8E79-3D69D8477DE4' : 'Linux filesystem data',
    'A19D880F-05FC-4D3B-A006-743F0F84911E' : 'Linux RAID partition',
    '44479540-F297-41B2-9AF7-D131D5F0458A' : 'Linux root (x86)',
    '4F68BCE3-E8CD-4DB1-96E7-FBCAF984B709' : 'Linux root (x86-64)',
    '69DAD710-2CE4-4E3C-B16C-21A1D49ABED3' : 'Linux root (ARM 32-bit)',
    'B921B045-1DF0-41C3-AF44-4C6F280D3FAE' : 'Linux root (AArch64)',
    '8484680C-9521-48C6-9C11-B0720656F69E' : 'Linux /usr (x86-64)',
    'BC13C2FF-59E6-4262-A352-B275FD6F7172' : 'Extended Boot Loader (XBOOTLDR)',
    '0657FD6D-A4AB-43C4-84E5-0933C84B4F4F' : 'Linux swap',
    'E6D6D379-F507-44C2-A23C-238F2A3DF928' : 'Linux LVM',
    '933AC7E1-2EB4-4F13-B844-0E14E2AEF915' : 'Linux /home',
    '3B8F8425-20E0-4F3B-907F-1A25A76F98E8' : 'Linux /srv',
    '7FFEC5C9-2D00-49B7-8941-3EA10A5586B7' : 'Plain dm-crypt partition',
    'CA7D7CCB-63ED-4C53-861C-1742536059CC' : 'LUKS partition',
    '8DA63339-0007-60C0-C436-083AC8230908' : 'Linux reserved',
    '83BD6B9D-7F41-11DC-BE0B-001560B84F0F' : 'FreeBSD boot',
    '516E7CB4-6ECF-11D6-8FF8-00022D09712B' : 'FreeBSD disklabel',
    '516E7CB5-6ECF-11D6-8FF8-00022D09712B' : 'FreeBSD swap',
    '516E7CB6-6ECF-11D6-8FF8-00022D09712B' : 'FreeBSD UFS',
    '516E7CBA-6ECF-11D6-8FF8-00022D09712B' : 'FreeBSD ZFS',
    '48465300-0000-11AA-AA11-00306543ECAC' : 'Apple HFS+',
    '7C3457EF-0000-11AA-AA11-00306543ECAC' : 'Apple APFS container',
    '55465300-0000-11AA-AA11-00306543ECAC' : 'Apple UFS container',
    '52414944-0000-11AA-AA11-00306543ECAC' : 'Apple RAID',
    '426F6F74-0000-11AA-AA11-00306543ECAC' : 'Apple Boot (Recovery HD)',
    '6A898CC3-1DD2-11B2-99A6-080020736631' : 'Solaris /usr or Apple ZFS',
    '6A82CB45-1DD2-11B2-99A6-080020736631' : 'Solaris boot',
    '6A85CF4D-1DD2-11B2-99A6-080020736631' : 'Solaris root',
    'FE3A2A5D-4F32-41A7-B725-ACCC3285A309' : 'ChromeOS kernel',
    '3CB8E202-3B7E-47DD-8A3C-7FF2A13CFCEC' : 'ChromeOS rootfs',
    '9D275380-40AD-11DB-BF97-000C2911D1B8' : 'VMware vmkcore',
    'AA31E02A-400F-11DB-9590-000C2911D1B8' : 'VMware VMFS',
    '9E1A2D38-C612-4316-AA26-8B49521E5A8B' : 'PReP boot',
}
