import os
import sys
from config import *

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from partreader.partitions.MBR import MBR, MBRPartitionEntry, CHS, PartitionType, PartitionStatus


def test_chs_high_cylinder_bits():
    chs = CHS.from_bytes(bytes([2, 0b01000011, 0x0A]))
    assert chs.cylinder == 266
    assert chs.sector == 3
    assert chs.head == 2
    assert str(chs) == '266/2/3'
    assert chs.is_zero() is False

def test_chs_max_values():
    chs = CHS.from_bytes(b'\xfe\xff\xff')
    assert chs.cylinder == 1023
    assert chs.sector == 63
    assert chs.head == 254
    assert CHS().is_zero() is True

def test_entry_decode():
    raw = mbr_entry(0x80, 0x83, 2048, 4096, b'\x20\x21\x00', b'\xfe\xff\xff')
    pt = MBRPartitionEntry.from_bytes(raw)
    assert pt.status == PartitionStatus.BOOTABLE
    assert pt.partition_type == PartitionType.LINUX_DATA
    assert pt.FirstLBA == 2048
    assert pt.size == 4096
    assert pt.is_used() is True
    assert pt.is_bootable() is True
    assert pt.is_extended() is False
    assert pt.is_gpt() is False
    assert str(pt) == 'Bootable 0/32/33 Linux Data 1023/254/63 2048 4096'
    assert pt.to_bytes() == raw

def test_entry_predicates():
    for ptype in (0x05, 0x0F, 0x85):
        assert MBRPartitionEntry.from_bytes(mbr_entry(0, ptype, 1, 1)).is_extended() is True
    assert MBRPartitionEntry.from_bytes(mbr_entry(0, 0xEE, 1, 1)).is_gpt() is True
    assert MBRPartitionEntry.from_bytes(mbr_entry()).is_used() is False
    # any non zero field makes the slot used, even with an empty type
    assert MBRPartitionEntry.from_bytes(mbr_entry(sectors = 1)).is_used() is True
    assert MBRPartitionEntry.from_bytes(mbr_entry(last_chs = b'\x00\x01\x00')).is_used() is True

def test_entry_unknown_values_preserved():
    pt = MBRPartitionEntry.from_bytes(mbr_entry(0x12, 0x07, 63, 100))
    assert pt.status == 0x12
    assert pt.partition_type == 0x07
    assert pt.is_bootable() is False
    assert pt.PartitionTypeName == '07'
    assert str(pt) == 'Unexpected 12 0/0/0 07 0/0/0 63 100'

def test_empty_entry_renders_empty():
    assert str(MBRPartitionEntry.create_empty()) == '(Empty)'
    assert MBRPartitionEntry.create_empty() == MBRPartitionEntry.from_bytes(b'\x00'*16)

def test_boot_record_roundtrip():
    bootcode = bytes(range(256)) + bytes(range(190))
    raw = boot_record([
        mbr_entry(0x80, 0x07, 2048, 204800, b'\x20\x21\x00', b'\xfe\xff\xff'),
        mbr_entry(0, 0x0F, 206848, 1000000),
        b'\x00'*16,
        mbr_entry(0, 0x82, 1206848, 8192),
    ], bootcode = bootcode)
    mbr = MBR.from_bytes(raw)
    assert len(mbr.partition_table) == 4
    assert mbr.boot_signature == 0xAA55
    assert mbr.to_bytes() == raw

def test_boot_record_signature_not_validated():
    mbr = MBR.from_bytes(boot_record(signature = b'\x00\x00'))
    assert mbr.boot_signature == 0
    assert str(mbr).endswith('Signature: 0000')

def test_disk_signature():
    bootcode = b'\x00'*440 + b'\x78\x56\x34\x12' + b'\x00\x00'
    mbr = MBR.from_bytes(boot_record(bootcode = bootcode))
    assert mbr.disk_signature == 0x12345678
