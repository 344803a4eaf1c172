import uuid

def guid_from_bytes_le(data:bytes):
    """Decodes a 16 byte on-disk GUID into a uuid.UUID.

    time_low, time_mid and time_hi_and_version are stored little-endian,
    clock_seq and node are stored in display (big-endian) order.
    https://developer.apple.com/library/archive/technotes/tn2166/_index.html
    """
    if len(data) != 16:
        raise ValueError('GUID must be 16 bytes, got %d' % len(data))
    time_low = int.from_bytes(data[0:4], 'little')
    time_mid = int.from_bytes(data[4:6], 'little')
    time_hi_version = int.from_bytes(data[6:8], 'little')
    clock_seq_hi_variant = data[8]
    clock_seq_low = data[9]
    node = int.from_bytes(data[10:16], 'big')
    return uuid.UUID(fields=(time_low, time_mid, time_hi_version, clock_seq_hi_variant, clock_seq_low, node))

def sizeof_fmt(num:int, suffix='B'):
    for unit in ('', 'Ki', 'Mi', 'Gi', 'Ti', 'Pi', 'Ei'):
        if abs(num) < 1024.0:
            return '%3.1f %s%s' % (num, unit, suffix)
        num /= 1024.0
    return '%.1f %s%s' % (num, 'Zi', suffix)
