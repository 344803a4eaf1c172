import enum

class ErrorKind(enum.Enum):
    OPEN = 'Error opening device'
    SEEK = 'Error seeking device'
    UNEXPECTED_POSITION = 'Unexpected position seeking device'
    READ = 'Error reading device'
    MULTIPLE_BOOTABLE = 'Multiple bootable partitions'

class PartitionError(Exception):
    """Base for every failure raised while analyzing a device.

    The kind decides classification; the chained cause (``__cause__``)
    is kept only for diagnostics.
    """
    kind:ErrorKind = None

    def __init__(self, device:str, offset:int = None, message:str = None):
        self.device = device
        self.offset = offset
        if message is None:
            message = '%s %s' % (self.kind.value, device)
            if offset is not None:
                message += ' offset %d' % offset
        self.message = message
        super().__init__(message)

    def is_kind(self, kind:ErrorKind):
        return self.kind == kind

    def unwrap(self):
        return self.__cause__

    def __str__(self):
        if self.__cause__ is not None:
            return '%s: %s' % (self.message, self.__cause__)
        return self.message

class OpenFailure(PartitionError):
    kind = ErrorKind.OPEN

class SeekFailure(PartitionError):
    kind = ErrorKind.SEEK

class UnexpectedPosition(PartitionError):
    kind = ErrorKind.UNEXPECTED_POSITION

    def __init__(self, device:str, offset:int, position:int):
        self.position = position
        super().__init__(
            device,
            offset,
            '%s %s offset %d seeked to %d instead' % (self.kind.value, device, offset, position)
        )

class ReadFailure(PartitionError):
    kind = ErrorKind.READ

class MultipleBootable(PartitionError):
    kind = ErrorKind.MULTIPLE_BOOTABLE

    def __init__(self, device:str, index:int):
        self.index = index
        super().__init__(
            device,
            None,
            '%s, first at index %d' % (self.kind.value, index)
        )
