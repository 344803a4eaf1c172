from partreader import logger
from partreader.datasource import DataSource
from partreader.errors import SeekFailure, UnexpectedPosition, ReadFailure

BLOCK_SIZE = 512 # For the time being

class Disk:
    """Raw disk view over a DataSource.

    Every record is read by seeking to an absolute offset, checking that
    the source really landed there and then reading exactly the record
    size. Short reads are errors, partial records are never returned.
    """
    def __init__(self, ds:DataSource, name:str = None):
        self.__stream = ds
        self.sector_size = BLOCK_SIZE
        self.name = name if name is not None else ds.name

    @staticmethod
    def from_datasource(ds:DataSource, name:str = None):
        return Disk(ds, name)

    @staticmethod
    def from_file(path:str):
        return Disk(DataSource.from_path(path), str(path))

    def close(self):
        self.__stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def read_record(self, offset:int, size:int):
        try:
            pos = self.__stream.seek(offset, 0)
        except (OSError, EOFError, ValueError, OverflowError) as e:
            raise SeekFailure(self.name, offset) from e
        if pos is None:
            pos = self.__stream.tell()
        if pos != offset:
            raise UnexpectedPosition(self.name, offset, pos)

        try:
            data = self.__stream.read(size)
        except (OSError, EOFError) as e:
            raise ReadFailure(self.name, offset) from e
        if len(data) != size:
            raise ReadFailure(self.name, offset) from EOFError(
                'unexpected EOF, read %d of %d bytes' % (len(data), size)
            )
        logger.log(1, '[DISK] read %d bytes at offset %d' % (size, offset))
        return data

    def list_partitions(self):
        from partreader.partitions import PartitionFinder
        return PartitionFinder(self).find_partitions()
