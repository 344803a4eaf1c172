import gzip
from partreader.datasource import DataSource


class GzipFileSource(DataSource):
    """ A DataSource that reads from a gzip compressed disk image """
    def __init__(self, config):
        super().__init__(config)
        self.__stream = None

    @staticmethod
    def from_config(config):
        ds = GzipFileSource(config)
        ds.setup()
        return ds

    @staticmethod
    def from_file(path:str):
        return GzipFileSource.from_config({'path': str(path)})

    def setup(self):
        self.__stream = DataSource.open_or_fail(gzip.open, self.config['path'])

    def read(self, size:int):
        # gzip raises on a corrupt or truncated member, callers treat
        # that like any other failed read
        return self.__stream.read(size)

    def seek(self, offset:int, whence:int = 0):
        return self.__stream.seek(offset, whence)

    def tell(self):
        return self.__stream.tell()

    def close(self):
        if self.__stream is not None:
            self.__stream.close()
            self.__stream = None

    def __str__(self):
        return 'GzipFileSource(%s)' % self.config['path']
