from partreader.datasource import DataSource

class FileSource(DataSource):
    """ A DataSource over a regular file or a block device """
    def __init__(self, config):
        super().__init__(config)
        self.__stream = None

    @staticmethod
    def from_config(config):
        ds = FileSource(config)
        ds.setup()
        return ds

    @staticmethod
    def from_file(path:str):
        return FileSource.from_config({'path': str(path)})

    def setup(self):
        self.__stream = DataSource.open_or_fail(open, self.config['path'])

    def read(self, size:int):
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
        return 'FileSource(%s)' % self.config['path']
