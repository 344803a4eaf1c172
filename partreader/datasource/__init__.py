from partreader.errors import OpenFailure

class DataSource:
    """Seekable byte source the disk layer reads records from."""
    def __init__(self, config):
        self.config = config

    def setup(self):
        pass

    def read(self, size:int):
        raise NotImplementedError()

    def seek(self, offset:int, whence:int = 0):
        raise NotImplementedError()

    def close(self):
        raise NotImplementedError()

    def tell(self):
        raise NotImplementedError()

    @property
    def name(self):
        return self.config.get('path', '<unknown>')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @staticmethod
    def from_path(path:str):
        path = str(path)
        if path.upper().endswith('.GZ'):
            from partreader.datasource.gzipfile import GzipFileSource
            return GzipFileSource.from_file(path)
        from partreader.datasource.file import FileSource
        return FileSource.from_file(path)

    @staticmethod
    def open_or_fail(opener, path:str):
        try:
            return opener(path, 'rb')
        except (OSError, ValueError) as e:
            raise OpenFailure(path) from e
