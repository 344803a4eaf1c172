import os
import sys
import logging
import pytest
from config import *

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from partreader import analyze, logger
from partreader.datasource import DataSource
from partreader.datasource.file import FileSource
from partreader.datasource.gzipfile import GzipFileSource
from partreader.disks import Disk
from partreader.errors import ErrorKind, PartitionError, OpenFailure, SeekFailure, UnexpectedPosition, ReadFailure
from partreader.examples.analyze import run, main


class ShortSeekSource(DataSource):
	"""Lands one byte before every requested offset."""
	def __init__(self):
		super().__init__({'path': 'shortseek'})
		self.closed = False

	def seek(self, offset, whence = 0):
		return max(0, offset - 1)

	def read(self, size):
		return b'\x00'*size

	def close(self):
		self.closed = True

class BrokenSource(ShortSeekSource):
	def seek(self, offset, whence = 0):
		raise OSError(5, 'Input/output error')

class BrokenReadSource(ShortSeekSource):
	def seek(self, offset, whence = 0):
		return offset

	def read(self, size):
		raise OSError(5, 'Input/output error')


def test_open_failure():
	with pytest.raises(OpenFailure) as exc:
		analyze('testdata/non-existent-file')
	err = exc.value
	assert isinstance(err, PartitionError)
	assert err.is_kind(ErrorKind.OPEN)
	assert err.offset is None
	assert isinstance(err.unwrap(), FileNotFoundError)
	assert err.__cause__ is err.unwrap()
	assert str(err).startswith('Error opening device testdata/non-existent-file: ')

def test_open_failure_bad_path():
	with pytest.raises(OpenFailure) as exc:
		analyze('bad\x00path')
	assert isinstance(exc.value.unwrap(), ValueError)
	assert exc.value.device == 'bad\x00path'

def test_open_failure_gzip(tmp_path):
	with pytest.raises(OpenFailure) as exc:
		analyze(tmp_path / 'missing.img.gz')
	assert isinstance(exc.value.unwrap(), FileNotFoundError)

def test_unexpected_position():
	# offset 0 always lands on 0, only later offsets drift
	with Disk.from_datasource(ShortSeekSource()) as disk:
		with pytest.raises(UnexpectedPosition) as exc:
			disk.read_record(512, 16)
	assert exc.value.offset == 512
	assert exc.value.position == 511
	assert exc.value.unwrap() is None
	assert str(exc.value) == 'Unexpected position seeking device shortseek offset 512 seeked to 511 instead'

def test_seek_failure():
	source = BrokenSource()
	with pytest.raises(SeekFailure) as exc:
		with Disk.from_datasource(source) as disk:
			disk.list_partitions()
	assert source.closed is True
	assert exc.value.offset == 0
	assert isinstance(exc.value.unwrap(), OSError)
	assert str(exc.value).startswith('Error seeking device shortseek offset 0: ')

def test_read_failure_from_source():
	with pytest.raises(ReadFailure) as exc:
		Disk.from_datasource(BrokenReadSource()).read_record(1024, 512)
	assert exc.value.offset == 1024
	assert exc.value.unwrap().errno == 5

def test_short_read(tmp_path):
	path = tmp_path / 'short.img'
	path.write_bytes(b'\x00'*100)
	with pytest.raises(ReadFailure) as exc:
		analyze(path)
	assert exc.value.offset == 0
	assert isinstance(exc.value.unwrap(), EOFError)

def test_datasource_dispatch(tmp_path):
	path = write_image(tmp_path / 'plain.img', {0: boot_record()})
	gz_path = gzip_image(path)
	with DataSource.from_path(path) as ds:
		assert isinstance(ds, FileSource)
	with DataSource.from_path(gz_path) as ds:
		assert isinstance(ds, GzipFileSource)

def test_gzip_image(tmp_path):
	path = logical_chain_image(tmp_path / 'chain.img', logical_count = 3)
	plain = analyze(path)
	compressed = analyze(gzip_image(path))
	assert compressed.entries == plain.entries
	assert compressed.report() == plain.report()

def test_gzip_truncated_chain(tmp_path):
	path = write_image(tmp_path / 'trunc.img', {0: boot_record([mbr_entry(0, 0x05, 1000, 10)])})
	with pytest.raises(UnexpectedPosition) as exc:
		analyze(gzip_image(path))
	assert exc.value.offset == 1000 * 512
	assert exc.value.position == 64 * 512

def test_cli_run(tmp_path, capsys):
	path = gpt_image(tmp_path / 'gpt.img')
	assert run(str(path)) == 0
	out = capsys.readouterr().out
	assert out.startswith('Total partitions: 6\nBootable: 0\n')

def test_cli_run_missing(tmp_path, capsys):
	assert run(str(tmp_path / 'nothing.img')) == 1
	assert 'Error opening device' in capsys.readouterr().err

def test_cli_main_verbosity(tmp_path, monkeypatch, capsys):
	path = logical_chain_image(tmp_path / 'chain.img', logical_count = 1)
	for argv, level in ((['-v'], logging.DEBUG), (['-vvv'], 1)):
		monkeypatch.setattr(sys, 'argv', ['partreader'] + argv + [str(path)])
		try:
			with pytest.raises(SystemExit) as exc:
				main()
			assert exc.value.code == 0
			assert logger.level == level
		finally:
			logger.setLevel(logging.NOTSET)
	assert 'Total partitions: 5' in capsys.readouterr().out

def test_cli_main_failure(tmp_path, monkeypatch):
	monkeypatch.setattr(sys, 'argv', ['partreader', str(tmp_path / 'nothing.img')])
	with pytest.raises(SystemExit) as exc:
		main()
	assert exc.value.code == 1
