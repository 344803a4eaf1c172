import sys
import logging

from partreader import logger
from partreader._version import __banner__
from partreader.errors import PartitionError
from partreader.partitions import analyze


def run(device:str):
	try:
		table = analyze(device)
	except PartitionError as e:
		logger.debug('Analysis of %s failed, cause: %r' % (device, e.unwrap()))
		print('Error: %s' % e, file=sys.stderr)
		return 1
	print(table.report())
	return 0

def main():
	import argparse

	parser = argparse.ArgumentParser(description='MBR/EBR and GPT partition table reader')
	parser.add_argument('-v', '--verbose', action='count', default=0)
	parser.add_argument('device', help = 'Block device or disk image path (.gz images are decompressed on the fly)')

	args = parser.parse_args()
	print(__banner__)

	if args.verbose >= 1:
		logging.basicConfig(format='%(levelname)s %(message)s')
		logger.setLevel(logging.DEBUG)

	if args.verbose > 2:
		logger.setLevel(1) #enabling deep debug

	sys.exit(run(args.device))

if __name__ == '__main__':
	main()
