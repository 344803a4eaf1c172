import logging

logger = logging.getLogger(__name__)

from partreader.partitions import analyze, PartitionTable, PartitionFinder
