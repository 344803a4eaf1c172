
__version__ = "0.1.0"
__banner__ = \
"""
# partreader %s 
# MBR/EBR and GPT partition table reader
""" % __version__
