# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every failure raised by the codec."""


class InvalidFormatError(HuffmanError):
    """The stream does not start with the tree-carrying magic number."""


class StreamCorruptError(HuffmanError):
    """The stream ended early or holds a header no encoder could produce."""
