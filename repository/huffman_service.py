# filename: huffman_service.py

import logging

from huffman_bitio import EXHAUSTED, BitInputStream, BitOutputStream
from huffman_core import ALPH_SIZE, BITS_PER_INT, BITS_PER_WORD, HUFF_TREE, HuffmanLogic
from huffman_errors import InvalidFormatError

logger = logging.getLogger(__name__)

DEBUG_LOW = 1
DEBUG_HIGH = 4


class HuffmanService:
    def __init__(self, debug=0):
        self.logic = HuffmanLogic()
        self.debug = debug

    def compress_stream(self, bit_in, bit_out):
        """Compress bit_in into bit_out: magic, tree header, then payload.

        bit_in is read twice, so it must support reset(). bit_out is closed
        on return.
        """
        freqs = self.logic.count_frequencies(bit_in)
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)

        if self.debug >= DEBUG_HIGH:
            for symbol in sorted(codes):
                logger.debug("code %d -> %s", symbol, codes[symbol])

        bit_out.write_bits(BITS_PER_INT, HUFF_TREE)
        self.logic.write_header(tree, bit_out)
        self.logic.encode_payload(codes, bit_in, bit_out)
        bit_out.close()

        if self.debug >= DEBUG_LOW:
            logger.info(
                "compressed %d bits into %d bits using %d symbols",
                sum(freqs[:ALPH_SIZE]) * BITS_PER_WORD,
                bit_out.bits_written,
                len(codes),
            )

    def decompress_stream(self, bit_in, bit_out):
        magic = bit_in.read_bits(BITS_PER_INT)
        if magic == EXHAUSTED:
            raise InvalidFormatError("stream is too short to hold a magic number")
        if magic != HUFF_TREE:
            raise InvalidFormatError(f"invalid magic number {magic:#010x}")

        tree = self.logic.read_header(bit_in)
        decoded = self.logic.decode_payload(tree, bit_in, bit_out)
        bit_out.close()

        if self.debug >= DEBUG_LOW:
            logger.info("decompressed %d bits into %d symbols", bit_in.bits_read, decoded)

    def compress(self, data):
        bit_out = BitOutputStream()
        self.compress_stream(BitInputStream(data), bit_out)
        return bit_out.getvalue()

    def decompress(self, data):
        bit_out = BitOutputStream()
        self.decompress_stream(BitInputStream(data), bit_out)
        return bit_out.getvalue()
