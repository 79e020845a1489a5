# filename: huffman_core.py

import heapq
import itertools

from huffman_bitio import EXHAUSTED
from huffman_errors import StreamCorruptError

BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE
HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1


class HuffmanNode:
    def __init__(self, symbol, weight, left=None, right=None):
        self.symbol = symbol
        self.weight = weight
        self.left = left
        self.right = right

    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode(symbol={self.symbol}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight}, left={self.left!r}, right={self.right!r})"


class HuffmanLogic:
    def count_frequencies(self, bit_in):
        # Frequency analysis of the input byte data
        freqs = [0] * (ALPH_SIZE + 1)
        symbol = bit_in.read_bits(BITS_PER_WORD)
        while symbol != EXHAUSTED:
            freqs[symbol] += 1
            symbol = bit_in.read_bits(BITS_PER_WORD)
        freqs[PSEUDO_EOF] = 1
        return freqs

    def build_tree(self, freqs):
        """Merge the two lightest nodes until a single root remains.

        Heap entries are (weight, sequence, node). Leaves take sequence
        numbers in ascending symbol order and every merged node takes the
        next one, so equal weights leave the heap first-in first-out and
        the tree shape is reproducible.
        """
        leaves = [(symbol, freq) for symbol, freq in enumerate(freqs) if freq > 0]
        if len(leaves) == 1:
            # A lone leaf would get an empty code; pair it with a zero-weight partner
            partner = 1 if leaves[0][0] == 0 else 0
            leaves = sorted(leaves + [(partner, 0)])

        sequence = itertools.count()
        priority_queue = [
            (freq, next(sequence), HuffmanNode(symbol, freq))
            for symbol, freq in leaves
        ]
        heapq.heapify(priority_queue)

        # Iteratively merge nodes to form the binary tree
        while len(priority_queue) > 1:
            left_weight, _, left = heapq.heappop(priority_queue)
            right_weight, _, right = heapq.heappop(priority_queue)
            weight = left_weight + right_weight
            merged = HuffmanNode(None, weight, left, right)
            heapq.heappush(priority_queue, (weight, next(sequence), merged))

        return priority_queue[0][2] if priority_queue else None

    def generate_codes(self, node, current_code="", codes=None):
        if codes is None:
            codes = {}
        if node is None:
            return codes
        if node.is_leaf():
            codes[node.symbol] = current_code
            return codes
        self.generate_codes(node.left, current_code + "0", codes)
        self.generate_codes(node.right, current_code + "1", codes)
        return codes

    def write_header(self, node, bit_out):
        # Preorder, left before right, same walk as generate_codes
        if node.is_leaf():
            bit_out.write_bits(1, 1)
            bit_out.write_bits(BITS_PER_WORD + 1, node.symbol)
            return
        bit_out.write_bits(1, 0)
        self.write_header(node.left, bit_out)
        self.write_header(node.right, bit_out)

    def read_header(self, bit_in, depth=0):
        flag = bit_in.read_bits(1)
        if flag == EXHAUSTED:
            raise StreamCorruptError("stream ended while reading the tree header")
        if flag == 0:
            # 257 leaves never put an internal node deeper than ALPH_SIZE - 1
            if depth >= ALPH_SIZE:
                raise StreamCorruptError(f"tree header nests deeper than {ALPH_SIZE} levels")
            left = self.read_header(bit_in, depth + 1)
            right = self.read_header(bit_in, depth + 1)
            return HuffmanNode(None, 0, left, right)

        symbol = bit_in.read_bits(BITS_PER_WORD + 1)
        if symbol == EXHAUSTED:
            raise StreamCorruptError("stream ended while reading a leaf symbol")
        if symbol > PSEUDO_EOF:
            raise StreamCorruptError(f"leaf symbol {symbol} is out of range")
        return HuffmanNode(symbol, 0)

    def encode_payload(self, codes, bit_in, bit_out):
        table = {symbol: (len(code), int(code, 2)) for symbol, code in codes.items()}
        bit_in.reset()
        symbol = bit_in.read_bits(BITS_PER_WORD)
        while symbol != EXHAUSTED:
            entry = table.get(symbol)
            if entry is not None:
                bit_out.write_bits(*entry)
            symbol = bit_in.read_bits(BITS_PER_WORD)
        bit_out.write_bits(*table[PSEUDO_EOF])

    def decode_payload(self, root, bit_in, bit_out):
        """Walk the tree one bit at a time until the end-of-stream leaf.

        Returns the number of symbols written to bit_out.
        """
        if root.is_leaf():
            raise StreamCorruptError("tree header holds a single leaf")

        decoded = 0
        node = root
        while True:
            bit = bit_in.read_bits(1)
            if bit == EXHAUSTED:
                raise StreamCorruptError("stream ended before the end-of-stream marker")
            node = node.left if bit == 0 else node.right
            if not node.is_leaf():
                continue
            if node.symbol == PSEUDO_EOF:
                return decoded
            bit_out.write_bits(BITS_PER_WORD, node.symbol)
            decoded += 1
            node = root
