# filename: huffman_bitio.py

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

# Returned by read_bits when the stream cannot supply the requested bits.
EXHAUSTED = -1


class BitInputStream:
    """Reads fixed-width fields, MSB first, from an in-memory byte buffer."""

    def __init__(self, data=b""):
        self._bits = bitarray(endian="big")
        self._bits.frombytes(bytes(data))
        self._pos = 0
        self.bits_read = 0

    @classmethod
    def from_path(cls, path):
        with open(path, "rb") as f:
            return cls(f.read())

    def __len__(self):
        return len(self._bits)

    def read_bits(self, n):
        """Return the next n bits as an unsigned int, or EXHAUSTED."""
        if n <= 0:
            return 0
        end = self._pos + n
        if end > len(self._bits):
            return EXHAUSTED
        value = ba2int(self._bits[self._pos:end])
        self._pos = end
        self.bits_read += n
        return value

    def reset(self):
        self._pos = 0

    def close(self):
        self._bits = bitarray(endian="big")
        self._pos = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class BitOutputStream:
    """Collects bits MSB first; close() pads to a byte and flushes to sink."""

    def __init__(self, sink=None):
        self._bits = bitarray(endian="big")
        self._sink = sink
        self.closed = False
        self.bits_written = 0

    def write_bits(self, n, value):
        if self.closed:
            raise ValueError("write to closed BitOutputStream")
        if n <= 0:
            return
        self._bits.extend(int2ba(value & ((1 << n) - 1), length=n, endian="big"))
        self.bits_written += n

    def getvalue(self):
        return self._bits.tobytes()

    def close(self):
        if self.closed:
            return
        self.closed = True
        if self._sink is not None:
            self._sink.write(self._bits.tobytes())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
