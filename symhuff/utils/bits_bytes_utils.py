from bitarray import bitarray


def bits_to_bitstring(bits: bitarray) -> str:
    """Render a bitarray as '0'/'1' characters (e.g. code words in reports)."""
    return bits.to01()


def bytes_to_bitstring(data: bytes, bit_count: int | None = None) -> str:
    """
    Convert bytes -> bitstring, MSB first.

    If `bit_count` is given, the string is cut to that many bits so trailing
    padding in the last byte is dropped.
    """
    bits = bitarray(endian="big")
    bits.frombytes(data)
    if bit_count is not None:
        if bit_count > len(bits):
            raise ValueError(f"bit_count {bit_count} exceeds {len(bits)} available bits")
        del bits[bit_count:]
    return bits.to01()


def bitstring_to_bytes(bits: str) -> bytes:
    """
    Convert bitstring -> bytes, MSB first.

    A final partial byte is padded with zero bits on its low-order end.
    """
    if any(ch not in "01" for ch in bits):
        raise ValueError("bitstring must contain only '0' and '1'")
    return bitarray(bits, endian="big").tobytes()
