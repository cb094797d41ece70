from dataclasses import dataclass
from typing import Dict

from bitarray import bitarray, frozenbitarray

from symhuff.encoding_schemes.tree import HuffmanNode
from symhuff.utils.bits_bytes_utils import bits_to_bitstring

# Code word of the only symbol when the tree is a single leaf.
SINGLE_SYMBOL_CODE = frozenbitarray("0", endian="big")


@dataclass
class CodeTable:
    """
    Symbol -> code word mapping derived from a Huffman tree.

    - codes: code word per symbol (left = 0, right = 1 from the root)
    - total_bits: sum of frequency * code length over all symbols, i.e. the
      exact size of the encoded payload in bits
    """
    codes: Dict[bytes, frozenbitarray]
    total_bits: int

    def as_strings(self) -> Dict[bytes, str]:
        return {symbol: bits_to_bitstring(code) for symbol, code in self.codes.items()}


def generate_codes(root: HuffmanNode) -> CodeTable:
    if root.is_leaf():
        return CodeTable(codes={root.symbol: SINGLE_SYMBOL_CODE}, total_bits=root.frequency)

    codes: Dict[bytes, frozenbitarray] = {}
    total_bits = 0
    # Iterative depth-first walk; each entry is (node, path so far).
    stack = [(root, bitarray(endian="big"))]
    while stack:
        node, path = stack.pop()
        if node.is_leaf():
            codes[node.symbol] = frozenbitarray(path)
            total_bits += node.frequency * len(path)
            continue
        if node.left is None or node.right is None:
            raise ValueError("Malformed Huffman tree: internal node with a single child")
        right_path = path.copy()
        right_path.append(1)
        stack.append((node.right, right_path))
        path.append(0)
        stack.append((node.left, path))

    return CodeTable(codes=codes, total_bits=total_bits)
