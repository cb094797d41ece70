import heapq
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Tuple

from symhuff.errors import EmptyInputError


@dataclass(eq=False)
class HuffmanNode:
    """
    Node of a Huffman tree.

    Leaves carry a symbol and its count; internal nodes carry the sum of their
    two children's counts and no symbol.
    """
    frequency: int
    symbol: Optional[bytes] = None
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def leaves(self) -> Iterator[Tuple[bytes, int]]:
        """Yield (symbol, frequency) for every leaf, left to right."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf():
                yield node.symbol, node.frequency
                continue
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)


def build_huffman_tree(frequencies: Mapping[bytes, int]) -> HuffmanNode:
    """
    Merge the two least frequent nodes until one root remains.

    Ties go to whichever node entered the queue first: leaves in table order,
    then merged nodes in the order they were created. The first node popped
    becomes the left child. A single-entry table yields a lone leaf.
    """
    if not frequencies:
        raise EmptyInputError("Cannot build a Huffman tree from an empty frequency table")

    serial = 0
    heap = []
    for symbol, frequency in frequencies.items():
        heap.append((frequency, serial, HuffmanNode(frequency, symbol=symbol)))
        serial += 1
    heapq.heapify(heap)

    while len(heap) > 1:
        f1, _, left = heapq.heappop(heap)
        f2, _, right = heapq.heappop(heap)
        merged = HuffmanNode(f1 + f2, left=left, right=right)
        heapq.heappush(heap, (merged.frequency, serial, merged))
        serial += 1

    return heap[0][2]
