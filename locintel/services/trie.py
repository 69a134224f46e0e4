"""
Prefix tree for place-name autocomplete.

Keys are lowercased before insertion and lookup, so matching is
case-insensitive. Autocomplete visits children in ascending character order,
which makes suggestion order independent of insertion order.

Complexity (m = key length):
    insert / search / starts_with: O(m)
    autocomplete: O(m + visited nodes), stopping once max_results is reached
"""

from typing import Dict, Iterator, List, Optional

from locintel.models import LocationRecord

DEFAULT_MAX_RESULTS = 10


class TrieNode:
    """Node for the trie. Only terminal nodes carry a record."""

    def __init__(self):
        self.children: Dict[str, "TrieNode"] = {}
        self.is_terminal = False
        self.record: Optional[LocationRecord] = None


class TrieIndex:
    """Case-insensitive prefix index mapping place names to LocationRecords."""

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: str) -> bool:
        return self.search(key) is not None

    def insert(self, key: str, record: LocationRecord) -> None:
        """
        Index record under key. Re-inserting an existing key replaces its record.

        An empty key marks the root itself as terminal.
        """
        node = self.root
        for char in key.lower():
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
            node = child

        if not node.is_terminal:
            self._size += 1
        node.is_terminal = True
        node.record = record

    def search(self, key: str) -> Optional[LocationRecord]:
        """Exact match lookup; None if key was never inserted."""
        node = self._walk(key)
        if node is None or not node.is_terminal:
            return None
        return node.record

    def starts_with(self, prefix: str) -> bool:
        """True if at least one inserted key begins with prefix."""
        node = self._walk(prefix)
        return node is not None and (node.is_terminal or bool(node.children))

    def autocomplete(self, prefix: str, max_results: int = DEFAULT_MAX_RESULTS) -> List[LocationRecord]:
        """
        Collect records whose key begins with prefix.

        Args:
            prefix: Typed text (case-insensitive)
            max_results: Upper bound on returned records

        Returns:
            Up to max_results records, in depth-first order with children
            visited by ascending character
        """
        if max_results <= 0:
            return []

        node = self._walk(prefix)
        if node is None:
            return []

        results: List[LocationRecord] = []
        for record in self._iter_records(node):
            results.append(record)
            if len(results) >= max_results:
                break
        return results

    def _walk(self, text: str) -> Optional[TrieNode]:
        node = self.root
        for char in text.lower():
            node = node.children.get(char)
            if node is None:
                return None
        return node

    @staticmethod
    def _iter_records(start: TrieNode) -> Iterator[LocationRecord]:
        """Pre-order walk yielding terminal records lazily, without recursion."""
        stack: List[TrieNode] = [start]
        while stack:
            node = stack.pop()
            if node.is_terminal:
                yield node.record
            # Reverse so the smallest character is popped first
            for char in sorted(node.children, reverse=True):
                stack.append(node.children[char])
