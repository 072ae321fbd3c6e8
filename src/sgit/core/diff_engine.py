"""Line-level diff engine.

Compares two versions of a text file line by line and groups the result
into contiguous runs of added, removed and unchanged lines. Line endings
are kept on each line, so joining the unchanged and removed chunks gives
back the old text exactly, and joining the unchanged and added chunks
gives back the new text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Sequence, Tuple


class ChangeKind(str, Enum):
    """Classification of a diff chunk."""

    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DiffChunk:
    """A contiguous run of lines with the same classification.

    Attributes:
        kind: Whether the lines were added, removed, or left unchanged
        text: The lines, including their line endings
    """

    kind: ChangeKind
    text: str

    @property
    def lines(self) -> List[str]:
        return self.text.splitlines(keepends=True)


class DiffEngine:
    """Computes line-oriented diffs between two texts.

    Example:
        >>> engine = DiffEngine()
        >>> [c.kind.value for c in engine.diff("a\\nb\\n", "a\\nc\\n")]
        ['unchanged', 'removed', 'added']
    """

    def diff(self, old_content: str, new_content: str) -> List[DiffChunk]:
        """Compute the chunks turning old_content into new_content.

        The unchanged lines form a longest common subsequence of the two
        line lists, so no other alignment keeps more lines. Within a
        changed region the removed lines come before the added lines.

        Args:
            old_content: Previous version of the file
            new_content: Current version of the file

        Returns:
            Chunks covering both inputs; adjacent chunks never share a kind
        """
        old_lines = old_content.splitlines(keepends=True)
        new_lines = new_content.splitlines(keepends=True)

        # Common head and tail lines are always part of some LCS.
        prefix = 0
        limit = min(len(old_lines), len(new_lines))
        while prefix < limit and old_lines[prefix] == new_lines[prefix]:
            prefix += 1
        suffix = 0
        while (
            suffix < limit - prefix
            and old_lines[-1 - suffix] == new_lines[-1 - suffix]
        ):
            suffix += 1

        old_middle = old_lines[prefix:len(old_lines) - suffix]
        new_middle = new_lines[prefix:len(new_lines) - suffix]

        chunks: List[DiffChunk] = []
        self._append(chunks, ChangeKind.UNCHANGED, old_lines[:prefix])
        for kind, line in self._edit_script(old_middle, new_middle):
            self._append(chunks, kind, [line])
        self._append(chunks, ChangeKind.UNCHANGED, old_lines[len(old_lines) - suffix:])
        return chunks

    def summarize(self, chunks: Sequence[DiffChunk]) -> Dict[str, int]:
        """Count added, removed and unchanged lines.

        Returns:
            Dictionary with keys "added", "removed", "unchanged"
        """
        summary = {kind.value: 0 for kind in ChangeKind}
        for chunk in chunks:
            summary[chunk.kind.value] += len(chunk.lines)
        return summary

    def _append(self, chunks: List[DiffChunk], kind: ChangeKind, lines: Sequence[str]) -> None:
        if not lines:
            return
        text = "".join(lines)
        if chunks and chunks[-1].kind is kind:
            chunks[-1] = DiffChunk(kind, chunks[-1].text + text)
        else:
            chunks.append(DiffChunk(kind, text))

    def _edit_script(
        self, old_lines: Sequence[str], new_lines: Sequence[str]
    ) -> Iterator[Tuple[ChangeKind, str]]:
        """Yield (kind, line) pairs along a longest common subsequence."""
        rows, cols = len(old_lines), len(new_lines)

        # lengths[i][j] is the LCS length of old_lines[i:] and new_lines[j:]
        lengths = [[0] * (cols + 1) for _ in range(rows + 1)]
        for i in range(rows - 1, -1, -1):
            row, below = lengths[i], lengths[i + 1]
            for j in range(cols - 1, -1, -1):
                if old_lines[i] == new_lines[j]:
                    row[j] = below[j + 1] + 1
                else:
                    row[j] = max(below[j], row[j + 1])

        i = j = 0
        while i < rows and j < cols:
            if old_lines[i] == new_lines[j]:
                yield ChangeKind.UNCHANGED, old_lines[i]
                i += 1
                j += 1
            elif lengths[i + 1][j] >= lengths[i][j + 1]:
                yield ChangeKind.REMOVED, old_lines[i]
                i += 1
            else:
                yield ChangeKind.ADDED, new_lines[j]
                j += 1
        for line in old_lines[i:]:
            yield ChangeKind.REMOVED, line
        for line in new_lines[j:]:
            yield ChangeKind.ADDED, line
