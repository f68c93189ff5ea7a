"""Line and word level diffs between a reference file and its regeneration."""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

ADD = "add"
REMOVE = "remove"
EQUAL = "equal"

BLAME_NEW = "new"
BLAME_MODIFIED = "modified"
BLAME_UNCHANGED = "unchanged"

_WORD_SPLIT_RE = re.compile(r"(\s+|[^\w\s])")


@dataclass(frozen=True)
class Span:
    text: str
    changed: bool


@dataclass
class DiffLine:
    type: str
    text: str
    old_line_num: Optional[int] = None
    new_line_num: Optional[int] = None
    spans: List[Span] = field(default_factory=list)

    @property
    def has_changed_spans(self) -> bool:
        return any(span.changed for span in self.spans)


@dataclass(frozen=True)
class Separator:
    """Marks elided unchanged lines in a filtered diff."""

    type: str = "separator"


@dataclass(frozen=True)
class DiffSummary:
    added: int
    removed: int
    unchanged: int
    modified: int = 0


def split_lines(text: str) -> List[str]:
    """Split file text into lines, ignoring the single trailing newline."""
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def compute_line_diff(old: str, new: str) -> List[DiffLine]:
    """Longest-common-subsequence diff; removals precede additions within a change block.

    The identical head and tail are matched before the LCS table is built, so
    the table only spans the changed middle of the file.
    """
    old_lines = split_lines(old)
    new_lines = split_lines(new)
    head = _common_head(old_lines, new_lines)
    tail = _common_tail(old_lines[head:], new_lines[head:])

    result = [DiffLine(EQUAL, old_lines[k], old_line_num=k + 1, new_line_num=k + 1) for k in range(head)]
    result.extend(
        _lcs_diff(old_lines[head : len(old_lines) - tail], new_lines[head : len(new_lines) - tail], head)
    )
    old_start, new_start = len(old_lines) - tail, len(new_lines) - tail
    result.extend(
        DiffLine(EQUAL, old_lines[old_start + k], old_line_num=old_start + k + 1, new_line_num=new_start + k + 1)
        for k in range(tail)
    )
    return result


def _common_head(old_lines: Sequence[str], new_lines: Sequence[str]) -> int:
    count = 0
    for old_line, new_line in zip(old_lines, new_lines):
        if old_line != new_line:
            break
        count += 1
    return count


def _common_tail(old_lines: Sequence[str], new_lines: Sequence[str]) -> int:
    count = 0
    for old_line, new_line in zip(reversed(old_lines), reversed(new_lines)):
        if old_line != new_line:
            break
        count += 1
    return count


def _lcs_diff(old_lines: Sequence[str], new_lines: Sequence[str], offset: int) -> List[DiffLine]:
    n, m = len(old_lines), len(new_lines)

    # lcs[i][j] = length of the LCS of old_lines[i:] and new_lines[j:]
    lcs = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row, below = lcs[i], lcs[i + 1]
        for j in range(m - 1, -1, -1):
            if old_lines[i] == new_lines[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    result: List[DiffLine] = []
    removes: List[DiffLine] = []
    adds: List[DiffLine] = []

    def flush() -> None:
        result.extend(removes)
        result.extend(adds)
        removes.clear()
        adds.clear()

    def remove(index: int) -> None:
        removes.append(DiffLine(REMOVE, old_lines[index], old_line_num=offset + index + 1))

    def add(index: int) -> None:
        adds.append(DiffLine(ADD, new_lines[index], new_line_num=offset + index + 1))

    i = j = 0
    while i < n and j < m:
        if old_lines[i] == new_lines[j]:
            flush()
            result.append(DiffLine(EQUAL, old_lines[i], old_line_num=offset + i + 1, new_line_num=offset + j + 1))
            i += 1
            j += 1
        elif lcs[i + 1][j] >= lcs[i][j + 1]:
            remove(i)
            i += 1
        else:
            add(j)
            j += 1
    while i < n:
        remove(i)
        i += 1
    while j < m:
        add(j)
        j += 1
    flush()
    return result


def word_diff(old: str, new: str) -> Tuple[List[Span], List[Span]]:
    """Return ``(old_spans, new_spans)`` marking the words that differ."""
    old_words = [word for word in _WORD_SPLIT_RE.split(old) if word]
    new_words = [word for word in _WORD_SPLIT_RE.split(new) if word]
    matcher = difflib.SequenceMatcher(None, old_words, new_words, autojunk=False)
    old_spans: List[Span] = []
    new_spans: List[Span] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            text = "".join(old_words[i1:i2])
            old_spans.append(Span(text, False))
            new_spans.append(Span(text, False))
            continue
        if i2 > i1:
            old_spans.append(Span("".join(old_words[i1:i2]), True))
        if j2 > j1:
            new_spans.append(Span("".join(new_words[j1:j2]), True))
    return old_spans, new_spans


def enrich_word_diffs(lines: List[DiffLine]) -> None:
    """Pair each run of removed lines with the following added lines and attach word spans in place."""
    removes: List[int] = []
    adds: List[int] = []

    def process() -> None:
        for remove_index, add_index in zip(removes, adds):
            old_spans, new_spans = word_diff(lines[remove_index].text, lines[add_index].text)
            if any(span.changed for span in old_spans):
                lines[remove_index].spans = old_spans
            if any(span.changed for span in new_spans):
                lines[add_index].spans = new_spans
        removes.clear()
        adds.clear()

    for index, line in enumerate(lines):
        if line.type == REMOVE:
            if adds:
                process()
            removes.append(index)
        elif line.type == ADD:
            adds.append(index)
        else:
            process()
    process()


def diff_stats(lines: Sequence[DiffLine], modified: int = 0) -> DiffSummary:
    return DiffSummary(
        added=sum(1 for line in lines if line.type == ADD),
        removed=sum(1 for line in lines if line.type == REMOVE),
        unchanged=sum(1 for line in lines if line.type == EQUAL),
        modified=modified,
    )


def diff_change_indices(lines: Sequence[DiffLine]) -> List[int]:
    """Index of the first line of every contiguous change block."""
    indices: List[int] = []
    in_chunk = False
    for index, line in enumerate(lines):
        if line.type != EQUAL:
            if not in_chunk:
                indices.append(index)
                in_chunk = True
        else:
            in_chunk = False
    return indices


def filter_diff_lines(lines: Sequence[DiffLine], context: int = 3) -> List[Union[DiffLine, Separator]]:
    """Keep changed lines plus ``context`` lines around them, with separators over gaps."""
    visible = set()
    for index, line in enumerate(lines):
        if line.type != EQUAL:
            visible.update(range(max(0, index - context), min(len(lines), index + context + 1)))

    out: List[Union[DiffLine, Separator]] = []
    last = -1
    for index in sorted(visible):
        if last >= 0 and index > last + 1:
            out.append(Separator())
        out.append(lines[index])
        last = index
    return out


def compute_blame_map(lines: Sequence[DiffLine]) -> List[str]:
    """Blame status per line of the generated file."""
    blame: List[str] = []
    for line in lines:
        if line.type == REMOVE:
            continue
        if line.type == EQUAL:
            blame.append(BLAME_UNCHANGED)
        else:
            blame.append(BLAME_MODIFIED if line.has_changed_spans else BLAME_NEW)
    return blame


def unified_diff(old: str, new: str, filename: str) -> str:
    """Plain unified diff text for terminals and logs."""
    return "".join(
        difflib.unified_diff(
            old.splitlines(keepends=True),
            new.splitlines(keepends=True),
            fromfile=f"reference/{filename}",
            tofile=f"generated/{filename}",
        )
    )


__all__ = [
    "ADD",
    "BLAME_MODIFIED",
    "BLAME_NEW",
    "BLAME_UNCHANGED",
    "DiffLine",
    "DiffSummary",
    "EQUAL",
    "REMOVE",
    "Separator",
    "Span",
    "compute_blame_map",
    "compute_line_diff",
    "diff_change_indices",
    "diff_stats",
    "enrich_word_diffs",
    "filter_diff_lines",
    "split_lines",
    "unified_diff",
    "word_diff",
]
