"""Unified diffs between a source file and its canonical formatting"""

import difflib


def diff_summary(old: str, new: str) -> dict[str, int]:
    """Return added/deleted line counts for a one-line fmt --check report."""
    matcher = difflib.SequenceMatcher(None, old.splitlines(), new.splitlines())
    added = deleted = 0
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag in ("replace", "delete"):
            deleted += i2 - i1
        if tag in ("replace", "insert"):
            added += j2 - j1
    return {"added": added, "deleted": deleted}


def unified_diff(old: str, new: str, path: str, context: int = 3) -> str:
    """Return a unified diff of a file against its formatted text; '' when identical."""
    return "".join(difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=f"{path} (original)",
        tofile=f"{path} (formatted)",
        n=context,
    ))
