"""
File discovery helpers shared by the class extractors.
"""

import fnmatch
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

IgnorePattern = Tuple[str, Path]


def get_gitignore_patterns(directory: Path) -> List[IgnorePattern]:
    """
    Collect .gitignore patterns from the directory and its parents.

    Returns:
        List of (pattern, directory holding the .gitignore) tuples
    """
    patterns_with_dirs: List[IgnorePattern] = []
    current_dir = directory.resolve()
    while current_dir != current_dir.parent:
        gitignore_path = current_dir / ".gitignore"
        if gitignore_path.is_file():
            with open(gitignore_path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and not line.startswith("!"):
                        patterns_with_dirs.append((line, current_dir))
        current_dir = current_dir.parent
    return patterns_with_dirs


def _posix(path: Path) -> str:
    text = str(path).replace("\\", "/")
    while text.startswith("./"):
        text = text[2:]
    return text


def match_file_against_pattern(file_path: Path, pattern: str, pattern_dir: Path, root_directory: Path) -> bool:
    """
    Match a file against one gitignore-style pattern.

    Args:
        file_path: File to check
        pattern: Gitignore pattern
        pattern_dir: Directory the pattern is relative to
        root_directory: Root directory of the analysis

    Returns:
        True if the file should be ignored
    """
    pattern = pattern.strip().replace("\\", "/")
    if not pattern:
        return False

    anchored = pattern.startswith("/")
    pattern = pattern.lstrip("/")

    try:
        rel_local = _posix(file_path.relative_to(pattern_dir))
    except ValueError:
        return False
    try:
        rel_root = _posix(file_path.relative_to(root_directory))
    except ValueError:
        rel_root = rel_local

    if pattern.endswith("/"):
        dir_pattern = pattern.rstrip("/")
        if not dir_pattern:
            return False
        if anchored or "/" in dir_pattern:
            return rel_local == dir_pattern or rel_local.startswith(dir_pattern + "/")
        return any(fnmatch.fnmatch(part, dir_pattern) for part in rel_local.split("/")[:-1])

    if anchored:
        return fnmatch.fnmatch(rel_local, pattern) or rel_local.startswith(pattern + "/")

    if fnmatch.fnmatch(rel_local, pattern) or fnmatch.fnmatch(rel_root, pattern):
        return True
    # 'build' matches any path segment named build
    if "/" not in pattern:
        return any(fnmatch.fnmatch(part, pattern) for part in rel_local.split("/"))
    # '**/x' style patterns also match at the top level
    if pattern.startswith("**/"):
        return match_file_against_pattern(file_path, pattern[3:], pattern_dir, root_directory)
    return False


def is_ignored(file_path: Path, root_directory: Path, patterns: Sequence[IgnorePattern]) -> bool:
    return any(
        match_file_against_pattern(file_path, pattern, pattern_dir, root_directory)
        for pattern, pattern_dir in patterns
    )


def collect_source_files(
    directory: Path,
    suffixes: Iterable[str],
    ignored_patterns: Sequence[str] = (),
) -> List[Path]:
    """
    Find source files under a directory, honouring .gitignore files and the
    configured ignore patterns (relative to the directory).
    """
    root = directory.resolve()
    patterns = get_gitignore_patterns(root) + [(p, root) for p in ignored_patterns]
    files: List[Path] = []
    for suffix in suffixes:
        files.extend(root.rglob(f"*{suffix}"))
    return sorted(f for f in set(files) if f.is_file() and not is_ignored(f, root, patterns))
