"""Reader for .tests data files.

A file holds blocks of the form:

    === name
    input lines
    ---
    expected lines
    ---
"""

from pathlib import Path


def read_blocks(path: Path) -> list[tuple[str, list[str], list[str]]]:
    """Split a .tests file into (name, input_lines, expected_lines) blocks."""
    lines = path.read_text(encoding="utf-8").split("\n")
    result: list[tuple[str, list[str], list[str]]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if not line.startswith("=== "):
            i += 1
            continue
        name = line[4:].strip()
        i += 1
        sections: list[list[str]] = []
        for _ in range(2):
            section: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                section.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            sections.append(section)
        result.append((name, sections[0], sections[1]))
    return result


def discover(test_dir: Path) -> list[tuple[str, list[str], list[str]]]:
    """Blocks of every *.tests file in test_dir, ids prefixed by file stem."""
    results = []
    for test_file in sorted(test_dir.glob("*.tests")):
        for name, input_lines, expected_lines in read_blocks(test_file):
            results.append((f"{test_file.stem}/{name}", input_lines, expected_lines))
    return results
