"""
Declaration Scanner

Extracts exported value and type names from TypeScript declaration
(.d.ts) text. This is a pattern scan over flattened text, not a parser:

1. Newlines are collapsed to spaces so multi-line clauses join up
2. A newline is inserted before every ``export {`` / ``export type {``
3. Each resulting line is matched against the export clause pattern

Only brace-delimited export clauses are recognised. Declarations such as
``export declare function foo()`` are ignored.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union


# Start of an export clause, used to split the flattened text
CLAUSE_START = re.compile(r"(export\s+(type\s*)?{)")

# A complete clause on its own line; group 1 is the type qualifier
CLAUSE = re.compile(r"^export(\s+type)?\s*{(.*)}")

# "local as exported" inside a clause
ALIAS = re.compile(r"^(\w+)\s+as\s+(\w+)$")


@dataclass
class ScanResult:
    """Names exported by one declaration document, in document order."""
    values: List[str] = field(default_factory=list)
    types: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.values and not self.types


def split_clauses(text: str) -> List[str]:
    """Flatten text and return the non-blank lines, one per export clause."""
    flattened = CLAUSE_START.sub(r"\n\1", text.replace("\n", " "))
    return [line for line in flattened.split("\n") if line.strip()]


def resolve_entry(entry: str) -> str:
    """Return the exported name for a clause entry (``a as b`` -> ``b``)."""
    alias = ALIAS.match(entry)
    if alias:
        return alias.group(2)
    return entry


def scan(text: str) -> ScanResult:
    """
    Scan declaration text for exported names.

    Duplicates are kept; the aggregator deduplicates.
    """
    result = ScanResult()

    for line in split_clauses(text):
        match = CLAUSE.match(line)
        if not match:
            continue

        target = result.types if match.group(1) else result.values
        entries = [entry.strip() for entry in match.group(2).split(",")]
        for entry in entries:
            if entry:
                target.append(resolve_entry(entry))

    return result


def scan_file(path: Union[str, Path]) -> ScanResult:
    """Read a declaration document (UTF-8) and scan it."""
    with open(path, "r", encoding="utf-8") as f:
        return scan(f.read())
