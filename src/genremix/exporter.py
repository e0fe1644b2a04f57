"""
Output Exporter

Renders a GeneratedOutput as TypeScript source and writes it to disk.

Layout:
    banner comment
    one "// name@version" comment per package
    import statements for override sources (if any)
    export statements, values then types, per package
    combined override export (if any)
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from genremix.aggregator.merge import ExportStatement, GeneratedOutput, ImportStatement

logger = logging.getLogger(__name__)

GENERATOR_NAME = "gen-remix"


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _block(names: List[str]) -> str:
    """One name per line, indented, each followed by a comma."""
    return "\n".join(f"  {name}," for name in names)


def render_import(stmt: ImportStatement) -> str:
    return f'import {{\n{_block(stmt.names)}\n}} from "{stmt.source}";'


def render_export(stmt: ExportStatement) -> str:
    keyword = "export type" if stmt.type_only else "export"
    body = _block([spec.render() for spec in stmt.specifiers])
    if stmt.source is None:
        return f"{keyword} {{\n{body}\n}};"
    return f'{keyword} {{\n{body}\n}} from "{stmt.source}";'


def render(output: GeneratedOutput, generated_at: Optional[datetime] = None) -> str:
    """
    Render the aggregation document.

    Args:
        output: Result of aggregate()
        generated_at: Banner timestamp (default: now)
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)

    text = f"// This file was generated by {GENERATOR_NAME} at {format_timestamp(generated_at)}\n"
    for name, version in output.packages:
        text += f"\n// {name}@{version}"

    if output.has_overrides:
        text += "\n\n// import overrides"
        for stmt in output.imports:
            text += "\n" + render_import(stmt)

    text += "\n\n// export packages"
    for stmt in output.statements:
        text += "\n" + render_export(stmt)

    if output.has_overrides:
        text += "\n\n// export overrides"
        text += "\n" + render_export(output.override_statement)

    return text


def write_output(path: Union[str, Path], text: str) -> Path:
    """Write the document as UTF-8, creating parent directories."""
    path = Path(path)
    logger.info(f"📝 Writing {path}...")
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path
