"""
Landsat MTL metadata parser.

MTL files are ``KEY = VALUE`` lines nested in ``GROUP`` blocks. Group
structure is flattened away; keys are unique across a Landsat MTL.
"""

import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_LINE = re.compile(r"^\s*([A-Z0-9_]+)\s*=\s*(.+?)\s*$")


def _coerce(value: str) -> Any:
    value = value.strip().strip('"')
    try:
        return float(value)
    except ValueError:
        return value


def parse_mtl_text(text: str) -> dict[str, Any]:
    """
    Parse MTL content into a flat dict.

    Numeric values become floats, everything else stays a string.

    Examples:
        >>> parse_mtl_text('RADIANCE_MULT_BAND_6 = 5.5375E-02\\nDATE_ACQUIRED = 1990-06-11')
        {'RADIANCE_MULT_BAND_6': 0.055375, 'DATE_ACQUIRED': '1990-06-11'}
    """
    metadata: dict[str, Any] = {}
    for line in text.splitlines():
        m = _LINE.match(line)
        if not m:
            continue
        key, value = m.groups()
        if key in ("GROUP", "END_GROUP"):
            continue
        metadata[key] = _coerce(value)
    return metadata


def parse_mtl(path: str | Path) -> dict[str, Any]:
    """Read and parse an MTL file."""
    with open(path) as f:
        metadata = parse_mtl_text(f.read())
    logger.debug("Parsed %d MTL keys from %s", len(metadata), path)
    return metadata


def format_mtl(metadata: dict[str, Any], group: str = "LANDSAT_METADATA_FILE") -> str:
    """Render a flat dict as a minimal MTL document."""
    lines = [f"GROUP = {group}"]
    for key, value in metadata.items():
        if isinstance(value, str):
            lines.append(f'  {key} = "{value}"')
        else:
            lines.append(f"  {key} = {value}")
    lines.append(f"END_GROUP = {group}")
    lines.append("END")
    return "\n".join(lines) + "\n"
