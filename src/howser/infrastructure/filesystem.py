"""File access — reading sources and pharmacy batch files.

Every failure here is environment-level and surfaces as
:class:`howser.domain.errors.LoadError` chained to the underlying cause.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from howser.domain.errors import LoadError

logger = logging.getLogger(__name__)

DEFAULT_PHARMACY_TABLE = "Specs"


def read_source(path: str | Path) -> bytes:
    """Return the raw bytes of a Markdown source file."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except FileNotFoundError as exc:
        raise LoadError(f"File not found: {p}") from exc
    except OSError as exc:
        raise LoadError(f"Unable to read {p}") from exc
    logger.debug("Read %d bytes from %s", len(data), p)
    return data


def load_pharmacy(path: str | Path, table: str = DEFAULT_PHARMACY_TABLE) -> list[tuple[str, str]]:
    """Load prescription/document pairs from a pharmacy TOML file.

    The file maps prescription paths to document paths inside *table*::

        [Specs]
        "templates/readme.rx.md" = "README.md"

    Pairs are returned in file order.  Paths are returned as written.
    """
    p = Path(path)
    raw = read_source(p)
    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise LoadError(f"Error parsing pharmacy file {p}.") from exc

    specs = data.get(table)
    if not isinstance(specs, dict):
        raise LoadError(f"Pharmacy file {p} has no [{table}] table.")

    pairs: list[tuple[str, str]] = []
    for rx_file, doc_file in specs.items():
        if not isinstance(doc_file, str):
            raise LoadError(
                f"The document corresponding to {rx_file} could not be parsed as a string."
            )
        pairs.append((rx_file, doc_file))
    logger.debug("Loaded %d pairs from pharmacy %s", len(pairs), p)
    return pairs
