# rigcurve/ingest.py
import logging

from .constants import METADATA_MARKER, HEADER_LINES

logger = logging.getLogger(__name__)


def clean_lines(text: str) -> list[str]:
    """Strip rig metadata, the fixed header and blank lines from raw export text.

    Line endings (``\\r\\n``, ``\\r``, ``\\n``) are unified first. Nothing is
    validated here; unparseable rows are dropped later by ``parse_rows``.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    lines = [l for l in lines if l[:len(METADATA_MARKER)] != METADATA_MARKER]
    kept = [l for l in lines[HEADER_LINES:] if l.strip() != ""]
    logger.debug("Ingested %d of %d lines", len(kept), len(lines))
    return kept


def display_name(file_name: str) -> str:
    """``"specimen A.txt"`` -> ``"specimen A"`` (everything before the first dot)."""
    return file_name.split(".")[0]
