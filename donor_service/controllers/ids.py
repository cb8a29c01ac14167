# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Path id decoding shared by the controllers."""
import re

from fastapi import HTTPException

_INT_RE = re.compile(r"-?[0-9]+")

# Range of the Integer primary-key columns.
MIN_ID = -(2 ** 31)
MAX_ID = 2 ** 31 - 1


def parse_id(raw: str, label: str) -> int:
    """Decode a base-10 integer path id; anything else, or out of column range, is a 400."""
    if not _INT_RE.fullmatch(raw):
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")
    value = int(raw)
    if not MIN_ID <= value <= MAX_ID:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")
    return value
