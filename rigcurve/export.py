# rigcurve/export.py
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from .constants import EXPORT_FILE_NAME


class ResultRow(BaseModel):
    """One analysed file, as written to the results CSV."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(alias="file name")
    slope: float
    area: float
    yield_displacement: float = Field(alias="yield displacement")
    yield_strength: float = Field(alias="yield strength")
    max_strength: float = Field(alias="max strength")


HEADERS = [f.alias or name for name, f in ResultRow.model_fields.items()]


class ResultLog:
    """Rows accumulated across files for one browser session."""

    file_name = EXPORT_FILE_NAME

    def __init__(self):
        self.rows: list[ResultRow] = []

    def __len__(self):
        return len(self.rows)

    def append(self, row: ResultRow) -> None:
        self.rows.append(row)

    def clear(self) -> None:
        self.rows.clear()

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([r.model_dump(by_alias=True) for r in self.rows], columns=HEADERS)

    def to_csv(self) -> str:
        return self.to_frame().to_csv(index=False, lineterminator="\n")
