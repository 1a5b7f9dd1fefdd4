from typing import Any, Dict, List, Optional
import pandas as pd
from sqlalchemy import Column


def clean_text(text) -> Optional[str]:
    if text is None or pd.isna(text):
        return None
    s = str(text).strip()
    return s if s else None


def read_csv_rows(path: str, columns: List[str]) -> List[Dict[str, Optional[str]]]:
    """
    Parses a CSV file into one dict per row holding exactly `columns`.
    Empty, whitespace-only and missing cells come back as None.
    """
    try:
        # keep_default_na=False so values such as "NA" or "null" survive as text
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return []

    rows = []
    for record in df.to_dict(orient="records"):
        rows.append({col: clean_text(record.get(col)) for col in columns})
    return rows


def coerce_value(value: Optional[str], column: Column) -> Any:
    """
    Converts a CSV cell to the Python type of the target column.
    Raises ValueError for integer columns holding anything but a whole number.
    """
    if value is None:
        return None
    if column.type.python_type is int:
        if "." not in value:
            return int(value)
        number = float(value)
        if not number.is_integer():
            raise ValueError(f"{column.name}: {value!r} is not a whole number")
        return int(number)
    return value
