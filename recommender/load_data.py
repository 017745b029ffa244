# load a corpus of {id, content} documents from disk
from pathlib import Path
from typing import List, Optional

import pandas as pd

from recommender.exceptions import ValidationError


def _read_frame(path: Path, max_rows: Optional[int]) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        return pd.read_json(path, lines=True, nrows=max_rows, dtype=False)
    if suffix == ".json":
        df = pd.read_json(path, dtype=False)
    elif suffix == ".csv":
        return pd.read_csv(path, nrows=max_rows, dtype=str, keep_default_na=False, na_values=[""])
    elif suffix == ".parquet":
        df = pd.read_parquet(path)
    else:
        raise ValidationError(f"Unsupported corpus format: {path.name}")
    return df if max_rows is None else df.head(max_rows)


def to_documents(df: pd.DataFrame, id_column: str = "id", content_column: str = "content") -> List[dict]:
    missing = {id_column, content_column} - set(df.columns)
    if missing:
        raise ValidationError(f"Corpus is missing required columns: {sorted(missing)}")

    # rm missing contents and repeated ids
    df = df.dropna(subset=[id_column, content_column]).drop_duplicates(subset=[id_column])
    df = df[[id_column, content_column]].rename(columns={id_column: "id", content_column: "content"})
    df["content"] = df["content"].astype(str)
    return df.to_dict(orient="records")


def load_documents(path, id_column: str = "id", content_column: str = "content",
                   max_rows: Optional[int] = None) -> List[dict]:
    """Read a .jsonl/.json/.csv/.parquet corpus into a list of documents."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Could not find corpus at {path}")
    return to_documents(_read_frame(path, max_rows), id_column, content_column)
