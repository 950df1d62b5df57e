# usage: row-oriented tables (pandas) for lines, tokens and frequency records
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

import pandas as pd

from booktext.nlp.frequency import check_group_by

LINE_COLUMNS = ["line_index", "paragraph_index", "chapter_index", "raw_text"]
TOKEN_COLUMNS = ["token_index", "line_index", "paragraph_index", "chapter_index", "text", "following"]


def lines_to_frame(lines: Sequence) -> pd.DataFrame:
    return pd.DataFrame([asdict(ln) for ln in lines], columns=LINE_COLUMNS)


def tokens_to_frame(tokens: Sequence) -> pd.DataFrame:
    return pd.DataFrame([asdict(t) for t in tokens], columns=TOKEN_COLUMNS)


def _leaves(term):
    for x in term:
        if isinstance(x, tuple):
            yield from _leaves(x)
        else:
            yield "" if x is None else str(x)


def _term_cell(term):
    # pairs/conjunctions (nested or not) are stored space-joined so the CSV stays one column
    return " ".join(_leaves(term)) if isinstance(term, tuple) else term


def records_to_frame(records: Sequence, group_by=()) -> pd.DataFrame:
    """
    Flatten FrequencyRecords into columns: one per grouping dimension, then
    term, count and percentage (percentage is left out when no record has one).
    """
    dims = check_group_by(group_by)
    rows = []
    for r in records:
        row = dict(zip(dims, r.unit_key))
        row["term"] = _term_cell(r.term)
        row["count"] = r.count
        row["percentage"] = r.percentage
        rows.append(row)
    df = pd.DataFrame(rows, columns=[*dims, "term", "count", "percentage"])
    if df["percentage"].isna().all():
        df = df.drop(columns="percentage")
    return df


def write_csv(df: pd.DataFrame, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, float_format="%.12f")
    return path
