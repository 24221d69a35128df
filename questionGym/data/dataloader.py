"""Data loaders for questionGym.

Simple file loaders for questions and writers for the generated
reformulations. Questions are either TSV rows (``qid<TAB>question``) or JSONL
objects (``{"qid": ..., "question": ...}``).
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterator, List, Tuple, Union
import csv
import json
import warnings

from ..core.base import QueryItem, ReformulationResult


class _WarnOnce:
    """Emit each kind of data warning once per file."""

    def __init__(self, path: Path):
        self.path = path
        self.seen = set()

    def __call__(self, kind: str, message: str):
        if kind not in self.seen:
            warnings.warn(f"{message} in {self.path}")
            self.seen.add(kind)


class DataLoader:
    """Core data loader for local files only."""

    @staticmethod
    def load_questions(
        path: Union[str, Path],
        format: str = "tsv",
        qid_col: int = 0,
        question_col: int = 1,
        qid_key: str = "qid",
        question_key: str = "question"
    ) -> List[QueryItem]:
        """
        Load questions from a local file.

        Args:
            path: Path to questions file
            format: File format - "tsv" or "jsonl"
            qid_col: Column index for question ID (TSV only)
            question_col: Column index for question text (TSV only)
            qid_key: JSON key for question ID (JSONL only)
            question_key: JSON key for question text (JSONL only)

        Returns:
            List of QueryItem objects

        Example:
            >>> questions = DataLoader.load_questions("questions.tsv", format="tsv")
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Question file not found: {path}")

        if format == "tsv":
            rows = DataLoader._iter_tsv
            keys = (qid_col, question_col)
        elif format == "jsonl":
            rows = DataLoader._iter_jsonl
            keys = (qid_key, question_key)
        else:
            raise ValueError(f"Unsupported format: {format}. Use 'tsv' or 'jsonl'")

        questions = []
        warn = _WarnOnce(path)
        with open(path, "r", encoding="utf-8") as f:
            for qid, text in rows(f, *keys, warn):
                text = text.strip()
                if not text:
                    warn("empty", "Skipping empty questions")
                    continue
                questions.append(QueryItem(qid=qid, text=text))

        if not questions:
            raise ValueError(f"No valid questions found in {path}")

        return questions

    @staticmethod
    def _iter_tsv(f, qid_col: int, question_col: int, warn) -> Iterator[Tuple[str, str]]:
        """Yield (qid, question) pairs from TSV rows."""
        for row in csv.reader(f, delimiter="\t"):
            if len(row) <= max(qid_col, question_col):
                warn("malformed", "Skipping malformed rows (not enough columns)")
                continue
            yield str(row[qid_col]).strip(), str(row[question_col])

    @staticmethod
    def _iter_jsonl(f, qid_key: str, question_key: str, warn) -> Iterator[Tuple[str, str]]:
        """Yield (qid, question) pairs from JSONL objects."""
        for line_num, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as e:
                warn(f"json:{line_num}", f"Invalid JSON at line {line_num}: {e}")
                continue
            if not isinstance(obj, dict) or qid_key not in obj or question_key not in obj:
                warn("keys", f"Missing keys '{qid_key}' or '{question_key}'")
                continue
            yield str(obj[qid_key]), str(obj[question_key])

    @staticmethod
    def save_reformulations(
        results: List[ReformulationResult],
        path: Union[str, Path],
        format: str = "tsv"
    ) -> int:
        """
        Save ranked reformulations, one row per query.

        TSV rows are ``qid, rank, score, pattern_id, query``; JSONL objects
        carry the same fields. Questions without any query produce no rows.

        Returns:
            Number of rows written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rows = [
            (r.qid, rank, q.score, q.pattern_id, q.text)
            for r in results
            for rank, q in enumerate(r.queries, 1)
        ]

        if format == "tsv":
            with open(path, "w", encoding="utf-8") as f:
                for qid, rank, score, pattern_id, text in rows:
                    # Tabs or newlines inside a query would break the row
                    text = " ".join(text.split())
                    f.write(f"{qid}\t{rank}\t{score}\t{pattern_id}\t{text}\n")
        elif format == "jsonl":
            with open(path, "w", encoding="utf-8") as f:
                for qid, rank, score, pattern_id, text in rows:
                    obj = {"qid": qid, "rank": rank, "score": score,
                           "pattern_id": pattern_id, "query": text}
                    f.write(json.dumps(obj) + "\n")
        else:
            raise ValueError(f"Unsupported format: {format}. Use 'tsv' or 'jsonl'")

        return len(rows)
