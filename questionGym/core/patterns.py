from __future__ import annotations
import re
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Any, Optional

from .base import ScoredQuery
from .template import ReformulationTemplate, TemplateSyntaxError

DEFAULT_PATTERN_BANK = Path(__file__).parents[1] / "pattern_bank.yaml"
RESERVED_KEYS = ["id", "pattern", "reformulations", "ignore_case"]


class PatternBankError(ValueError):
    """Raised when a pattern bank entry is invalid."""


@dataclass(frozen=True)
class QuestionPattern:
    id: str
    regex: "re.Pattern[str]"
    reformulations: List[ReformulationTemplate]
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    def match(self, question: str) -> Optional["re.Match[str]"]:
        return self.regex.fullmatch(question.strip())

    def reformulate(self, question: str) -> List[ScoredQuery]:
        m = self.match(question)
        if m is None:
            return []
        return [ScoredQuery(text, tpl.get_score(), self.id)
                for tpl in self.reformulations
                for text in tpl.expand(m)]


def _parse_pattern(x: Dict[str, Any]) -> QuestionPattern:
    if not isinstance(x, dict):
        raise PatternBankError(f"Pattern entry must be a mapping: {x!r}")
    pid = x.get("id")
    if not pid:
        raise PatternBankError(f"Pattern entry without 'id': {x!r}")
    for key in ("pattern", "reformulations"):
        if key not in x:
            raise PatternBankError(f"Pattern '{pid}' is missing '{key}'")
    if not isinstance(x["reformulations"] or [], list):
        raise PatternBankError(f"Pattern '{pid}': 'reformulations' must be a list")

    flags = re.IGNORECASE if x.get("ignore_case", True) else 0
    try:
        regex = re.compile(str(x["pattern"]), flags)
    except re.error as e:
        raise PatternBankError(f"Pattern '{pid}' has an invalid regex: {e}") from e

    templates = []
    for r in x["reformulations"] or []:
        if not isinstance(r, dict):
            raise PatternBankError(f"Reformulation of '{pid}' must be a mapping: {r!r}")
        if "expr" not in r:
            raise PatternBankError(f"Reformulation of '{pid}' is missing 'expr': {r!r}")
        try:
            score = float(r.get("score", 1.0))
        except (TypeError, ValueError):
            raise PatternBankError(f"Pattern '{pid}': invalid score {r.get('score')!r}") from None
        try:
            tpl = ReformulationTemplate(str(r["expr"]), score)
        except TemplateSyntaxError as e:
            raise PatternBankError(f"Pattern '{pid}': {e}") from e
        # Group references must exist in the question pattern
        bad = [g for g in tpl.group_ids() if g > regex.groups]
        if bad:
            raise PatternBankError(
                f"Pattern '{pid}': '{tpl.expression}' references groups {bad} "
                f"but the pattern only has {regex.groups}"
            )
        templates.append(tpl)

    return QuestionPattern(
        id=pid,
        regex=regex,
        reformulations=templates,
        meta={k: v for k, v in x.items() if k not in RESERVED_KEYS},
    )


class PatternBank:
    def __init__(self, path: str | Path):
        items = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or []
        if not isinstance(items, list):
            raise PatternBankError(f"Pattern bank {path} must be a YAML list")
        self._by_id: Dict[str, QuestionPattern] = {}
        for x in items:
            p = _parse_pattern(x)
            if p.id in self._by_id:
                raise PatternBankError(f"Duplicate pattern id '{p.id}' in {path}")
            self._by_id[p.id] = p

    def __iter__(self) -> Iterator[QuestionPattern]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def list(self) -> List[str]:
        return list(self._by_id.keys())

    def get(self, pattern_id: str) -> QuestionPattern:
        return self._by_id[pattern_id]

    def get_meta(self, pattern_id: str):
        return self._by_id[pattern_id].meta

    def match(self, question: str) -> List[QuestionPattern]:
        return [p for p in self if p.match(question) is not None]
