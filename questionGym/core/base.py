from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Any

@dataclass
class QueryItem:
    qid: str
    text: str

@dataclass(frozen=True)
class ScoredQuery:
    text: str
    score: float
    pattern_id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass
class ReformulationResult:
    qid: str
    original: str
    reformulated: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def queries(self) -> List[ScoredQuery]:
        return [ScoredQuery(**q) for q in self.metadata.get("queries", [])]

@dataclass
class MethodConfig:
    name: str
    params: Dict[str, Any] = field(default_factory=dict)

class BaseReformulator:
    VERSION = "0.1"

    def __init__(self, cfg: MethodConfig, pattern_bank):
        self.cfg = cfg
        self.patterns = pattern_bank

    def reformulate(self, q: QueryItem) -> ReformulationResult:
        raise NotImplementedError

    def reformulate_batch(self, queries: List[QueryItem]) -> List[ReformulationResult]:
        return [self.reformulate(q) for q in queries]
