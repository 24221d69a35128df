from __future__ import annotations
import warnings
from typing import Dict, List, Set

from ..core.base import BaseReformulator, QueryItem, ReformulationResult, ScoredQuery
from ..core.registry import register_method

@register_method("pattern")
class PatternReformulator(BaseReformulator):
    """
    Pattern-based question reformulation.

    Pipeline:
        1. Match the question against every pattern in the bank
        2. Expand the reformulation templates of each matching pattern
        3. Drop duplicates (keeping the highest score) and rank by score

    Parameters (cfg.params):
        first_match_only: Only use the first matching pattern (default: False)
        min_score: Drop queries scored below this value (default: None)
        max_queries: Keep at most this many queries (default: None)
    """
    VERSION = "1.0"

    def __init__(self, cfg, pattern_bank):
        super().__init__(cfg, pattern_bank)
        self._warned_empty: Set[str] = set()

    def _expand_pattern(self, pattern, question: str) -> List[ScoredQuery]:
        out = pattern.reformulate(question)
        # A combined group over a single word yields nothing
        if not out and pattern.id not in self._warned_empty:
            warnings.warn(f"Pattern '{pattern.id}' matched but produced no queries for: {question}")
            self._warned_empty.add(pattern.id)
        return out

    def reformulate(self, q: QueryItem) -> ReformulationResult:
        first_match_only = bool(self.cfg.params.get("first_match_only", False))
        min_score = self.cfg.params.get("min_score")
        max_queries = self.cfg.params.get("max_queries")

        matched = self.patterns.match(q.text)
        if first_match_only:
            matched = matched[:1]

        candidates: List[ScoredQuery] = []
        for pattern in matched:
            candidates.extend(self._expand_pattern(pattern, q.text))

        if min_score is not None:
            candidates = [c for c in candidates if c.score >= float(min_score)]

        # Keep the best-scoring occurrence of each query string
        best: Dict[str, ScoredQuery] = {}
        for c in candidates:
            if c.text not in best or c.score > best[c.text].score:
                best[c.text] = c
        # Survivors keep their own bank/template position for the stable sort
        kept = [c for c in candidates if best[c.text] is c]
        ranked = sorted(kept, key=lambda c: c.score, reverse=True)

        if max_queries is not None:
            ranked = ranked[:int(max_queries)]

        return ReformulationResult(
            q.qid,
            q.text,
            ranked[0].text if ranked else q.text,
            metadata={
                "matched_patterns": [p.id for p in matched],
                "queries": [c.to_dict() for c in ranked],
            }
        )
