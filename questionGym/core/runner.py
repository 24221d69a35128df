from __future__ import annotations
from pathlib import Path
from typing import List
from .base import QueryItem, MethodConfig, ReformulationResult
from .patterns import PatternBank
from .registry import get_method

# Import all methods to ensure they're registered
from ..methods.pattern import PatternReformulator

def run_method(method_name: str, cfg: MethodConfig, queries: List[QueryItem],
               pattern_bank_path: str | Path) -> List[ReformulationResult]:
    Method = get_method(method_name)
    pb = PatternBank(pattern_bank_path)
    reformulator = Method(cfg, pb)
    return reformulator.reformulate_batch(queries)
