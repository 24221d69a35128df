"""
questionGym: Pattern-based Question Reformulation Toolkit

Simple usage:
    import questionGym as qg

    # Create a reformulator backed by the bundled pattern bank
    reformulator = qg.create_reformulator("pattern")

    # Reformulate questions into ranked, quoted queries
    result = reformulator.reformulate(qg.QueryItem("q1", "When was the telephone invented?"))
    for q in result.queries:
        print(q.score, q.text)
"""

__version__ = "0.1.0"

# Core data structures
from .core.base import QueryItem, ScoredQuery, ReformulationResult, MethodConfig, BaseReformulator

# Templates and patterns
from .core.template import ReformulationTemplate, TemplateSyntaxError, InvalidGroupError
from .core.patterns import QuestionPattern, PatternBank, PatternBankError, DEFAULT_PATTERN_BANK

# Data loaders
from .data.dataloader import DataLoader

# All reformulation methods
from .methods import PatternReformulator

# High-level runner
from .core.runner import run_method
from .core.registry import METHODS, register_method, get_method



def create_reformulator(
    method_name: str = "pattern",
    params: dict = None,
    pattern_bank_path: str = None,
):
    """
    Create a reformulator instance with sensible defaults.

    Args:
        method_name: Name of the method (default: "pattern")
        params: Method-specific parameters (default: {})
        pattern_bank_path: Path to pattern bank YAML (default: bundled pattern_bank.yaml)

    Returns:
        BaseReformulator instance

    Example:
        >>> import questionGym as qg
        >>> reformulator = qg.create_reformulator(params={"max_queries": 3})
    """
    MethodClass = get_method(method_name)
    config = MethodConfig(name=method_name, params=params or {})
    pb = PatternBank(pattern_bank_path or DEFAULT_PATTERN_BANK)

    return MethodClass(config, pb)


def load_questions(path: str, format: str = "tsv", **kwargs):
    """
    Load questions from a local file.

    Args:
        path: Path to questions file
        format: File format - "tsv" or "jsonl" (default: "tsv")
        **kwargs: Additional parameters for DataLoader.load_questions()

    Returns:
        List of QueryItem objects
    """
    return DataLoader.load_questions(path, format=format, **kwargs)


__all__ = [
    # Version
    "__version__",

    # Core classes
    "QueryItem",
    "ScoredQuery",
    "ReformulationResult",
    "MethodConfig",
    "BaseReformulator",

    # Templates & patterns
    "ReformulationTemplate",
    "TemplateSyntaxError",
    "InvalidGroupError",
    "QuestionPattern",
    "PatternBank",
    "PatternBankError",

    # Data
    "DataLoader",

    # Methods
    "PatternReformulator",

    # High-level API
    "run_method",
    "create_reformulator",
    "load_questions",
    "DEFAULT_PATTERN_BANK",

    # Registry
    "METHODS",
    "register_method",
    "get_method",
]
