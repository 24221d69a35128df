from __future__ import annotations
import typer, json, os, re
from pathlib import Path
from typing import Any, Dict, Optional

from .core.base import MethodConfig, QueryItem
from .core.runner import run_method
from .core.patterns import PatternBank, DEFAULT_PATTERN_BANK
from .data.dataloader import DataLoader
app = typer.Typer(help="questionGym Toolkit CLI")


def expand_env_vars(text: str) -> str:
    """Expand ${VAR} and ${VAR:-default} references in YAML content"""
    def replace_env_var(match):
        var_expr = match.group(1)
        if ':-' in var_expr:
            var_name, default_value = var_expr.split(':-', 1)
            return os.getenv(var_name, default_value)
        else:
            return os.getenv(var_expr, '')

    return re.sub(r'\$\{([^}]+)\}', replace_env_var, text)

def load_config(cfg_path: Optional[Path]) -> Dict[str, Any]:
    import yaml
    if not cfg_path:
        return {}
    return yaml.safe_load(expand_env_vars(cfg_path.read_text(encoding="utf-8"))) or {}

@app.command()
def run(questions: Path = typer.Option(..., "--questions", exists=True, help="Questions TSV/JSONL"),
        output_tsv: Path = typer.Option(..., "--output-tsv"),
        format: str = typer.Option("tsv", "--format", help="Input format: tsv|jsonl"),
        method: str = typer.Option("pattern", "--method"),
        pattern_bank: Optional[Path] = typer.Option(None, "--pattern-bank"),
        cfg_path: Optional[Path] = typer.Option(None, "--cfg-path", exists=True),
        max_queries: Optional[int] = typer.Option(None, "--max-queries", help="Keep at most N queries per question"),
):
    cfg = load_config(cfg_path)

    # CLI options override config file values
    params = dict(cfg.get("params", {}) or {})
    if max_queries is not None:
        params["max_queries"] = max_queries
    bank_path = pattern_bank or cfg.get("pattern_bank") or DEFAULT_PATTERN_BANK

    mc = MethodConfig(name=method, params=params)
    queries = DataLoader.load_questions(questions, format=format)
    results = run_method(method_name=method, cfg=mc, queries=queries,
                         pattern_bank_path=bank_path)

    matched = sum(1 for r in results if r.metadata.get("queries"))
    typer.echo(f"Processed {len(results)} questions with {method} ({matched} matched)")

    n_rows = DataLoader.save_reformulations(results, output_tsv, format="tsv")
    typer.echo(f"Wrote {n_rows} queries to {output_tsv}")

@app.command()
def expand(question: str,
           pattern_bank: Path = typer.Option(DEFAULT_PATTERN_BANK, "--pattern-bank")):
    results = run_method(method_name="pattern", cfg=MethodConfig(name="pattern"),
                         queries=[QueryItem("cli", question)], pattern_bank_path=pattern_bank)
    queries = results[0].queries
    if not queries:
        typer.echo("No pattern matched")
        raise typer.Exit(code=1)
    for q in queries:
        typer.echo(f"{q.score:.2f}\t{q.pattern_id}\t{q.text}")

@app.command("patterns-list")
def patterns_list(pattern_bank: Path = typer.Option(DEFAULT_PATTERN_BANK, "--pattern-bank")):
    pb = PatternBank(pattern_bank)
    for pid in pb.list():
        typer.echo(pid)

@app.command("patterns-show")
def patterns_show(pattern_id: str,
                  pattern_bank: Path = typer.Option(DEFAULT_PATTERN_BANK, "--pattern-bank")):
    pb = PatternBank(pattern_bank)
    if pattern_id not in pb.list():
        typer.echo(f"Unknown pattern: {pattern_id}", err=True)
        raise typer.Exit(code=1)
    p = pb.get(pattern_id)
    typer.echo(json.dumps({
        "id": p.id,
        "pattern": p.pattern,
        "reformulations": [{"expr": t.expression, "score": t.score} for t in p.reformulations],
        **p.meta,
    }, indent=2))

if __name__ == "__main__":
    app()
