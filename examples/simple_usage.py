"""Reformulate questions with the bundled pattern bank"""
import questionGym as qg
from pathlib import Path

example_dir = Path(__file__).parent

# Load questions
questions = qg.load_questions(example_dir / "tiny_questions.tsv")

# Create reformulator
reformulator = qg.create_reformulator("pattern", params={"max_queries": 3})

# Reformulate
results = reformulator.reformulate_batch(questions)

# Show results
for r in results:
    print(f"{r.qid}: {r.original}")
    for q in r.queries:
        print(f"  {q.score:.1f}  {q.text}  ({q.pattern_id})")
    print()

# Templates can also be used directly with any regex match
pattern = qg.PatternBank(qg.DEFAULT_PATTERN_BANK).get("when_passive")
m = pattern.match("When was the Eiffel Tower built?")
for tpl in pattern.reformulations:
    print(tpl.get_score(), tpl.expand(m))
