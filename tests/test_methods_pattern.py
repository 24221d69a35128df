import pytest

import questionGym as qg
from questionGym.core.base import MethodConfig, QueryItem
from questionGym.core.patterns import PatternBank
from questionGym.methods.pattern import PatternReformulator

BANK = """
- id: when_passive
  pattern: 'when (was) (.+?)\\??'
  reformulations:
    - {expr: '[2]<[1] in', score: 3.0}
    - {expr: '[2]<[1]', score: 1.0}
- id: generic
  pattern: '(.+?)\\??'
  reformulations:
    - {expr: '[1]', score: 0.5}
"""

QUESTION = QueryItem("Q1", "When was the telephone invented?")

def make(tmp_path, params=None, bank=BANK):
    path = tmp_path / "bank.yaml"
    path.write_text(bank)
    cfg = MethodConfig(name="pattern", params=params or {})
    return PatternReformulator(cfg, PatternBank(path))

def test_ranked_queries(tmp_path):
    res = make(tmp_path).reformulate(QUESTION)
    texts = [q.text for q in res.queries]
    assert texts == [
        '"the was telephone invented in"',
        '"the telephone was invented in"',
        '"the was telephone invented"',
        '"the telephone was invented"',
        '"When was the telephone invented"',
    ]
    assert [q.score for q in res.queries] == [3.0, 3.0, 1.0, 1.0, 0.5]
    assert res.reformulated == texts[0]
    assert res.metadata["matched_patterns"] == ["when_passive", "generic"]

def test_first_match_only(tmp_path):
    res = make(tmp_path, {"first_match_only": True}).reformulate(QUESTION)
    assert res.metadata["matched_patterns"] == ["when_passive"]
    assert len(res.queries) == 4

def test_min_score_and_max_queries(tmp_path):
    assert len(make(tmp_path, {"min_score": 1.0}).reformulate(QUESTION).queries) == 4
    res = make(tmp_path, {"max_queries": 2}).reformulate(QUESTION)
    assert [q.score for q in res.queries] == [3.0, 3.0]

def test_no_match_keeps_original(tmp_path):
    bank = "- {id: a, pattern: 'when (was) (.+)', reformulations: [{expr: '[2]'}]}\n"
    res = make(tmp_path, bank=bank).reformulate(QueryItem("Q2", "Who is he?"))
    assert res.reformulated == "Who is he?"
    assert res.queries == []
    assert res.metadata["matched_patterns"] == []

def test_duplicates_keep_highest_score(tmp_path):
    bank = """
- {id: low, pattern: '(.+)', reformulations: [{expr: '[1]', score: 1.0}]}
- {id: high, pattern: '(.+)', reformulations: [{expr: '[0]', score: 2.0}]}
"""
    res = make(tmp_path, bank=bank).reformulate(QueryItem("Q3", "paris"))
    assert len(res.queries) == 1
    assert res.queries[0].score == 2.0 and res.queries[0].pattern_id == "high"

def test_single_word_combination_warns(tmp_path):
    bank = "- {id: w, pattern: 'when (was) (\\w+)', reformulations: [{expr: '[2]<[1]'}]}\n"
    meth = make(tmp_path, bank=bank)
    with pytest.warns(UserWarning, match="produced no queries"):
        res = meth.reformulate(QueryItem("Q4", "when was it"))
    assert res.queries == []

def test_batch(tmp_path):
    results = make(tmp_path).reformulate_batch([QUESTION, QueryItem("Q5", "paris")])
    assert [r.qid for r in results] == ["Q1", "Q5"]
    assert results[1].reformulated == '"paris"'

def test_create_reformulator_with_bundled_bank():
    meth = qg.create_reformulator("pattern")
    texts = [q.text for q in meth.reformulate(QUESTION).queries]
    assert '"the telephone was invented in"' in texts

def test_unknown_method():
    with pytest.raises(ValueError, match="Unknown method"):
        qg.create_reformulator("nope")

def test_registry():
    assert qg.get_method("pattern") is PatternReformulator
    with pytest.raises(ValueError, match="already registered"):
        qg.register_method("pattern")(type("Other", (qg.BaseReformulator,), {}))

def test_duplicate_takes_position_of_kept_entry(tmp_path):
    bank = """
- {id: first, pattern: '(.+)', reformulations: [{expr: '[1]', score: 1.0}]}
- id: second
  pattern: '(.+)'
  reformulations:
    - {expr: 'y', score: 2.0}
    - {expr: '[0]', score: 2.0}
"""
    res = make(tmp_path, bank=bank).reformulate(QueryItem("Q6", "paris"))
    assert [q.text for q in res.queries] == ['"y"', '"paris"']
    assert res.queries[1].pattern_id == "second"
