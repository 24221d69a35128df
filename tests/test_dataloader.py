import json
import tempfile
import pytest

from questionGym.core.base import ReformulationResult
from questionGym.data.dataloader import DataLoader

def test_local_tsv_loading():
    with tempfile.NamedTemporaryFile(mode="w", delete=False, suffix=".tsv") as f:
        f.write("1\twho invented the telephone?\n2\twhere is Paris?\n")
        path = f.name
    questions = DataLoader.load_questions(path, format="tsv")
    assert len(questions) == 2 and questions[0].qid == "1"

def test_jsonl_loading_skips_bad_lines(tmp_path):
    path = tmp_path / "q.jsonl"
    path.write_text('{"qid": "a", "question": "where is Paris?"}\nnot json\n{"qid": "b"}\n[1, 2]\n')
    with pytest.warns(UserWarning):
        questions = DataLoader.load_questions(path, format="jsonl")
    assert [q.qid for q in questions] == ["a"]

def test_malformed_tsv_rows_warn(tmp_path):
    path = tmp_path / "q.tsv"
    path.write_text("1\tfirst\nonlyone\n2\t \n")
    with pytest.warns(UserWarning):
        questions = DataLoader.load_questions(path)
    assert [q.text for q in questions] == ["first"]

def test_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataLoader.load_questions(tmp_path / "missing.tsv")
    empty = tmp_path / "empty.tsv"
    empty.write_text("")
    with pytest.raises(ValueError, match="No valid questions"):
        DataLoader.load_questions(empty)
    with pytest.raises(ValueError, match="Unsupported format"):
        DataLoader.load_questions(empty, format="csv")

def test_save_reformulations(tmp_path):
    results = [
        ReformulationResult("q1", "who?", '"a b"', metadata={"queries": [
            {"text": '"a b"', "score": 2.0, "pattern_id": "p"},
            {"text": '"b"', "score": 1.0, "pattern_id": "p"},
        ]}),
        ReformulationResult("q2", "none", "none", metadata={"queries": []}),
    ]
    out = tmp_path / "out" / "run.tsv"
    assert DataLoader.save_reformulations(results, out) == 2
    assert out.read_text().splitlines() == ['q1\t1\t2.0\tp\t"a b"', 'q1\t2\t1.0\tp\t"b"']

    jl = tmp_path / "run.jsonl"
    DataLoader.save_reformulations(results, jl, format="jsonl")
    first = json.loads(jl.read_text().splitlines()[0])
    assert first == {"qid": "q1", "rank": 1, "score": 2.0, "pattern_id": "p", "query": '"a b"'}
