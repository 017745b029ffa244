"""Tests for the build and query command-line tools."""

import json

import pytest

from recommender import ContentBasedRecommender, build_index, recommend

DOCS = [
    {"id": "fox-1", "content": "The quick brown fox jumps over the lazy dog"},
    {"id": "fox-2", "content": "A quick brown fox jumped over lazy dogs"},
    {"id": "stocks", "content": "Stock markets rallied after the central bank announcement"},
]


@pytest.fixture
def corpus_path(tmp_path):
    path = tmp_path / "corpus.jsonl"
    path.write_text("\n".join(json.dumps(doc) for doc in DOCS) + "\n")
    return path


@pytest.fixture
def model_path(tmp_path, normalizer):
    recommender = ContentBasedRecommender(normalizer=normalizer, min_score=0.1)
    recommender.train(DOCS)
    return recommender.save(tmp_path / "model.joblib")


class TestBuildIndex:

    def test_trains_and_saves(self, corpus_path, tmp_path, capsys, nltk_stopwords):
        out = tmp_path / "out" / "model.joblib"

        code = build_index.main([str(corpus_path), "--out", str(out), "--min-score", "0.1"])

        assert code == 0
        assert out.exists()
        assert "Trained on 3 documents" in capsys.readouterr().out
        assert ContentBasedRecommender.load(out).options["min_score"] == 0.1

    def test_invalid_option(self, corpus_path, tmp_path, capsys):
        code = build_index.main([str(corpus_path), "--out", str(tmp_path / "m.joblib"), "--max-vector-size", "0"])

        assert code == 1
        assert "max_vector_size" in capsys.readouterr().err

    def test_missing_corpus(self, tmp_path, capsys):
        code = build_index.main([str(tmp_path / "missing.jsonl"), "--out", str(tmp_path / "m.joblib")])

        assert code == 1
        assert "Could not find corpus" in capsys.readouterr().err


class TestRecommend:

    def test_prints_ranked_table(self, model_path, capsys):
        code = recommend.main(["fox-1", "--model", str(model_path)])

        out = capsys.readouterr().out
        assert code == 0
        assert "fox-2" in out
        assert "stocks" not in out

    def test_unknown_id(self, model_path, capsys):
        code = recommend.main(["nope", "--model", str(model_path)])

        assert code == 0
        assert "No related documents found." in capsys.readouterr().out

    def test_saves_csv(self, model_path, tmp_path):
        recommend.main(["fox-1", "--model", str(model_path), "--csv-dir", str(tmp_path / "results")])

        lines = (tmp_path / "results" / "fox-1.csv").read_text().splitlines()
        assert lines[0] == "query,rank,doc_id,score"
        assert lines[1].startswith("fox-1,1,fox-2,")

    def test_missing_model(self, tmp_path, capsys):
        code = recommend.main(["fox-1", "--model", str(tmp_path / "missing.joblib")])

        assert code == 1
        assert "could not find model" in capsys.readouterr().err

    def test_negative_limit(self, model_path):
        with pytest.raises(SystemExit):
            recommend.main(["fox-1", "--model", str(model_path), "--limit", "-1"])


class TestLookup:

    def test_numeric_id_falls_back_to_int(self, normalizer):
        recommender = ContentBasedRecommender(normalizer=normalizer)
        recommender.train([{"id": i, "content": doc["content"]} for i, doc in enumerate(DOCS)])

        assert [e["id"] for e in recommend.lookup(recommender, "0")] == [1]

    def test_slug(self):
        assert recommend.slug("Fox 1 / Story") == "fox-1-story"
