# print the related documents of one id from a saved model
import argparse
import re
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from recommender.build_index import DEFAULT_MODEL
from recommender.model import ContentBasedRecommender

RESULTS_DIR = Path.cwd() / "results"


def slug(s: str) -> str:
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    return re.sub(r"-+", "-", s).strip("-") or "query"


def lookup(recommender: ContentBasedRecommender, doc_id: str, offset: int = 0, limit=None) -> list:
    """Similar documents for an id typed on the command line or in a URL.

    Ids arrive as strings; a numeric string falls back to the integer id.
    """
    similar = recommender.get_similar_documents(doc_id, offset, limit)
    if not similar and doc_id not in recommender.data and re.fullmatch(r"-?\d+", doc_id):
        similar = recommender.get_similar_documents(int(doc_id), offset, limit)
    return similar


def results_frame(doc_id, similar: list, offset: int = 0) -> pd.DataFrame:
    return pd.DataFrame({
        "query": [doc_id] * len(similar),
        "rank": np.arange(offset + 1, offset + len(similar) + 1),
        "doc_id": [entry["id"] for entry in similar],
        "score": np.round([float(entry["score"]) for entry in similar], 4),
    })


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Show the documents most similar to one document")
    parser.add_argument("doc_id", type=str, help="Id of the document to look up")
    parser.add_argument("--model", type=str, default=str(DEFAULT_MODEL), help="Saved model artifact")
    parser.add_argument("--offset", type=int, default=0)
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--csv-dir", type=str, default=None, help="Also save the results as CSV here")
    args = parser.parse_args(argv)

    if args.offset < 0 or args.limit < 0:
        parser.error("--offset and --limit should not be negative")

    model_path = Path(args.model)
    if not model_path.exists():
        print(f"error: could not find model at {model_path}", file=sys.stderr)
        return 1

    recommender = ContentBasedRecommender.load(model_path)
    recs = results_frame(args.doc_id, lookup(recommender, args.doc_id, args.offset, args.limit), args.offset)

    print(f'\nDocument: "{args.doc_id}"\n')
    if recs.empty:
        print("No related documents found.")
        return 0

    print(f"{'Rank':>4} | {'Document':40} | {'Cosine Similarity'}")
    print("-" * 70)
    for _, row in recs.iterrows():
        doc = str(row["doc_id"])
        doc = (doc[:37] + "...") if len(doc) > 40 else doc
        print(f"{row['rank']:>4} | {doc:40} | {row['score']:.3f}")

    if args.csv_dir:
        out_dir = Path(args.csv_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / f"{slug(args.doc_id)}.csv"
        recs.to_csv(out_path, index=False)
        print(f"\n[saved] {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
