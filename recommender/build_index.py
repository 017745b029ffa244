# train a recommender on a corpus and save the model artifact
import argparse
import logging
import sys
from pathlib import Path

from recommender.exceptions import RecommenderError
from recommender.load_data import load_documents
from recommender.model import ContentBasedRecommender

ROOT = Path.cwd()
OUT = ROOT / "data" / "processed"
DEFAULT_MODEL = OUT / "recommender.joblib"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Train related-document recommendations for a corpus")
    parser.add_argument("corpus", type=str, help="Corpus file (.jsonl, .json, .csv or .parquet)")
    parser.add_argument("--out", type=str, default=str(DEFAULT_MODEL), help="Where to save the model")
    parser.add_argument("--id-column", type=str, default="id")
    parser.add_argument("--content-column", type=str, default="content")
    parser.add_argument("--max-rows", type=int, default=None, help="Only read this many rows")
    parser.add_argument("--max-vector-size", type=int, default=None)
    parser.add_argument("--max-similar-documents", type=int, default=None)
    parser.add_argument("--min-score", type=float, default=None)
    parser.add_argument("--jobs", type=int, default=1, help="Parallel workers for pair scoring")
    parser.add_argument("--debug", action="store_true", help="Log training progress")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.debug else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    options = {
        "max_vector_size": args.max_vector_size,
        "max_similar_documents": args.max_similar_documents,
        "min_score": args.min_score,
    }
    options = {name: value for name, value in options.items() if value is not None}

    try:
        recommender = ContentBasedRecommender(n_jobs=args.jobs, debug=args.debug, **options)
        documents = load_documents(args.corpus, args.id_column, args.content_column, args.max_rows)
        recommender.train(documents)
        out_path = recommender.save(args.out)
    except (RecommenderError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    with_neighbors = sum(1 for similar in recommender.data.values() if similar)
    print(f"Trained on {len(documents)} documents, {with_neighbors} with related documents")
    print(f"Saved model to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
