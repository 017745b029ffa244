from flask import Flask, jsonify, request
import os
from pathlib import Path

from recommender import ContentBasedRecommender
from recommender.recommend import lookup


ROOT = Path(__file__).resolve().parents[0]
MODEL_PATH = Path(os.environ.get("RECOMMENDER_MODEL", ROOT / "data" / "processed" / "recommender.joblib"))

# Load artifacts
if MODEL_PATH.exists():
    recommender = ContentBasedRecommender.load(MODEL_PATH)
else:
    recommender = ContentBasedRecommender()

app = Flask(__name__)


# Utilities
def non_negative_arg(name, default=None):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    value = int(raw)
    if value < 0:
        raise ValueError(f"{name} should not be negative")
    return value


# Routes
@app.route("/similar/<doc_id>", methods=["GET"])
def similar(doc_id):
    try:
        offset = non_negative_arg("offset", 0)
        limit = non_negative_arg("limit")
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "id": doc_id,
        "offset": offset,
        "limit": limit,
        "results": lookup(recommender, doc_id, offset, limit),
    })


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "documents": len(recommender.documents)})


if __name__ == "__main__":
    app.run(debug=True)
