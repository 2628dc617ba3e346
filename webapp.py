from __future__ import annotations

import io
import logging
import os

from flask import Flask, Response, jsonify, request, send_file
from werkzeug.exceptions import HTTPException

from review_forms.aggregation import to_tsv
from review_forms.config import ReviewFormsConfig, load_config_override
from review_forms.exceptions import InvalidUploadError, ReviewFormsError
from review_forms.generator import generate_forms, parse_review_type
from review_forms.importer import import_scores, validate_upload_names


logger = logging.getLogger(__name__)


def _load_config() -> ReviewFormsConfig:
    cfg = ReviewFormsConfig()
    override = os.environ.get("REVIEW_FORMS_CONFIG")
    if override:
        cfg = load_config_override(override, cfg)
    return cfg


app = Flask(__name__)
app.config["REVIEW_FORMS"] = _load_config()


@app.errorhandler(ReviewFormsError)
def handle_bad_input(err: ReviewFormsError):
    return jsonify({"error": str(err)}), 400


@app.errorhandler(Exception)
def handle_failure(err: Exception):
    if isinstance(err, HTTPException):
        return err
    logger.exception("Request failed")
    return jsonify({"error": str(err) or "Server error"}), 500


@app.post("/generate")
@app.post("/api/generate-forms")
def generate():
    cfg: ReviewFormsConfig = app.config["REVIEW_FORMS"]
    uploaded = request.files.get("file")
    if uploaded is None or not uploaded.filename:
        raise InvalidUploadError("Missing file")
    if not uploaded.filename.lower().endswith(".xlsx"):
        raise InvalidUploadError("File must be .xlsx")

    result = generate_forms(
        uploaded.read(),
        review_type=parse_review_type(request.form.get("reviewType", "mid")),
        fiscal_year=request.form.get("fiscalYear"),
        cfg=cfg,
    )

    return send_file(
        io.BytesIO(result.archive),
        mimetype="application/zip",
        as_attachment=True,
        download_name=result.archive_name,
    )


@app.post("/import")
@app.post("/api/import-scores")
def import_completed():
    cfg: ReviewFormsConfig = app.config["REVIEW_FORMS"]
    files = [f for f in request.files.getlist("files") if f.filename]
    validate_upload_names(f.filename for f in files)

    result = import_scores(((f.filename, f.read()) for f in files), cfg)

    if request.args.get("format", "").lower() == "tsv":
        return Response(to_tsv(result.rows), mimetype="text/tab-separated-values")
    return jsonify(result.to_dict())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app.run(debug=True)
