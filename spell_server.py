from __future__ import annotations
import os
import sys
from flask import Flask, jsonify, request
from speller_settings import get_spell_corrector, get_max_segmentation_word_length
from suggest_item import CompoundOptions, LookupOptions, SegmentationOptions, Verbosity

app = Flask(__name__)

# FLASK_MANAGE_CORS controls whether Flask adds CORS headers itself.
#
# Set FLASK_MANAGE_CORS=True  in your local .env so that Flask adds the headers
# when running without a reverse proxy (e.g. python spell_server.py on port 8003).
#
# In production the nginx reverse proxy already adds Access-Control-Allow-Origin
# to every response, so Flask must NOT add them too. Duplicate headers make
# browsers reject the response even when both copies say "*".
_flask_manage_cors = os.environ.get("FLASK_MANAGE_CORS", "false").strip().lower() in ("1", "true", "yes")

if _flask_manage_cors:
    from flask_cors import CORS

    CORS(
        app,
        origins="*",
        supports_credentials=False,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
        automatic_options=True,
    )
    print("[spell_server] flask_cors applied (FLASK_MANAGE_CORS=True).", file=sys.stderr)
else:
    print("[spell_server] FLASK_MANAGE_CORS is not set, CORS headers will NOT be added by Flask "
          "(expected in production where nginx handles CORS).", file=sys.stderr)


_VERBOSITIES = {
    "top": Verbosity.TOP,
    "closest": Verbosity.CLOSEST,
    "all": Verbosity.ALL,
}


class BadRequest(Exception):
    pass


@app.errorhandler(BadRequest)
def handle_bad_request(e):
    return jsonify({"error": str(e)}), 400


def _get_param(name: str, default=None):
    """Read a parameter from the JSON body, the form, or the query string, in that order."""
    json_data = request.get_json(silent=True) or {}
    value = json_data.get(name)
    if value is None:
        value = request.form.get(name)
    if value is None:
        value = request.args.get(name)
    return default if value is None else value


def _get_required(name: str) -> str:
    value = _get_param(name)
    if value is None or not str(value).strip():
        raise BadRequest(f"Missing required parameter '{name}'")
    return str(value)


def _get_int(name: str, default: int | None = None) -> int | None:
    value = _get_param(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"Parameter '{name}' must be an integer")


def _get_bool(name: str) -> bool:
    value = _get_param(name, False)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes")


@app.route("/lookup", methods=["GET", "POST", "OPTIONS"])
def lookup_route():
    if request.method == "OPTIONS":
        return jsonify({"ok": True}), 200

    term = _get_required("term")
    verbosity_name = str(_get_param("verbosity", "closest")).strip().lower()
    if verbosity_name not in _VERBOSITIES:
        raise BadRequest(f"Unknown verbosity '{verbosity_name}', use one of {sorted(_VERBOSITIES)}")
    options = LookupOptions(
        include_unknown=_get_bool("include_unknown"),
        transfer_casing=_get_bool("transfer_casing"),
    )
    corrector = get_spell_corrector()
    max_edit_distance = _get_int("max_edit_distance", corrector.max_dictionary_edit_distance)
    if max_edit_distance < 0:
        raise BadRequest("Parameter 'max_edit_distance' cannot be negative")

    suggestions = corrector.lookup(term, _VERBOSITIES[verbosity_name], max_edit_distance, options)
    return jsonify({"suggestions": [s.to_dict() for s in suggestions]})


@app.route("/lookup_compound", methods=["GET", "POST", "OPTIONS"])
def lookup_compound_route():
    if request.method == "OPTIONS":
        return jsonify({"ok": True}), 200

    phrase = _get_required("phrase")
    options = CompoundOptions(
        ignore_non_words=_get_bool("ignore_non_words"),
        transfer_casing=_get_bool("transfer_casing"),
    )
    corrector = get_spell_corrector()
    max_edit_distance = _get_int("max_edit_distance", corrector.max_dictionary_edit_distance)
    if max_edit_distance < 0:
        raise BadRequest("Parameter 'max_edit_distance' cannot be negative")

    suggestion = corrector.lookup_compound(phrase, max_edit_distance, options)[0]
    return jsonify({"suggestion": suggestion.to_dict()})


@app.route("/segment", methods=["GET", "POST", "OPTIONS"])
def segment_route():
    if request.method == "OPTIONS":
        return jsonify({"ok": True}), 200

    text = _get_required("text")
    options = SegmentationOptions(
        max_edit_distance=_get_int("max_edit_distance"),
        max_segmentation_word_length=_get_int("max_segmentation_word_length",
                                              get_max_segmentation_word_length()),
    )
    if options.max_edit_distance is not None and options.max_edit_distance < 0:
        raise BadRequest("Parameter 'max_edit_distance' cannot be negative")

    composition = get_spell_corrector().word_segmentation(text, options)
    return jsonify(composition.to_dict())


@app.route("/fix", methods=["GET", "POST", "OPTIONS"])
def fix_route():
    if request.method == "OPTIONS":
        return jsonify({"ok": True}), 200

    text = _get_required("text")
    print("Received text:", text[:200])
    return jsonify({"text": get_spell_corrector().fix_string(text)})


if __name__ == "__main__":
    # Build the dictionary before the first request instead of during it
    get_spell_corrector()
    app.run(host="0.0.0.0", port=int(os.getenv("SPELL_SERVER_PORT", "8003")), debug=True)
