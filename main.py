from flask import Flask, request, jsonify
from flask_cors import CORS
from payment_terms import api
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the authoring forms call the API from the browser)
CORS(app)


def _handle(operation, label):
    """Run an engine operation on the request body and map errors to responses."""
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        logger.info(f"Processing {label} request")

        result = operation(input_data)

        logger.info(f"{label} request processed successfully")

        return jsonify(result), 200

    except api.FormInvalid as e:
        logger.info(f"{label} request rejected: document has validation errors")
        return jsonify({
            "error": str(e),
            "status": "invalid",
            "validation": e.outcome
        }), 422

    except (ValueError, KeyError, TypeError, AttributeError) as e:
        # Malformed input (missing keys, unknown modes, bad numbers)
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Payment Terms Engine API",
        "version": "1.0",
        "endpoints": {
            "totals": "/totals [POST]",
            "edit_leg": "/split/leg [POST]",
            "switch_mode": "/split/mode [POST]",
            "validate": "/validate [POST]",
            "payload": "/payload [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/totals", methods=["POST"])
def totals():
    """Subtotal, tax and total for a list of line items"""
    return _handle(api.compute_totals, "totals")


@app.route("/split/leg", methods=["POST"])
def edit_leg():
    """Edit one payment leg and re-derive the balance"""
    return _handle(api.edit_leg, "edit_leg")


@app.route("/split/mode", methods=["POST"])
def switch_mode():
    """Switch between amount and percent units"""
    return _handle(api.switch_mode, "switch_mode")


@app.route("/validate", methods=["POST"])
def validate():
    """
    Validate a whole document form.

    Always 200 for a well-formed request; check `has_errors` in the body.
    """
    return _handle(api.validate_document, "validate")


@app.route("/payload", methods=["POST"])
def payload():
    """Validate and build the submission payload (422 when invalid)"""
    return _handle(api.build_payload, "payload")


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
