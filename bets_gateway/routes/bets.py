import logging

from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import BadRequest

from bets_gateway.assembler import assemble_bet
from bets_gateway.errors import AggregationFailed
from bets_gateway.headers import forwarded_headers
from bets_gateway.models import BetSubmission

logger = logging.getLogger(__name__)

bp = Blueprint('bets', __name__)


@bp.route('/api/bets', methods=['POST'])
def create_bet():
    """Validate the submission, aggregate upstream data and return the bet."""
    if request.mimetype != 'application/json':
        return '', 415

    try:
        submission = BetSubmission.from_dict(request.get_json())
    except BadRequest as e:
        logger.error(f"Failed reading the request body: {e.description}")
        return jsonify({'error': e.description}), 400
    except ValueError as e:
        logger.error(f"Failed reading the request body: {e}")
        return jsonify({'error': str(e)}), 400

    logger.debug(f"bet submission received: {submission}")

    try:
        result = current_app.aggregator.aggregate(forwarded_headers(request.headers))
    except AggregationFailed as e:
        return jsonify(e.error.to_dict()), 503

    bet = assemble_bet(result)
    return jsonify(bet.to_dict()), 201
