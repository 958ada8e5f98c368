from flask import Blueprint, jsonify

from statduel.presenters import (
    high_score_payload,
    outcome_payload,
    round_payload,
    snapshot_payload,
)
from statduel.services.game.context import game_session
from statduel.services.game.highscores import best_in_window

main = Blueprint('main', __name__)


@main.route('/')
def index():
    """Home screen state.

    Shows the last correct result once, then the game-over screen while the
    game is lost, otherwise the round waiting for a guess.
    """
    with game_session() as gs:
        snapshot = gs.consume_pending_result()
        current = gs.serve_round() if snapshot is None else gs.state.current_round
        state = gs.state

    payload = high_score_payload(best_in_window())
    payload['streak'] = state.streak

    if snapshot is not None:
        payload['view'] = 'correct_result'
        payload['result'] = snapshot_payload(snapshot)
        return jsonify(payload)

    if state.game_over:
        payload['view'] = 'game_over'
        payload['round'] = round_payload(state.result_round, gs.dataset)
        payload['result'] = outcome_payload(state.result) if state.result else {}
        return jsonify(payload)

    payload['view'] = 'round'
    payload['round'] = round_payload(current, gs.dataset)
    return jsonify(payload)
