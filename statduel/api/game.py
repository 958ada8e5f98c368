from datetime import timedelta

from flask import Blueprint, current_app, jsonify, request

from statduel import get_dataset
from statduel.presenters import high_score_payload, outcome_payload, round_payload
from statduel.services.game import DataIntegrityError, Round
from statduel.services.game.context import game_session
from statduel.services.game.highscores import best_in_window

game = Blueprint('game', __name__)

# Longest leaderboard window, roughly ten years
MAX_WINDOW_DAYS = 3650


def _request_data():
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form


@game.route('/round', methods=['GET'])
def get_round():
    """Returns the current round, picking one if none is waiting."""
    with game_session() as gs:
        current = gs.serve_round()
        state = gs.state
    return jsonify({
        'round': round_payload(current, gs.dataset),
        'streak': state.streak,
        'game_over': state.game_over,
    })


@game.route('/guess', methods=['POST'])
def submit_guess():
    """Scores a guess for the round the client was shown."""
    data = _request_data()
    left = data.get('left')
    right = data.get('right')
    indicator = data.get('indicator')
    guess = data.get('guess')
    if not all(isinstance(v, str) and v for v in (left, right, indicator)) or left == right:
        return jsonify({'error': 'Invalid round.'}), 422
    if guess is not None and not isinstance(guess, str):
        return jsonify({'error': 'Invalid round.'}), 422

    round_ = Round(left=left, right=right, indicator=indicator)
    try:
        with game_session() as gs:
            outcome = gs.submit_guess(round_, guess)
            state = gs.state
    except DataIntegrityError as exc:
        current_app.logger.info(f"[guess-rejected] round={round_.to_dict()} reason={exc}")
        return jsonify({'error': 'Invalid round.'}), 422

    current_app.logger.info(
        f"[guess] round={round_.to_dict()} guess={guess} correct={outcome.correct} streak={state.streak}"
    )
    payload = outcome_payload(outcome)
    payload.update({
        'streak': state.streak,
        'game_over': state.game_over,
        'next_round': round_payload(state.current_round, get_dataset()) if outcome.correct else None,
    })
    return jsonify(payload)


@game.route('/restart', methods=['POST'])
def restart():
    with game_session() as gs:
        gs.restart()
        current = gs.serve_round()
    return jsonify({
        'round': round_payload(current, gs.dataset),
        'streak': 0,
        'game_over': False,
    })


@game.route('/highscore', methods=['GET'])
def get_high_score():
    default_days = int(current_app.config.get('HIGH_SCORE_WINDOW_DAYS', 7))
    days = request.args.get('days', default_days, type=int)
    if days <= 0 or days > MAX_WINDOW_DAYS:
        return jsonify({'error': f'days must be between 1 and {MAX_WINDOW_DAYS}'}), 400
    payload = high_score_payload(best_in_window(timedelta(days=days)))
    payload['window_days'] = days
    return jsonify(payload)
