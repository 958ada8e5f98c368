"""JSON shapes handed to the front end."""
from statduel.services.countries import country_info, format_stat_value, indicator_label


def round_payload(round_, dataset, with_countries=True):
    if round_ is None:
        return None
    payload = {
        'left': round_.left,
        'right': round_.right,
        'indicator': round_.indicator,
        'indicator_label': indicator_label(round_.indicator),
        'indicator_year': dataset.indicator_year(round_.indicator),
    }
    if with_countries:
        left_info = country_info(round_.left)
        right_info = country_info(round_.right)
        payload.update({
            'left_name': left_info['name'],
            'right_name': right_info['name'],
            'left_flag_url': left_info['flag_url'],
            'right_flag_url': right_info['flag_url'],
        })
    return payload


def outcome_payload(outcome):
    payload = outcome.to_dict()
    payload['left_value_display'] = format_stat_value(outcome.left_value)
    payload['right_value_display'] = format_stat_value(outcome.right_value)
    return payload


def snapshot_payload(snapshot):
    left_info = country_info(snapshot.left)
    right_info = country_info(snapshot.right)
    payload = snapshot.to_dict()
    payload.update({
        'left_name': left_info['name'],
        'right_name': right_info['name'],
        'left_flag_url': left_info['flag_url'],
        'right_flag_url': right_info['flag_url'],
        'indicator_label': indicator_label(snapshot.indicator),
        'left_value_display': format_stat_value(snapshot.left_value),
        'right_value_display': format_stat_value(snapshot.right_value),
    })
    return payload


def high_score_payload(best):
    streak, set_at = best
    return {
        'high_score': streak,
        'high_score_set_at': set_at.isoformat() if set_at else None,
    }
