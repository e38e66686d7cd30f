from scheduler.ratings import rating_options
from utils.cors_utils import build_response, is_preflight


def lambda_handler(event, _ctx):
    """GET /rating-options -> the four review buttons, in shortcut order."""
    if is_preflight(event):
        return build_response(200, {"ok": True}, methods="GET, OPTIONS")
    return build_response(200, {"options": rating_options()}, methods="GET, OPTIONS")
