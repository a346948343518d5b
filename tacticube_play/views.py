"""tacticube_play/views.py  –  HTTP views for creating and joining matches."""

import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from tacticube_play import session_store
from tacticube_play.engine.game_session import GameMode

logger = logging.getLogger(__name__)


def _seat_payload(match: dict, token: str) -> dict:
    key = match['match_key']
    return {
        'match_key':  key,
        'mode':       match['mode'],
        'seat_token': token,
        'player_id':  match['role_manager'].get_seat(token).player_id,
        'ws_url':     f'/ws/match/{key}/{token}/',
    }


@require_POST
def create_match(request):
    """Create a networked match and seat the caller as host (P1).

    POST field ``mode`` selects SINGLE, MULTI (default) or RANDOM.
    """
    mode = request.POST.get('mode', GameMode.MULTI.value)
    try:
        mode = GameMode(mode).value
    except ValueError:
        return JsonResponse({'error': f'Unknown mode {mode!r}.'}, status=400)

    match = session_store.create_match(mode)
    token = match['role_manager'].add_host(request.POST.get('name', ''))
    logger.info("Match %s created (%s)", match['match_key'], mode)
    return JsonResponse(_seat_payload(match, token), status=201)


@require_POST
def join_match(request, match_key):
    """Seat the caller as guest (P2) in an existing match."""
    match = session_store.get_match(str(match_key))
    if match is None:
        return JsonResponse({'error': 'Match not found.'}, status=404)

    role_manager = match['role_manager']
    if role_manager.is_full():
        return JsonResponse({'error': 'Match is full.'}, status=409)
    token = role_manager.add_guest(request.POST.get('name', ''))
    return JsonResponse(_seat_payload(match, token))


@require_GET
def match_status(request, match_key):
    match = session_store.get_match(str(match_key))
    if match is None:
        return JsonResponse({'error': 'Match not found.'}, status=404)
    return JsonResponse({
        'match_key':  match['match_key'],
        'mode':       match['mode'],
        'status':     match['status'],
        'created_at': match['created_at'],
        **match['role_manager'].to_dict(),
    })
