from tacticube_play.engine.board import P1, P2
from tacticube_play.engine.role_manager import RoleManager


def test_host_and_guest_get_fixed_seats():
    rm = RoleManager()
    host  = rm.add_host('Ada')
    guest = rm.add_guest('Grace')
    assert rm.get_seat(host).player_id == P1
    assert rm.get_seat(host).is_host
    assert rm.get_seat(guest).player_id == P2
    assert not rm.get_seat(guest).is_host
    assert rm.is_full()


def test_second_guest_is_refused():
    rm = RoleManager()
    rm.add_host()
    assert rm.add_guest() is not None
    assert rm.add_guest() is None


def test_default_names_come_from_the_player_config():
    rm = RoleManager()
    assert rm.get_seat(rm.add_host()).name == 'Player 1'


def test_full_only_once_both_seats_are_taken():
    rm = RoleManager()
    rm.add_host()
    assert not rm.is_full()
    assert rm.get_token_for_player(P2) is None
    guest = rm.add_guest()
    assert rm.is_full()
    assert rm.get_token_for_player(P2) == guest


def test_unknown_token():
    assert RoleManager().get_seat('nope') is None


def test_to_dict_lists_seats_without_tokens():
    rm = RoleManager()
    guest = rm.add_guest('Grace')
    rm.add_host('Ada')
    rm.get_seat(guest).connected = True
    assert rm.to_dict() == {'seats': [
        {'player_id': P1, 'name': 'Ada', 'connected': False},
        {'player_id': P2, 'name': 'Grace', 'connected': True},
    ]}
