import time


def events_named(received, name):
    return [pkt['args'][0] for pkt in received if pkt['name'] == name]


def join(sio_client, name, size=3):
    sio_client.emit('joinGame', {'playerName': name, 'gridSize': size})
    received = sio_client.get_received()
    joined = events_named(received, 'playerJoined')[-1]
    me = [p for p in joined['players'] if p['name'] == name][-1]
    return me, received


def test_join_sends_symbol_and_state(flask_app, make_sio_client):
    alice = make_sio_client(flask_app)
    alice.get_received()
    me, received = join(alice, 'Alice', 4)
    assert [pkt['name'] for pkt in received] == ['playerSymbol', 'playerJoined', 'gameState']
    assert events_named(received, 'playerSymbol') == ['X']
    state = events_named(received, 'gameState')[0]
    assert state['board'] == [None] * 16
    assert state['status'] == 'waiting'
    assert me['symbol'] == 'X'


def test_two_players_play_and_score(flask_app, make_sio_client):
    alice = make_sio_client(flask_app)
    bob = make_sio_client(flask_app)
    a, _ = join(alice, 'Alice')
    b, received = join(bob, 'Bob')
    assert events_named(received, 'playerSymbol') == ['O']
    started = events_named(alice.get_received(), 'playerJoined')[-1]
    assert started['status'] == 'playing'
    assert started['currentPlayer'] == a['id']

    for player, sio, index in [(a, alice, 0), (b, bob, 3), (a, alice, 1), (b, bob, 4)]:
        sio.emit('makeMove', {'index': index, 'playerId': player['id']})
    alice.get_received()
    bob.get_received()

    alice.emit('makeMove', {'index': 2, 'playerId': a['id']})
    received = bob.get_received()
    assert [pkt['name'] for pkt in received] == ['scoreUpdate', 'moveResult', 'gameUpdate']
    score = events_named(received, 'scoreUpdate')[0]
    assert score['lines'] == ['horizontal']
    assert score['winningIndices'] == [0, 1, 2]
    assert score['scores'][a['id']] == 1
    result = events_named(received, 'moveResult')[0]
    assert result['success'] is True
    assert result['currentPlayer'] == b['id']


def test_rejected_move_reaches_only_the_mover(flask_app, make_sio_client):
    alice = make_sio_client(flask_app)
    bob = make_sio_client(flask_app)
    join(alice, 'Alice')
    b, _ = join(bob, 'Bob')
    alice.get_received()

    bob.emit('makeMove', {'index': 0, 'playerId': b['id']})
    received = bob.get_received()
    assert events_named(received, 'moveResult') == [{'success': False, 'message': 'Not your turn'}]
    assert alice.get_received() == []


def test_bad_join_gets_error(flask_app, make_sio_client):
    alice = make_sio_client(flask_app)
    alice.get_received()
    alice.emit('joinGame', {'playerName': 'Alice', 'gridSize': 42})
    received = alice.get_received()
    assert [pkt['name'] for pkt in received] == ['error']


def test_disconnect_notifies_and_tears_down(flask_app, make_sio_client):
    registry = flask_app.extensions['xox_registry']
    alice = make_sio_client(flask_app)
    bob = make_sio_client(flask_app)
    a, _ = join(alice, 'Alice', 5)
    join(bob, 'Bob', 5)
    bob.get_received()
    session = registry.session_for(a['id'])

    alice.disconnect()
    received = bob.get_received()
    assert events_named(received, 'playerLeft') == [{'playerId': a['id']}]
    assert events_named(received, 'gameUpdate')[-1]['status'] == 'waiting'

    bob.disconnect()
    assert session.id not in registry
    assert len(registry) == 0


def test_winning_cells_cleared_after_delay(clearing_app, make_sio_client):
    alice = make_sio_client(clearing_app)
    bob = make_sio_client(clearing_app)
    a, _ = join(alice, 'Alice')
    b, _ = join(bob, 'Bob')
    for player, sio, index in [(a, alice, 0), (b, bob, 3), (a, alice, 1), (b, bob, 4), (a, alice, 2)]:
        sio.emit('makeMove', {'index': index, 'playerId': player['id']})

    deadline = time.time() + 3.0
    board = None
    while time.time() < deadline and board is None:
        updates = events_named(bob.get_received(), 'boardUpdate')
        if updates:
            board = updates[-1]['board']
        else:
            time.sleep(0.05)
    assert board == [None, None, None, 'O', 'O', None, None, None, None]
