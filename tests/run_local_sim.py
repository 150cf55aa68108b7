import time
import socketio

SERVER = 'http://127.0.0.1:3000'
CONNECT_TIMEOUT = 5

# one dashboard, two snake players
admin = socketio.Client(logger=True, engineio_logger=True)
player_a = socketio.Client()
player_b = socketio.Client()

ANSWERS = [
    ('Which protocol indicates a secure website?', 'HTTPS', True),
    ('What is the main purpose of a firewall?', 'Play media files', False),
    ('Which is a strong password?', 'Welcome@123', True),
]

@admin.event
def connect():
    print('[ADMIN] connected')

@admin.event
def connect_error(data):
    print('[ADMIN] connect_error', data)

@admin.on('adminUpdate')
def on_update(d):
    top = d.get('leaderboard', [])[:3]
    print('[ADMIN]', d.get('type'), [(r['rank'], r['name'], r['score']) for r in top])


def connect_client(name, client):
    try:
        client.connect(SERVER, wait=True, wait_timeout=CONNECT_TIMEOUT)
        print(f'{name} connected')
    except Exception as e:
        print(f'{name} connect error', e)


def play(client, name, answers):
    reply = client.call('registerPlayer', {'org': 'SimCorp', 'name': name, 'designation': 'Tester'})
    if reply.get('error'):
        print(f'[{name}] register error', reply['error'])
        return
    player_id = reply['playerId']

    score = 0
    for q_index, (question, option, correct) in enumerate(answers):
        score += 5 if correct else -2
        client.emit('answerQuestion', {
            'playerId': player_id,
            'qIndex': q_index,
            'question': question,
            'chosenOption': option,
            'correct': correct,
            'newScore': score,
        })
        time.sleep(0.3)

    result = client.call('finishQuiz', {'playerId': player_id})
    print(f'[{name}] finished, rank', result.get('rank'))


def run():
    print('Connecting clients...')
    connect_client('admin', admin)
    connect_client('player_a', player_a)
    connect_client('player_b', player_b)

    info = admin.call('getEventInfo')
    print('Current event:', info.get('currentEventName'), info.get('currentEventId'))

    play(player_a, 'TeamA', ANSWERS)
    play(player_b, 'TeamB', [(q, o, not c) for q, o, c in ANSWERS])

    # second attempt must be refused
    print('Retry TeamA:', player_a.call('registerPlayer', {'org': 'SimCorp', 'name': 'TeamA', 'designation': 'Tester'}))

    time.sleep(1)
    for client in (admin, player_a, player_b):
        client.disconnect()

if __name__ == '__main__':
    run()
