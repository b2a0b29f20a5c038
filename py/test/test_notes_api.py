"""
笔记接口测试
"""
import time


def test_list_is_empty_initially(client):
    response = client.get('/api/notes')
    assert response.status_code == 200
    assert response.json() == []


def test_create_and_get_note(client):
    response = client.post('/api/notes', json={
        'id': 'n1', 'title': 'Hello', 'content': '# Hi', 'tags': ['a', ' b ']
    })
    assert response.status_code == 200
    assert response.json() == {'success': True, 'id': 'n1'}

    note = client.get('/api/notes/n1').json()
    assert note['title'] == 'Hello'
    assert note['content'] == '# Hi'
    assert note['tags'] == ['a', 'b']
    assert note['createdAt'].endswith('Z')
    assert note['updatedAt'].endswith('Z')


def test_create_without_id_generates_one(client):
    first = client.post('/api/notes', json={'title': 'A', 'content': 'x'}).json()
    second = client.post('/api/notes', json={'title': 'B', 'content': 'y'}).json()
    assert first['id'] and second['id']
    assert first['id'] != second['id']
    assert len(client.get('/api/notes').json()) == 2


def test_missing_fields_are_rejected(client):
    response = client.post('/api/notes', json={'title': 'no content'})
    assert response.status_code == 400
    assert response.json()['success'] is False

    response = client.post('/api/notes', json={'title': '   ', 'content': 'x'})
    assert response.status_code == 400


def test_upsert_is_idempotent_and_keeps_created_at(client):
    payload = {'id': 'same', 'title': 'T', 'content': 'c', 'tags': ['t']}
    client.post('/api/notes', json=payload)
    first = client.get('/api/notes/same').json()
    time.sleep(0.01)
    client.post('/api/notes', json=payload)
    second = client.get('/api/notes/same').json()

    notes = client.get('/api/notes').json()
    assert [n['id'] for n in notes] == ['same']
    assert second['createdAt'] == first['createdAt']
    assert second['updatedAt'] > first['updatedAt']


def test_list_is_ordered_by_updated_at_desc(client):
    client.post('/api/notes', json={'id': 'old', 'title': 'Old', 'content': ''})
    time.sleep(0.01)
    client.post('/api/notes', json={'id': 'new', 'title': 'New', 'content': ''})
    assert [n['id'] for n in client.get('/api/notes').json()] == ['new', 'old']

    time.sleep(0.01)
    client.put('/api/notes/old', json={'content': 'touched'})
    assert [n['id'] for n in client.get('/api/notes').json()] == ['old', 'new']


def test_update_changes_only_given_fields(client):
    client.post('/api/notes', json={'id': 'u1', 'title': 'T', 'content': 'c', 'tags': ['x']})
    response = client.put('/api/notes/u1', json={'title': 'T2'})
    assert response.status_code == 200
    note = response.json()['note']
    assert note['title'] == 'T2'
    assert note['content'] == 'c'
    assert note['tags'] == ['x']

    note = client.put('/api/notes/u1', json={'tags': []}).json()['note']
    assert note['tags'] == []


def test_update_missing_note_returns_404(client):
    response = client.put('/api/notes/nope', json={'title': 'x'})
    assert response.status_code == 404
    assert response.json() == {'success': False, 'error': 'Note not found'}


def test_delete_note(client):
    client.post('/api/notes', json={'id': 'd1', 'title': 'T', 'content': 'c'})
    response = client.delete('/api/notes/d1')
    assert response.status_code == 200
    assert response.json() == {'success': True}

    assert client.get('/api/notes').json() == []
    assert client.get('/api/notes/d1').status_code == 404
    assert client.delete('/api/notes/d1').status_code == 404


def test_import_then_list(client):
    response = client.post('/api/import', json={
        'notes': [{'id': '1', 'title': 'A', 'content': 'x', 'tags': ['t']}]
    })
    assert response.status_code == 200
    assert response.json() == {'success': True, 'imported': 1, 'skipped': 0}

    notes = client.get('/api/notes').json()
    assert len(notes) == 1
    assert notes[0]['id'] == '1'
    assert notes[0]['title'] == 'A'
    assert notes[0]['tags'] == ['t']


def test_import_skips_malformed_items(client):
    response = client.post('/api/import', json=[
        {'title': 'ok', 'content': 'x'},
        'not an object',
        ['a', 'list'],
        {'title': 42, 'content': 'numeric title'},
        {'title': 'ok2', 'content': 'y', 'created_at': '2020-05-06T07:08:09.000Z'},
    ])
    assert response.json() == {'success': True, 'imported': 2, 'skipped': 3}

    notes = {n['title']: n for n in client.get('/api/notes').json()}
    assert set(notes) == {'ok', 'ok2'}
    assert notes['ok2']['createdAt'] == '2020-05-06T07:08:09.000Z'


def test_import_fills_defaults_for_loose_items(client):
    response = client.post('/api/import', json={'notes': [
        {'id': 'a', 'title': 'no content'},
        {'id': 'b', 'title': 'bad tags', 'content': 'x', 'tags': 'not-a-list'},
        {'id': 'c', 'title': 'numeric time', 'content': 'x', 'createdAt': 1700000000000},
        {'id': 'd', 'content': 'untitled'},
        {'id': 'e', 'title': 'bad time', 'content': 'x', 'createdAt': 'yesterday'},
    ]})
    assert response.json() == {'success': True, 'imported': 5, 'skipped': 0}

    notes = {n['id']: n for n in client.get('/api/notes').json()}
    assert notes['a']['content'] == ''
    assert notes['b']['tags'] == []
    assert notes['c']['createdAt'] == '2023-11-14T22:13:20.000Z'
    assert notes['d']['title'] == '导入的笔记'
    assert notes['d']['content'] == 'untitled'
    assert notes['e']['createdAt'] == notes['e']['updatedAt']


def test_saved_title_is_trimmed(client):
    client.post('/api/notes', json={'id': 's', 'title': '  spaced  ', 'content': 'c'})
    assert client.get('/api/notes/s').json()['title'] == 'spaced'

    client.put('/api/notes/s', json={'title': '  renamed '})
    assert client.get('/api/notes/s').json()['title'] == 'renamed'


def test_import_requires_array(client):
    response = client.post('/api/import', json={'notes': 'nope'})
    assert response.status_code == 400


def test_note_operations_are_logged(client):
    client.post('/api/notes', json={'id': 'l1', 'title': 'T', 'content': 'c'})
    client.delete('/api/notes/l1')
    messages = [item['message'] for item in client.get('/api/logs').json()['items']]
    assert messages[:2] == ['note.delete', 'note.upsert']
