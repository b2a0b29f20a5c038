"""
Redis 存储测试（使用内存中的假客户端）
"""
import json
import time

import pytest

from storage.redis_storage import RedisStorage, NOTES_KEY, LOGS_KEY, SETTINGS_KEY, note_key
from utils.time_utils import parse_iso


@pytest.fixture
def storage(fake_redis):
    return RedisStorage(fake_redis)


def _note(note_id, title='T', content='c', tags=None):
    return {'id': note_id, 'title': title, 'content': content, 'tags': tags or []}


def test_upsert_uses_key_layout(storage, fake_redis):
    storage.upsert_note(_note('1', tags=['a']))
    assert fake_redis.smembers(NOTES_KEY) == {'1'}
    stored = json.loads(fake_redis.get(note_key('1')))
    assert stored['tags'] == ['a']
    assert stored['createdAt'].endswith('Z')


def test_upsert_preserves_created_at(storage):
    first = storage.upsert_note(_note('1'))
    time.sleep(0.01)
    second = storage.upsert_note(_note('1', title='T2'))
    assert second['createdAt'] == first['createdAt']
    assert second['updatedAt'] > first['updatedAt']
    assert storage.get_note('1')['title'] == 'T2'


def test_list_sorted_by_updated_at(storage):
    storage.upsert_note(_note('a'))
    time.sleep(0.01)
    storage.upsert_note(_note('b'))
    assert [n['id'] for n in storage.list_notes()] == ['b', 'a']


def test_update_and_delete(storage):
    storage.upsert_note(_note('1', tags=['x']))
    updated = storage.update_note('1', {'content': 'new'})
    assert updated['content'] == 'new'
    assert updated['tags'] == ['x']
    assert storage.update_note('missing', {'content': 'x'}) is None

    assert storage.delete_note('1') is True
    assert storage.delete_note('1') is False
    assert storage.list_notes() == []


def test_replace_all_notes(storage, fake_redis):
    storage.upsert_note(_note('old'))
    count = storage.replace_all_notes([
        {**_note('n1'), 'createdAt': parse_iso('2025-01-01T00:00:00Z'), 'updatedAt': parse_iso('2025-01-02T00:00:00Z')},
        _note('n2'),
    ])
    assert count == 2
    assert fake_redis.smembers(NOTES_KEY) == {'n1', 'n2'}
    assert fake_redis.get(note_key('old')) is None
    assert storage.get_note('n1')['updatedAt'] == '2025-01-02T00:00:00.000Z'


def test_logs_are_trimmed_and_newest_first(storage, fake_redis):
    for i in range(15):
        storage.append_log('info', f'event {i}', None, retention=10)
    assert fake_redis.llen(LOGS_KEY) == 10
    items = storage.list_logs(3)
    assert [item['message'] for item in items] == ['event 14', 'event 13', 'event 12']
    assert items[0]['id'] == 15

    assert storage.clear_logs() == 10
    assert storage.list_logs(5) == []


def test_corrupt_log_entries_are_reported(storage, fake_redis):
    fake_redis.lpush(LOGS_KEY, 'not json')
    assert storage.list_logs(5)[0]['message'] == 'Invalid log entry'


def test_settings_hash(storage, fake_redis):
    assert storage.get_setting('password') is None
    storage.set_setting('password', 'pw')
    assert fake_redis.hget(SETTINGS_KEY, 'password') == 'pw'
    assert storage.get_setting('password') == 'pw'


def test_api_over_redis_storage(client_factory, fake_redis):
    client = client_factory(storage=RedisStorage(fake_redis), PASSWORD='pw')
    headers = {'Authorization': 'Bearer pw'}

    client.post('/api/import', json={'notes': [{'id': '1', 'title': 'A', 'content': 'x', 'tags': ['t']}]}, headers=headers)
    notes = client.get('/api/notes', headers=headers).json()
    assert [(n['id'], n['title'], n['tags']) for n in notes] == [('1', 'A', ['t'])]

    client.post('/api/backup', headers=headers)
    client.delete('/api/notes/1', headers=headers)
    client.get('/api/backup', headers=headers)
    notes = client.get('/api/notes', headers=headers).json()
    assert [(n['title'], n['content']) for n in notes] == [('A', 'x')]

    assert client.get('/api/health').json()['storage'] == 'redis'
