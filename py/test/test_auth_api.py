"""
访问密码与登录接口测试
"""
import pytest


@pytest.fixture
def secured(client_factory):
    return client_factory(PASSWORD='secret')


def _bearer(password):
    return {'Authorization': f'Bearer {password}'}


def test_no_password_allows_all_requests(client):
    assert client.get('/api/notes').status_code == 200
    assert client.post('/api/login', json={'password': 'anything'}).json() == {'success': True}


def test_requests_without_token_are_rejected(secured):
    response = secured.get('/api/notes')
    assert response.status_code == 401
    assert response.json() == {'success': False, 'error': 'Unauthorized'}
    assert response.headers['www-authenticate'] == 'Bearer'


def test_requests_with_wrong_token_are_rejected(secured):
    assert secured.get('/api/notes', headers=_bearer('wrong')).status_code == 401
    assert secured.get('/api/notes', headers={'Authorization': 'secret'}).status_code == 401
    assert secured.get('/api/logs', headers=_bearer('wrong')).status_code == 401
    assert secured.post('/api/backup', headers=_bearer('wrong')).status_code == 401


def test_requests_with_valid_token_succeed(secured):
    assert secured.get('/api/notes', headers=_bearer('secret')).status_code == 200


def test_login(secured):
    assert secured.post('/api/login', json={'password': 'secret'}).json() == {'success': True}

    response = secured.post('/api/login', json={'password': 'nope'})
    assert response.status_code == 401
    assert response.json()['success'] is False

    assert secured.post('/api/login', json={}).status_code == 400


def test_login_attempts_are_logged(secured):
    secured.post('/api/login', json={'password': 'nope'}, headers={'X-Forwarded-For': '10.0.0.1, 10.0.0.2'})
    secured.post('/api/login', json={'password': 'secret'})
    items = secured.get('/api/logs', headers=_bearer('secret')).json()['items']
    assert [item['message'] for item in items[:2]] == ['login.success', 'login.failed']
    assert items[1]['level'] == 'warn'
    assert '10.0.0.1' in items[1]['meta']


def test_health_does_not_require_auth(secured):
    response = secured.get('/api/health')
    assert response.status_code == 200
    assert response.json()['status'] == 'ok'
    assert response.json()['storage'] == 'sql'


def test_password_status_env(secured):
    status = secured.get('/api/password/status', headers=_bearer('secret')).json()
    assert status == {
        'success': True,
        'hasPassword': True,
        'hasEnvPassword': True,
        'hasDbPassword': False,
        'passwordSource': 'env',
    }


def test_password_status_none(client):
    status = client.get('/api/password/status').json()
    assert status['hasPassword'] is False
    assert status['passwordSource'] == 'none'


def test_change_password_switches_to_database_password(secured):
    response = secured.post(
        '/api/password',
        json={'currentPassword': 'secret', 'newPassword': 'rotated'},
        headers=_bearer('secret')
    )
    assert response.json() == {'success': True}

    assert secured.get('/api/notes', headers=_bearer('secret')).status_code == 401
    assert secured.get('/api/notes', headers=_bearer('rotated')).status_code == 200

    status = secured.get('/api/password/status', headers=_bearer('rotated')).json()
    assert status['passwordSource'] == 'database'
    assert status['hasDbPassword'] is True


def test_change_password_validates_current(secured):
    response = secured.post(
        '/api/password',
        json={'currentPassword': 'wrong', 'newPassword': 'rotated'},
        headers=_bearer('secret')
    )
    assert response.status_code == 401

    response = secured.post(
        '/api/password',
        json={'currentPassword': 'secret'},
        headers=_bearer('secret')
    )
    assert response.status_code == 400


def test_first_password_can_be_set_without_existing_one(client):
    response = client.post('/api/password', json={'currentPassword': 'x', 'newPassword': 'first'})
    assert response.json() == {'success': True}
    assert client.get('/api/notes').status_code == 401
    assert client.get('/api/notes', headers=_bearer('first')).status_code == 200


def test_debug_env_hides_values(secured):
    body = secured.get('/api/debug/env', headers=_bearer('secret')).json()
    assert body['hasPassword'] is True
    assert body['passwordLength'] == 6
    assert 'secret' not in str(body)
