"""Goal endpoints: CRUD, ownership and validation."""

import pytest


def auth_header(token: str):
    return {'Authorization': f'Bearer {token}'}


def create_goal(client, token, **overrides):
    payload = {'goalType': 'water', 'targetValue': 8, 'unit': 'glasses'}
    payload.update(overrides)
    resp = client.post('/api/goals', json=payload, headers=auth_header(token))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_and_list_goals(api_client, patient, store):
    user, token = patient
    goal = create_goal(api_client, token, progressValue=2)
    assert goal['userId'] == user['id']
    assert goal['goalType'] == 'water'
    assert goal['targetValue'] == 8
    assert goal['progressValue'] == 2
    assert len(goal['date']) == 10

    create_goal(api_client, token, goalType='steps', targetValue=10000, unit='steps', date='2020-01-01')
    create_goal(api_client, token, goalType='sleep', targetValue=7.5, unit='hours', date='2030-01-01')

    resp = api_client.get('/api/goals', headers=auth_header(token))
    assert resp.status_code == 200
    dates = [g['date'] for g in resp.json()]
    assert dates == sorted(dates, reverse=True)
    assert dates[0] == '2030-01-01'
    assert resp.json()[0]['targetValue'] == 7.5

    actions = [e.action for e in store.list_audit(user['id'])]
    assert actions[0] == 'viewGoals'
    assert actions.count('createGoal') == 3


def test_goals_are_private_to_owner(api_client, patient, other_patient):
    _, token = patient
    _, other_token = other_patient
    create_goal(api_client, token)
    assert api_client.get('/api/goals', headers=auth_header(other_token)).json() == []


def test_update_goal_progress(api_client, patient, store):
    user, token = patient
    goal = create_goal(api_client, token)
    resp = api_client.put(
        f"/api/goals/{goal['id']}", json={'progressValue': 8}, headers=auth_header(token)
    )
    assert resp.status_code == 200
    assert resp.json()['progressValue'] == 8
    assert resp.json()['targetValue'] == 8

    entry = store.list_audit(user['id'])[0]
    assert entry.action == 'updateGoal'
    assert entry.target_resource == f"goal:{goal['id']}"
    assert entry.metadata == {'newProgress': 8}


def test_update_goal_of_other_user_is_forbidden(api_client, patient, other_patient, store):
    _, token = patient
    _, other_token = other_patient
    goal = create_goal(api_client, token, progressValue=1)

    resp = api_client.put(
        f"/api/goals/{goal['id']}", json={'progressValue': 8}, headers=auth_header(other_token)
    )
    assert resp.status_code == 403
    assert resp.json() == {'message': 'Access denied'}
    assert store.get_goal(goal['id']).progress_value == 1

    resp = api_client.delete(f"/api/goals/{goal['id']}", headers=auth_header(other_token))
    assert resp.status_code == 403
    assert store.get_goal(goal['id']) is not None


def test_delete_goal_then_missing(api_client, patient):
    _, token = patient
    goal = create_goal(api_client, token)
    resp = api_client.delete(f"/api/goals/{goal['id']}", headers=auth_header(token))
    assert resp.status_code == 204
    assert resp.content == b''

    for _ in range(2):
        again = api_client.delete(f"/api/goals/{goal['id']}", headers=auth_header(token))
        assert again.status_code == 404
        assert again.json() == {'message': 'Goal not found'}


def test_update_missing_goal(api_client, patient):
    _, token = patient
    resp = api_client.put('/api/goals/missing', json={'progressValue': 1}, headers=auth_header(token))
    assert resp.status_code == 404
    assert resp.json() == {'message': 'Goal not found'}


@pytest.mark.parametrize(
    'overrides, message',
    [
        ({'targetValue': 0}, 'Target must be a positive number'),
        ({'targetValue': -3}, 'Target must be a positive number'),
        ({'progressValue': -1}, 'Progress must be zero or greater'),
        ({'date': 'not-a-date'}, 'Date must be a valid date (YYYY-MM-DD)'),
    ],
)
def test_create_goal_validation(api_client, patient, overrides, message):
    _, token = patient
    payload = {'goalType': 'water', 'targetValue': 8, 'unit': 'glasses'}
    payload.update(overrides)
    resp = api_client.post('/api/goals', json=payload, headers=auth_header(token))
    assert resp.status_code == 400
    assert resp.json() == {'message': message}


def test_update_goal_rejects_negative_progress(api_client, patient):
    _, token = patient
    goal = create_goal(api_client, token)
    resp = api_client.put(
        f"/api/goals/{goal['id']}", json={'progressValue': -2}, headers=auth_header(token)
    )
    assert resp.status_code == 400
    assert resp.json() == {'message': 'Progress must be zero or greater'}


def test_goals_require_token(api_client):
    resp = api_client.get('/api/goals')
    assert resp.status_code == 401
    assert resp.json() == {'message': 'Access token required'}

    resp = api_client.get('/api/goals', headers=auth_header('not-a-token'))
    assert resp.status_code == 403
    assert resp.json() == {'message': 'Invalid or expired token'}


@pytest.mark.parametrize(
    'body, message',
    [
        ('{"goalType": "steps", "targetValue": 1e400, "unit": "steps"}', 'Target must be a positive number'),
        ('{"goalType": "steps", "targetValue": NaN, "unit": "steps"}', 'Target must be a positive number'),
        ('{"goalType": "steps", "targetValue": "10", "unit": "steps"}', 'Target must be a positive number'),
        ('{"goalType": "steps", "targetValue": true, "unit": "steps"}', 'Target must be a positive number'),
        (
            '{"goalType": "steps", "targetValue": 10, "progressValue": Infinity, "unit": "steps"}',
            'Progress must be zero or greater',
        ),
    ],
)
def test_create_goal_rejects_non_finite_and_non_numeric(api_client, patient, store, body, message):
    user, token = patient
    headers = {**auth_header(token), 'Content-Type': 'application/json'}
    resp = api_client.post('/api/goals', content=body, headers=headers)
    assert resp.status_code == 400
    assert resp.json() == {'message': message}
    assert store.list_goals(user['id']) == []


@pytest.mark.parametrize('raw', ['NaN', '1e400', '-Infinity', '"5"', 'null'])
def test_update_goal_rejects_non_finite_progress(api_client, patient, store, raw):
    _, token = patient
    goal = create_goal(api_client, token, progressValue=3)
    headers = {**auth_header(token), 'Content-Type': 'application/json'}
    resp = api_client.put(
        f"/api/goals/{goal['id']}", content=f'{{"progressValue": {raw}}}', headers=headers
    )
    assert resp.status_code == 400
    assert resp.json() == {'message': 'Progress must be zero or greater'}
    assert store.get_goal(goal['id']).progress_value == 3


def test_fractional_values_are_kept(api_client, patient):
    _, token = patient
    goal = create_goal(api_client, token, goalType='sleep', targetValue=7.5, progressValue=6.25, unit='hours')
    assert goal['targetValue'] == 7.5
    assert goal['progressValue'] == 6.25
