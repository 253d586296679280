"""Health tip and public health information endpoints."""

import random

from wellness.content import HEALTH_TIPS, public_content, random_health_tip


def auth_header(token: str):
    return {'Authorization': f'Bearer {token}'}


def test_health_tip_requires_token(api_client):
    resp = api_client.get('/api/health-tip')
    assert resp.status_code == 401
    assert resp.json() == {'message': 'Access token required'}


def test_health_tip_comes_from_catalogue(api_client, patient):
    _, token = patient
    tips = {tip.tip for tip in HEALTH_TIPS}
    for _ in range(5):
        resp = api_client.get('/api/health-tip', headers=auth_header(token))
        assert resp.status_code == 200
        body = resp.json()
        assert body['tip'] in tips
        assert set(body) == {'id', 'tip', 'category', 'icon'}


def test_random_health_tip_uses_given_rng():
    first = random_health_tip(random.Random(7))
    second = random_health_tip(random.Random(7))
    assert first == second


def test_public_health_info_is_open(api_client):
    resp = api_client.get('/api/public/health-info')
    assert resp.status_code == 200
    topics = resp.json()
    assert [t['id'] for t in topics] == [
        'covid',
        'flu',
        'mental-health',
        'nutrition',
        'exercise',
        'heart-health',
    ]
    assert topics[-1]['category'] == 'other'
    assert all(t['body'] and t['publishedAt'] for t in topics)


def test_public_content_returns_copies():
    items = public_content()
    items[0].title = 'Changed'
    assert public_content()[0].title == 'COVID-19 Updates'
