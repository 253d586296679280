"""Demo data seeding."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from wellness.main import create_app
from wellness.seed import DEMO_PATIENT_PASSWORD, DEMO_PROVIDER_PASSWORD, seed_demo_data
from wellness.store import RecordStore

TODAY = date(2024, 6, 1)


@pytest.fixture()
def seeded():
    store = RecordStore()
    ids = seed_demo_data(store, today=TODAY)
    return store, ids


def test_seed_creates_linked_accounts(seeded):
    store, ids = seeded
    provider_id = ids['provider@wellness.com']
    assert store.get_account(provider_id).role == 'provider'
    patients = store.list_patients_for_provider(provider_id)
    assert sorted(p.email for p in patients) == [
        'david@example.com',
        'emma@example.com',
        'james@example.com',
    ]
    david = store.get_account(ids['david@example.com'])
    assert david.profile.allergies == ['Penicillin', 'Peanuts']
    assert david.profile.blood_type == 'A+'


def test_seed_compliance_mix(seeded):
    store, ids = seeded
    summaries = {
        s.email: s for s in store.patient_summaries(ids['provider@wellness.com'], TODAY)
    }
    assert summaries['david@example.com'].compliance_status == 'needs-attention'
    assert summaries['david@example.com'].total_goals == 4
    assert summaries['emma@example.com'].compliance_status == 'needs-attention'
    assert summaries['james@example.com'].compliance_status == 'missed-checkup'
    assert summaries['james@example.com'].missed_reminders == 1
    assert summaries['james@example.com'].upcoming_reminders == 1


def test_seed_reminder_dates_follow_today(seeded):
    store, ids = seeded
    [missed, upcoming] = store.list_reminders(ids['james@example.com'])
    assert missed.due_date == '2024-05-18'
    assert missed.status == 'missed'
    assert upcoming.due_date == '2024-06-22'


def test_demo_accounts_can_log_in(settings):
    store = RecordStore()
    seed_demo_data(store)

    with TestClient(create_app(settings=settings, store=store)) as client:
        resp = client.post(
            '/api/auth/login',
            json={'email': 'provider@wellness.com', 'password': DEMO_PROVIDER_PASSWORD},
        )
        assert resp.status_code == 200
        token = resp.json()['token']

        patients = client.get(
            '/api/provider/patients', headers={'Authorization': f'Bearer {token}'}
        ).json()
        assert {p['complianceStatus'] for p in patients} == {'needs-attention', 'missed-checkup'}

        resp = client.post(
            '/api/auth/login',
            json={'email': 'emma@example.com', 'password': DEMO_PATIENT_PASSWORD},
        )
        assert resp.status_code == 200
        assert resp.json()['user']['role'] == 'patient'
