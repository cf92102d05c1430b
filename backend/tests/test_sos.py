from datetime import datetime
from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from shelytics.models.incident import Alert, Incident
from shelytics.models.user import LocationLog
from shelytics.schemas.incident import IncidentStatus
from shelytics.schemas.risk import RiskLevel
from shelytics.schemas.user import LocationState
from shelytics.services import store
from shelytics.services.sos import trigger_sos


def test_sos_creates_incident_and_alerts(db, user):
    incident, alerts = trigger_sos(db, user, 28.6139, 77.2090, user_name="Asha", risk_level=RiskLevel.AT_RISK)

    assert incident.alert_type.value == "sos"
    assert incident.status == IncidentStatus.ACTIVE
    assert incident.risk_level == RiskLevel.AT_RISK
    assert incident.created_at is not None
    assert len(alerts) == 3
    assert sum(a.sent_to_police for a in alerts) == 1
    assert all(a.incident_id == incident.id for a in alerts)
    assert len(db.scalars(select(Alert)).all()) == 3


def test_sos_uses_profile_name(db, user):
    _, alerts = trigger_sos(db, user, 0.0, 0.0)
    assert "EMERGENCY ALERT from Asha!" in alerts[0].message


def test_sos_for_user_without_contacts(db):
    _, alerts = trigger_sos(db, "nobody", 0.0, 0.0)
    assert len(alerts) == 1
    assert alerts[0].sent_to_police is True
    assert "SHElytics User" in alerts[0].message


def test_incident_write_failure_propagates(db, user):
    with patch.object(db, "commit", side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))):
        with pytest.raises(OperationalError):
            trigger_sos(db, user, 0.0, 0.0)
    assert db.scalars(select(Incident)).all() == []


def test_resolve_incident(db, user):
    incident, _ = trigger_sos(db, user, 0.0, 0.0)
    resolved = store.resolve_incident(db, incident.id)
    assert resolved.status == IncidentStatus.RESOLVED
    assert resolved.resolved_at is not None
    assert store.resolve_incident(db, "missing") is None


def test_list_incidents_filters(db, user):
    incident, _ = trigger_sos(db, user, 0.0, 0.0)
    trigger_sos(db, "someone-else", 0.0, 0.0)
    store.resolve_incident(db, incident.id)

    assert len(store.list_incidents(db)) == 2
    assert [i.id for i in store.list_incidents(db, user_id=user)] == [incident.id]
    assert len(store.list_incidents(db, status=IncidentStatus.ACTIVE)) == 1


def test_contacts_primary_first(db, user):
    contacts = store.get_contacts(db, user)
    assert [c.id for c in contacts][0] == "contact-1"


def test_log_location(db):
    state = LocationState(latitude=1.0, longitude=2.0, timestamp=datetime(2026, 3, 14, 9, 0), speed_kmh=4.5)
    store.log_location(db, "user-1", state)
    row = db.scalars(select(LocationLog)).one()
    assert (row.latitude, row.longitude, row.speed) == (1.0, 2.0, 4.5)
