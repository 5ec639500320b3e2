"""Unit тести для NotificationService."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from backend.models.notification import NotificationLog
from backend.services.notification_service import NotificationService
from shared.enums import NotificationType
from shared.exceptions import NotFoundError, StoreUnavailableError


@pytest.fixture
def notifications(db_session):
    return NotificationService(db_session)


def add_notification(db, user, sent_at=None, read_at=None, title="Avviso"):
    row = NotificationLog(
        user_id=user.id,
        organization_id=user.organization_id,
        notification_type=NotificationType.ANNOUNCEMENT,
        title=title,
        body="Testo",
        sent_at=sent_at or datetime.now(),
        read_at=read_at,
    )
    db.add(row)
    db.commit()
    return row


class TestNotify:
    """Тести запису сповіщень."""

    def test_one_row_per_recipient(self, db_session, notifications, admin, worker):
        result = notifications.notify(
            NotificationType.ANNOUNCEMENT,
            [admin.id, worker.id],
            title="Riunione",
            body="Riunione alle 9",
            organization_id=admin.organization_id,
        )

        assert result.success
        assert result.total == 2
        assert result.logged == 2
        assert db_session.query(NotificationLog).count() == 2

    def test_no_recipients(self, notifications):
        result = notifications.notify(NotificationType.ANNOUNCEMENT, [], title="x", body="y")

        assert result.total == 0
        assert result.success

    def test_store_failure_is_swallowed(self, db_session, notifications, monkeypatch, worker):
        def failing_commit():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", failing_commit)

        result = notifications.notify(NotificationType.ASSIGNMENT, [worker.id], title="x", body="y")

        assert not result.success
        assert result.logged == 0
        assert "disk I/O error" in result.errors[0]
        monkeypatch.undo()
        assert db_session.query(NotificationLog).count() == 0

    def test_admin_ids(self, notifications, admin, worker, other_admin):
        assert notifications.admin_ids(admin.organization_id) == [admin.id]

    def test_leave_response_texts(self, db_session, notifications, worker):
        notifications.notify_leave_response(worker.id, "rejected", 7, worker.organization_id)

        row = db_session.query(NotificationLog).one()
        assert row.notification_type == NotificationType.LEAVE_RESPONSE
        assert row.title == "Richiesta Permesso Rifiutata"
        assert row.body == "La tua richiesta di permesso è stata rifiutata"
        assert row.entity_type == "leave_request"
        assert row.entity_id == 7

    def test_leave_request_recipient_failure_is_swallowed(self, db_session, notifications, monkeypatch, worker):
        def failing_query(*args, **kwargs):
            raise OperationalError("SELECT profiles.id", {}, Exception("database is locked"))

        monkeypatch.setattr(db_session, "query", failing_query)

        result = notifications.notify_leave_request("Mario Verdi", 7, worker.organization_id)

        assert not result.success
        assert result.logged == 0
        assert "database is locked" in result.errors[0]
        monkeypatch.undo()
        assert db_session.query(NotificationLog).count() == 0

    def test_leave_request_notifies_organization_admins(self, db_session, notifications, admin, worker, other_admin):
        result = notifications.notify_leave_request("Mario Verdi", 7, worker.organization_id)

        assert result.logged == 1
        row = db_session.query(NotificationLog).one()
        assert row.user_id == admin.id
        assert row.body == "Mario Verdi ha richiesto un permesso"


class TestReadMarkers:
    """Тести читання та позначок прочитання."""

    def test_recent_for_user_window(self, db_session, notifications, worker, second_worker):
        fresh = add_notification(db_session, worker, title="Nuovo")
        add_notification(db_session, worker, sent_at=datetime.now() - timedelta(days=3), title="Vecchio")
        add_notification(db_session, second_worker, title="Altro")

        recent = notifications.recent_for_user(worker.id, window_days=2)

        assert [n.id for n in recent] == [fresh.id]

    def test_recent_for_user_limit(self, db_session, notifications, worker):
        for i in range(5):
            add_notification(db_session, worker, sent_at=datetime.now() - timedelta(minutes=i))

        assert len(notifications.recent_for_user(worker.id, limit=3)) == 3

    def test_mark_read(self, db_session, notifications, worker):
        row = add_notification(db_session, worker)

        marked = notifications.mark_read(worker.id, row.id)

        assert marked.is_read
        assert marked.read_at is not None

    def test_mark_read_of_other_user(self, db_session, notifications, worker, second_worker):
        row = add_notification(db_session, worker)

        with pytest.raises(NotFoundError):
            notifications.mark_read(second_worker.id, row.id)

    def test_mark_all_read(self, db_session, notifications, worker):
        add_notification(db_session, worker)
        add_notification(db_session, worker)
        add_notification(db_session, worker, read_at=datetime.now())

        assert notifications.mark_all_read(worker.id) == 2
        db_session.expire_all()
        assert all(n.is_read for n in notifications.recent_for_user(worker.id))


class TestStoreUnavailable:
    """Недоступність сховища при читанні та позначках."""

    @pytest.fixture
    def broken_query(self, db_session, monkeypatch):
        def failing_query(*args, **kwargs):
            raise OperationalError("SELECT notification_logs", {}, Exception("unable to open database file"))

        monkeypatch.setattr(db_session, "query", failing_query)

    def test_recent_for_user(self, notifications, broken_query, worker):
        with pytest.raises(StoreUnavailableError):
            notifications.recent_for_user(worker.id)

    def test_mark_all_read(self, notifications, broken_query, worker):
        with pytest.raises(StoreUnavailableError):
            notifications.mark_all_read(worker.id)

    def test_mark_read_commit_failure_rolls_back(self, db_session, notifications, monkeypatch, worker):
        row = add_notification(db_session, worker)

        def failing_commit():
            raise OperationalError("UPDATE notification_logs", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", failing_commit)

        with pytest.raises(StoreUnavailableError):
            notifications.mark_read(worker.id, row.id)

        monkeypatch.undo()
        db_session.expire_all()
        assert db_session.get(NotificationLog, row.id).read_at is None
