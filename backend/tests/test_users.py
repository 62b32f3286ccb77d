import pytest
from django.urls import reverse

from accounts import services
from accounts.models import Role, User
from audit.models import AuditLog
from common.exceptions import UserFriendlyDataException


@pytest.mark.parametrize("raw,ok", [
    ("Abc123", True),
    ("abc123", False),
    ("ABC123", False),
    ("Abcdef", False),
    ("Ab1", False),
    ("", False),
])
def test_password_rules(raw, ok):
    assert services.is_valid_password(raw) is ok


def test_new_user_defaults_to_barista():
    u = services.create_new_user()
    assert u.pk is None
    assert u.role == Role.BARISTA


@pytest.mark.django_db
def test_locked_user_cannot_be_modified_or_deleted(admin_user):
    locked = User.objects.create_user(email="boss@example.com", password="Boss1234", role=Role.ADMIN, locked=True)
    locked.first_name = "Changed"
    with pytest.raises(UserFriendlyDataException):
        services.save_user(admin_user, locked)
    with pytest.raises(UserFriendlyDataException):
        services.delete_user(admin_user, locked)
    assert User.objects.get(pk=locked.pk).first_name == ""


@pytest.mark.django_db
def test_clearing_the_flag_in_memory_does_not_unlock(admin_user):
    locked = User.objects.create_user(email="boss@example.com", password="Boss1234", locked=True)
    locked.locked = False
    with pytest.raises(UserFriendlyDataException):
        services.save_user(admin_user, locked)


@pytest.mark.django_db
def test_cannot_delete_self(admin_user):
    with pytest.raises(UserFriendlyDataException) as exc:
        services.delete_user(admin_user, admin_user)
    assert str(exc.value) == services.DELETING_SELF_NOT_PERMITTED
    assert User.objects.filter(pk=admin_user.pk).exists()


@pytest.mark.django_db
def test_blank_password_keeps_the_old_one(admin_user, baker):
    baker.first_name = "Bob"
    services.save_user(admin_user, baker, "")
    baker.refresh_from_db()
    assert baker.check_password("Baker123")
    assert baker.first_name == "Bob"


@pytest.mark.django_db
def test_new_user_needs_a_password(admin_user):
    with pytest.raises(UserFriendlyDataException):
        services.save_user(admin_user, User(email="new@example.com"))


@pytest.mark.django_db
def test_weak_password_rejected(admin_user, baker):
    with pytest.raises(UserFriendlyDataException):
        services.save_user(admin_user, baker, "weak")


@pytest.mark.django_db
def test_filter_and_count(admin_user, baker, barista):
    assert services.count_any_matching("bar") == 1
    assert [u.email for u in services.find_any_matching("b").object_list] == ["baker@example.com", "barista@example.com"]
    assert services.count_any_matching(None) == 3


@pytest.mark.django_db
def test_admin_creates_user(client, admin_user):
    client.force_login(admin_user)
    resp = client.post(reverse("accounts:user_create"), {
        "email": "new@example.com", "first_name": "New", "last_name": "Person",
        "role": Role.BAKER, "password": "Secret123",
    })
    assert resp.status_code == 302
    u = User.objects.get(email="new@example.com")
    assert u.role == Role.BAKER
    assert u.check_password("Secret123")
    assert AuditLog.objects.filter(action="USER_SAVED", actor=admin_user, target_id=str(u.pk)).exists()


@pytest.mark.django_db
def test_edit_with_blank_password_keeps_it(client, admin_user, baker):
    client.force_login(admin_user)
    resp = client.post(reverse("accounts:user_edit", args=[baker.pk]), {
        "email": baker.email, "first_name": "Bo", "last_name": "Bread", "role": Role.BAKER, "password": "",
    })
    assert resp.status_code == 302
    baker.refresh_from_db()
    assert baker.last_name == "Bread"
    assert baker.check_password("Baker123")


@pytest.mark.django_db
def test_create_form_reports_weak_password(client, admin_user):
    client.force_login(admin_user)
    resp = client.post(reverse("accounts:user_create"), {
        "email": "new@example.com", "first_name": "New", "last_name": "Person", "role": Role.BAKER, "password": "weak",
    })
    assert resp.status_code == 200
    assert not User.objects.filter(email="new@example.com").exists()
    assert services.PASSWORD_HINT in resp.content.decode()


@pytest.mark.django_db
def test_deleting_self_through_the_view_is_refused(client, admin_user):
    client.force_login(admin_user)
    resp = client.post(reverse("accounts:user_delete", args=[admin_user.pk]))
    assert resp.status_code == 302
    assert User.objects.filter(pk=admin_user.pk).exists()
    assert not AuditLog.objects.filter(action="USER_DELETED").exists()


@pytest.mark.django_db
def test_admin_deletes_user(client, admin_user, barista):
    client.force_login(admin_user)
    client.post(reverse("accounts:user_delete", args=[barista.pk]))
    assert not User.objects.filter(pk=barista.pk).exists()
    log = AuditLog.objects.get(action="USER_DELETED")
    assert log.payload["email"] == "barista@example.com"
