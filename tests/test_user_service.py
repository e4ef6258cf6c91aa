import pytest

from skillforge.errors import DuplicateEmail, NotFound, ValidationError
from skillforge.schemas.user import Role, UserCreate, UserUpdate
from skillforge.services.user_service import UserService


@pytest.fixture
def service(seeded):
    return UserService(seeded)


def new_user(**overrides):
    data = {"name": "New Mentor", "email": "new@skillforge.com", "role": Role.MENTOR, "password": "secret1"}
    data.update(overrides)
    return UserCreate(**data)


def test_list_users(service):
    assert [u.id for u in service.list_users()] == ["user-admin-01", "user-mentor-01", "user-student-01"]


def test_create_user_stores_credential(service, seeded):
    user = service.create_user(new_user())

    assert user.id.startswith("user-")
    assert user.role == Role.MENTOR
    assert seeded.verify_credential("new@skillforge.com", "secret1")
    assert seeded.find_user_by_email("new@skillforge.com").id == user.id


def test_create_user_short_password(service):
    with pytest.raises(ValidationError):
        service.create_user(new_user(password="12345"))


def test_create_user_duplicate_email(service):
    with pytest.raises(DuplicateEmail):
        service.create_user(new_user(email="student@skillforge.com"))


def test_update_user_moves_credential(service, seeded):
    updated = service.update_user("user-student-01", UserUpdate(email="renamed@skillforge.com", name="Renamed"))

    assert updated.email == "renamed@skillforge.com"
    assert updated.name == "Renamed"
    assert updated.role == Role.STUDENT
    assert seeded.verify_credential("renamed@skillforge.com", "student123")
    assert not seeded.verify_credential("student@skillforge.com", "student123")


def test_update_user_email_collision(service):
    with pytest.raises(DuplicateEmail):
        service.update_user("user-student-01", UserUpdate(email="mentor@skillforge.com"))


def test_update_missing_user(service):
    with pytest.raises(NotFound):
        service.update_user("user-nobody", UserUpdate(name="x"))


def test_delete_user_removes_credential(service, seeded):
    service.delete_user("user-student-01")

    assert seeded.find_user_by_email("student@skillforge.com") is None
    assert seeded.get_credential("student@skillforge.com") is None


def test_delete_missing_user(service):
    with pytest.raises(NotFound):
        service.delete_user("user-nobody")


def test_reset_password(service, seeded):
    service.reset_password("user-student-01", "newpass", "newpass")
    assert seeded.verify_credential("student@skillforge.com", "newpass")


@pytest.mark.parametrize("new,confirm", [("short", "short"), ("newpass", "different")])
def test_reset_password_rejected(service, seeded, new, confirm):
    with pytest.raises(ValidationError):
        service.reset_password("user-student-01", new, confirm)
    assert seeded.verify_credential("student@skillforge.com", "student123")
