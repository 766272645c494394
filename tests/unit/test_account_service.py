import pytest
from django.contrib.auth import get_user_model
from django.db.models.query import QuerySet

from accounts.services import AccountService
from filehub.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError

pytestmark = pytest.mark.django_db

User = get_user_model()


@pytest.fixture
def service():
    return AccountService()


@pytest.fixture
def alice(service):
    return service.register(name="alice", email="a@x.com", password="secret")


def test_register_returns_summary_and_hashes_password(alice):
    assert alice == {"name": "alice", "email": "a@x.com"}

    user = User.objects.get(name="alice")
    assert user.password != "secret"
    assert user.check_password("secret")


@pytest.mark.parametrize(
    "name,email,password,missing",
    [
        ("", "a@x.com", "secret", "name"),
        ("alice", None, "secret", "email"),
        ("alice", "a@x.com", "", "password"),
    ],
)
def test_register_requires_all_fields(service, name, email, password, missing):
    with pytest.raises(ValidationError) as exc_info:
        service.register(name=name, email=email, password=password)

    assert missing in str(exc_info.value)
    assert not User.objects.exists()


def test_register_rejects_malformed_email(service):
    with pytest.raises(ValidationError):
        service.register(name="alice", email="not-an-email", password="secret")


def test_register_duplicate_name_conflicts(service, alice):
    with pytest.raises(ConflictError):
        service.register(name="alice", email="other@x.com", password="whatever")

    assert User.objects.count() == 1


def test_register_duplicate_email_conflicts(service, alice):
    with pytest.raises(ConflictError):
        service.register(name="bob", email="A@x.com", password="whatever")


def test_register_uniqueness_holds_when_precheck_is_raced(service, alice, monkeypatch):
    # Both requests passed the existence check; the database constraint decides.
    monkeypatch.setattr(QuerySet, "exists", lambda self: False)

    with pytest.raises(ConflictError):
        service.register(name="alice", email="late@x.com", password="secret")


def test_login_success_never_exposes_password(service, alice):
    summary = service.login(name="alice", password="secret")

    assert summary == {"name": "alice", "email": "a@x.com"}
    assert User.objects.get(name="alice").password not in str(summary)


def test_login_wrong_password(service, alice):
    with pytest.raises(AuthenticationError):
        service.login(name="alice", password="wrong")


def test_login_unknown_user(service):
    with pytest.raises(NotFoundError):
        service.login(name="nobody", password="secret")


@pytest.mark.parametrize("name,password", [("", "secret"), ("alice", ""), (None, None)])
def test_login_requires_name_and_password(service, name, password):
    with pytest.raises(ValidationError):
        service.login(name=name, password=password)
