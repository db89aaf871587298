from shared.core.config import Settings, build_database_url
from shared.data.super_admin_insert import ensure_super_admin
from shared.helpers.password_generator import generate_secure_password
from shared.utils.enums import AdminRole
from shared.wrappers.empty_string_model_wrapper import deep_clean
from partner_service.app.schemas.partners.partner_schemas import RejectRequest


def test_database_url_prefers_full_url():
    s = Settings(DATABASE_URL="postgresql+psycopg2://u:p@db/console", DB_HOST="ignored")

    assert build_database_url(s) == "postgresql+psycopg2://u:p@db/console"


def test_database_url_from_parts():
    s = Settings(DATABASE_URL=None, DB_USER="console", DB_PASS="pw",
                 DB_HOST="db.internal", DB_PORT="6543", DB_NAME="partners")

    assert build_database_url(s) == "postgresql+psycopg2://console:pw@db.internal:6543/partners"


def test_database_url_falls_back_to_sqlite():
    s = Settings(DATABASE_URL=None, DB_HOST=None)

    assert build_database_url(s).startswith("sqlite:///")


def test_deep_clean():
    assert deep_clean({"a": "  x ", "b": ["\u200b", " y"], "c": 3}) == {
        "a": "x", "b": [None, "y"], "c": 3}


def test_request_models_blank_text_becomes_none():
    assert RejectRequest(rejection_reason="\ufeff  ").rejection_reason is None
    assert RejectRequest(rejection_reason=" Fake GST ").rejection_reason == "Fake GST"


def test_generated_password_mixes_character_classes():
    password = generate_secure_password(16)

    assert len(password) == 16
    assert any(c.isupper() for c in password)
    assert any(c.islower() for c in password)
    assert any(c.isdigit() for c in password)
    assert any(c in "!@#$%^&*" for c in password)


def test_ensure_super_admin_is_idempotent(db):
    admin, password = ensure_super_admin(db, " Root@Console.test ")

    assert admin.email == "root@console.test"
    assert admin.role == AdminRole.SUPER_ADMIN
    assert admin.verify_password(password)

    again, second_password = ensure_super_admin(db, "other@console.test")
    assert again.id == admin.id
    assert second_password is None
