"""Unit tests for application settings configuration."""

from pathlib import Path

from tenant_admin.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_collection_path_uses_root_and_service_id():
    settings = Settings(firestore_root="touchAfrica", service_id="southAfrica")
    assert settings.collection_path("lookups") == "touchAfrica/southAfrica/lookups"


def test_document_store_can_be_selected_from_environment(monkeypatch):
    monkeypatch.setenv("DOCUMENT_STORE", "memory")
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")
    settings = Settings()
    assert settings.document_store == "memory"
    assert settings.default_page_size == 25
