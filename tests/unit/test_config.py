from petcare.config import Settings, load_settings


def test_disabled_flag_forces_in_memory(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("SUPABASE_DISABLED", "1")
    assert load_settings().use_supabase is False


def test_next_public_variables_are_accepted(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("SUPABASE_DISABLED", "0")
    settings = load_settings()
    assert settings.use_supabase
    assert settings.supabase_url == "https://example.supabase.co"


def test_cors_origins(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://cats.example.com, https://app.example.com")
    assert load_settings().allowed_origins == ["https://cats.example.com", "https://app.example.com"]
    assert Settings(env="production").allowed_origins == []
    assert "http://localhost:3000" in Settings(env="development").allowed_origins


def test_defaults():
    settings = Settings()
    assert settings.min_password_length == 6
    assert settings.use_supabase is False
