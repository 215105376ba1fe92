import importlib

import pytest

from cops_praja.core.errors import ConfigurationError


def reload_config(monkeypatch, **env):
    for name in ('SUPABASE_URL', 'SUPABASE_ANON_KEY', 'SECRET_KEY', 'DEBUG', 'REVIEW_ENABLED'):
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)

    from cops_praja.core import config as config_module

    # 環境変数からConfigを再読み込み（.envの影響を受けないようload_dotenvは無効化）
    monkeypatch.setattr('dotenv.load_dotenv', lambda *a, **k: False)
    importlib.reload(config_module)
    return config_module.Config


def test_create_app_with_env(monkeypatch):
    config_class = reload_config(
        monkeypatch,
        SUPABASE_URL='https://abc.supabase.co/',
        SUPABASE_ANON_KEY='anon-key',
        SECRET_KEY='test-secret-key',
        REVIEW_ENABLED='false',
    )
    from app import create_app

    flask_app = create_app(config_class)

    assert flask_app.secret_key == 'test-secret-key'
    assert flask_app.question_store.endpoint == 'https://abc.supabase.co/rest/v1/questions'
    assert flask_app.exam_registry.review_enabled is False
    assert flask_app.exam_registry.duration == 5400


def test_missing_store_settings_fail_fast(monkeypatch):
    config_class = reload_config(monkeypatch, SECRET_KEY='test-secret-key', SUPABASE_URL='https://abc.supabase.co')

    with pytest.raises(ConfigurationError, match='SUPABASE_ANON_KEY'):
        config_class.get_store_config()

    from app import create_app
    with pytest.raises(ConfigurationError):
        create_app(config_class)


def test_missing_secret_key_outside_debug(monkeypatch):
    config_class = reload_config(
        monkeypatch,
        SUPABASE_URL='https://abc.supabase.co',
        SUPABASE_ANON_KEY='anon-key',
    )
    from app import create_app

    with pytest.raises(ValueError):
        create_app(config_class)


def test_config_has_no_unused_flask_env(monkeypatch):
    config_class = reload_config(monkeypatch, SUPABASE_URL='https://abc.supabase.co', SUPABASE_ANON_KEY='k')
    assert not hasattr(config_class, 'FLASK_ENV')
    assert config_class.MAX_EXAM_SESSIONS == 1000
