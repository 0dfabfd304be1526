"""Tests for the application factory, config, and error envelope."""

import logging

import pytest

from cp_analytics import create_app, validate_config
from cp_analytics.config import config_map, TestingConfig


class TestAppFactory:
    def test_testing_config(self, app):
        assert app.config['TESTING'] is True
        assert app.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite:///:memory:'

    def test_blueprints_registered(self, app):
        for name in ('auth', 'submissions', 'analytics', 'leetcode', 'health'):
            assert name in app.blueprints

    def test_config_map(self):
        assert set(config_map) == {'development', 'production', 'testing'}
        assert config_map['testing'] is TestingConfig

    def test_production_requires_jwt_secret(self, app):
        app.config['JWT_SECRET'] = ''
        app.config['DEBUG'] = False
        app.config['TESTING'] = False
        with pytest.raises(RuntimeError, match='JWT_SECRET'):
            validate_config(app)

    def test_env_file_settings_reach_config(self, tmp_path, monkeypatch):
        secret = 's' * 40
        (tmp_path / '.env.production').write_text(
            f'JWT_SECRET={secret}\n'
            'DATABASE_URL=sqlite:///:memory:\n'
            'LEETCODE_MAX_RETRIES=4\n'
            'LOG_FILE_MAX_BYTES=0\n'
        )
        # setenv first so values written by load_dotenv are removed afterwards
        for key in ('JWT_SECRET', 'DATABASE_URL', 'SQLALCHEMY_DATABASE_URI',
                    'LEETCODE_MAX_RETRIES', 'LOG_FILE_MAX_BYTES'):
            monkeypatch.setenv(key, '')
            monkeypatch.delenv(key)
        monkeypatch.setattr('cp_analytics.ROOT_DIR', str(tmp_path))

        prod = create_app('production')

        assert prod.config['JWT_SECRET'] == secret
        assert prod.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite:///:memory:'
        assert prod.config['LEETCODE_MAX_RETRIES'] == 4
        assert prod.debug is False

    def test_environment_read_per_instance(self, monkeypatch):
        monkeypatch.setenv('LEETCODE_TIMEOUT', '3')
        assert config_map['production']().LEETCODE_TIMEOUT == 3.0
        monkeypatch.setenv('LEETCODE_TIMEOUT', '7')
        assert config_map['production']().LEETCODE_TIMEOUT == 7.0

    def test_short_secret_warns(self, app, caplog):
        app.config['JWT_SECRET'] = 'short'
        with caplog.at_level(logging.WARNING):
            validate_config(app)
        assert 'at least 32 characters' in caplog.text


class TestHealth:
    def test_health(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['code'] == 'SUCCESS'
        assert body['message'] == 'Server is healthy'
        assert 'timestamp' in body


class TestErrorEnvelope:
    def test_unknown_route(self, client):
        resp = client.get('/nope')
        assert resp.status_code == 404
        body = resp.get_json()
        assert body['code'] == 'NOT_FOUND'
        assert body['message'] == 'Route GET /nope not found'
        assert body['details'] == {}

    def test_method_not_allowed(self, client):
        resp = client.patch('/health')
        assert resp.status_code == 405
        assert resp.get_json()['code'] == 'METHOD_NOT_ALLOWED'

    def test_duplicate_entry_maps_to_409(self, app, client, user):
        from cp_analytics.extensions import db
        from cp_analytics.models import User

        @app.route('/_dup')
        def _dup():
            clash = User(email=user['email'], password_hash='x')
            db.session.add(clash)
            db.session.commit()
            return 'unreachable'

        resp = client.get('/_dup')
        assert resp.status_code == 409
        assert resp.get_json()['code'] == 'DUPLICATE_ENTRY'

    def test_unexpected_error_maps_to_500(self, app, client):
        @app.route('/_boom')
        def _boom():
            raise RuntimeError('kaboom')

        resp = client.get('/_boom')
        assert resp.status_code == 500
        body = resp.get_json()
        assert body['code'] == 'INTERNAL_ERROR'
        assert body['message'] == 'kaboom'
        assert 'stack' in body['details']


class TestCors:
    def test_allowed_origin(self, client):
        resp = client.get('/health', headers={'Origin': 'http://localhost:5173'})
        assert resp.headers.get('Access-Control-Allow-Origin') == 'http://localhost:5173'

    def test_vercel_preview_origin(self, client):
        origin = 'https://my-app-git-main.vercel.app'
        resp = client.get('/health', headers={'Origin': origin})
        assert resp.headers.get('Access-Control-Allow-Origin') == origin

    def test_unknown_origin(self, client):
        resp = client.get('/health', headers={'Origin': 'https://evil.example'})
        assert 'Access-Control-Allow-Origin' not in resp.headers
