"""Tests for the process-wide configuration cache."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from envconfig import EnvConfig, Int32
from envconfig.exceptions import ConfigBindingError
from envconfig.models import cached_configs, clear, clear_all, from_env, get_or_create
from envconfig.models.registry import DEFAULT_NAMESPACE, cache_key


@pytest.fixture(autouse=True)
def cleanup_cache():
    """Clean up config cache before and after each test."""
    clear_all()
    yield
    clear_all()


class ServiceSettings(EnvConfig):
    port: Int32
    region: str = "local"


class OtherSettings(EnvConfig):
    port: Int32


class TestCacheKey:
    """Test cache key normalization."""

    def test_prefix_upper_cased(self):
        assert cache_key(ServiceSettings, "myapp") == ("MYAPP", ServiceSettings)

    @pytest.mark.parametrize("prefix", [None, ""])
    def test_no_prefix(self, prefix):
        assert cache_key(ServiceSettings, prefix) == (DEFAULT_NAMESPACE, ServiceSettings)


class TestFromEnv:
    """Test cached binding from os.environ."""

    def test_same_instance_returned(self, monkeypatch):
        monkeypatch.setenv("PORT", "80")
        first = ServiceSettings.from_env()
        second = ServiceSettings.from_env()
        assert first is second
        assert first.port == 80

    def test_environment_read_once(self, monkeypatch):
        """Test later environment changes do not affect a cached instance."""
        monkeypatch.setenv("PORT", "80")
        first = ServiceSettings.from_env()
        monkeypatch.setenv("PORT", "81")
        assert ServiceSettings.from_env() is first
        assert ServiceSettings.from_env().port == 80

    def test_prefixes_are_separate(self, monkeypatch):
        monkeypatch.setenv("A_PORT", "1")
        monkeypatch.setenv("B_PORT", "2")
        assert ServiceSettings.from_env("a").port == 1
        assert ServiceSettings.from_env("b").port == 2
        assert ServiceSettings.from_env("A") is ServiceSettings.from_env("a")

    def test_types_are_separate(self, monkeypatch):
        monkeypatch.setenv("PORT", "5")
        assert from_env(ServiceSettings) is not from_env(OtherSettings)

    def test_failure_not_cached(self, monkeypatch):
        """Test a failing build leaves no entry, so the next call retries."""
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(ConfigBindingError):
            ServiceSettings.from_env()
        assert cached_configs() == {}

        monkeypatch.setenv("PORT", "80")
        assert ServiceSettings.from_env().port == 80

    def test_from_source(self):
        settings = ServiceSettings.from_source({"SVC_PORT": "443"}, "svc")
        assert settings.port == 443
        assert ServiceSettings.from_source({}, "svc") is settings


class TestClear:
    """Test cache removal."""

    def test_clear_one(self):
        settings = ServiceSettings.from_source({"PORT": "1"})
        OtherSettings.from_source({"PORT": "2"})

        clear(ServiceSettings)
        assert list(cached_configs()) == [(DEFAULT_NAMESPACE, OtherSettings)]
        assert ServiceSettings.from_source({"PORT": "3"}) is not settings

    def test_clear_cached_classmethod(self):
        ServiceSettings.from_source({"X_PORT": "1"}, "x")
        ServiceSettings.clear_cached("x")
        assert cached_configs() == {}

    def test_clear_missing_is_noop(self):
        clear(ServiceSettings, "nothing")

    def test_clear_all(self):
        ServiceSettings.from_source({"PORT": "1"})
        ServiceSettings.from_source({"P_PORT": "1"}, "p")
        assert len(cached_configs()) == 2
        clear_all()
        assert cached_configs() == {}

    def test_cached_configs_is_a_copy(self):
        ServiceSettings.from_source({"PORT": "1"})
        snapshot = cached_configs()
        snapshot.clear()
        assert len(cached_configs()) == 1


class TestConcurrentFirstAccess:
    """Test at most one build per key under concurrent first access."""

    def test_built_once(self):
        builds = []
        lock = threading.Lock()
        start = threading.Barrier(16)

        def factory():
            with lock:
                builds.append(1)
            time.sleep(0.05)
            return ServiceSettings.bind({"PORT": "8080"})

        def access(_):
            start.wait()
            return get_or_create(ServiceSettings, "race", factory)

        with ThreadPoolExecutor(max_workers=16) as executor:
            results = list(executor.map(access, range(16)))

        assert len(builds) == 1
        assert all(result is results[0] for result in results)

    def test_distinct_keys_build_independently(self):
        builds = []
        lock = threading.Lock()

        def factory_for(prefix):
            def factory():
                with lock:
                    builds.append(prefix)
                time.sleep(0.01)
                return ServiceSettings.bind({f"{prefix}_PORT": "1"}, prefix)

            return factory

        def access(prefix):
            return get_or_create(ServiceSettings, prefix, factory_for(prefix))

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(access, ["a", "b", "c", "d"] * 4))

        assert sorted(builds) == ["a", "b", "c", "d"]

    def test_failed_build_retried_by_next_caller(self):
        attempts = []

        def flaky():
            attempts.append(1)
            if len(attempts) == 1:
                raise ConfigBindingError(ServiceSettings, [])
            return ServiceSettings.bind({"PORT": "1"})

        with pytest.raises(ConfigBindingError):
            get_or_create(ServiceSettings, None, flaky)
        assert get_or_create(ServiceSettings, None, flaky).port == 1
        assert len(attempts) == 2
