import pytest
from pydantic import ValidationError

from el_navigator.config import AppConfig
from el_navigator.exceptions import ConfigurationError

ENV_VARS = (
    "EL_NAVIGATOR_SOURCE_ROOT_RELATIVE",
    "EL_NAVIGATOR_INDEX_CACHE_TTL_MS",
    "EL_NAVIGATOR_COMPLETION_ENABLED",
    "EL_NAVIGATOR_HOVER_ENABLED",
    "EL_NAVIGATOR_WATCH_DEBOUNCE_SECONDS",
    "EL_NAVIGATOR_WATCH_MAX_WAIT_SECONDS",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        config = AppConfig(_env_file=None)

        assert config.SOURCE_ROOT_RELATIVE == "src/main/java"
        assert config.INDEX_CACHE_TTL_MS == 10000
        assert config.COMPLETION_ENABLED is True
        assert config.HOVER_ENABLED is True
        assert config.WATCH_DEBOUNCE_SECONDS == 0.5
        assert config.WATCH_MAX_WAIT_SECONDS == 5.0
        assert config.index_cache_ttl_seconds == 10.0

    def test_environment_prefix(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("EL_NAVIGATOR_SOURCE_ROOT_RELATIVE", "java")
        clean_env.setenv("EL_NAVIGATOR_INDEX_CACHE_TTL_MS", "0")
        clean_env.setenv("EL_NAVIGATOR_HOVER_ENABLED", "false")

        config = AppConfig(_env_file=None)

        assert config.SOURCE_ROOT_RELATIVE == "java"
        assert config.INDEX_CACHE_TTL_MS == 0
        assert config.HOVER_ENABLED is False


class TestValidation:
    def test_negative_ttl(self, clean_env: pytest.MonkeyPatch) -> None:
        with pytest.raises(ValidationError, match="INDEX_CACHE_TTL_MS"):
            AppConfig(_env_file=None, INDEX_CACHE_TTL_MS=-1)

    @pytest.mark.parametrize(
        "field", ["WATCH_DEBOUNCE_SECONDS", "WATCH_MAX_WAIT_SECONDS"]
    )
    def test_negative_watch_timing(
        self, clean_env: pytest.MonkeyPatch, field: str
    ) -> None:
        with pytest.raises(ValidationError, match="must not be negative"):
            AppConfig(_env_file=None, **{field: -0.1})

    def test_absolute_source_root(self, clean_env: pytest.MonkeyPatch) -> None:
        with pytest.raises(ValidationError):
            AppConfig(_env_file=None, SOURCE_ROOT_RELATIVE="/abs/src")


class TestOverrides:
    def test_overrides_return_new_instance(self, clean_env: pytest.MonkeyPatch) -> None:
        config = AppConfig(_env_file=None)
        updated = config.with_overrides(source_root="app/src", ttl_ms=250)

        assert updated is not config
        assert updated.SOURCE_ROOT_RELATIVE == "app/src"
        assert updated.index_cache_ttl_seconds == 0.25
        assert config.SOURCE_ROOT_RELATIVE == "src/main/java"

    def test_no_overrides(self, clean_env: pytest.MonkeyPatch) -> None:
        config = AppConfig(_env_file=None)
        assert config.with_overrides() == config

    def test_absolute_source_root_override(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        config = AppConfig(_env_file=None)
        with pytest.raises(ConfigurationError, match="/abs/src"):
            config.with_overrides(source_root="/abs/src")

    def test_negative_ttl_override(self, clean_env: pytest.MonkeyPatch) -> None:
        config = AppConfig(_env_file=None)
        with pytest.raises(ConfigurationError):
            config.with_overrides(ttl_ms=-5)
