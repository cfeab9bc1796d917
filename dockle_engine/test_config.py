import pytest

from dockle_engine.config import EngineSettings, load_settings


def test_defaults_without_environment():
    settings = load_settings({})

    assert settings == EngineSettings()
    assert settings.dockerfile_names == ["dockerfile"]
    assert settings.compose_name == "docker-compose.yaml"
    assert settings.backup_suffix == ".bak"
    assert settings.normalize_whitespace is False
    assert settings.max_run_instructions == 3


def test_environment_overrides():
    settings = load_settings(
        {
            "DOCKLE_DOCKERFILE_NAMES": "dockerfile, Dockerfile",
            "DOCKLE_NORMALIZE_WHITESPACE": "yes",
            "DOCKLE_MAX_RUN_INSTRUCTIONS": "5",
            "DOCKLE_NON_ROOT_USER": "svc",
            "DOCKLE_LOG_LEVEL": "debug",
        }
    )

    assert settings.dockerfile_names == ["dockerfile", "Dockerfile"]
    assert settings.normalize_whitespace is True
    assert settings.max_run_instructions == 5
    assert settings.non_root_user == "svc"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "environ",
    [
        {"DOCKLE_NORMALIZE_WHITESPACE": "maybe"},
        {"DOCKLE_MAX_RUN_INSTRUCTIONS": "many"},
        {"DOCKLE_MAX_RUN_INSTRUCTIONS": "-1"},
        {"DOCKLE_DOCKERFILE_NAMES": " , "},
        {"DOCKLE_DOCKERFILE_NAMES": "docker/dockerfile"},
        {"DOCKLE_LOG_LEVEL": "LOUD"},
        {"DOCKLE_BACKUP_SUFFIX": ""},
    ],
)
def test_invalid_values_are_rejected(environ):
    with pytest.raises(ValueError):
        load_settings(environ)
