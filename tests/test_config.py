import pytest

from evsite.config import PACKAGE_DATA_FILE, Settings


def test_defaults():
    config = Settings(_env_file=None)

    assert config.data_file == PACKAGE_DATA_FILE
    assert config.cluster_seeding == "kmeans++"
    assert config.acceptable_distance_m == 500


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("EVSITE_SNAP_MAX_RADIUS_M", "250")
    monkeypatch.setenv("EVSITE_CLUSTER_SEEDING", "random")
    monkeypatch.setenv("EVSITE_FRONTEND_ALLOWED_ORIGINS", '["https://a.example", "https://b.example"]')

    config = Settings(_env_file=None)

    assert config.snap_max_radius_m == 250
    assert config.cluster_seeding == "random"
    assert config.frontend_allowed_origins == ("https://a.example", "https://b.example")


def test_origins_accept_comma_separated_string():
    config = Settings(_env_file=None, frontend_allowed_origins="https://a.example, https://b.example")

    assert config.frontend_allowed_origins == ("https://a.example", "https://b.example")


def test_invalid_seeding_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("EVSITE_CLUSTER_SEEDING", "spectral")

    with pytest.raises(ValueError):
        Settings(_env_file=None)
