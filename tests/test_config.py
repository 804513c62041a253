from smartride.application.config import DEFAULT_PORT, Settings, load_settings
from smartride.application.services import build_services


def test_defaults_from_empty_env():
    settings = load_settings({})
    assert settings == Settings()
    assert settings.port == DEFAULT_PORT
    assert settings.cors_origins == ("*",)


def test_reads_smartride_variables():
    settings = load_settings({
        "SMARTRIDE_PORT": "8080",
        "SMARTRIDE_LOG_LEVEL": "debug",
        "SMARTRIDE_CORS_ORIGINS": "http://localhost:5173, https://app.example.com",
        "SMARTRIDE_RNG_SEED": "9",
        "SMARTRIDE_DEFAULT_CITY": "mumbai",
        "SMARTRIDE_HOST": " ",
    })
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ("http://localhost:5173", "https://app.example.com")
    assert settings.rng_seed == 9
    assert settings.default_city == "mumbai"
    assert settings.host == "0.0.0.0"


def test_default_city_setting_drives_registry_fallback():
    services = build_services(Settings(default_city="pune"))
    assert services.registry.resolve_city("Atlantis") == "pune"
    assert services.engine.quote("Atlantis", "Nowhere", 4, simulated_peak=False).base_fare == 24


def test_unknown_default_city_falls_back_to_first_entry():
    services = build_services(Settings(default_city="gotham"))
    assert services.registry.default_key == "delhi"
