from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Google Maps API configuration (one key for Places and Directions)
    google_api_key: str = ""

    # API configuration
    api_version: str = "1.0"

    # External services
    places_autocomplete_url: str = (
        "https://maps.googleapis.com/maps/api/place/autocomplete/json"
    )
    places_details_url: str = "https://maps.googleapis.com/maps/api/place/details/json"
    directions_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    places_language: str = "pt-BR"
    travel_mode: str = "driving"
    request_timeout_s: float = 10.0

    # API call limits
    max_api_calls_per_day: int = 1000

    # Map viewport (screen units)
    initial_latitude: float = 6.5166
    initial_longitude: float = 3.38479
    latitude_delta: float = 0.02
    screen_width: float = 390.0
    screen_height: float = 844.0
    edge_padding: float = 100.0
    camera_animation_ms: int = 1000

    # Sessions: idle ones are dropped after the TTL, oldest first past the cap
    session_ttl_s: float = 1800.0
    max_sessions: int = 1000

    # Behaviour switches
    missing_geometry_policy: str = "zero"  # "zero" | "raise"
    route_policy: str = "latest_request"  # "latest_request" | "cancel_previous" | "last_completed"
    clear_route_on_change: bool = False

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
