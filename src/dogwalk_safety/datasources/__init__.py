"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants (optional)
    └── {feature}.py      # Fetch functions / provider classes

- weather/    OpenWeatherMap current conditions + synthetic fallback sample
- location/   Device location providers (configured, IP-based, none)

Sources raise ``PermissionDenied`` or ``SourceUnavailable`` on failure; the
acquisition chain in ``dogwalk_safety.acquire`` turns those into fallbacks.
"""
