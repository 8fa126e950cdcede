"""OpenWeatherMap API constants.

API docs:
  - Current weather: https://openweathermap.org/current
"""

OPENWEATHER_API = "https://api.openweathermap.org/data/2.5/weather"

# Fahrenheit temperatures in every response
UNITS = "imperial"

# Postal codes are looked up as US ZIP codes
COUNTRY_CODE = "us"
