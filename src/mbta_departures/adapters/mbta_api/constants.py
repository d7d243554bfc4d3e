"""Constants for the MBTA v3 API adapter.

API Documentation: https://api-v3.mbta.com/docs/swagger/index.html

Anonymous clients get 20 requests/minute; an API key raises that to 1000.
"""

SCHEDULES_PATH = "/schedules"
PREDICTIONS_PATH = "/predictions"
STOPS_PATH = "/stops"

# HTTP headers
DEFAULT_HEADERS = {
    "accept": "application/vnd.api+json",
}
API_KEY_HEADER = "x-api-key"

# Vehicles further away than this are not worth counting stops for
MAX_STOPS_AWAY = 20
