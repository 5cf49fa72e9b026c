"""
HTTP Helpers
============

JSON fetching shared by the DONKI and NOAA loaders.
"""

import json
from urllib.error import URLError
from urllib.request import Request, urlopen


USER_AGENT = 'SolarEvents/0.1'


def fetch_json(url: str, timeout: int = 30) -> dict | list | None:
    """
    Fetch JSON from URL with error handling.

    Network and decoding errors are reported and yield None; callers treat
    that as an empty upstream response.
    """
    try:
        req = Request(url, headers={'User-Agent': USER_AGENT})
        with urlopen(req, timeout=timeout) as response:
            return json.loads(response.read().decode())
    except URLError as e:
        print(f"  Network error: {e}")
        return None
    except OSError as e:
        print(f"  Connection error: {e}")
        return None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        print(f"  JSON parse error: {e}")
        return None
