from urllib.parse import urlencode

from starlette.requests import Request


def make_request(params: dict | None = None, user: dict | None = None) -> Request:
    """Build a GET request carrying ``params`` as its query string."""
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [],
        "query_string": urlencode(params or {}).encode(),
    }
    request = Request(scope)
    request.state.user = user
    return request
