# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import gzip
from flask import Request, Response

# Empty bodies and byte ranges stay as they are
_SKIP_STATUSES = (204, 206, 304)

def accepts_gzip(request: Request) -> bool:
    return "gzip" in request.headers.get("Accept-Encoding", "")

def gzip_response(request: Request, response: Response, compresslevel: int = 6) -> Response:
    """Compress the response body in place when the client accepts gzip."""
    if not accepts_gzip(request):
        return response
    if response.status_code in _SKIP_STATUSES or request.method == "HEAD":
        return response
    if "Content-Encoding" in response.headers or response.is_streamed and not response.direct_passthrough:
        return response

    # send_file responses hand a file wrapper straight to the server
    response.direct_passthrough = False
    data = response.get_data()
    response.set_data(gzip.compress(data, compresslevel=compresslevel))
    response.headers["Content-Encoding"] = "gzip"
    response.vary.add("Accept-Encoding")
    return response
