"""
Static serving for uploaded objects.

Uploads are served from the API origin, so every response is sandboxed:
an uploaded SVG renders as an image but never runs script.
"""

from fastapi.staticfiles import StaticFiles

UPLOAD_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; style-src 'unsafe-inline'; sandbox",
    "X-Content-Type-Options": "nosniff",
}


class StorageFiles(StaticFiles):
    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers.update(UPLOAD_HEADERS)
        return response
