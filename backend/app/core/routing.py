"""
Route name resolution for the web layer
"""
from fastapi import Request


class RequestRouter:
    """Resolves route names to paths using the application's route table"""

    def __init__(self, request: Request):
        self.request = request

    def url_for(self, route_name: str) -> str:
        # Path only, so redirects stay on whatever host the user came in on
        return str(self.request.app.url_path_for(route_name))
