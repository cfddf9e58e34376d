from typing import Protocol
from fastapi import Request
from stations_api.errors import Unauthorized
from stations_api.logger import CustomLogger

console = CustomLogger()


class Authorizer(Protocol):
    def authorize(self, request: Request) -> bool:
        ...


class HeaderPresenceAuthorizer:
    """Allows any request that carries a non-blank value in ``header``.

    This only checks presence. Deployments that need token or claim
    validation pass their own ``Authorizer`` to ``create_app``.
    """

    def __init__(self, header: str = "Authorization"):
        self.header = header

    def authorize(self, request: Request) -> bool:
        value = request.headers.get(self.header)
        return bool(value and value.strip())


async def require_authorization(request: Request):
    authorizer: Authorizer = request.app.state.authorizer
    if not authorizer.authorize(request):
        console.warning(f"Rejected unauthorized {request.method} {request.url.path}")
        raise Unauthorized()
