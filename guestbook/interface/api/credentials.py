"""Credential extraction from incoming requests."""

from typing import Annotated, Optional

from fastapi import Cookie, Depends, Header, Request
from pydantic import BaseModel


class ClientCredentials(BaseModel):
    """Raw, unverified credentials presented by the client."""

    token: Optional[str] = None
    visitor_key: Optional[str] = None
    origin: Optional[str] = None


def read_credentials(
    request: Request,
    auth_token: Optional[str] = Cookie(default=None),
    authorization: Optional[str] = Header(default=None),
    x_visitor_id: Optional[str] = Header(default=None),
    x_forwarded_for: Optional[str] = Header(default=None),
) -> ClientCredentials:
    """Collect the session token, visitor key and client origin.

    A bearer token in ``Authorization`` wins over the ``auth_token``
    cookie. The origin is the first ``X-Forwarded-For`` hop when the app
    runs behind a proxy, else the socket peer.
    """
    token = auth_token
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            token = value.strip()

    origin = None
    if x_forwarded_for:
        origin = x_forwarded_for.split(",")[0].strip() or None
    if origin is None and request.client:
        origin = request.client.host

    return ClientCredentials(token=token, visitor_key=x_visitor_id, origin=origin)


Credentials = Annotated[ClientCredentials, Depends(read_credentials)]
