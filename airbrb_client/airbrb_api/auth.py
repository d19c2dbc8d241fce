"""Authentication endpoints: /user/auth/*."""

from airbrb_client.network.client import parse_response, request
from airbrb_client.schemas.session import AuthResponse, LoginPayload, RegisterPayload


def login(email: str, password: str) -> AuthResponse:
    data = request(
        "POST", "/user/auth/login", payload=LoginPayload(email=email, password=password).to_wire()
    )
    return parse_response(AuthResponse, data)


def register(email: str, password: str, name: str) -> AuthResponse:
    payload = RegisterPayload(email=email, password=password, name=name).to_wire()
    data = request("POST", "/user/auth/register", payload=payload)
    return parse_response(AuthResponse, data)


def logout(token: str) -> None:
    request("POST", "/user/auth/logout", token=token)
