import bcrypt
from httpx import AsyncClient

from underneath.api.utils.jwt import generate_jwt
from underneath.domain.entities import User, UserRole

PASSWORD = "Secure1!pass"


async def register(client: AsyncClient, email: str, role: str, display_name: str = None) -> dict:
    """Register a user and return the auth payload with a ready header"""
    payload = {
        "email": email,
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "role": role,
    }
    if display_name:
        payload["display_name"] = display_name

    response = await client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text

    data = response.json()
    data["headers"] = {"Authorization": f"Bearer {data['access_token']}"}
    return data


async def create_admin(db_session, email: str = "admin@example.com") -> dict:
    """ADMIN accounts cannot self-register; insert one directly"""
    user = User(
        email=email,
        password_hash=bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
        role=UserRole.ADMIN,
    )
    db_session.add(user)
    await db_session.commit()

    token = generate_jwt(user.id, UserRole.ADMIN.value)
    return {"id": str(user.id), "headers": {"Authorization": f"Bearer {token}"}}


async def connect(client: AsyncClient, dom: dict, sub: dict) -> dict:
    """Invite and accept; returns the accept response body"""
    invite = await client.post("/invitations", json={}, headers=dom["headers"])
    assert invite.status_code == 201, invite.text

    accept = await client.post(
        "/invitations/accept", json={"code": invite.json()["code"]}, headers=sub["headers"]
    )
    assert accept.status_code == 200, accept.text
    return accept.json()
