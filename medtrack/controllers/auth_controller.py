# medtrack/controllers/auth_controller.py

from medtrack.helpers import api_response, json_body
from medtrack.services import identity


def _auth_response(user, message, status_code):
    return api_response(
        True, message, status_code=status_code,
        user=user.to_summary(),
        access_token=identity.issue_credential(user),
    )


def register():
    data = json_body()
    user = identity.register(
        username=data.get("username"),
        password=data.get("password"),
        email=data.get("email"),
        role=data.get("role"),
    )
    return _auth_response(user, "User registered successfully", 201)


def login():
    data = json_body()
    user = identity.authenticate(data.get("username"), data.get("password"))
    return _auth_response(user, "Login successful", 200)
