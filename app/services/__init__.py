from app.services.auth import AuthService, auth_service

__all__ = [
    "AuthService",
    "auth_service",
]
