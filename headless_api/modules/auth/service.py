from datetime import datetime, timezone
from supabase import Client
from headless_api.config.settings import settings
from headless_api.core.email import EmailService
from headless_api.core.keys import generate_key
from headless_api.core.security import hash_password, verify_password
from headless_api.modules.auth.schemas import LoginRequest, RegisterRequest, RegisterResponse, UserResponse
from fastapi import HTTPException
from typing import Any, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _find_user(self, column: str, value: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("users")\
            .select("*")\
            .eq(column, value)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new admin user with a bcrypt-hashed password"""
        try:
            if self._find_user("username", register_data.username) or self._find_user("email", register_data.email):
                raise HTTPException(status_code=400, detail="User already exists")

            result = self.supabase.table("users").insert({
                "username": register_data.username,
                "email": register_data.email,
                "password_hash": hash_password(register_data.password),
                "created_at": datetime.now(timezone.utc).isoformat()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to register user")

            user = result.data[0]
            return RegisterResponse(
                user_id=user["id"],
                username=user["username"],
                email=user["email"],
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "duplicate" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Registration failed: {error_message}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> Tuple[Dict[str, Any], str]:
        """Verify credentials and open a session, replacing any previous session of the user"""
        try:
            user = self._find_user("username", login_data.username)
        except Exception as e:
            logger.error(f"Login lookup failed: {e}")
            raise HTTPException(status_code=500, detail="Login failed")

        if not user or not verify_password(login_data.password, user["password_hash"]):
            logger.warning(f"Failed login for username '{login_data.username}'")
            raise HTTPException(status_code=401, detail="Invalid username or password")

        session_token = generate_key(settings.session_token_length)
        try:
            self.supabase.table("sessions").upsert({
                "session_token": session_token,
                "user_id": user["id"],
                "created_at": datetime.now(timezone.utc).isoformat()
            }, on_conflict="user_id").execute()
        except Exception as e:
            logger.error(f"Could not store session for user {user['id']}: {e}")
            raise HTTPException(status_code=500, detail="Login failed")

        logger.info(f"User {user['id']} logged in")
        return user, session_token

    def logout(self, session_token: str) -> bool:
        try:
            result = self.supabase.table("sessions")\
                .delete()\
                .eq("session_token", session_token)\
                .execute()
            return len(result.data) > 0
        except Exception as e:
            logger.error(f"Logout failed: {e}")
            raise HTTPException(status_code=500, detail="Logout failed")

    def get_user(self, user_id: int) -> UserResponse:
        try:
            user = self._find_user("id", user_id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return UserResponse(**user)

    async def forgot_password(self, email: str, email_service: EmailService) -> bool:
        """Replace the user's password with a generated one and email it. False if no such user."""
        try:
            user = self._find_user("email", email)
        except Exception as e:
            logger.error(f"Password reset lookup failed: {e}")
            raise HTTPException(status_code=500, detail="Password reset failed")

        if not user:
            logger.info("Password reset requested for unknown email")
            return False

        new_password = generate_key(settings.generated_password_length)
        try:
            self.supabase.table("users")\
                .update({"password_hash": hash_password(new_password)})\
                .eq("id", user["id"])\
                .execute()
        except Exception as e:
            logger.error(f"Could not update password for user {user['id']}: {e}")
            raise HTTPException(status_code=500, detail="Password reset failed")

        sent = await email_service.send_new_password_email(user["email"], new_password)
        if not sent:
            raise HTTPException(status_code=500, detail="Failed to send password email")
        return True
