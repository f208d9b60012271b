from fastapi import APIRouter, Depends, Request, Response
from headless_api.config.settings import settings
from headless_api.core.dependencies import require_session, SessionContext
from headless_api.core.email import EmailService, get_email_service
from headless_api.database.supabase_client import get_supabase
from headless_api.modules.auth.schemas import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse,
    ForgotPasswordRequest, UserResponse
)
from headless_api.modules.auth.service import AuthService
from supabase import Client

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new admin user"""
    return service.register(register_data)


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Login and receive the session cookie"""
    user, session_token = service.login(login_data)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_token,
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite=settings.session_cookie_samesite,
        path="/",
    )
    return LoginResponse(user_id=user["id"], username=user["username"])


@router.post("/forgot", status_code=200)
async def forgot_password(
    forgot_data: ForgotPasswordRequest,
    service: AuthService = Depends(get_auth_service),
    email_service: EmailService = Depends(get_email_service)
):
    """Email a newly generated password to the account owner"""
    await service.forgot_password(forgot_data.email, email_service)
    # Same answer whether or not the address is registered
    return {"message": "If the email is registered, a new password has been sent"}


@router.get("/logout", status_code=200)
async def logout(
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Logout: drop the session row and clear the cookie"""
    session_token = request.cookies.get(settings.session_cookie_name)
    if session_token:
        service.logout(session_token)
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite=settings.session_cookie_samesite,
    )
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    session: SessionContext = Depends(require_session),
    service: AuthService = Depends(get_auth_service)
):
    """Get the user behind the current session"""
    return service.get_user(session.user_id)
