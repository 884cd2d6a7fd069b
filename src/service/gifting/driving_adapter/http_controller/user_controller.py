from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Cookie, Depends, Response, status
from fastapi.responses import JSONResponse

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.register_rider_use_case import RegisterRiderUseCase
from src.service.gifting.app.command.sign_in_use_case import SignInUseCase
from src.service.gifting.app.command.sign_up_sender_use_case import SignUpSenderUseCase
from src.service.gifting.app.command.update_profile_use_case import UpdateProfileUseCase
from src.service.gifting.app.query.get_session_user_use_case import GetSessionUserUseCase
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.gifting.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    ProfileUpdateRequest,
    RiderRegisterRequest,
    SenderSignUpRequest,
    UserResponse,
)


# === API Router ===

router = APIRouter()


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
    session_use_case: GetSessionUserUseCase = Depends(GetSessionUserUseCase.depends),
) -> UserEntity:
    """Resolve the session cookie to a freshly loaded, still-eligible account."""
    user_id = jwt_auth.get_user_id_from_jwt(token)
    return await session_use_case.execute(user_id=user_id)


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def sign_up_sender(
    request: SenderSignUpRequest,
    use_case: SignUpSenderUseCase = Depends(SignUpSenderUseCase.depends),
) -> UserResponse:
    user = await use_case.execute(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        phone_number=request.phone_number,
    )
    return UserResponse.from_entity(user)


@router.post('/rider', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def register_rider(
    request: RiderRegisterRequest,
    use_case: RegisterRiderUseCase = Depends(RegisterRiderUseCase.depends),
) -> UserResponse:
    rider = await use_case.execute(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        phone_number=request.phone_number,
        cnic=request.cnic,
        city=request.city,
        otp_id=request.otp_id,
        profile_image=request.profile_image,
    )
    return UserResponse.from_entity(rider)


@router.post('/login', response_model=UserResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    use_case: SignInUseCase = Depends(SignInUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserResponse | JSONResponse:
    try:
        user = await use_case.execute(email=request.email, password=request.password)
    except CustomBaseError as e:
        # Refused sign-in must not leave an older session behind
        refused = JSONResponse(status_code=e.status_code, content={'detail': e.message})
        refused.delete_cookie(settings.SESSION_COOKIE_NAME)
        return refused

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=jwt_auth.create_jwt_token(user),
        max_age=jwt_auth.max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=not settings.DEBUG,
    )
    return UserResponse.from_entity(user)


@router.post('/logout', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def logout(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


@router.get('/me', response_model=UserResponse)
@Logger.io
async def get_me(current_user: UserEntity = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(current_user)


@router.patch('/me', response_model=UserResponse)
@Logger.io
async def update_me(
    request: ProfileUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateProfileUseCase = Depends(UpdateProfileUseCase.depends),
) -> UserResponse:
    user = await use_case.execute(
        user=current_user,
        full_name=request.full_name,
        phone_number=request.phone_number,
        city=request.city,
        profile_image=request.profile_image,
    )
    return UserResponse.from_entity(user)
