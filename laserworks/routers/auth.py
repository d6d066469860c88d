from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from ..auth import Identity, TokenCodec
from ..dependencies import get_mailer, get_token_codec, get_user_manager, require_correct_user_or_admin
from ..emails import ConfirmationMailer
from ..errors import BadRequestError
from ..managers import UserManager
from ..rate_limit import login_limit, register_limit
from ..schemas import LoginRequest, Token, UserRegister, UserResponse, VerificationRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=Token)
@login_limit
def login(
    request: Request,
    credentials: LoginRequest,
    users: UserManager = Depends(get_user_manager),
    codec: TokenCodec = Depends(get_token_codec),
) -> dict:
    user = users.authenticate(credentials.username, credentials.password)
    return {"token": codec.encode(user)}


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
@register_limit
def register(
    request: Request,
    user_in: UserRegister,
    background_tasks: BackgroundTasks,
    users: UserManager = Depends(get_user_manager),
    codec: TokenCodec = Depends(get_token_codec),
    mailer: ConfirmationMailer = Depends(get_mailer),
) -> dict:
    """Create a regular account and e-mail the confirmation link."""
    user = users.register(user_in.model_dump(by_alias=True))
    background_tasks.add_task(mailer.send_confirmation, user.username, user.email)
    return {"token": codec.encode(user)}


@router.get("/confirmation/{token}", response_model=UserResponse)
def confirm_email(
    token: str,
    users: UserManager = Depends(get_user_manager),
    mailer: ConfirmationMailer = Depends(get_mailer),
) -> dict:
    username = mailer.tokens.decode(token)
    if username is None:
        raise BadRequestError("Invalid or expired confirmation token")
    return {"user": users.verify_user(username)}


@router.post("/send-verification/{username}")
def send_verification(
    username: str,
    payload: VerificationRequest,
    background_tasks: BackgroundTasks,
    _: Identity = Depends(require_correct_user_or_admin),
    users: UserManager = Depends(get_user_manager),
    mailer: ConfirmationMailer = Depends(get_mailer),
) -> dict:
    user = users.get_user(username)
    background_tasks.add_task(mailer.send_confirmation, user.username, payload.email)
    return {"success": True}
