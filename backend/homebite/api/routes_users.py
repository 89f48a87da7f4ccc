from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from homebite.db import get_db
from homebite.errors import InvalidCredentials
from homebite.schemas.user_schema import LoginIn, PrincipalOut, RegisterUserIn, UserOut
from homebite.services.auth_service import Authenticator, Credentials, PasswordAuthenticator
from homebite.services.user_service import UserService
from homebite.utils.validation import MAX_ID

router = APIRouter(prefix="/api", tags=["users"])


def get_authenticator(db: Session = Depends(get_db)) -> Authenticator:
    # override this dependency to plug in another credential check
    return PasswordAuthenticator(db)


@router.post("/users", summary="Register user", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(payload: RegisterUserIn, db: Session = Depends(get_db)):
    user = UserService(db).register_user(**payload.model_dump())
    return UserOut.model_validate(user)


@router.get("/users/{user_id}", summary="Get user", response_model=UserOut)
def get_user(user_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    return UserOut.model_validate(UserService(db).get_user(user_id))


@router.post("/auth/login", summary="Verify credentials", response_model=PrincipalOut)
def login(payload: LoginIn, authenticator: Authenticator = Depends(get_authenticator)):
    principal = authenticator.verify(Credentials(email=payload.email, password=payload.password))
    if principal is None:
        raise InvalidCredentials()
    return PrincipalOut(user_id=principal.user_id, role=principal.role)
