from fastapi import APIRouter, HTTPException, status, Depends
from pymongo.errors import DuplicateKeyError
from app.models.user import UserCreate, UserResponse, UserInDB
from app.db.mongo import get_db
from app.repositories.user_repo import UserRepository
from app.core.auth import create_access_token, get_current_user
from app.core.security import verify_password
from app.schemas.auth import UserLogin, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: UserInDB) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(str(user.id)),
        token_type="bearer",
        user=UserResponse(
            id=str(user.id),
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at
        )
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db = Depends(get_db)):
    """Create a new user account, or claim a profile a group invite created."""
    user_repo = UserRepository(db)

    existing_user = await user_repo.get_user_by_email(user_data.email)
    if existing_user and not existing_user.is_placeholder:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    if existing_user:
        user = await user_repo.claim_placeholder(str(existing_user.id), user_data)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Profile changed during signup, try again"
            )
    else:
        try:
            user = await user_repo.create_user(user_data)
        except DuplicateKeyError:
            # Lost a race with a concurrent signup for the same email
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db = Depends(get_db)):
    """Login with email and password."""
    user_repo = UserRepository(db)

    user = await user_repo.get_user_by_email(credentials.email)
    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """Get current user details."""
    return current_user
