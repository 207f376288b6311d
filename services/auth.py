import logging
import re
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.orm import Session

from models.user import User, UserRole
from schemas.user import UserCreate, UserLogin
from utils.errors import AuthenticationError, ConflictError, ValidationError
from utils.security import create_access_token, get_jwt_secret, hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")

INVALID_CREDENTIALS = "Invalid email or password"
OAUTH_ONLY_ACCOUNT = (
    "This account was created with Google sign-in. "
    "Please use Google sign-in to access your account."
)

REQUIRED_FIELDS = [
    ("email", "email"),
    ("username", "username"),
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("password", "password"),
]


def _validate_email(email: str) -> None:
    def invalid(message: str):
        return ValidationError("Invalid email format", message, fields=["email"])

    if not EMAIL_PATTERN.match(email):
        raise invalid("Please enter a valid email address (e.g., name@example.com). Make sure it contains @ and a domain.")
    if ".." in email:
        raise invalid("Email cannot contain consecutive dots (..)")
    if email.startswith((".", "@")):
        raise invalid("Email cannot start with a dot or @ symbol")
    if email.endswith((".", "@")):
        raise invalid("Email cannot end with a dot or @ symbol")
    parts = email.split("@")
    if len(parts) != 2 or "." not in parts[1]:
        raise invalid("Email must have a valid domain (e.g., @gmail.com, @example.com)")


def validate_registration(data: UserCreate) -> UserCreate:
    """Check a registration payload and return it normalized."""
    missing = [
        wire_name for attr, wire_name in REQUIRED_FIELDS
        if not getattr(data, attr) or not getattr(data, attr).strip()
    ]
    if missing:
        raise ValidationError(
            "Missing required fields",
            f"Please provide: {', '.join(missing)}",
            fields=missing,
        )

    email = data.email.strip().lower()
    _validate_email(email)

    password = data.password
    if len(password) < 6:
        raise ValidationError("Password too short", "Password must be at least 6 characters long", fields=["password"])
    if len(password) > 100:
        raise ValidationError("Password too long", "Password must be 100 characters or less", fields=["password"])

    username = data.username.strip()
    if len(username) < 3:
        raise ValidationError("Username too short", "Username must be at least 3 characters long", fields=["username"])
    if len(username) > 20:
        raise ValidationError("Username too long", "Username must be 20 characters or less", fields=["username"])
    if not USERNAME_PATTERN.match(username):
        raise ValidationError(
            "Invalid username format",
            "Username can only contain letters, numbers, and underscores (no spaces or special characters)",
            fields=["username"],
        )

    first_name = data.first_name.strip()
    last_name = data.last_name.strip()
    if len(first_name) < 2:
        raise ValidationError("First name too short", "First name must be at least 2 characters long", fields=["firstName"])
    if len(last_name) < 2:
        raise ValidationError("Last name too short", "Last name must be at least 2 characters long", fields=["lastName"])

    return data.model_copy(update={
        "email": email,
        "username": username.lower(),
        "first_name": first_name,
        "last_name": last_name,
        "role": data.role or UserRole.ENTHUSIAST,
    })


def register(data: UserCreate, db: Session) -> dict:
    data = validate_registration(data)

    existing = db.query(User).filter(
        or_(User.email == data.email, User.username == data.username)
    ).first()
    if existing:
        field = "email" if existing.email.lower() == data.email else "username"
        value = data.email if field == "email" else data.username
        raise ConflictError(
            message=f"An account with this {field} ({value}) already exists. "
                    f"Please use a different {field} or try logging in instead.",
            fields=[field],
        )

    # Fail before writing anything if tokens cannot be issued.
    get_jwt_secret()

    user = User(
        email=data.email,
        username=data.username,
        first_name=data.first_name,
        last_name=data.last_name,
        password=hash_password(data.password),
        role=data.role,
        skills=[],
        interests=[],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)

    token = create_access_token(user.id, user.role.value)
    return {"message": "User registered successfully", "user": user, "token": token}


def login(credentials: UserLogin, db: Session) -> dict:
    email = credentials.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not user.password:
        raise AuthenticationError(OAUTH_ONLY_ACCOUNT)

    if not verify_password(credentials.password, user.password):
        raise AuthenticationError(INVALID_CREDENTIALS)

    user.last_active = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    token = create_access_token(user.id, user.role.value)
    logger.info("User %s logged in", user.id)
    return {"message": "Login successful", "user": user, "token": token}
