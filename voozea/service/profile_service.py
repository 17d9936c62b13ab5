import logging
import re
from voozea.extension import db
from voozea.models import User
from voozea.errors import ValidationError, ConflictError, NotFoundError
from voozea.utils.helper import commit_or_raise

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30


def normalize_username(raw):
    """Lowercase, non ``[a-z0-9_]`` to ``_``, collapse and trim underscores, cut to 30."""
    username = (raw or "").lower().strip()
    username = re.sub(r"[^a-z0-9_]", "_", username)
    username = re.sub(r"_+", "_", username)
    username = username.strip("_")
    return username[:USERNAME_MAX_LENGTH]


def validate_username(raw, exclude_user_id=None):
    username = normalize_username(raw)
    if len(username) < USERNAME_MIN_LENGTH:
        raise ValidationError(f"Username must be at least {USERNAME_MIN_LENGTH} characters")

    query = User.query.filter(User.username == username)
    if exclude_user_id:
        query = query.filter(User.id != exclude_user_id)
    if query.first():
        raise ConflictError(f'Username "{username}" is already taken')
    return username


def register_user(email, password, username, display_name=None):
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise ValidationError("A valid email is required")
    if not password or len(password) < 6:
        raise ValidationError("Password must be at least 6 characters")
    if User.query.filter_by(email=email).first():
        raise ConflictError("User with this email already exists")

    normalized = validate_username(username)
    user = User(
        email=email,
        username=normalized,
        display_name=(display_name or username or "").strip() or None,
    )
    user.set_password(password)
    db.session.add(user)
    commit_or_raise("Username or email already taken")
    logger.info(f"User registered: {user.id} ({normalized})")
    return user


def authenticate(email, password):
    user = User.query.filter_by(email=(email or "").strip().lower()).first()
    if not user or not user.check_password(password or ""):
        return None
    return user


def get_profile_by_username(username):
    user = User.query.filter_by(username=(username or "").lower()).first()
    if not user:
        raise NotFoundError("Profile not found")
    return user


def update_profile(user, username=None, display_name=None, bio=None, avatar_url=None):
    if username and username != user.username:
        user.username = validate_username(username, exclude_user_id=user.id)

    user.display_name = display_name or None
    user.bio = bio or None
    user.avatar_url = avatar_url or None
    commit_or_raise("Username is already taken")
    return user


# ---------------------------
# Onboarding
# ---------------------------
def update_onboarding_profile(user, avatar_url=None, bio=None, display_name=None):
    user.avatar_url = avatar_url or None
    user.bio = bio or None
    user.display_name = display_name or None
    commit_or_raise()
    return user


def complete_onboarding(user):
    user.onboarding_completed = True
    commit_or_raise()
    return user


def skip_onboarding(user):
    user.onboarding_skipped = True
    commit_or_raise()
    return user
