import logging
import re
from voozea.extension import db
from voozea.models import Business, Category, User
from voozea.models.business import WEEKDAYS
from voozea.models.category import TYPE_BUSINESS
from voozea.models.membership import ROLE_OWNER
from voozea.errors import ValidationError, AuthorizationError, ConflictError, NotFoundError
from voozea.service.entity_service import get_business_role
from voozea.utils.helper import commit_or_raise

logger = logging.getLogger(__name__)

SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 60
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# plain text fields copied from the request as-is (blank -> None)
BUSINESS_FIELDS = (
    "description",
    "phone",
    "website",
    "address",
    "city",
    "state",
    "postal_code",
    "country",
    "logo_url",
    "cover_url",
    "instagram_url",
    "facebook_url",
    "twitter_url",
)


def slugify(text):
    slug = (text or "").lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def sanitize_slug(text):
    slug = (text or "").lower().strip()
    slug = re.sub(r"[^a-z0-9-]", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")[:SLUG_MAX_LENGTH]


def unique_slug(base, exists, max_length=None):
    """
    ``base``, then ``base-1``, ``base-2``... until ``exists(slug)`` is false.
    With ``max_length`` the base is cut so base plus suffix still fits.
    """
    base = base or "item"

    def fit(suffix=""):
        stem = base if max_length is None else base[:max_length - len(suffix)].rstrip("-")
        return f"{stem}{suffix}"

    slug = fit()
    counter = 1
    while exists(slug):
        slug = fit(f"-{counter}")
        counter += 1
    return slug


def parse_hours(raw):
    """
    Normalize a weekly hours map. Every weekday maps to ``{"open", "close"}``
    or None; the whole map is None when no day has hours.
    """
    if not raw:
        return None
    if not isinstance(raw, dict):
        raise ValidationError("Hours must be an object keyed by weekday")

    unknown = set(raw) - set(WEEKDAYS)
    if unknown:
        raise ValidationError(f"Unknown weekday(s) in hours: {', '.join(sorted(unknown))}")

    hours = {}
    has_any = False
    for day in WEEKDAYS:
        entry = raw.get(day)
        if not entry:
            hours[day] = None
            continue
        if not isinstance(entry, dict):
            raise ValidationError(f"Hours for {day} must have open and close times")
        open_, close = entry.get("open"), entry.get("close")
        if not open_ or not close:
            hours[day] = None
            continue
        if not isinstance(open_, str) or not isinstance(close, str) \
                or not TIME_RE.match(open_) or not TIME_RE.match(close):
            raise ValidationError(f"Hours for {day} must be HH:MM")
        hours[day] = {"open": open_, "close": close}
        has_any = True

    return hours if has_any else None


def _business_category(category_id):
    if not category_id:
        return None
    category = db.session.get(Category, category_id)
    if not category or category.type != TYPE_BUSINESS:
        raise ValidationError("Category must be an existing business type")
    return category


def create_business(principal, data, as_owner=False):
    """
    Create a business. Without ``as_owner`` it starts unclaimed and can be
    claimed later; with it the principal becomes the owner straight away.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Business name is required")

    category = _business_category(data.get("category_id"))
    slug = unique_slug(
        slugify(name),
        lambda s: Business.query.filter_by(slug=s).first() is not None,
        max_length=SLUG_MAX_LENGTH
    )

    business = Business(
        name=name,
        slug=slug,
        category_id=category.id if category else None,
        hours=parse_hours(data.get("hours")),
    )
    for field in BUSINESS_FIELDS:
        setattr(business, field, data.get(field) or None)

    if as_owner:
        business.owner_id = principal.id
        business.is_claimed = True
        principal.is_business_owner = True

    db.session.add(business)
    commit_or_raise("A business with this slug already exists")
    logger.info(f"Business created: {business.id} ({slug}) owner={business.owner_id}")
    return business


def update_business(principal, business_id, data):
    business = db.session.get(Business, business_id)
    if not business:
        raise NotFoundError("Business not found")

    if get_business_role(business.id, principal.id) != ROLE_OWNER:
        raise AuthorizationError("You do not have permission to edit this business")

    raw_slug = data.get("slug")
    if raw_slug and raw_slug != business.slug:
        new_slug = sanitize_slug(raw_slug)
        if len(new_slug) < SLUG_MIN_LENGTH:
            raise ValidationError(f"Business username must be at least {SLUG_MIN_LENGTH} characters")
        taken = Business.query.filter(Business.slug == new_slug, Business.id != business.id).first()
        if taken:
            raise ConflictError(f'Business username "{new_slug}" is already taken')
        business.slug = new_slug

    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            raise ValidationError("Business name is required")
        business.name = name

    if "category_id" in data:
        category = _business_category(data.get("category_id"))
        business.category_id = category.id if category else None

    if "hours" in data:
        business.hours = parse_hours(data.get("hours"))

    for field in BUSINESS_FIELDS:
        if field in data:
            setattr(business, field, data.get(field) or None)

    commit_or_raise("Business username is already taken")
    logger.info(f"Business updated: {business.id} by {principal.id}")
    return business


def get_business_by_slug(slug):
    business = Business.query.filter_by(slug=slug).first()
    if not business:
        raise NotFoundError("Business not found")
    return business


def list_businesses(category_id=None, limit=50, offset=0):
    query = Business.query
    if category_id:
        query = query.filter(Business.category_id == category_id)
    return query.order_by(Business.name).offset(offset).limit(limit).all()


def mark_business_owner(user_id):
    user = db.session.get(User, user_id)
    if user:
        user.is_business_owner = True
