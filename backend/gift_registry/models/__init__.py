"""ORM models. Importing this package registers every table on Base.metadata."""
from gift_registry.models.event_config import EventConfig  # noqa: F401
from gift_registry.models.guest import Guest  # noqa: F401
from gift_registry.models.gift import GiftItem  # noqa: F401
from gift_registry.models.contribution import Contribution, ContributionDecision  # noqa: F401
from gift_registry.models.profile import Profile, RevokedToken  # noqa: F401
