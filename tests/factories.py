from datetime import datetime, timezone

import factory

from db import get_session
from db.models import Contact
from schema.choices import INDUSTRIES, US_STATES
from services.search_service import ContactRow


def _now():
    return datetime.now(timezone.utc)


class ContactFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Factory for persisted Contact rows.  Needs an initialised database."""

    class Meta:
        model = Contact
        sqlalchemy_session_factory = get_session
        sqlalchemy_session_persistence = "commit"

    email = factory.Sequence(lambda n: f"contact{n}@example.com")
    company_name = factory.Faker("company")
    industry = factory.Faker("random_element", elements=INDUSTRIES)
    state = factory.Faker("random_element", elements=US_STATES)
    status = "Valid"
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    created_at = factory.LazyFunction(_now)


class ContactRowFactory(factory.Factory):
    """Factory for in-memory dashboard rows (no database)."""

    class Meta:
        model = ContactRow

    id = factory.Sequence(lambda n: f"id-{n}")
    email = factory.Sequence(lambda n: f"row{n}@example.com")
    name = factory.Faker("name")
    company = factory.Sequence(lambda n: f"Company {n}")
    industry = "University"
    state = "CA"
    status = "Valid"
    created_at = factory.LazyFunction(_now)
