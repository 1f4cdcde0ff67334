# people/utils.py
from __future__ import annotations
from typing import Optional

from django.contrib.auth import get_user_model

from .models import Person

User = get_user_model()


def resolve_person(user: User) -> Optional[Person]:
    """
    Resolve the active Person for a given Django user (people.Person.user).
    Returns None for anonymous users or accounts without a directory record.
    """
    if not user or not user.is_authenticated:
        return None
    return (
        Person.objects
        .filter(user=user, is_active=True)
        .select_related("supervisor")
        .first()
    )


def supervisor_of(person: Person) -> Optional[Person]:
    """The person's direct supervisor, if one is assigned and still active."""
    sup = person.supervisor
    if sup is None or not sup.is_active:
        return None
    return sup
