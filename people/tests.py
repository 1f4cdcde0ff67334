# File: people/tests.py
# Version: 1.1.0
# Modified: 2026-10-19

from django.contrib import admin
from django.test import TestCase
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from concurrency.exceptions import RecordModifiedError
from people.models import Person
from people.utils import resolve_person, supervisor_of

User = get_user_model()


class PersonModelTest(TestCase):
    """Test Person model validation and behavior."""

    def test_full_name_and_str(self):
        person = Person.objects.create(first_name="John", last_name="Doe")
        self.assertEqual(person.full_name, "John Doe")
        self.assertEqual(str(person), "Doe, John")

    def test_employee_id_format(self):
        """Employee IDs allow letters, digits and hyphens only."""
        Person(first_name="A", last_name="B", employee_id="EMP-0042").full_clean()
        with self.assertRaises(ValidationError):
            Person(first_name="A", last_name="B", employee_id="EMP 0042").full_clean()

    def test_employee_id_unique_when_set(self):
        Person.objects.create(first_name="A", last_name="B", employee_id="EMP-1")
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Person.objects.create(first_name="C", last_name="D", employee_id="EMP-1")

    def test_employee_id_null_allowed(self):
        """Multiple persons can go without an employee ID."""
        Person.objects.create(first_name="A", last_name="B")
        person = Person(first_name="C", last_name="D", employee_id="")
        person.full_clean()
        person.save()
        self.assertIsNone(person.employee_id)

    def test_user_link_one_to_one(self):
        """One person per Django user."""
        user = User.objects.create_user(username="testuser")
        Person.objects.create(first_name="John", last_name="Doe", user=user)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Person.objects.create(first_name="Jane", last_name="Doe", user=user)

    def test_stale_save_rejected(self):
        """Concurrent edits of the same record are detected."""
        person = Person.objects.create(first_name="John", last_name="Doe")
        stale = Person.objects.get(pk=person.pk)
        person.position = "Foreman"
        person.save()
        stale.position = "Clerk"
        with self.assertRaises(RecordModifiedError):
            stale.save()

    def test_history_tracked(self):
        person = Person.objects.create(first_name="John", last_name="Doe")
        person.position = "Foreman"
        person.save()
        self.assertEqual(person.history.count(), 2)


class SupervisorHierarchyTest(TestCase):
    """Test supervisor links, chains and cycle protection."""

    def setUp(self):
        self.ceo = Person.objects.create(first_name="Cora", last_name="Chief")
        self.manager = Person.objects.create(first_name="Max", last_name="Manager", supervisor=self.ceo)
        self.worker = Person.objects.create(first_name="Wim", last_name="Worker", supervisor=self.manager)

    def test_supervisor_chain(self):
        self.assertEqual(list(self.worker.supervisor_chain()), [self.manager, self.ceo])
        self.assertEqual(list(self.ceo.supervisor_chain()), [])

    def test_reporting_line_in_admin(self):
        person_admin = admin.site._registry[Person]
        self.assertEqual(person_admin.reporting_line(self.worker), "Max Manager → Cora Chief")
        self.assertEqual(person_admin.reporting_line(self.ceo), "—")

    def test_subordinates(self):
        self.assertEqual(list(self.manager.subordinates.all()), [self.worker])

    def test_self_supervision_rejected(self):
        self.ceo.supervisor = self.ceo
        with self.assertRaises(ValidationError) as cm:
            self.ceo.full_clean()
        self.assertIn("supervisor", cm.exception.message_dict)

    def test_cycle_rejected(self):
        """The CEO cannot report to someone who reports to them."""
        self.ceo.supervisor = self.worker
        with self.assertRaises(ValidationError) as cm:
            self.ceo.full_clean()
        self.assertIn("cycle", cm.exception.message_dict["supervisor"][0])

    def test_reassignment_allowed(self):
        other = Person.objects.create(first_name="Otto", last_name="Other")
        self.worker.supervisor = other
        self.worker.full_clean()

    def test_deleting_supervisor_unlinks(self):
        self.manager.delete()
        self.worker.refresh_from_db()
        self.assertIsNone(self.worker.supervisor)


class PeopleUtilsTest(TestCase):
    """Test account resolution and supervisor lookup."""

    def setUp(self):
        self.user = User.objects.create_user(username="worker", password="test123")
        self.boss = Person.objects.create(first_name="Sabine", last_name="Boss")
        self.person = Person.objects.create(
            first_name="Walter", last_name="Worker", user=self.user, supervisor=self.boss,
        )

    def test_resolve_person(self):
        self.assertEqual(resolve_person(self.user), self.person)
        self.assertIsNone(resolve_person(AnonymousUser()))
        self.assertIsNone(resolve_person(None))

    def test_resolve_inactive_person(self):
        self.person.is_active = False
        self.person.save()
        self.assertIsNone(resolve_person(self.user))

    def test_resolve_user_without_person(self):
        other = User.objects.create_user(username="nobody")
        self.assertIsNone(resolve_person(other))

    def test_supervisor_of(self):
        self.assertEqual(supervisor_of(self.person), self.boss)
        self.assertIsNone(supervisor_of(self.boss))

    def test_inactive_supervisor_is_ignored(self):
        self.boss.is_active = False
        self.boss.save()
        self.person.refresh_from_db()
        self.assertIsNone(supervisor_of(self.person))
