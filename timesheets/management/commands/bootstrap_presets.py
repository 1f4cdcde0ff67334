"""Bootstrap default WorkingHoursPresets from YAML (idempotent)."""
# File: timesheets/management/commands/bootstrap_presets.py
# Version: 1.0.0
# Modified: 2026-10-19

from pathlib import Path
import yaml
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from people.models import Person
from timesheets.durations import parse_time_value
from timesheets.models import WorkingHoursPreset
from timesheets.services import save_preset


def get_fixture_path(filename):
    return Path(__file__).parent.parent.parent / "fixtures" / filename


class Command(BaseCommand):
    help = "Create default working hours presets for active people from YAML (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", "-f",
            default=None,
            help="Path to YAML file (default: timesheets/fixtures/presets.yaml)"
        )
        parser.add_argument(
            "--person",
            default=None,
            help="Only this person (employee ID)",
        )
        parser.add_argument("--dry-run", action="store_true")

    def handle(self, *args, **opts):
        file_path = Path(opts["file"]) if opts["file"] else get_fixture_path("presets.yaml")
        dry = opts["dry_run"]

        if not file_path.exists():
            raise CommandError(f"YAML file not found: {file_path}")

        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        presets_cfg = data.get("presets", []) or []
        if not presets_cfg:
            self.stdout.write(self.style.WARNING("No presets defined."))
            return

        # validate the whole file before touching anything
        for p in presets_cfg:
            if not p.get("name"):
                raise CommandError(f"Missing 'name' in: {p}")
            for key in ("start", "end"):
                try:
                    parse_time_value(str(p.get(key, "")))
                except ValueError:
                    raise CommandError(f"Invalid '{key}' time in preset {p['name']!r}: {p.get(key)!r}")

        people = Person.objects.filter(is_active=True)
        if opts["person"]:
            people = people.filter(employee_id=opts["person"])
            if not people.exists():
                raise CommandError(f"No active person with employee ID {opts['person']!r}")

        created_count = unchanged_count = 0

        for person in people:
            existing = set(WorkingHoursPreset.objects.filter(employee=person).values_list("name", flat=True))
            has_default = WorkingHoursPreset.objects.filter(employee=person, is_default=True).exists()

            for p in presets_cfg:
                name = p["name"]
                if name in existing:
                    unchanged_count += 1
                    continue

                # never steal the default flag from a preset the person picked
                is_default = bool(p.get("is_default", False)) and not has_default

                if dry:
                    self.stdout.write(self.style.NOTICE(f"[DRY] Create: {person} → {name}"))
                else:
                    try:
                        with transaction.atomic():
                            save_preset(person, name, str(p["start"]), str(p["end"]), is_default=is_default)
                    except ValidationError as e:
                        raise CommandError(f"Error creating preset {name!r} for {person}: {e}")
                    self.stdout.write(self.style.SUCCESS(f"Created: {person} → {name}"))
                if is_default:
                    has_default = True
                created_count += 1

        summary = []
        if created_count:
            summary.append(f"{created_count} created")
        if unchanged_count:
            summary.append(f"{unchanged_count} unchanged")
        if not summary:
            summary.append("nothing to do")

        if dry:
            self.stdout.write(self.style.WARNING(f"\nDry run. {', '.join(summary)}. No changes applied."))
        else:
            self.stdout.write(self.style.SUCCESS(f"\n✓ Bootstrap complete! {', '.join(summary)}."))
