import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, NamedTuple, Optional, Tuple

from sqlalchemy.orm import Session

from rocketfist.config import config
from rocketfist.crud import class_instance as instance_crud
from rocketfist.crud import class_template as template_crud
from rocketfist.database import transactional
from rocketfist.errors.base_errors import InvalidInputError
from rocketfist.errors.schedule_errors import ClassTemplateNotFoundError, InactiveClassTemplateError
from rocketfist.models import ClassInstance, ClassTemplate
from rocketfist.schemas.class_instance import ExpandScheduleRequest
from rocketfist.services.gym import require_gym
from rocketfist.utils.ids import parse_uuid
from rocketfist.utils.timeutils import get_zone, utc_now

logger = logging.getLogger(__name__)


class Occurrence(NamedTuple):
    start_time: datetime
    end_time: datetime


def _validate_slot(slot) -> None:
    if not 0 <= slot.day_of_week <= 6:
        raise InvalidInputError(f"day_of_week must be between 0 and 6, got {slot.day_of_week}")
    if not 0 <= slot.hour <= 23:
        raise InvalidInputError(f"hour must be between 0 and 23, got {slot.hour}")
    if not 0 <= slot.minute <= 59:
        raise InvalidInputError(f"minute must be between 0 and 59, got {slot.minute}")


def next_weekday_on_or_after(anchor: date, day_of_week: int) -> date:
    """Next date with the given weekday (0 = Sunday), the anchor itself included."""
    current = anchor.isoweekday() % 7
    days_until = day_of_week - current
    if days_until < 0:
        days_until += 7
    return anchor + timedelta(days=days_until)


def expand_weekly_pattern(
    pattern: Iterable,
    duration_minutes: int,
    anchor: datetime,
    week_offsets: Iterable[int],
    tz_name: str = "UTC",
) -> List[Occurrence]:
    """
    Turns a weekly pattern into concrete occurrences, one per slot and week offset.

    Each slot lands on its first weekday at or after the anchor's local date,
    shifted by ``offset`` weeks, at hour:minute wall-clock time in ``tz_name``.
    Results are UTC, sorted, and free of duplicates.
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidInputError("Duration must be a positive number of minutes")

    zone = get_zone(tz_name)
    offsets = list(week_offsets)
    duration = timedelta(minutes=duration_minutes)

    occurrences = set()
    try:
        if anchor.tzinfo is None:
            anchor_local = zone.localize(anchor)
        else:
            anchor_local = anchor.astimezone(zone)
        anchor_date = anchor_local.date()

        for slot in pattern:
            _validate_slot(slot)
            first = next_weekday_on_or_after(anchor_date, slot.day_of_week)
            for offset in offsets:
                day = first + timedelta(weeks=offset)
                local_start = zone.localize(datetime.combine(day, time(slot.hour, slot.minute)))
                start = local_start.astimezone(timezone.utc)
                occurrences.add(Occurrence(start, start + duration))
    except OverflowError:
        raise InvalidInputError("Expansion window is out of the supported date range")

    return sorted(occurrences)


def capacity_for_template(template: ClassTemplate) -> int:
    """Template capacity if set, otherwise the discipline rule from config."""
    if template.default_capacity:
        return template.default_capacity
    if (template.discipline or "").lower() in config.LARGE_CAPACITY_DISCIPLINES:
        return config.LARGE_CLASS_CAPACITY
    return config.DEFAULT_CLASS_CAPACITY


class ScheduleExpansionService:
    """Materialises class instances from a template's weekly pattern."""

    def __init__(self, db: Session):
        self.db = db

    def expand_template(
        self,
        gym_id: str,
        template_id: str,
        request: ExpandScheduleRequest,
    ) -> Tuple[int, int, List[ClassInstance]]:
        """
        Expands the template over the requested week window.

        Instances are keyed on (template, start_time): ones that already exist
        are left as they are, so repeated runs never duplicate.

        Returns:
            (created, skipped, instances in the window)
        """
        template_id = parse_uuid(template_id, "Invalid class ID format")
        gym = require_gym(self.db, gym_id)

        template = template_crud.get_class_template(self.db, gym.id, template_id)
        if not template:
            raise ClassTemplateNotFoundError()

        pattern = request.pattern if request.pattern is not None else template.schedule_slots
        return self.expand(template, pattern, request.week_offsets, request.anchor, gym.timezone)

    def expand(
        self,
        template: ClassTemplate,
        pattern: Iterable,
        week_offsets: Iterable[int],
        anchor: Optional[datetime] = None,
        tz_name: str = "UTC",
    ) -> Tuple[int, int, List[ClassInstance]]:
        if not template.is_active:
            raise InactiveClassTemplateError(template.name)

        pattern = list(pattern)
        if not pattern:
            raise InvalidInputError(f"Class '{template.name}' has no weekly schedule")

        anchor = anchor or utc_now()
        occurrences = expand_weekly_pattern(
            pattern, template.default_duration_minutes, anchor, week_offsets, tz_name
        )
        max_capacity = capacity_for_template(template)

        created = 0
        with transactional(self.db):
            for occurrence in occurrences:
                inserted = instance_crud.insert_instance_if_absent(
                    self.db,
                    class_template_id=template.id,
                    gym_id=template.gym_id,
                    coach_user_id=template.default_coach_user_id,
                    start_time=occurrence.start_time,
                    end_time=occurrence.end_time,
                    max_capacity=max_capacity,
                )
                if inserted:
                    created += 1

        skipped = len(occurrences) - created
        logger.info(
            f"Expanded class {template.id} ({template.name}): {created} created, {skipped} already existed"
        )

        instances = instance_crud.get_template_instances(
            self.db, template.id, [o.start_time for o in occurrences]
        )
        return created, skipped, instances
