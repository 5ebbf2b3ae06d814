"""
The "current group" filter shared by the calendar, dashboard and settings.

A scope is either every group (``ALL_GROUPS``) or one specific group. Views
parse it from the ``group`` query parameter and hand it to the core functions
explicitly; nothing reads a process-wide "current group".
"""

from dataclasses import dataclass

ALL_TOKEN = "all"


@dataclass(frozen=True)
class AllGroups:
    is_all = True

    def includes(self, unit):
        return True

    def filter_units(self, units):
        return list(units)

    def filter_bookings(self, bookings, units):
        return list(bookings)

    def apply(self, queryset, field="group_id"):
        return queryset

    def __str__(self):
        return ALL_TOKEN


@dataclass(frozen=True)
class SpecificGroup:
    group_id: int
    is_all = False

    def includes(self, unit):
        return unit.group_id == self.group_id

    def filter_units(self, units):
        return [unit for unit in units if self.includes(unit)]

    def filter_bookings(self, bookings, units):
        unit_ids = {unit.id for unit in self.filter_units(units)}
        return [booking for booking in bookings if booking.unit_id in unit_ids]

    def apply(self, queryset, field="group_id"):
        return queryset.filter(**{field: self.group_id})

    def __str__(self):
        return str(self.group_id)


ALL_GROUPS = AllGroups()


def parse_group_scope(value):
    """
    Parse a ``group`` query parameter.

    ``None``, an empty string and ``"all"`` mean every group; anything else must
    be a group id. Raises ``ValueError`` for values that are neither.
    """
    if value is None:
        return ALL_GROUPS
    text = str(value).strip()
    if not text or text.lower() == ALL_TOKEN:
        return ALL_GROUPS
    try:
        return SpecificGroup(int(text))
    except ValueError:
        raise ValueError(f"Invalid group scope: {value!r}")


def config_for_scope(queryset, scope):
    """
    Return the configuration row for ``scope`` from a per-group config queryset.

    A specific group falls back to the "all groups" row (``group IS NULL``) when
    it has no row of its own. Returns ``None`` when neither exists.
    """
    if not scope.is_all:
        config = queryset.filter(group_id=scope.group_id).first()
        if config is not None:
            return config
    return queryset.filter(group__isnull=True).first()
