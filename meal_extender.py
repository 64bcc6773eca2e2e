import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from config import CONFIG

log = logging.getLogger(__name__)

# ====================================================================

@dataclass(frozen=True)
class Meal:
    name: str
    tolerance: int  # max positions the meal may go without reappearing

    @classmethod
    def placeholder(cls) -> "Meal":
        return cls(CONFIG["placeholder_name"], CONFIG["placeholder_tolerance"])

    def as_tuple(self) -> Tuple[str, int]:
        return (self.name, self.tolerance)

    def __str__(self) -> str:
        return f"({self.name}, {self.tolerance})"


@dataclass(frozen=True)
class DroppedRepeat:
    meal: Meal
    multiplier: int
    position: int  # absolute slot the repeat wanted


@dataclass
class ExtensionReport:
    sequence: List[Meal]
    dropped: List[DroppedRepeat] = field(default_factory=list)
    placeholder_positions: List[int] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.dropped and not self.placeholder_positions

# ---------------------------- errors --------------------------------

class PlanningError(ValueError):
    """Raised when a meal sequence cannot be built from the given input."""


class DestinationTooShort(PlanningError):
    def __init__(self, target_length: int, source_length: int):
        super().__init__(
            f"target length {target_length} is shorter than the {source_length} source meals"
        )
        self.target_length = target_length
        self.source_length = source_length


class InvalidTolerance(PlanningError):
    def __init__(self, meal: Meal):
        super().__init__(f"meal {meal} needs a positive integer tolerance")
        self.meal = meal


class RemainderExceedsSource(PlanningError):
    def __init__(self, requested: int, available: int):
        super().__init__(
            f"a cycle of {requested} meals needs more meals than the {available} available"
        )
        self.requested = requested
        self.available = available


class PlacementIncomplete(PlanningError):
    def __init__(self, dropped: List[DroppedRepeat]):
        names = sorted({d.meal.name for d in dropped})
        super().__init__(
            f"{len(dropped)} repeat(s) found no free slot: {', '.join(names)}"
        )
        self.dropped = list(dropped)

# ---------------------------- ordering ------------------------------

def tolerance_key(meal: Meal) -> int:
    return meal.tolerance

def order_by_tolerance(meals: Iterable[Meal], descending: bool = True) -> List[Meal]:
    """Priority order only. Ties keep their input order."""
    return sorted(meals, key=tolerance_key, reverse=descending)

# ---------------------------- validation ----------------------------

def validate_meals(meals: List[Meal], target_length: int) -> None:
    if not meals:
        raise PlanningError("no meals to extend")
    if target_length < len(meals):
        raise DestinationTooShort(target_length, len(meals))
    for meal in meals:
        t = meal.tolerance
        if isinstance(t, bool) or not isinstance(t, int) or t <= 0:
            raise InvalidTolerance(meal)

# ---------------------------- placement -----------------------------

def repeat_bound(meal: Meal, source_length: int, extra: int) -> int:
    return (extra + source_length) // meal.tolerance

def target_index(position: int, tolerance: int, multiplier: int,
                 source_length: int, offset: int) -> int:
    """
    Index into the extra region for the multiplier-th repeat of the meal
    sitting at `position` in the source list. Negative means the slot is
    still inside the source prefix.
    """
    return position + multiplier * tolerance - source_length + offset

def find_free_slot(slots: List[Optional[Meal]], start: int) -> Optional[int]:
    for idx in range(max(start, 0), len(slots)):
        if slots[idx] is None:
            return idx
    return None

def place_repeat(slots: List[Optional[Meal]], meal: Meal,
                 target: int, offset: int) -> Tuple[Optional[int], int]:
    """
    Put `meal` at `target` or the first free slot after it.
    Returns (placed index or None, updated offset cursor).
    """
    found = find_free_slot(slots, target)
    if found is None:
        return None, offset
    slots[found] = meal
    return found, offset + (found - target)

def _place_meal(slots: List[Optional[Meal]], meal: Meal, position: int,
                source_length: int) -> List[DroppedRepeat]:
    extra = len(slots)
    offset = 0
    dropped = []
    for multiplier in range(1, repeat_bound(meal, source_length, extra) + 1):
        target = target_index(position, meal.tolerance, multiplier, source_length, offset)
        if target < 0:
            continue
        if target >= extra:
            break
        placed, offset = place_repeat(slots, meal, target, offset)
        if placed is None:
            dropped.append(DroppedRepeat(meal, multiplier, source_length + target))
    return dropped

def backfill(slots: List[Optional[Meal]], start_position: int) -> Tuple[List[Meal], List[int]]:
    placeholder = Meal.placeholder()
    resolved, positions = [], []
    for idx, slot in enumerate(slots):
        if slot is None:
            positions.append(start_position + idx)
            resolved.append(placeholder)
        else:
            resolved.append(slot)
    if positions:
        log.info("Backfilled %d empty slot(s) with placeholder %s at positions %s",
                 len(positions), placeholder, positions)
    return resolved, positions

# ---------------------------- extension -----------------------------

def extend_with_report(meals: Iterable[Meal], target_length: int,
                       strict: bool = False) -> ExtensionReport:
    """
    Extend `meals` to `target_length` slots, spacing each meal's repeats
    roughly `tolerance` positions apart.

    Meals are placed in the order given; on a collision the repeat moves
    forward to the next free slot and the rest of that meal's repeats
    follow the shifted baseline. Repeats with no free slot left are
    dropped (raises PlacementIncomplete when `strict`), and leftover
    slots get the placeholder meal.
    """
    source = list(meals)
    validate_meals(source, target_length)
    source_length = len(source)

    slots: List[Optional[Meal]] = [None] * (target_length - source_length)
    dropped: List[DroppedRepeat] = []
    for position, meal in enumerate(source):
        dropped.extend(_place_meal(slots, meal, position, source_length))

    if dropped:
        if strict:
            raise PlacementIncomplete(dropped)
        log.warning("%d repeat(s) found no free slot and were dropped", len(dropped))

    extra, placeholder_positions = backfill(slots, source_length)
    return ExtensionReport(
        sequence=source + extra,
        dropped=dropped,
        placeholder_positions=placeholder_positions,
    )

def extend(meals: Iterable[Meal], target_length: int, strict: bool = False) -> List[Meal]:
    return extend_with_report(meals, target_length, strict=strict).sequence

def repeat_cycle(meals: Iterable[Meal], target_length: int,
                 cycle_length: Optional[int] = None) -> List[Meal]:
    """
    Plain repetition: whole copies of the first `cycle_length` meals,
    then the head of that cycle for the remainder.
    """
    source = list(meals)
    validate_meals(source, target_length)
    if cycle_length is None:
        cycle_length = len(source)
    if cycle_length < 1:
        raise PlanningError(f"cycle length must be positive, got {cycle_length}")
    if cycle_length > len(source):
        raise RemainderExceedsSource(cycle_length, len(source))

    cycle = source[:cycle_length]
    whole, remainder = divmod(target_length, cycle_length)
    return cycle * whole + cycle[:remainder]

# ---------------------------- output --------------------------------

def spacing_gaps(sequence: List[Meal]) -> Dict[Meal, List[int]]:
    """Gaps between consecutive occurrences of each real meal."""
    placeholder = Meal.placeholder()
    last_seen: Dict[Meal, int] = {}
    gaps: Dict[Meal, List[int]] = {}
    for pos, meal in enumerate(sequence):
        if meal == placeholder:
            continue
        if meal in last_seen:
            gaps[meal].append(pos - last_seen[meal])
        else:
            gaps[meal] = []
        last_seen[meal] = pos
    return gaps

def format_sequence(sequence: List[Meal]) -> str:
    return "\n".join(str(meal) for meal in sequence)

def format_report(report: ExtensionReport) -> str:
    parts = ["✅ Extended Meal Plan" if report.complete else "⚠️ Extended Meal Plan (incomplete)"]
    parts.append(format_sequence(report.sequence))
    if report.dropped:
        parts.append(f"Dropped repeats: {len(report.dropped)}")
        for d in report.dropped:
            parts.append(f"  {d.meal} repeat {d.multiplier} wanted slot {d.position}")
    if report.placeholder_positions:
        parts.append(f"Placeholders at: {', '.join(str(p) for p in report.placeholder_positions)}")
    for meal, gaps in spacing_gaps(report.sequence).items():
        if gaps and max(gaps) > meal.tolerance:
            parts.append(f"  {meal} max gap {max(gaps)} exceeds tolerance")
    return "\n".join(parts)
