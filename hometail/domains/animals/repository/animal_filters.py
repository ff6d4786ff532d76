"""
Animal search predicate composer.

Each optional search criterion becomes one clause from a closed set of
filter types. ``compose`` ANDs the clause predicates together; with no
clauses the result is an always-true predicate.

Text clauses reference ``Category.name`` and ``Breed.name``, so queries using
the composed predicate must outer-join both tables (see
``AnimalRepository.search``).
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import and_, or_, func, true

from hometail.models.animal import Animal, AgeGroup, Gender, Size
from hometail.models.breed import Breed
from hometail.models.category import Category

LIKE_ESCAPE = "\\"
SENIOR_FLOOR = date(1900, 1, 1)


@dataclass(frozen=True)
class AnimalSearchCriteria:
    q: Optional[str] = None
    category_id: Optional[int] = None
    breed_id: Optional[int] = None
    gender: Optional[Gender] = None
    size: Optional[Size] = None
    age_group: Optional[AgeGroup] = None
    adopted: Optional[bool] = None


# -------------------------------
# Clauses
# -------------------------------
class FilterClause:
    def to_predicate(self):
        raise NotImplementedError


@dataclass(frozen=True)
class CategoryEquals(FilterClause):
    category_id: int

    def to_predicate(self):
        return Animal.category_id == self.category_id


@dataclass(frozen=True)
class BreedEquals(FilterClause):
    breed_id: int

    def to_predicate(self):
        return Animal.breed_id == self.breed_id


@dataclass(frozen=True)
class GenderEquals(FilterClause):
    gender: Gender

    def to_predicate(self):
        return Animal.gender == self.gender


@dataclass(frozen=True)
class SizeEquals(FilterClause):
    size: Size

    def to_predicate(self):
        return Animal.size == self.size


@dataclass(frozen=True)
class AdoptedEquals(FilterClause):
    adopted: bool

    def to_predicate(self):
        return Animal.is_adopted == self.adopted


@dataclass(frozen=True)
class AgeGroupRange(FilterClause):
    """Birth-date window; lower bound inclusive, upper bound per ``upper_inclusive``."""
    lower: date
    upper: date
    upper_inclusive: bool = False

    @classmethod
    def for_group(cls, age_group: AgeGroup, today: date) -> "AgeGroupRange":
        six_months_ago = today - relativedelta(months=6)
        two_years_ago = today - relativedelta(months=24)
        seven_years_ago = today - relativedelta(months=84)

        if age_group == AgeGroup.BABY:
            return cls(six_months_ago, today + timedelta(days=1), upper_inclusive=True)
        if age_group == AgeGroup.YOUNG:
            return cls(two_years_ago, six_months_ago)
        if age_group == AgeGroup.ADULT:
            return cls(seven_years_ago, two_years_ago)
        return cls(SENIOR_FLOOR, seven_years_ago)

    def to_predicate(self):
        upper = (
            Animal.birthday <= self.upper
            if self.upper_inclusive
            else Animal.birthday < self.upper
        )
        return and_(Animal.birthday >= self.lower, upper)


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


@dataclass(frozen=True)
class TextTokenMatch(FilterClause):
    """One lower-cased token that must occur in at least one searchable field."""
    token: str

    def to_predicate(self):
        pattern = f"%{escape_like(self.token)}%"
        return or_(
            func.lower(Animal.name).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Animal.short_description).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Category.name).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Breed.name).like(pattern, escape=LIKE_ESCAPE),
        )


# -------------------------------
# Composition
# -------------------------------
def tokenize(raw: Optional[str]) -> List[str]:
    if raw is None:
        return []
    return raw.strip().lower().split()


def build_clauses(criteria: AnimalSearchCriteria, today: date) -> List[FilterClause]:
    clauses: List[FilterClause] = [TextTokenMatch(t) for t in tokenize(criteria.q)]

    if criteria.category_id is not None:
        clauses.append(CategoryEquals(criteria.category_id))
    if criteria.breed_id is not None:
        clauses.append(BreedEquals(criteria.breed_id))
    if criteria.gender is not None:
        clauses.append(GenderEquals(criteria.gender))
    if criteria.size is not None:
        clauses.append(SizeEquals(criteria.size))
    if criteria.age_group is not None:
        clauses.append(AgeGroupRange.for_group(criteria.age_group, today))
    if criteria.adopted is not None:
        clauses.append(AdoptedEquals(criteria.adopted))

    return clauses


def compose(clauses: List[FilterClause]):
    if not clauses:
        return true()
    return and_(*(c.to_predicate() for c in clauses))


def build_predicate(criteria: AnimalSearchCriteria, today: date):
    return compose(build_clauses(criteria, today))
