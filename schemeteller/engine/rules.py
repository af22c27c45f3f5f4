# schemeteller/engine/rules.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from .policy import EligibilityPolicy, MalformedPolicyError, parse_policy, parse_regions
from .types import Region, SchemeStatus
from .vector import EligibilityVector, _get


@dataclass
class MatchOut:
    matched_ids: List[Any] = field(default_factory=list)
    matched_schemes: List[Any] = field(default_factory=list)
    malformed: Dict[Any, str] = field(default_factory=dict)  # scheme id -> reason


def _allowed(value: Any, allowed: Sequence[Any] | None) -> bool:
    # None and [] both mean "anyone"
    if not allowed:
        return True
    return value is not None and value in allowed


def matches_policy(
    vector: EligibilityVector,
    policy: EligibilityPolicy,
    regions: Sequence[Region] = (),
) -> bool:
    """
    True iff every constraint present on the policy accepts the vector.

    Unknown vector values fail any constraint that is present.
    """
    # ---------- age ----------
    if policy.min_age is not None and (vector.age is None or vector.age < policy.min_age):
        return False
    if policy.max_age is not None and (vector.age is None or vector.age > policy.max_age):
        return False

    # ---------- allow-lists ----------
    if not _allowed(vector.gender, policy.genders):
        return False
    if not _allowed(vector.category, policy.categories):
        return False

    if policy.max_income is not None:
        if vector.annual_income is None or vector.annual_income > policy.max_income:
            return False

    if not _allowed(vector.occupation, policy.occupations):
        return False

    # ---------- region scoping (scheme-level) ----------
    if not _allowed(vector.region, regions):
        return False

    # ---------- flags ----------
    if policy.bpl_only and not vector.is_bpl:
        return False
    if policy.disability_only and not vector.is_disabled:
        return False
    if policy.minority_only and not vector.is_minority:
        return False

    # is_rural None is unknown: satisfies neither restriction
    if policy.rural_only and vector.is_rural is not True:
        return False
    if policy.urban_only and vector.is_rural is not False:
        return False

    return True


def find_eligible(vector: EligibilityVector, schemes: Iterable[Any]) -> MatchOut:
    """
    Match a vector against a catalog snapshot.

    Schemes may be ORM rows or dicts exposing id, status, eligibility_rules
    and applicable_regions. Anything not APPROVED is dropped. A scheme whose
    policy or region list is malformed is excluded and reported in
    `malformed` instead of failing the whole pass.
    """
    out = MatchOut()

    for scheme in schemes:
        if _get(scheme, "status") != SchemeStatus.APPROVED:
            continue

        scheme_id = _get(scheme, "id")
        try:
            policy = parse_policy(_get(scheme, "eligibility_rules"))
            regions = parse_regions(_get(scheme, "applicable_regions"))
        except MalformedPolicyError as e:
            out.malformed[scheme_id] = str(e)
            continue

        if matches_policy(vector, policy, regions):
            out.matched_ids.append(scheme_id)
            out.matched_schemes.append(scheme)

    return out
