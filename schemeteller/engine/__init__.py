# schemeteller/engine/__init__.py
from .vector import EligibilityVector, build_vector, calculate_age, derive_income_bracket
from .policy import EligibilityPolicy, MalformedPolicyError, parse_policy
from .rules import MatchOut, find_eligible, matches_policy
