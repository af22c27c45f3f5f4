# schemeteller/engine/catalog.py
from .. import models
from .types import SchemeLevel, SchemeStatus

# Seed catalog. Policies are stored as camelCase documents, same shape as
# admin-authored schemes.

CENTRAL_SCHEMES = [
    {
        "name": "PM Kisan Samman Nidhi",
        "ministry": "Ministry of Agriculture and Farmers Welfare",
        "eligibility_rules": {"occupations": ["FARMER"], "maxIncome": 500_000},
        "official_link": "https://pmkisan.gov.in/",
    },
    {
        "name": "Ayushman Bharat - PM-JAY",
        "ministry": "Ministry of Health and Family Welfare",
        "eligibility_rules": {"maxIncome": 250_000, "bplOnly": True},
        "official_link": "https://pmjay.gov.in/",
    },
    {
        "name": "PM Awas Yojana - Gramin",
        "ministry": "Ministry of Rural Development",
        "eligibility_rules": {"maxIncome": 300_000, "ruralOnly": True, "bplOnly": True},
        "official_link": "https://pmayg.nic.in/",
    },
    {
        "name": "PM Awas Yojana - Urban",
        "ministry": "Ministry of Housing and Urban Affairs",
        "eligibility_rules": {"maxIncome": 600_000, "urbanOnly": True},
        "official_link": "https://pmaymis.gov.in/",
    },
    {
        "name": "Pradhan Mantri Mudra Yojana",
        "ministry": "Ministry of Finance",
        "eligibility_rules": {"occupations": ["SELF_EMPLOYED"], "minAge": 18},
        "official_link": "https://www.mudra.org.in/",
    },
    {
        "name": "National Scholarship Portal",
        "ministry": "Ministry of Education",
        "eligibility_rules": {"occupations": ["STUDENT"], "maxIncome": 600_000},
        "official_link": "https://scholarships.gov.in/",
    },
    {
        "name": "PM Ujjwala Yojana",
        "ministry": "Ministry of Petroleum and Natural Gas",
        "eligibility_rules": {"genders": ["FEMALE"], "bplOnly": True, "minAge": 18},
        "official_link": "https://www.pmujjwalayojana.com/",
    },
    {
        "name": "Atal Pension Yojana",
        "ministry": "Ministry of Finance",
        "eligibility_rules": {"minAge": 18, "maxAge": 40, "maxIncome": 500_000},
        "official_link": "https://www.npscra.nsdl.co.in/atal-pension-yojana.php",
    },
    {
        "name": "Stand Up India Scheme",
        "ministry": "Ministry of Finance",
        "eligibility_rules": {"categories": ["SC", "ST"], "minAge": 18, "occupations": ["SELF_EMPLOYED"]},
        "official_link": "https://www.standupmitra.in/",
    },
    {
        "name": "PM Kaushal Vikas Yojana",
        "ministry": "Ministry of Skill Development and Entrepreneurship",
        "eligibility_rules": {"minAge": 15, "maxAge": 45, "occupations": ["STUDENT", "UNEMPLOYED"]},
        "official_link": "https://www.pmkvyofficial.org/",
    },
]

STATE_SCHEMES = [
    {
        "name": "Kalia Yojana",
        "ministry": "Department of Agriculture, Odisha",
        "eligibility_rules": {
            "occupations": ["FARMER"],
            "maxIncome": 200_000,
            "categories": ["GENERAL", "OBC", "SC", "ST"],
        },
        "applicable_regions": ["ODISHA"],
        "official_link": "https://kalia.odisha.gov.in/",
    },
    {
        "name": "Mukhyamantri Ladli Behna Yojana",
        "ministry": "Department of Women and Child Development, Madhya Pradesh",
        "eligibility_rules": {"genders": ["FEMALE"], "minAge": 23, "maxAge": 60, "maxIncome": 250_000},
        "applicable_regions": ["MADHYA_PRADESH"],
        "official_link": "https://ladlibahna.mp.gov.in/",
    },
    {
        "name": "Amma Two Wheeler Scheme",
        "ministry": "Department of Social Welfare, Tamil Nadu",
        "eligibility_rules": {
            "genders": ["FEMALE"],
            "minAge": 18,
            "maxIncome": 250_000,
            "occupations": ["SALARIED", "SELF_EMPLOYED"],
        },
        "applicable_regions": ["TAMIL_NADU"],
        "official_link": "https://www.tn.gov.in/",
    },
    {
        "name": "Delhi Mukhyamantri Tirth Yatra Yojana",
        "ministry": "Department of Welfare, Delhi",
        "eligibility_rules": {"minAge": 60},
        "applicable_regions": ["DELHI"],
        "official_link": "https://delhi.gov.in/",
    },
    {
        "name": "Rajasthan Mukhyamantri Yuva Sambal Yojana",
        "ministry": "Department of Employment, Rajasthan",
        "eligibility_rules": {"minAge": 21, "maxAge": 30, "occupations": ["UNEMPLOYED"]},
        "applicable_regions": ["RAJASTHAN"],
        "official_link": "https://employment.livelihoods.rajasthan.gov.in/",
    },
    {
        "name": "Karnataka Anna Bhagya Scheme",
        "ministry": "Department of Food and Civil Supplies, Karnataka",
        "eligibility_rules": {"bplOnly": True},
        "applicable_regions": ["KARNATAKA"],
        "official_link": "https://ahara.kar.nic.in/",
    },
]


def iter_seed_schemes():
    for entry in CENTRAL_SCHEMES:
        yield {**entry, "level": "CENTRAL", "applicable_regions": None}
    for entry in STATE_SCHEMES:
        yield {**entry, "level": "STATE"}


def seed_catalog(db) -> int:
    """Insert missing seed schemes as APPROVED; existing names are left alone."""
    existing = {name for (name,) in db.query(models.Scheme.name).all()}
    created = 0
    for entry in iter_seed_schemes():
        if entry["name"] in existing:
            continue
        db.add(models.Scheme(
            name=entry["name"],
            ministry=entry["ministry"],
            level=SchemeLevel(entry["level"]),
            status=SchemeStatus.APPROVED,
            eligibility_rules=entry["eligibility_rules"],
            applicable_regions=entry["applicable_regions"],
            official_link=entry["official_link"],
        ))
        created += 1
    db.commit()
    return created
