"""Mapping of raw partner / exhibitor objects into Partner records."""

import logging

from errors import MappingError
from models import Partner
from scrapers.fields import get_nested, get_text

logger = logging.getLogger(__name__)

# Substring of key_figures.city -> country
CITY_COUNTRIES = [
    ("Paris", "France"),
    ("London", "UK"),
    ("Berlin", "Germany"),
    ("Tokyo", "Japan"),
    ("New York", "USA"),
    ("San Francisco", "USA"),
    ("Beijing", "China"),
    ("Shanghai", "China"),
    ("Mumbai", "India"),
    ("Bangalore", "India"),
    ("Toronto", "Canada"),
    ("Montreal", "Canada"),
]

# Country names recognised inside a company name, and their canonical form
NAME_COUNTRIES = [
    ("United States", "USA"),
    ("United Kingdom", "UK"),
    ("France", "France"),
    ("USA", "USA"),
    ("UK", "UK"),
    ("Germany", "Germany"),
    ("Japan", "Japan"),
    ("China", "China"),
    ("India", "India"),
    ("Canada", "Canada"),
]

# Accepted after a " - " suffix, e.g. "Business France - Morocco"
KNOWN_COUNTRIES = {
    c.lower() for c in [
        "France", "USA", "United States", "UK", "United Kingdom", "Germany",
        "Japan", "China", "India", "Canada", "Spain", "Italy", "Netherlands",
        "Belgium", "Switzerland", "Austria", "Australia", "New Zealand",
        "Singapore", "Korea", "Brazil", "Mexico", "Argentina", "Chile",
        "Poland", "Czech Republic", "Hungary", "Romania", "Greece", "Portugal",
        "Ireland", "Scotland", "Wales", "Sweden", "Norway", "Denmark",
        "Finland", "Russia", "Ukraine", "Turkey", "Israel", "UAE",
        "Saudi Arabia", "Egypt", "South Africa", "Nigeria", "Kenya", "Morocco",
        "Algeria", "Tunisia", "Albania", "Armenia", "Bangladesh",
    ]
}


def country_from_city(city: str) -> str:
    for fragment, country in CITY_COUNTRIES:
        if fragment in city:
            return country
    return ""


def country_from_name(name: str) -> str:
    """Guess a country from a "Company - Country" suffix or a country in the name."""
    _, sep, tail = name.rpartition(" - ")
    if sep and tail.strip().lower() in KNOWN_COUNTRIES:
        return tail.strip()

    upper = name.upper()
    for pattern, country in NAME_COUNTRIES:
        # Short codes must be whole words ("UK" is not in "DUKE")
        if len(pattern) <= 3:
            if pattern in upper.replace("-", " ").replace(",", " ").split():
                return country
        elif pattern.upper() in upper:
            return country
    return ""


def _logo_url(raw: dict) -> str:
    logo = raw.get("logo")
    if isinstance(logo, dict):
        return get_text(logo, "u", "url")
    return get_text(raw, "logo_url", "logoUrl", "logo")


def map_partner(raw: dict) -> Partner:
    """
    Convert one raw API object into a Partner.

    Raises:
        MappingError: if the object has no company name
    """
    if not isinstance(raw, dict):
        raise MappingError(f"Partner record is not an object: {raw!r}", raw)

    name = get_text(raw, "name", "companyName", "company_name")
    if not name:
        raise MappingError(f"Partner record {raw.get('id', '?')} has no company name", raw)

    country = get_text(raw, "country")
    if not country:
        city = get_nested(raw, "key_figures", "city")
        if isinstance(city, str) and city:
            country = country_from_city(city)
        else:
            country = country_from_name(name)

    return Partner(
        company_name=name,
        category=get_text(raw, "category", "type"),
        country=country,
        description=get_text(raw, "description", "desc", "short_desc"),
        website=get_text(raw, "website", "url"),
        logo_url=_logo_url(raw),
    )


def map_partners(raws: list, strict: bool = False) -> list[Partner]:
    """Map raw objects in order, keeping the first record per company name."""
    partners = []
    seen_names = set()
    skipped = 0

    for raw in raws:
        try:
            partner = map_partner(raw)
        except MappingError as e:
            if strict:
                raise
            skipped += 1
            logger.warning(f"Skipping partner: {e}")
            continue

        if partner.company_name in seen_names:
            logger.debug(f"Duplicate partner {partner.company_name}")
            continue
        seen_names.add(partner.company_name)
        partners.append(partner)

    if skipped:
        logger.warning(f"Skipped {skipped} partner records without a company name")
    logger.info(f"Mapped {len(partners)} partners")
    return partners

