"""Mapping of raw speaker objects into Speaker records."""

import logging

from errors import MappingError
from models import Speaker, split_full_name
from scrapers.fields import get_flag, get_list, get_text

logger = logging.getLogger(__name__)


def map_speaker(raw: dict) -> Speaker:
    """
    Convert one raw API object into a Speaker.

    Raises:
        MappingError: if the object has no usable name
    """
    if not isinstance(raw, dict):
        raise MappingError(f"Speaker record is not an object: {raw!r}", raw)

    first_name = get_text(raw, "firstname", "firstName", "first_name")
    last_name = get_text(raw, "lastname", "lastName", "last_name")
    if not first_name and not last_name:
        full_name = get_text(raw, "name", "fullName", "full_name", "displayName")
        if not full_name:
            raise MappingError(f"Speaker record {raw.get('id', '?')} has no name", raw)
        first_name, last_name = split_full_name(full_name)

    image = raw.get("image")
    if not isinstance(image, dict):
        image = {}

    return Speaker(
        id=get_text(raw, "id", "_id", "uid"),
        first_name=first_name,
        last_name=last_name,
        email=get_text(raw, "email"),
        job_title=get_text(raw, "jobTitle", "job_title", "title"),
        company=get_text(raw, "company", "companyName", "organization"),
        tags=get_list(raw, "tags"),
        themes=get_list(raw, "themes"),
        has_bio=get_flag(raw, "hasBio", "biography", "bio"),
        has_sessions=get_flag(raw, "hasSessions", "sessions"),
        is_official=get_flag(raw, "isOfficial"),
        is_partner=get_flag(raw, "isPartner"),
        is_top_speaker=get_flag(raw, "top", "isTopSpeaker"),
        communication_manager=get_flag(raw, "communication_manager", "communicationManager"),
        image_small_url=get_text(image, "s"),
        image_thumbnail_url=get_text(image, "t"),
        image_large_url=get_text(image, "l"),
        image_main_url=get_text(image, "u"),
    )


def map_speakers(raws: list, strict: bool = False) -> list[Speaker]:
    """
    Map raw objects in order, dropping repeated ids.

    A record that cannot be mapped is skipped with a warning, or re-raised
    when ``strict`` is set.
    """
    speakers = []
    seen_ids = set()
    skipped = 0

    for raw in raws:
        try:
            speaker = map_speaker(raw)
        except MappingError as e:
            if strict:
                raise
            skipped += 1
            logger.warning(f"Skipping speaker: {e}")
            continue

        if speaker.id:
            if speaker.id in seen_ids:
                logger.debug(f"Duplicate speaker id {speaker.id} ({speaker.name})")
                continue
            seen_ids.add(speaker.id)
        speakers.append(speaker)

    if skipped:
        logger.warning(f"Skipped {skipped} speaker records without a name")
    logger.info(f"Mapped {len(speakers)} speakers")
    return speakers

