"""Data models for VivaTech speaker and partner exports."""

from dataclasses import dataclass, field

# Separator used inside the Tags and Themes cells
VALUE_DELIMITER = "; "

SPEAKER_COLUMNS = [
    "ID", "FirstName", "LastName", "Email", "JobTitle", "Company",
    "Tags", "Themes", "HasBio", "HasSessions", "IsOfficial", "IsPartner",
    "IsTopSpeaker", "CommunicationManager", "ImageSmallURL",
    "ImageThumbnailURL", "ImageLargeURL", "ImageMainURL",
]

PARTNER_COLUMNS = [
    "CompanyName", "Category", "Country", "Description", "Website", "LogoURL",
]


def split_full_name(name: str) -> tuple[str, str]:
    """Split a full name into (first, last): first token, then the rest."""
    parts = name.strip().split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def join_values(values) -> str:
    return VALUE_DELIMITER.join(values)


def split_values(cell: str) -> list[str]:
    """Inverse of join_values for a CSV cell."""
    if not cell:
        return []
    return cell.split(VALUE_DELIMITER)


@dataclass(frozen=True)
class Speaker:
    """A conference speaker as listed on the website."""
    id: str
    first_name: str
    last_name: str
    email: str = ""
    job_title: str = ""
    company: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    themes: tuple[str, ...] = field(default_factory=tuple)

    # Derived flags
    has_bio: bool = False
    has_sessions: bool = False
    is_official: bool = False
    is_partner: bool = False
    is_top_speaker: bool = False
    communication_manager: bool = False

    # Image variants: small, thumbnail, large, main
    image_small_url: str = ""
    image_thumbnail_url: str = ""
    image_large_url: str = ""
    image_main_url: str = ""

    @property
    def name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    def to_row(self) -> list[str]:
        """Return the cells in SPEAKER_COLUMNS order."""
        return [
            self.id,
            self.first_name,
            self.last_name,
            self.email,
            self.job_title,
            self.company,
            join_values(self.tags),
            join_values(self.themes),
            format_bool(self.has_bio),
            format_bool(self.has_sessions),
            format_bool(self.is_official),
            format_bool(self.is_partner),
            format_bool(self.is_top_speaker),
            format_bool(self.communication_manager),
            self.image_small_url,
            self.image_thumbnail_url,
            self.image_large_url,
            self.image_main_url,
        ]


@dataclass(frozen=True)
class Partner:
    """An exhibiting partner or startup."""
    company_name: str
    category: str = ""
    country: str = ""
    description: str = ""
    website: str = ""
    logo_url: str = ""

    def to_row(self) -> list[str]:
        return [
            self.company_name,
            self.category,
            self.country,
            self.description,
            self.website,
            self.logo_url,
        ]
