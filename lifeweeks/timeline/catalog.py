"""Curated historical events and life-stage milestones.

The catalog is read-only reference data. ``match_catalog`` picks the
entries that fall inside a person's lifetime and are not already on their
timeline; ``catalog_entry_to_event`` maps a chosen entry onto the fields of
a new user event.
"""

from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from lifeweeks.models.enums import CatalogCategory, EventCategory, Significance
from lifeweeks.timeline.filters import filter_by_category, filter_by_significance
from lifeweeks.timeline.weeks import add_years, years_between

DEFAULT_SIGNIFICANCE = (Significance.MEDIUM, Significance.HIGH, Significance.CRITICAL)
LIFE_STAGE_SOURCE = "Life Stages"
LIFE_STAGE_PREFIX = "life-stage-"


@dataclass(frozen=True)
class HistoricalEvent:
    id: str
    title: str
    description: str
    date: date
    category: CatalogCategory
    significance: Significance
    source: str = "Historical Records"
    tags: tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "category": self.category.value,
            "significance": self.significance.value,
            "significance_label": self.significance.label,
            "source": self.source,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class LifeStageMilestone:
    age_in_years: int
    title: str
    description: str


CATALOG_COLORS: dict[CatalogCategory, str] = {
    CatalogCategory.WORLD: "#EF4444",
    CatalogCategory.TECHNOLOGY: "#3B82F6",
    CatalogCategory.CULTURE: "#8B5CF6",
    CatalogCategory.SCIENCE: "#10B981",
    CatalogCategory.SPORTS: "#F59E0B",
    CatalogCategory.DISASTER: "#DC2626",
    CatalogCategory.POLITICS: "#6B7280",
    CatalogCategory.PERSONAL: "#F97316",
}


def _entry(id, title, description, day, category, significance, tags):
    return HistoricalEvent(
        id=id,
        title=title,
        description=description,
        date=date.fromisoformat(day),
        category=CatalogCategory(category),
        significance=Significance(significance),
        tags=tuple(tags),
    )


HISTORICAL_EVENTS: tuple[HistoricalEvent, ...] = (
    # Technology
    _entry("internet-1991", "World Wide Web Goes Public",
           "Tim Berners-Lee releases the first web browser and makes the World Wide Web available to the public.",
           "1991-08-06", "technology", "critical", ["internet", "technology", "communication"]),
    _entry("google-1998", "Google Founded",
           "Larry Page and Sergey Brin found Google, revolutionizing internet search.",
           "1998-09-04", "technology", "high", ["google", "search", "internet"]),
    _entry("facebook-2004", "Facebook Launched",
           "Mark Zuckerberg launches Facebook from Harvard, beginning the social media revolution.",
           "2004-02-04", "technology", "high", ["social media", "facebook", "communication"]),
    _entry("iphone-2007", "iPhone Released",
           "Apple releases the first iPhone, revolutionizing mobile technology and smartphones.",
           "2007-06-29", "technology", "critical", ["apple", "smartphone", "mobile"]),
    _entry("youtube-2005", "YouTube Founded",
           "Chad Hurley, Steve Chen, and Jawed Karim create YouTube, transforming video sharing.",
           "2005-02-14", "technology", "high", ["youtube", "video", "social media"]),
    _entry("twitter-2006", "Twitter Launched",
           "Jack Dorsey launches Twitter, creating the microblogging revolution.",
           "2006-03-21", "technology", "high", ["twitter", "social media", "microblogging"]),
    _entry("netflix-streaming-2007", "Netflix Begins Streaming",
           "Netflix launches its streaming service, changing how we consume entertainment.",
           "2007-01-16", "technology", "high", ["netflix", "streaming", "entertainment"]),
    _entry("spotify-2008", "Spotify Launches",
           "Spotify revolutionizes music streaming and changes the music industry.",
           "2008-10-07", "technology", "medium", ["spotify", "music", "streaming"]),
    _entry("instagram-2010", "Instagram Launched",
           "Kevin Systrom and Mike Krieger launch Instagram, transforming photo sharing.",
           "2010-10-06", "technology", "medium", ["instagram", "photos", "social media"]),
    _entry("chatgpt-2022", "ChatGPT Released",
           "OpenAI releases ChatGPT, bringing AI to mainstream users and starting the AI revolution.",
           "2022-11-30", "technology", "critical", ["ai", "chatgpt", "artificial intelligence"]),
    # World and politics
    _entry("9-11-2001", "September 11 Attacks",
           "Terrorist attacks on the World Trade Center and Pentagon change global security forever.",
           "2001-09-11", "world", "critical", ["terrorism", "security", "america"]),
    _entry("covid-pandemic-2020", "COVID-19 Pandemic Declared",
           "WHO declares COVID-19 a global pandemic, leading to worldwide lockdowns.",
           "2020-03-11", "world", "critical", ["pandemic", "health", "global"]),
    _entry("berlin-wall-1989", "Fall of Berlin Wall",
           "The Berlin Wall falls, symbolizing the end of the Cold War era.",
           "1989-11-09", "politics", "critical", ["cold war", "germany", "freedom"]),
    _entry("obama-president-2009", "Barack Obama Becomes President",
           "Barack Obama is inaugurated as the first African American President of the United States.",
           "2009-01-20", "politics", "high", ["president", "america", "history"]),
    # Culture
    _entry("harry-potter-1997", "Harry Potter Published",
           "J.K. Rowling publishes the first Harry Potter book, creating a global phenomenon.",
           "1997-06-26", "culture", "high", ["books", "literature", "fantasy"]),
    _entry("titanic-movie-1997", "Titanic Movie Released",
           "James Cameron's Titanic becomes the highest-grossing film of all time.",
           "1997-12-19", "culture", "medium", ["movies", "cinema", "romance"]),
    _entry("avatar-movie-2009", "Avatar Movie Released",
           "James Cameron's Avatar revolutionizes 3D cinema and becomes highest-grossing film.",
           "2009-12-18", "culture", "medium", ["movies", "3d", "technology"]),
    # Science and space
    _entry("human-genome-2003", "Human Genome Project Completed",
           "Scientists complete the mapping of the human genome, revolutionizing medicine.",
           "2003-04-14", "science", "critical", ["genetics", "medicine", "science"]),
    _entry("spacex-falcon-heavy-2018", "SpaceX Falcon Heavy Launch",
           "SpaceX successfully launches Falcon Heavy, advancing commercial space travel.",
           "2018-02-06", "science", "high", ["space", "spacex", "technology"]),
    _entry("mars-rover-2021", "Perseverance Rover Lands on Mars",
           "NASA's Perseverance rover successfully lands on Mars to search for signs of life.",
           "2021-02-18", "science", "high", ["mars", "nasa", "space exploration"]),
    # Sports
    _entry("olympics-2008-beijing", "Beijing Olympics",
           "China hosts the Summer Olympics, showcasing spectacular opening ceremony.",
           "2008-08-08", "sports", "medium", ["olympics", "china", "sports"]),
    _entry("world-cup-2018-russia", "FIFA World Cup Russia",
           "France wins the FIFA World Cup in Russia, with memorable matches throughout.",
           "2018-06-14", "sports", "medium", ["world cup", "football", "russia"]),
    # Disasters
    _entry("tsunami-2004", "Indian Ocean Tsunami",
           "Devastating tsunami affects 14 countries, killing over 230,000 people.",
           "2004-12-26", "disaster", "critical", ["tsunami", "disaster", "natural disaster"]),
    _entry("fukushima-2011", "Fukushima Nuclear Disaster",
           "Earthquake and tsunami cause nuclear disaster at Fukushima power plant.",
           "2011-03-11", "disaster", "high", ["nuclear", "disaster", "japan"]),
)

LIFE_STAGE_MILESTONES: tuple[LifeStageMilestone, ...] = (
    LifeStageMilestone(5, "Started School Age",
                       "Typical age when children start formal education"),
    LifeStageMilestone(13, "Became a Teenager",
                       "Entered teenage years - a time of growth and discovery"),
    LifeStageMilestone(16, "Driving Age",
                       "Reached typical driving age in many countries"),
    LifeStageMilestone(18, "Became an Adult",
                       "Reached legal adulthood in most countries"),
    LifeStageMilestone(21, "Legal Drinking Age",
                       "Reached legal drinking age in many countries"),
    LifeStageMilestone(25, "Quarter Century",
                       "Completed 25 years of life - often a time of career establishment"),
    LifeStageMilestone(30, "Entered 30s",
                       "Beginning of the fourth decade - often focused on career and relationships"),
    LifeStageMilestone(40, "Entered 40s",
                       "Beginning of the fifth decade - often a time of reflection and achievement"),
    LifeStageMilestone(50, "Half Century",
                       "Completed 50 years of life - a significant milestone"),
)


def lifetime_events(
    birthdate: date,
    today: date,
    significance: Collection = DEFAULT_SIGNIFICANCE,
) -> list[HistoricalEvent]:
    """Curated entries dated within ``[birthdate, today]`` at the given significance."""
    in_lifetime = [entry for entry in HISTORICAL_EVENTS if birthdate <= entry.date <= today]
    return sorted(filter_by_significance(in_lifetime, significance), key=lambda e: e.date)


def life_stage_milestones(birthdate: date, today: date) -> list[HistoricalEvent]:
    """Milestone entries for every age already reached."""
    current_age = years_between(birthdate, today)
    return [
        HistoricalEvent(
            id=f"{LIFE_STAGE_PREFIX}{milestone.age_in_years}",
            title=milestone.title,
            description=milestone.description,
            date=add_years(birthdate, milestone.age_in_years),
            category=CatalogCategory.PERSONAL,
            significance=Significance.MEDIUM,
            source=LIFE_STAGE_SOURCE,
            tags=("personal", "milestone", "age"),
        )
        for milestone in LIFE_STAGE_MILESTONES
        if milestone.age_in_years <= current_age
    ]


def match_catalog(
    birthdate: date,
    today: date,
    categories: Collection = (),
    significance: Collection = DEFAULT_SIGNIFICANCE,
    include_life_stages: bool = True,
    existing_titles: Iterable[str] = (),
) -> list[HistoricalEvent]:
    """Catalog entries a user could still add to their timeline.

    Selects curated entries inside the lifetime at the requested
    significance, adds reached life-stage milestones when asked, keeps the
    requested categories (empty means all), drops anything whose title
    matches an existing event title case-insensitively, and sorts by date.
    """
    candidates = lifetime_events(birthdate, today, significance)
    if include_life_stages:
        candidates += life_stage_milestones(birthdate, today)

    candidates = filter_by_category(candidates, categories)

    taken = {title.lower() for title in existing_titles}
    candidates = [entry for entry in candidates if entry.title.lower() not in taken]

    return sorted(candidates, key=lambda entry: entry.date)


def find_entries(
    entry_ids: Iterable[str],
    birthdate: date,
    today: date,
) -> list[HistoricalEvent]:
    """Resolve entry ids, including synthesized life-stage ids, in date order.

    Ids resolve against the same lifetime window ``match_catalog`` lists
    from, at any significance. Unknown ids and entries dated outside
    ``[birthdate, today]`` are skipped.
    """
    wanted = set(entry_ids)
    pool = match_catalog(birthdate, today, significance=tuple(Significance))
    return [entry for entry in pool if entry.id in wanted]


def catalog_entry_to_event(entry: HistoricalEvent) -> dict[str, Any]:
    """Fields for a new user event created from ``entry``.

    Only the personal catalog category survives; every other category is
    imported as ``other``, keeping its catalog color.
    """
    if entry.category is CatalogCategory.PERSONAL:
        category = EventCategory.PERSONAL
    else:
        category = EventCategory.OTHER
    return {
        "title": entry.title,
        "description": entry.description,
        "date": entry.date,
        "category": category,
        "color": CATALOG_COLORS[entry.category],
        "notify_on_anniversary": False,
    }
