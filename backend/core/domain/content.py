"""Content domain entities."""
from dataclasses import dataclass
from enum import Enum


class Niche(str, Enum):
    """Fixed content categories used to scope topics, images and blog categories."""
    TECHNOLOGY = "technology"
    HEALTH = "health"
    BUSINESS = "business"
    LIFESTYLE = "lifestyle"
    ENTERTAINMENT = "entertainment"
    SPORTS = "sports"
    EDUCATION = "education"
    TRAVEL = "travel"
    FOOD = "food"
    FASHION = "fashion"
    SCIENCE = "science"
    POLITICS = "politics"


class Tone(str, Enum):
    """Article tone."""
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    FRIENDLY = "friendly"
    AUTHORITATIVE = "authoritative"


class ArticleStatus(str, Enum):
    """Article lifecycle status. Any value may follow any other."""
    DRAFT = "draft"
    REVIEW = "review"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class AnalyticsMetric(str, Enum):
    """Per-article counters."""
    VIEWS = "views"
    LIKES = "likes"
    SHARES = "shares"
    COMMENTS = "comments"


@dataclass(frozen=True)
class NicheInfo:
    id: str
    name: str
    description: str


NICHES: tuple[NicheInfo, ...] = (
    NicheInfo("technology", "Technology", "Latest tech trends and innovations"),
    NicheInfo("health", "Health & Wellness", "Health tips and medical news"),
    NicheInfo("business", "Business & Finance", "Business insights and financial news"),
    NicheInfo("lifestyle", "Lifestyle", "Lifestyle tips and trends"),
    NicheInfo("entertainment", "Entertainment", "Movies, music, and celebrity news"),
    NicheInfo("sports", "Sports", "Sports news and updates"),
    NicheInfo("education", "Education", "Educational content and learning tips"),
    NicheInfo("travel", "Travel", "Travel guides and destination tips"),
    NicheInfo("food", "Food & Cooking", "Recipes and culinary trends"),
    NicheInfo("fashion", "Fashion & Beauty", "Fashion trends and beauty tips"),
    NicheInfo("science", "Science", "Scientific discoveries and research"),
    NicheInfo("politics", "Politics", "Political news and analysis"),
)

DEFAULT_TONE = Tone.PROFESSIONAL.value
DEFAULT_WORD_COUNT = 1000
MIN_PREFERRED_WORD_COUNT = 300
MAX_PREFERRED_WORD_COUNT = 3000
