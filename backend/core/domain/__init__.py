# Domain Entities
# Pure business objects with no external dependencies
from .content import (
    NICHES,
    AnalyticsMetric,
    ArticleStatus,
    Niche,
    NicheInfo,
    Tone,
)
from .writing_style import DEFAULT_WRITING_STYLE, Complexity, Structure, Voice, WritingStyle

__all__ = [
    "Niche",
    "NicheInfo",
    "NICHES",
    "Tone",
    "ArticleStatus",
    "AnalyticsMetric",
    "WritingStyle",
    "DEFAULT_WRITING_STYLE",
    "Voice",
    "Complexity",
    "Structure",
]
