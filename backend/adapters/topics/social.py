"""
Social hashtag topic source (synthesized, no credentials).
"""

from .base import TopicItem, TopicSource


class SocialTrendSource(TopicSource):
    name = "Social Media"
    RELEVANCE = 0.6

    async def trending(self, niche: str, country: str, timeframe: str) -> list[TopicItem]:
        return [
            TopicItem(
                title=f"#{niche} trending on Twitter",
                description=f"Latest {niche} hashtags and discussions",
                source=self.name,
                relevance=self.RELEVANCE,
                metadata={"hashtag": f"#{niche}"},
            )
        ]
