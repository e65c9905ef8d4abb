"""Writing style record and its field-by-field merge."""
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Optional


class Voice(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    FRIENDLY = "friendly"
    AUTHORITATIVE = "authoritative"
    CONVERSATIONAL = "conversational"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    ADVANCED = "advanced"


class Structure(str, Enum):
    TRADITIONAL = "traditional"
    STORYTELLING = "storytelling"
    LIST_BASED = "list-based"
    QUESTION_ANSWER = "question-answer"


MAX_CUSTOM_INSTRUCTIONS = 500


@dataclass(frozen=True)
class WritingStyle:
    """
    User writing preferences controlling prompt phrasing.

    Every field is optional: ``None`` means "not set", which lets a partial
    request-level style be laid over a stored one without clobbering it.
    Enum-valued fields hold the plain string value.
    """

    voice: Optional[str] = None
    complexity: Optional[str] = None
    structure: Optional[str] = None
    examples: Optional[bool] = None
    quotes: Optional[bool] = None
    call_to_action: Optional[bool] = None
    custom_instructions: Optional[str] = None

    def merged_over(self, base: Optional["WritingStyle"]) -> "WritingStyle":
        """Return ``base`` with every field set on ``self`` overriding it.

        Fields left as ``None`` on ``self`` keep the value from ``base``.
        """
        if base is None:
            return self
        overrides = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
        return replace(base, **overrides)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON storage, dropping unset fields."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "WritingStyle":
        """Build from stored JSON, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


DEFAULT_WRITING_STYLE = WritingStyle(
    voice=Voice.PROFESSIONAL.value,
    complexity=Complexity.MODERATE.value,
    structure=Structure.TRADITIONAL.value,
    examples=True,
    quotes=False,
    call_to_action=True,
)
