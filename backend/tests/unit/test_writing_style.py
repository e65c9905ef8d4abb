"""
Tests for the WritingStyle record.
"""

from core.domain.writing_style import DEFAULT_WRITING_STYLE, WritingStyle


class TestWritingStyleMerge:
    def test_set_fields_override_base(self):
        override = WritingStyle(voice="casual", quotes=True)

        merged = override.merged_over(DEFAULT_WRITING_STYLE)

        assert merged.voice == "casual"
        assert merged.quotes is True
        # Untouched fields keep the base value
        assert merged.complexity == DEFAULT_WRITING_STYLE.complexity
        assert merged.examples is True

    def test_false_is_a_real_override(self):
        merged = WritingStyle(examples=False).merged_over(DEFAULT_WRITING_STYLE)

        assert merged.examples is False

    def test_merge_over_none_returns_self(self):
        style = WritingStyle(voice="friendly")

        assert style.merged_over(None) is style

    def test_merge_does_not_mutate_base(self):
        WritingStyle(voice="casual").merged_over(DEFAULT_WRITING_STYLE)

        assert DEFAULT_WRITING_STYLE.voice == "professional"


class TestWritingStyleSerialization:
    def test_to_dict_drops_unset_fields(self):
        assert WritingStyle(voice="casual", examples=False).to_dict() == {
            "voice": "casual",
            "examples": False,
        }

    def test_from_dict_ignores_unknown_keys(self):
        style = WritingStyle.from_dict({"voice": "casual", "colour": "blue"})

        assert style == WritingStyle(voice="casual")

    def test_from_dict_empty(self):
        assert WritingStyle.from_dict(None) == WritingStyle()
        assert WritingStyle.from_dict({}) == WritingStyle()
