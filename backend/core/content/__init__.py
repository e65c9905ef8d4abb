# Article text pipeline: prompt in, parsed article out
from .output_parser import ParsedArticle, count_words, parse_generated_content
from .prompt_builder import build_article_prompt

__all__ = [
    "build_article_prompt",
    "parse_generated_content",
    "count_words",
    "ParsedArticle",
]
