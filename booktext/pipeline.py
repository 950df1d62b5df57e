# usage: load -> annotate -> tokenize -> following-word, with eagerly validated settings
from dataclasses import dataclass, field

from booktext.etl.annotator import DEFAULT_CHAPTER_RULES, annotate_lines, check_rules
from booktext.etl.loader import check_decode_policy, check_encoding, load_lines
from booktext.nlp.adjacency import attach_following
from booktext.nlp.frequency import FrequencyEngine
from booktext.nlp.tokenizer import TokenizerConfig, make_tokenizer, tokenize_lines
from booktext.shared.errors import ConfigurationError


@dataclass(frozen=True)
class PipelineConfig:
    """
    Settings for one run. Everything is checked in __post_init__, so a bad
    option fails before the input is even opened.

    on_error applies to both decoding and tokenization: "raise" stops at the
    first bad line, "skip" keeps going and records what was skipped.
    """
    encoding: str = "utf-8"
    on_error: str = "raise"
    strip_gutenberg: bool = False
    chapter_rules: tuple = DEFAULT_CHAPTER_RULES
    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)

    def __post_init__(self):
        check_encoding(self.encoding)
        check_decode_policy(self.on_error)
        object.__setattr__(self, "chapter_rules", check_rules(self.chapter_rules))
        if not isinstance(self.tokenizer, TokenizerConfig):
            raise ConfigurationError(f"tokenizer must be a TokenizerConfig, got {type(self.tokenizer).__name__}")


@dataclass
class Analysis:
    lines: list
    tokens: list
    errors: list

    def engine(self, *, include_empty_units: bool = False) -> FrequencyEngine:
        """
        Frequency engine over this run. With include_empty_units the units come
        from the annotated lines, so a chapter or paragraph without tokens is
        reported too (and percent-of-unit queries on it raise DivisionUndefined).
        """
        return FrequencyEngine(self.tokens, self.lines if include_empty_units else None)


def run_pipeline(source, config: PipelineConfig = None) -> Analysis:
    config = config or PipelineConfig()
    tokenizer = make_tokenizer(config.tokenizer)

    lines = load_lines(
        source,
        encoding=config.encoding,
        on_decode_error=config.on_error,
        strip_gutenberg=config.strip_gutenberg,
    )
    lines = annotate_lines(lines, config.chapter_rules)
    tokenized = tokenize_lines(lines, tokenizer, on_error=config.on_error)
    tokens = attach_following(tokenized.tokens)
    return Analysis(lines=lines, tokens=tokens, errors=tokenized.errors)
