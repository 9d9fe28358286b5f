"""Public parsing API for strict markup.

Two families of entry points are provided:

- :func:`parse_document` returns the root node and raises a
  :class:`~strict_markup_parser.parsing.ParseError` on malformed input.
- :func:`parse`, :func:`parse_string` and :func:`parse_file` never raise for
  malformed input; they return a :class:`ParseResult` whose diagnostics
  describe the failure.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from strict_markup_parser.parsing import MarkupParser, ParseError
from strict_markup_parser.parsing import parse_document as _parse_document
from strict_markup_parser.shared import DiagnosticSeverity, ParserConfig, get_logger
from strict_markup_parser.tools import MemorySampler
from strict_markup_parser.tree import Node

from .result import ParseResult

InputType = Union[str, bytes, Path]

MS_PER_SECOND = 1000


def parse_document(
    source: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> Node:
    """Parse a complete markup document and return its root node.

    Raises:
        UnexpectedEofError: Input ended inside a construct
        UnexpectedCharError: A required character was missing
        TagMismatchError: A closing tag did not match its opening tag

    Examples:
        >>> parse_document('<a class="x" class="y">t</a>').attributes
        {'class': 'y'}
        >>> parse_document('<a></a><b></b>').tag_name
        'html'
    """
    return _parse_document(source, config, correlation_id)


def parse(
    input_data: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup from a string, bytes or a Path.

    Bytes are decoded with ``config.encoding``; paths are routed to
    :func:`parse_file`.
    """
    config = config or ParserConfig()
    logger = get_logger(__name__, correlation_id, "parse", config.logging_level)
    logger.info(
        "Starting parse operation",
        extra={"input_type": type(input_data).__name__}
    )

    if isinstance(input_data, Path):
        return parse_file(input_data, config=config, correlation_id=correlation_id)
    if isinstance(input_data, bytes):
        try:
            input_data = input_data.decode(config.encoding)
        except UnicodeDecodeError as e:
            return _create_error_result(
                f"Unable to decode input as {config.encoding}: {e}",
                correlation_id,
            )
    if not isinstance(input_data, str):
        raise TypeError(
            f"Unsupported input type {type(input_data).__name__}; "
            f"expected str, bytes or Path"
        )
    return _parse_content(input_data, config, correlation_id)


def parse_string(
    source: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup from a string.

    Examples:
        >>> result = parse_string('<div><p>Hello</p></div>')
        >>> result.success, result.element_count
        (True, 2)

        >>> result = parse_string('<a><b></a></b>')
        >>> result.success
        False
        >>> result.error.details["kind"]
        'TAG_MISMATCH'
    """
    config = config or ParserConfig()
    logger = get_logger(
        __name__, correlation_id, "parse_string", config.logging_level
    )
    logger.info(
        "Starting string parse operation",
        extra={
            "content_length": len(source),
            "preview": _preview(source, config.preview_length),
        }
    )
    return _parse_content(source, config, correlation_id)


def parse_file(
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Read a markup file into memory and parse it.

    Args:
        file_path: Path to the document
        encoding: Optional encoding override (defaults to ``config.encoding``)
        config: Parser configuration
        correlation_id: Optional correlation ID for request tracking
    """
    config = config or ParserConfig()
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "parse_file", config.logging_level)
    effective_encoding = encoding or config.encoding

    logger.info(
        "Starting file parse operation",
        extra={"file_path": str(path_obj), "encoding": effective_encoding}
    )

    if not path_obj.exists():
        return _create_error_result(
            f"File not found: {path_obj}", correlation_id, source_name=str(path_obj)
        )
    if not path_obj.is_file():
        return _create_error_result(
            f"Path is not a file: {path_obj}", correlation_id, source_name=str(path_obj)
        )

    try:
        content = path_obj.read_text(encoding=effective_encoding)
    except PermissionError:
        return _create_error_result(
            f"Permission denied accessing file: {path_obj}",
            correlation_id,
            source_name=str(path_obj),
        )
    except UnicodeDecodeError as e:
        return _create_error_result(
            f"Unable to decode {path_obj} as {effective_encoding}: {e}",
            correlation_id,
            source_name=str(path_obj),
        )

    result = _parse_content(content, config, correlation_id)
    result.source_name = str(path_obj)
    return result


def _parse_content(
    content: str, config: ParserConfig, correlation_id: Optional[str]
) -> ParseResult:
    start_time = time.time()
    logger = get_logger(
        __name__, correlation_id, "parse_content", config.logging_level
    )
    sampler = None
    if config.track_memory:
        sampler = MemorySampler(correlation_id, config.logging_level)
        sampler.start()

    parser = MarkupParser(content, config, correlation_id)
    result = ParseResult(correlation_id=correlation_id)
    try:
        result.root = parser.parse_document()
    except ParseError as e:
        logger.warning(
            "Markup is not well-formed",
            extra={"error": str(e), **e.to_dict()}
        )
        result.success = False
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            str(e),
            "parser",
            position=e.position,
            details=e.to_dict(),
        )

    metrics = result.performance
    metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
    metrics.characters_processed = parser.cursor.position
    metrics.nodes_created = parser.nodes_created
    metrics.elements_created = parser.elements_created
    if sampler:
        metrics.memory_used_bytes = sampler.stop()

    logger.info(
        "Parse operation completed",
        extra={
            "success": result.success,
            "processing_time_ms": metrics.processing_time_ms,
            "nodes_created": metrics.nodes_created,
        }
    )
    return result


def _create_error_result(
    error_message: str,
    correlation_id: Optional[str],
    source_name: Optional[str] = None
) -> ParseResult:
    """Create a failed result for input that never reached the parser."""
    result = ParseResult(
        success=False, source_name=source_name, correlation_id=correlation_id
    )
    result.add_diagnostic(DiagnosticSeverity.CRITICAL, error_message, "api_parser")
    return result


def _preview(source: str, length: int) -> str:
    return source[:length] + "..." if len(source) > length else source


class StrictMarkupParser:
    """Parser facade bound to one configuration and correlation ID.

    Examples:
        >>> parser = StrictMarkupParser(ParserConfig(root_tag="body"))
        >>> parser.parse_document('<p></p><p></p>').tag_name
        'body'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(
            __name__, correlation_id, "strict_markup_parser", self.config.logging_level
        )

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse_document(self, source: str) -> Node:
        """Parse ``source`` and return the root node, raising on malformed input."""
        return parse_document(source, self.config, self.correlation_id)

    def parse(self, input_data: InputType) -> ParseResult:
        return self._record(parse(input_data, self.config, self.correlation_id))

    def parse_string(self, source: str) -> ParseResult:
        return self._record(parse_string(source, self.config, self.correlation_id))

    def parse_file(
        self, file_path: Union[str, Path], encoding: Optional[str] = None
    ) -> ParseResult:
        return self._record(parse_file(
            file_path, encoding, self.config, self.correlation_id
        ))

    def _record(self, result: ParseResult) -> ParseResult:
        self.record(result.success, result.processing_time_ms)
        return result

    def record(self, success: bool, processing_time_ms: float) -> None:
        """Add one parse performed elsewhere, e.g. in a worker process."""
        self._parse_count += 1
        self._total_processing_time += processing_time_ms
        if success:
            self._successful_parses += 1

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")
