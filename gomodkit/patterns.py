"""
Output patterns for Go toolchain output.

Each pattern pairs a regular expression with a handler. The handler runs
when a line of tool output matches and either rewrites the line (masking
credentials) or raises GoOutputError for failures that should stop the
caller.
"""

import re
from typing import Callable

from gomodkit.console import debug, err_console
from gomodkit.credentials import CREDENTIALS_IN_URL_REGEXP, mask_credentials
from gomodkit.errors import GoOutputError, PatternCompileError

NOT_FOUND_REGEXP = r"^go: ([^\/\r\n]+\/[^\r\n\s:]*).*(404 Not Found[\s]?)$"
UNRECOGNIZED_IMPORT_REGEXP = (
    r"[^go:]([^\/\r\n]+\/[^\r\n\s:]*).*(unrecognized import path)"
)
UNKNOWN_REVISION_REGEXP = r"[^go:]([^\/\r\n]+\/[^\r\n\s:]*).*(unknown revision)"
GIT_FETCH_ERROR_REGEXP = r"^go: ([^:]+): git fetch .+ (exit status [^0]\d*)"
NOT_FOUND_ZIP_REGEXP = (
    r'unknown import path ["]([^\/\r\n]+\/[^\r\n\s:]*)["].*(404( Not Found)?[\s]?)$'
)


class OutputPattern:
    """A compiled regular expression and the handler to run on a match.

    While a line is processed, ``line`` holds the line and
    ``matched_results`` the full match followed by every capture group.
    """

    def __init__(
        self,
        regexp: re.Pattern,
        handler: Callable[["OutputPattern"], str],
        name: str = "",
    ):
        self.regexp = regexp
        self.handler = handler
        self.name = name
        self.line = ""
        self.matched_results: list[str] = []

    def match(self, line: str) -> bool:
        """Search ``line`` and remember the results on success."""
        found = self.regexp.search(line)
        if found is None:
            return False
        self.line = line
        # Unmatched optional groups are reported as empty strings
        self.matched_results = [found.group(0)] + [g or "" for g in found.groups()]
        return True

    def apply(self, line: str) -> str:
        """Run the handler if ``line`` matches, otherwise return it as is."""
        if not self.match(line):
            return line
        return self.handler(self)

    def __repr__(self) -> str:
        return f"OutputPattern(name={self.name!r}, regexp={self.regexp.pattern!r})"


def mask_credentials_handler(pattern: OutputPattern) -> str:
    """Mask the credentials information from the line."""
    return mask_credentials(pattern.line, pattern.matched_results[0])


def error_handler(pattern: OutputPattern) -> str:
    """
    Echo the failing line to stderr and raise.

    Raises:
        GoOutputError: "<reason>:<module>" when the pattern captured both,
            otherwise a message listing whatever was captured.
    """
    # Raw write: Console.print would expand tabs and drop control characters
    line = pattern.line if pattern.line.endswith("\n") else pattern.line + "\n"
    err_console.file.write(line)
    err_console.file.flush()
    results = pattern.matched_results
    if len(results) >= 3:
        module = results[1].strip()
        reason = results[2].strip()
        raise GoOutputError(f"{reason}:{module}", reason=reason, module=module)
    raise GoOutputError(f"Regex found the following values: [{' '.join(results)}]")


def init_regexp(
    regex: str, handler: Callable[[OutputPattern], str], name: str = ""
) -> OutputPattern:
    """
    Compile ``regex`` into an OutputPattern.

    Raises:
        PatternCompileError: If the expression is invalid.
    """
    try:
        compiled = re.compile(regex)
    except re.error as e:
        raise PatternCompileError(f"Invalid output pattern {regex!r}: {e}") from e
    return OutputPattern(compiled, handler, name=name)


# name -> (regex, handler, description), in the order patterns are applied
_PATTERN_SPECS: dict[str, tuple[str, Callable[[OutputPattern], str], str]] = {
    "protocol": (CREDENTIALS_IN_URL_REGEXP, mask_credentials_handler, "protocol"),
    "not_found": (NOT_FOUND_REGEXP, error_handler, "not found"),
    "unrecognized_import": (
        UNRECOGNIZED_IMPORT_REGEXP,
        error_handler,
        "unrecognized import path",
    ),
    "unknown_revision": (UNKNOWN_REVISION_REGEXP, error_handler, "unknown revision"),
    "git_fetch_error": (GIT_FETCH_ERROR_REGEXP, error_handler, "git fetch error"),
    "not_found_zip": (NOT_FOUND_ZIP_REGEXP, error_handler, "not found zip file"),
}

GLOBAL_PATTERN_NAMES = (
    "protocol",
    "not_found",
    "unrecognized_import",
    "unknown_revision",
    "git_fetch_error",
)

# Compiled patterns, filled lazily
_PATTERNS: dict[str, OutputPattern] = {}


def _prepare(name: str) -> None:
    if name in _PATTERNS:
        return
    regex, handler, description = _PATTERN_SPECS[name]
    debug(f"Initializing {description} regexp")
    _PATTERNS[name] = init_regexp(regex, handler, name=name)


def prepare_global_regexp() -> None:
    """Compile the credentials and failure patterns once."""
    for name in GLOBAL_PATTERN_NAMES:
        _prepare(name)


def prepare_not_found_zip_regexp() -> None:
    """Compile the "unknown import path ... 404" pattern once."""
    _prepare("not_found_zip")


def prepare_regexp() -> None:
    """Compile every output pattern once."""
    prepare_global_regexp()
    prepare_not_found_zip_regexp()


def get_pattern(name: str) -> OutputPattern:
    """
    Get a compiled pattern by name.

    Raises:
        KeyError: If no pattern is registered under ``name``.
    """
    if name not in _PATTERN_SPECS:
        raise KeyError(
            f"Unknown output pattern '{name}'. "
            f"Available patterns: {', '.join(_PATTERN_SPECS)}"
        )
    _prepare(name)
    return _PATTERNS[name]


def get_patterns() -> list[OutputPattern]:
    """Get every compiled pattern, credentials masking first."""
    prepare_regexp()
    return [_PATTERNS[name] for name in _PATTERN_SPECS]


def reset_patterns() -> None:
    """Forget compiled patterns so the next call compiles them again."""
    _PATTERNS.clear()
