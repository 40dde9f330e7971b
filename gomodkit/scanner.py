"""Feed Go toolchain output through the output patterns."""

from gomodkit.patterns import OutputPattern, get_patterns


class OutputScanner:
    """Apply a list of OutputPatterns to tool output, line by line.

    Patterns run in order and each sees the line as rewritten by the
    previous one. A GoOutputError raised by a handler propagates.
    """

    def __init__(self, patterns: list[OutputPattern]):
        self.patterns = list(patterns)

    def process_line(self, line: str) -> str:
        for pattern in self.patterns:
            line = pattern.apply(line)
        return line

    def process(self, text: str) -> str:
        """Process every line of ``text`` and return the rewritten text.

        Line endings are kept, so ``$`` anchored patterns see the same
        line a streaming reader would.
        """
        parts = text.split("\n")
        processed = []
        for index, part in enumerate(parts):
            if index < len(parts) - 1:
                part += "\n"
            elif not part:
                break
            processed.append(self.process_line(part))
        return "".join(processed)


def default_scanner() -> OutputScanner:
    """Build a scanner over all registered output patterns."""
    return OutputScanner(get_patterns())
