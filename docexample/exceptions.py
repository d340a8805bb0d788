"""Exception hierarchy for docexample.

All exceptions inherit from DocExampleError, providing a consistent error handling interface.
Recoverable problems (malformed tags) are not exceptions; they are reported as
CompileWarning records, see docexample.generator.nodes.
"""


class DocExampleError(Exception):
    """Base exception for all docexample errors."""


class SourceParseError(DocExampleError):
    """Raised when an input source file cannot be parsed under the input dialect."""

    def __init__(self, path: str, line: int, column: int, reason: str):
        self.path = path
        self.line = line
        self.column = column
        self.reason = reason
        super().__init__(f"{path}:{line}:{column}: cannot parse source file: {reason}")


class MalformedCodeBlockError(DocExampleError):
    """Raised when a code block in a doc comment is not a valid statement sequence.

    Fatal to the whole generation run: a broken example must not silently
    disappear from the generated suite.
    """

    def __init__(self, path: str, line: int, column: int, reason: str):
        self.path = path
        self.line = line
        self.column = column
        self.reason = reason
        super().__init__(f"{path}:{line}:{column}: malformed code block in doc comment: {reason}")
