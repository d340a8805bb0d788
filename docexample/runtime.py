"""Runtime support for generated example suites.

FreeSpec is mixed into the generated test class next to unittest.TestCase.
Groups and test cases are nested functions decorated with `group` and
`case`; the decorators run the function right away inside a named scope.

Example:
    >>> class WidgetExamples(unittest.TestCase, FreeSpec):
    ...     def test_widget(self):
    ...         @self.group("Widget")
    ...         def _group_1():
    ...             @self.case("example basic")
    ...             def _case_2():
    ...                 self.markup("shows construction")
    ...                 assert Widget().size == 1
"""

import contextlib
from collections.abc import Callable, Iterator
from typing import Any

from docexample.logging import get_pipeline_logger

logger = get_pipeline_logger(__name__)

PATH_SEPARATOR = " / "

Body = Callable[[], Any]


class FreeSpec:
    """Named, nested test groups for unittest test cases."""

    @property
    def _titles(self) -> list[str]:
        return vars(self).setdefault("_free_spec_titles", [])

    @property
    def markups(self) -> list[tuple[str, str]]:
        """(path, text) of every markup call, in call order."""
        return vars(self).setdefault("_free_spec_markups", [])

    @property
    def current_path(self) -> str:
        return PATH_SEPARATOR.join(self._titles)

    def group(self, title: str) -> Callable[[Body], Body]:
        """Run the decorated function as the body of a named group."""

        def register(body: Body) -> Body:
            with self._scope(title):
                body()
            return body

        return register

    def case(self, title: str) -> Callable[[Body], Body]:
        """Run the decorated function as a named test case.

        Inside a unittest.TestCase the case runs in its own subTest, so a
        failure is reported under the case's path and the remaining cases
        still run.
        """

        def register(body: Body) -> Body:
            with self._scope(title):
                sub_test = getattr(self, "subTest", None)
                with sub_test(self.current_path) if sub_test else contextlib.nullcontext():
                    body()
            return body

        return register

    def markup(self, text: str) -> None:
        """Record descriptive text for the running group or case."""
        self.markups.append((self.current_path, text))
        logger.info("%s: %s", self.current_path, text)

    @contextlib.contextmanager
    def _scope(self, title: str) -> Iterator[None]:
        self._titles.append(title)
        try:
            yield
        finally:
            self._titles.pop()
