"""Default configuration for example generation.

Settings are loaded from environment variables with .env file support via
pydantic-settings. They provide the defaults for every generation run; a
single run can override them through ExampleOptions.

Environment variables:
    DOCEXAMPLE_PACKAGE_REF: Dotted package the generated module belongs to
    DOCEXAMPLE_CLASS_NAME: Name of the generated test class
    DOCEXAMPLE_SUPER_TYPES: JSON list of dotted base classes, first is the primary base
    DOCEXAMPLE_INPUT_DIALECT: Python grammar version of the input sources ("3.12")
    DOCEXAMPLE_TEST_DIALECT: Python grammar version of the embedded code blocks

Example:
    >>> from docexample.settings import settings
    >>> print(settings.class_name)
    DocExamples

Note:
    Settings are loaded once at module import and frozen.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SUPER_TYPES = ("unittest.TestCase", "docexample.runtime.FreeSpec")


class Settings(BaseSettings):
    """Defaults for the generated suite and the grammar used to parse inputs.

    Attributes:
        package_ref: Dotted name of the package that will hold the generated module.
        class_name: Name of the generated final class.
        super_types: Base classes of the generated class, in MRO order.
        input_dialect: Grammar version used to parse the source files.
        test_dialect: Grammar version used to parse code blocks inside doc comments.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCEXAMPLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    package_ref: str = "tests"
    class_name: str = "DocExamples"
    super_types: list[str] = list(DEFAULT_SUPER_TYPES)

    input_dialect: str = "3.12"
    test_dialect: str = "3.12"


settings = Settings()
