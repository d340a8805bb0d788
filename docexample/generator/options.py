"""Per-run generation options."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docexample.generator.folder import EmptySectionPolicy
from docexample.settings import Settings, settings

_DOTTED_NAME_RE = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")
_DIALECT_RE = re.compile(r"^3\.\d+$")


class ExampleOptions(BaseModel):
    """Options of one generation run.

    Attributes:
        package_ref: Dotted package the generated module belongs to.
        class_name: Name of the generated class.
        super_types: Dotted base classes, first is the primary base.
        input_dialect: Grammar version ("3.N") of the source files.
        test_dialect: Grammar version ("3.N") of the code blocks in doc comments.
        empty_sections: Treatment of tags without a code block.
    """

    model_config = ConfigDict(frozen=True)

    package_ref: str
    class_name: str
    super_types: tuple[str, ...] = Field(min_length=1)
    input_dialect: str = "3.12"
    test_dialect: str = "3.12"
    empty_sections: EmptySectionPolicy = EmptySectionPolicy.DROP

    @field_validator("package_ref")
    @classmethod
    def validate_package_ref(cls, v: str) -> str:
        if not _DOTTED_NAME_RE.match(v):
            raise ValueError(f"package_ref must be a dotted name, got {v!r}")
        return v

    @field_validator("class_name")
    @classmethod
    def validate_class_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"class_name must be an identifier, got {v!r}")
        return v

    @field_validator("super_types")
    @classmethod
    def validate_super_types(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for super_type in v:
            if not _DOTTED_NAME_RE.match(super_type):
                raise ValueError(f"super type must be a dotted name, got {super_type!r}")
        return v

    @field_validator("input_dialect", "test_dialect")
    @classmethod
    def validate_dialect(cls, v: str) -> str:
        if not _DIALECT_RE.match(v):
            raise ValueError(f"dialect must look like '3.12', got {v!r}")
        return v

    @classmethod
    def from_settings(cls, source: Settings | None = None, **overrides: object) -> "ExampleOptions":
        """Options taken from settings, with keyword overrides for this run."""
        source = source or settings
        values: dict[str, object] = {
            "package_ref": source.package_ref,
            "class_name": source.class_name,
            "super_types": tuple(source.super_types),
            "input_dialect": source.input_dialect,
            "test_dialect": source.test_dialect,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(values)
