"""
Exception taxonomy for wrapper generation.

Class-scoped errors (everything except ``ConfigError`` and
``AggregationError``) make the pipeline skip one class and carry on.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""

    pass


class ClassGenerationError(GeneratorError):
    """Failure scoped to a single class; the batch continues."""

    def __init__(self, message: str, class_name: str | None = None):
        super().__init__(message)
        self.class_name = class_name


class UnknownClass(ClassGenerationError):
    """Class name is absent from the class table."""

    def __init__(self, class_name: str):
        super().__init__(f"invalid class name: {class_name}", class_name)


class MalformedClass(UnknownClass):
    """Class table entry exists but could not be parsed."""

    def __init__(self, class_name: str, reason: str):
        ClassGenerationError.__init__(
            self, f"invalid class entry {class_name}: {reason}", class_name
        )
        self.reason = reason


class ConfigCycle(ClassGenerationError):
    """Superclass chain loops back on itself."""

    def __init__(self, chain: list[str]):
        super().__init__(
            "superclass cycle detected: " + " -> ".join(chain),
            chain[0] if chain else None,
        )
        self.chain = chain


class InvalidReference(ClassGenerationError):
    """A dependency names neither a known class nor a bare path."""

    pass


class TemplateRenderError(ClassGenerationError):
    """Render context lacks something the template needs."""

    pass


class AggregationError(GeneratorError):
    """Index or package registration could not be written."""

    pass
