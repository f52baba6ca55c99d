from __future__ import annotations


class QuizError(Exception):
    """Base error for quizcore domain exceptions."""


class CatalogError(QuizError):
    """Raised when a question bank cannot be read."""


class CatalogValidationError(CatalogError):
    """Raised when a question bank does not match the expected shape."""

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = list(details or [])

    def to_human(self) -> str:
        parts = [str(self)]
        for d in self.details:
            parts.append(f" - {d}")
        return "\n".join(parts)


class ConfigError(QuizError):
    """Raised when a configuration file is present but invalid."""
