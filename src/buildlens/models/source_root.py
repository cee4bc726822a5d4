"""Source root model."""

from dataclasses import dataclass
from enum import Enum

from buildlens.shared.domain.base_model import BaseDomainModel


class Language(str, Enum):
    """Language of the sources under a root."""

    JAVA = "JAVA"
    KOTLIN = "KOTLIN"
    OTHER = "OTHER"


@dataclass(frozen=True)
class SourceRoot(BaseDomainModel):
    """A source directory. Java and Kotlin roots may point at the same path."""

    path: str
    language: Language = Language.JAVA
